"""Data classes for elements, grid points, run settings and paths."""

import pathlib
from dataclasses import dataclass, field
from typing import ClassVar, Union

from shapely.geometry import Polygon, box

from .constants import OUTPUT_DIR, DEFAULT_GROUND_LEVEL


class PathManager:
    """Manage paths relative to the WorldBuilder directory."""

    @staticmethod
    def get_output_path(filename: str) -> pathlib.Path:
        """Get the output file path."""
        return OUTPUT_DIR / filename


@dataclass
class BoundingBox:
    north: float
    south: float
    east: float
    west: float

    def __post_init__(self):
        if self.north <= self.south or self.east <= self.west:
            raise ValueError(f"Invalid bounding box: N={self.north}, "
                             f"S={self.south}, E={self.east}, W={self.west}")

    def to_polygon(self) -> Polygon:
        """Convert bounding box to shapely polygon."""
        return box(self.west, self.south, self.east, self.north)


@dataclass(frozen=True)
class XZPoint:
    x: int
    z: int


@dataclass(frozen=True)
class RunConfig:
    """Per-run generation settings."""
    path: str
    terrain: bool = False
    winter: bool = False
    fillground: bool = False
    debug: bool = False
    scale_x: float = 0.0
    scale_z: float = 0.0
    ground_level: int = DEFAULT_GROUND_LEVEL
    vertical_scale: float = 1.0


# ── Elements ────────────────────────────────────────────────────────────

@dataclass
class Node:
    id: int
    x: int
    z: int
    tags: dict = field(default_factory=dict)

    kind: ClassVar[str] = "node"

    @property
    def point(self) -> XZPoint:
        return XZPoint(self.x, self.z)


@dataclass
class Way:
    id: int
    nodes: list
    tags: dict = field(default_factory=dict)

    kind: ClassVar[str] = "way"

    @property
    def points(self) -> list:
        return [(n.x, n.z) for n in self.nodes]

    @property
    def is_closed(self) -> bool:
        return (len(self.nodes) >= 4
                and self.nodes[0].x == self.nodes[-1].x
                and self.nodes[0].z == self.nodes[-1].z)


@dataclass
class RelationMember:
    role: str
    way: Way


@dataclass
class Relation:
    id: int
    members: list
    tags: dict = field(default_factory=dict)

    kind: ClassVar[str] = "relation"

    def ways_with_role(self, role: str) -> list:
        return [m.way for m in self.members if m.role == role]


Element = Union[Node, Way, Relation]
