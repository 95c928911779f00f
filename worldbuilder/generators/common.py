"""Helpers shared by the feature generators."""

import random

from ..blocks import GRASS_BLOCK, SNOW_BLOCK
from ..geometry import polygon_cells, polyline_cells
from ..models import Relation, Way, XZPoint


def tag_float(tags, key, default=None):
    """Parse a numeric tag such as ``"12"``, ``"12.5 m"`` or ``"3,5"``."""
    value = tags.get(key)
    if value is None:
        return default
    try:
        return float(str(value).split()[0].replace(",", "."))
    except (ValueError, IndexError):
        return default


def level_at(ground, x, z) -> int:
    return ground.level(XZPoint(x, z))


def element_rng(element) -> random.Random:
    """Deterministic per-element random source."""
    return random.Random(element.id)


def green_surface(config):
    return SNOW_BLOCK if config.winter else GRASS_BLOCK


def is_area(way: Way) -> bool:
    return way.is_closed and way.tags.get("area") != "no"


def way_cells(way: Way):
    return polyline_cells(way.points)


def area_cells(element):
    """Cells inside a closed way, or inside a relation's outers minus inners."""
    if isinstance(element, Relation):
        holes = [w.points for w in element.ways_with_role("inner")]
        cells = []
        for outer in element.ways_with_role("outer"):
            cells.extend(polygon_cells(outer.points, holes))
        return cells
    return polygon_cells(element.points)


def fill_surface(editor, ground, cells, block, dy=0, **overrides) -> None:
    """Place *block* on each cell at ground level plus *dy*."""
    for x, z in cells:
        editor.set_block(block, x, level_at(ground, x, z) + dy, z, **overrides)


def column(editor, block, x, y0, z, height, **overrides) -> None:
    for y in range(y0, y0 + height):
        editor.set_block(block, x, y, z, **overrides)
