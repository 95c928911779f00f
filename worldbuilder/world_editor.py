"""In-memory voxel world with chunk-section storage and region persistence.

Blocks are held in 16x16x16 ``uint16`` sections indexed ``[y, z, x]``; each
value is an index into a world-wide palette whose entry 0 is air.  Sections
are only allocated when something is written into them.

``save()`` writes one ``numpy`` archive per 32x32-chunk region plus a
``level.json`` summary.
"""

import json
import logging
import pathlib

import numpy as np

from .blocks import AIR, Block
from .constants import MIN_Y, MAX_Y

logger = logging.getLogger(__name__)

SECTION_SIZE = 16
REGION_CHUNKS = 32


class WorldSaveError(RuntimeError):
    """Raised when the world cannot be written to disk."""


def read_level_info(world_dir) -> dict:
    """Load the ``level.json`` summary of a saved world."""
    path = pathlib.Path(world_dir) / "level.json"
    with open(path) as f:
        return json.load(f)


class WorldEditor:
    def __init__(self, world_dir, scale_x: float, scale_z: float):
        """
        world_dir: directory the world is saved into.
        scale_x, scale_z: horizontal extents; x in 0..=scale_x and
        z in 0..=scale_z are writable, everything else is ignored.
        """
        self.world_dir = pathlib.Path(world_dir)
        self.max_x = max(int(scale_x), 0)
        self.max_z = max(int(scale_z), 0)
        self._palette = [AIR]
        self._palette_index = {AIR: 0}
        self._sections = {}
        self._saved = False

    # ── Palette ─────────────────────────────────────────────────────────

    def _block_id(self, block: Block) -> int:
        idx = self._palette_index.get(block)
        if idx is None:
            idx = len(self._palette)
            self._palette.append(block)
            self._palette_index[block] = idx
        return idx

    def _known_ids(self, blocks):
        """Palette ids of *blocks*; None passes through, unseen blocks drop out."""
        if blocks is None:
            return None
        return np.array([self._palette_index[b] for b in blocks
                         if b in self._palette_index], dtype=np.uint16)

    # ── Lookup ──────────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return (0 <= x <= self.max_x and 0 <= z <= self.max_z
                and MIN_Y <= y <= MAX_Y)

    @staticmethod
    def _locate(x: int, y: int, z: int):
        ry = y - MIN_Y
        key = (x >> 4, ry >> 4, z >> 4)
        return key, (ry & 15, z & 15, x & 15)

    def _get_section(self, key, create: bool):
        section = self._sections.get(key)
        if section is None and create:
            section = np.zeros((SECTION_SIZE,) * 3, dtype=np.uint16)
            self._sections[key] = section
        return section

    def get_block(self, x: int, y: int, z: int):
        """Return the block at a position, or None for air / out of bounds."""
        if not self.in_bounds(x, y, z):
            return None
        key, local = self._locate(x, y, z)
        section = self._sections.get(key)
        if section is None:
            return None
        idx = int(section[local])
        return self._palette[idx] if idx else None

    def block_at(self, x: int, y: int, z: int) -> bool:
        """True when a non-air block occupies the position."""
        return self.get_block(x, y, z) is not None

    def _may_overwrite(self, existing: int, override_whitelist,
                       override_blacklist) -> bool:
        existing_block = self._palette[existing]
        if override_whitelist is not None:
            return existing_block in override_whitelist
        if override_blacklist is not None:
            return existing_block not in override_blacklist
        return False

    # ── Mutation ────────────────────────────────────────────────────────

    def set_block(self, block: Block, x: int, y: int, z: int,
                  override_whitelist=None, override_blacklist=None) -> None:
        """Place a block.

        Empty cells are always written.  An occupied cell is replaced only
        when its block is in *override_whitelist*, or, without a whitelist,
        when it is not in *override_blacklist*.  With neither list the
        existing block is kept.
        """
        if not self.in_bounds(x, y, z):
            return
        key, local = self._locate(x, y, z)
        section = self._sections.get(key)
        existing = 0 if section is None else int(section[local])
        if existing and not self._may_overwrite(
                existing, override_whitelist, override_blacklist):
            return
        if section is None:
            section = self._get_section(key, create=True)
        section[local] = self._block_id(block)

    def fill_blocks(self, block: Block, x1: int, y1: int, z1: int,
                    x2: int, y2: int, z2: int,
                    override_whitelist=None, override_blacklist=None) -> None:
        """Fill an inclusive box, with the same overwrite rules as set_block."""
        x_lo, x_hi = max(min(x1, x2), 0), min(max(x1, x2), self.max_x)
        y_lo, y_hi = max(min(y1, y2), MIN_Y), min(max(y1, y2), MAX_Y)
        z_lo, z_hi = max(min(z1, z2), 0), min(max(z1, z2), self.max_z)
        if x_lo > x_hi or y_lo > y_hi or z_lo > z_hi:
            return

        block_id = self._block_id(block)
        whitelist_ids = self._known_ids(override_whitelist)
        blacklist_ids = self._known_ids(override_blacklist)
        ry_lo, ry_hi = y_lo - MIN_Y, y_hi - MIN_Y

        for sx in range(x_lo >> 4, (x_hi >> 4) + 1):
            xs = slice(max(x_lo - sx * 16, 0), min(x_hi - sx * 16, 15) + 1)
            for sy in range(ry_lo >> 4, (ry_hi >> 4) + 1):
                ys = slice(max(ry_lo - sy * 16, 0), min(ry_hi - sy * 16, 15) + 1)
                for sz in range(z_lo >> 4, (z_hi >> 4) + 1):
                    zs = slice(max(z_lo - sz * 16, 0), min(z_hi - sz * 16, 15) + 1)
                    section = self._get_section((sx, sy, sz), create=True)
                    view = section[ys, zs, xs]
                    mask = view == 0
                    if whitelist_ids is not None:
                        mask |= np.isin(view, whitelist_ids)
                    elif blacklist_ids is not None:
                        mask |= (view != 0) & ~np.isin(view, blacklist_ids)
                    view[mask] = block_id

    # ── Persistence ─────────────────────────────────────────────────────

    def block_count(self) -> int:
        return int(sum(np.count_nonzero(s) for s in self._sections.values()))

    def save(self, metadata: dict = None) -> None:
        """Write all regions and the level summary.  May only run once."""
        if self._saved:
            raise WorldSaveError(f"World {self.world_dir} was already saved")

        regions = {}
        for (sx, sy, sz), section in self._sections.items():
            if not section.any():
                continue
            region = regions.setdefault(
                (sx // REGION_CHUNKS, sz // REGION_CHUNKS), {})
            region[f"c{sx}_{sz}_s{sy}"] = section

        palette = np.array([b.id for b in self._palette])
        region_dir = self.world_dir / "region"
        level = {
            "name": self.world_dir.name,
            "generator": "worldbuilder",
            "min_y": MIN_Y,
            "max_y": MAX_Y,
            "bounds": {"max_x": self.max_x, "max_z": self.max_z},
            "regions": len(regions),
            "block_count": self.block_count(),
        }
        if metadata:
            level.update(metadata)

        try:
            region_dir.mkdir(parents=True, exist_ok=True)
            for (rx, rz), arrays in regions.items():
                np.savez_compressed(region_dir / f"r.{rx}.{rz}.npz",
                                    palette=palette, **arrays)
            with open(self.world_dir / "level.json", "w") as f:
                json.dump(level, f, indent=2)
        except OSError as e:
            raise WorldSaveError(
                f"Failed to save world to {self.world_dir}: {e}") from e

        self._saved = True
        logger.info(f"Saved {len(regions)} region(s), "
                    f"{level['block_count']} blocks to {self.world_dir}")
