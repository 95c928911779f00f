"""Ground layer synthesis.

Runs after the feature generators so the surface can seat itself under
structures that are already in the world instead of burying them.

Elevation-aware mode searches each column upward from ``MIN_Y`` for the first
block a generator placed below the target level and puts the surface there.
The search never looks above the target, so structures standing on or above
the nominal ground do not move it.

Flat mode just writes the surface and one dirt layer at the oracle's level.
"""

import logging

import numpy as np

from .blocks import BEDROCK, DIRT, GRASS_BLOCK, SNOW_BLOCK, STONE
from .constants import (
    MIN_Y, SPAWN_Y, SPAWN_SIZE,
    PROGRESS_GROUND_START, PROGRESS_GROUND_END,
)
from .models import XZPoint
from .progress import BatchCounter, NullProgressSink, PhaseProgress

logger = logging.getLogger(__name__)


def surface_block(config):
    return SNOW_BLOCK if config.winter else GRASS_BLOCK


def grid_extent(scale_x: float, scale_z: float):
    """Inclusive column counts along x and z."""
    return max(int(scale_x), 0) + 1, max(int(scale_z), 0) + 1


def precompute_levels(ground, scale_x: float, scale_z: float) -> np.ndarray:
    """Target ground level for every column, indexed ``[x, z]``."""
    nx, nz = grid_extent(scale_x, scale_z)
    levels = np.empty((nx, nz), dtype=np.int32)
    for x in range(nx):
        for z in range(nz):
            levels[x, z] = ground.level(XZPoint(x, z))
    return levels


def find_surface_level(editor, x: int, z: int, target: int) -> int:
    """Lowest occupied y below *target* in the column, else *target*."""
    for y in range(MIN_Y, target):
        if editor.block_at(x, y, z):
            return min(y, target)
    return target


def _elevation_column(editor, x, z, target, top_block, fillground):
    top_y = find_surface_level(editor, x, z, target)

    editor.set_block(top_block, x, top_y, z)
    editor.set_block(DIRT, x, top_y - 1, z)
    editor.set_block(DIRT, x, top_y - 2, z)

    if fillground:
        if top_y - 3 >= MIN_Y + 1:
            editor.fill_blocks(STONE, x, MIN_Y + 1, z, x, top_y - 3, z)
        editor.set_block(BEDROCK, x, MIN_Y, z, override_blacklist=(BEDROCK,))


def _flat_column(editor, x, z, level, top_block):
    editor.set_block(top_block, x, level, z)
    editor.set_block(DIRT, x, level - 1, z)


def flatten_spawn(editor, block) -> None:
    """Lay the surface block over the spawn square at SPAWN_Y."""
    for x in range(SPAWN_SIZE + 1):
        for z in range(SPAWN_SIZE + 1):
            editor.set_block(block, x, SPAWN_Y, z)


def generate_ground(editor, ground, config, scale_x: float, scale_z: float,
                    progress=None, bar=None) -> int:
    """Write the ground layers for every column; returns the columns visited."""
    sink = progress if progress is not None else NullProgressSink()
    nx, nz = grid_extent(scale_x, scale_z)
    total = nx * nz

    phase = PhaseProgress(sink, PROGRESS_GROUND_START, PROGRESS_GROUND_END, total)
    counter = BatchCounter(total, bar=bar, desc="Generating ground", unit="blocks")
    top_block = surface_block(config)

    if ground.elevation_enabled:
        levels = precompute_levels(ground, scale_x, scale_z)
        logger.info(f"Ground levels {int(levels.min())}..{int(levels.max())} "
                    f"over {nx}x{nz} columns")
        for x in range(nx):
            for z in range(nz):
                _elevation_column(editor, x, z, int(levels[x, z]), top_block,
                                  config.fillground)
                counter.step()
                phase.advance()
        flatten_spawn(editor, top_block)
    else:
        for x in range(nx):
            for z in range(nz):
                _flat_column(editor, x, z, ground.level(XZPoint(x, z)), top_block)
                counter.step()
                phase.advance()

    counter.finish()
    return counter.count
