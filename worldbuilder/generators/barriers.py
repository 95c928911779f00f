"""Walls, fences and hedges along ways; bollards and blocks on nodes."""

import logging

from ..blocks import (
    COBBLESTONE_WALL, OAK_FENCE, OAK_LEAVES, STONE, STONE_BRICKS,
    STONE_BRICK_WALL,
)
from ..models import Node
from .common import column, level_at, tag_float, way_cells

logger = logging.getLogger(__name__)

# barrier=* → (block, default height in blocks)
BARRIER_STYLES = {
    'wall': (STONE_BRICK_WALL, 2),
    'city_wall': (STONE_BRICKS, 4),
    'retaining_wall': (STONE_BRICKS, 1),
    'fence': (OAK_FENCE, 1),
    'hedge': (OAK_LEAVES, 2),
    'guard_rail': (COBBLESTONE_WALL, 1),
    'kerb': (STONE, 1),
}
DEFAULT_STYLE = (COBBLESTONE_WALL, 2)
MAX_BARRIER_HEIGHT = 8

NODE_BARRIERS = {
    'bollard': COBBLESTONE_WALL,
    'block': STONE,
    'post': OAK_FENCE,
}


def generate_barriers(editor, element, ground, config) -> None:
    barrier = element.tags.get('barrier')

    if isinstance(element, Node):
        block = NODE_BARRIERS.get(barrier)
        if block is not None:
            editor.set_block(block, element.x,
                             level_at(ground, element.x, element.z) + 1, element.z)
        return

    block, height = BARRIER_STYLES.get(barrier, DEFAULT_STYLE)
    tagged = tag_float(element.tags, 'height')
    if tagged is not None:
        height = int(max(1, min(round(tagged), MAX_BARRIER_HEIGHT)))

    for x, z in way_cells(element):
        column(editor, block, x, level_at(ground, x, z) + 1, z, height)
