"""Building footprints extruded into walls, floors and a flat roof.

Height comes from ``height`` (metres, one block each) or
``building:levels`` (``FLOOR_HEIGHT`` blocks per level); buildings without
either get ``DEFAULT_LEVELS``.  ``min_height`` / ``building:min_level``
lift building parts off the ground.  The whole footprint sits on the lowest
ground level under its outline.
"""

import logging

from ..blocks import (
    BRICK, GLASS, LIGHT_GRAY_CONCRETE, OAK_FENCE, OAK_PLANKS, SANDSTONE,
    SMOOTH_STONE, STONE_BRICKS, WHITE_CONCRETE, WHITE_TERRACOTTA,
)
from ..geometry import polygon_cells, polyline_cells
from ..models import XZPoint
from .common import tag_float

logger = logging.getLogger(__name__)

FLOOR_HEIGHT = 4
DEFAULT_LEVELS = 2
MAX_HEIGHT = 256

WALL_BLOCKS = {
    'house': BRICK,
    'detached': BRICK,
    'residential': BRICK,
    'apartments': WHITE_TERRACOTTA,
    'dormitory': WHITE_TERRACOTTA,
    'commercial': LIGHT_GRAY_CONCRETE,
    'retail': LIGHT_GRAY_CONCRETE,
    'office': LIGHT_GRAY_CONCRETE,
    'industrial': SMOOTH_STONE,
    'warehouse': SMOOTH_STONE,
    'church': STONE_BRICKS,
    'cathedral': STONE_BRICKS,
    'school': SANDSTONE,
    'university': SANDSTONE,
    'hospital': WHITE_CONCRETE,
    'shed': OAK_PLANKS,
    'garage': OAK_PLANKS,
    'hut': OAK_PLANKS,
}

# Building types that get no windows.
WINDOWLESS = frozenset({'garage', 'garages', 'shed', 'hut', 'roof', 'carport'})


def building_height(tags) -> int:
    """Wall height in blocks."""
    height = tag_float(tags, 'height')
    if height is None:
        levels = tag_float(tags, 'building:levels', DEFAULT_LEVELS)
        height = levels * FLOOR_HEIGHT
    return int(max(FLOOR_HEIGHT - 1, min(round(height), MAX_HEIGHT)))


def base_offset(tags) -> int:
    """Blocks between the ground and the lowest wall block of a part."""
    min_height = tag_float(tags, 'min_height')
    if min_height is not None:
        return max(0, int(round(min_height)))
    return max(0, int(tag_float(tags, 'building:min_level', 0) * FLOOR_HEIGHT))


def _kind(tags) -> str:
    kind = tags.get('building')
    if kind in (None, 'yes'):
        kind = tags.get('building:part', 'yes')
    return kind


def _is_window(x, z, y, start_y) -> bool:
    return (y - start_y) % FLOOR_HEIGHT in (1, 2) and (x + z) % 3 != 0


def build_footprint(editor, outer, holes, tags, ground) -> None:
    """Extrude one footprint ring (with optional holes)."""
    cells = polygon_cells(outer, holes)
    if not cells:
        return
    outline = polyline_cells(outer)
    for ring in holes:
        outline.extend(polyline_cells(ring))

    base = ground.min_level(XZPoint(x, z) for x, z in outer)
    kind = _kind(tags)
    height = building_height(tags)
    start_y = base + 1 + base_offset(tags)
    top_y = base + height
    if top_y < start_y:
        top_y = start_y

    if kind == 'roof':
        # Open structure: corner posts carrying the roof.
        for x, z in outer:
            for y in range(start_y, top_y + 1):
                editor.set_block(OAK_FENCE, x, y, z)
        for x, z in cells:
            editor.set_block(SMOOTH_STONE, x, top_y + 1, z)
        return

    wall = WALL_BLOCKS.get(kind, STONE_BRICKS)
    windows = kind not in WINDOWLESS

    for x, z in outline:
        for y in range(start_y, top_y + 1):
            block = GLASS if windows and _is_window(x, z, y, start_y) else wall
            editor.set_block(block, x, y, z)

    # Ground floor, intermediate floors and the roof.
    floor_y = start_y - 1
    while floor_y <= top_y:
        for x, z in cells:
            editor.set_block(SMOOTH_STONE, x, floor_y, z)
        floor_y += FLOOR_HEIGHT
    for x, z in cells:
        editor.set_block(SMOOTH_STONE, x, top_y + 1, z)


def generate_buildings(editor, element, ground, config) -> None:
    if element.tags.get('building') == 'no' and 'building:part' not in element.tags:
        return
    if not element.is_closed:
        logger.debug(f"Skipping unclosed building way {element.id}")
        return
    build_footprint(editor, element.points, (), element.tags, ground)


def generate_building_from_relation(editor, element, ground, config) -> None:
    """Each outer ring becomes a footprint; inner rings are courtyards."""
    holes = [w.points for w in element.ways_with_role('inner')]
    for outer in element.ways_with_role('outer'):
        tags = {**outer.tags, **element.tags}
        build_footprint(editor, outer.points, holes, tags, ground)
