"""Roads, paths, street furniture on highway nodes, aeroways and sidings."""

import logging

from ..blocks import (
    BLACK_CONCRETE, COBBLESTONE_WALL, DIRT_PATH, GLOWSTONE, GRAVEL,
    GRAY_CONCRETE, LIGHT_GRAY_CONCRETE, OAK_FENCE, RAIL, STONE_BRICKS,
    WHITE_CONCRETE, YELLOW_CONCRETE,
)
from ..geometry import widen_cells
from ..models import Node
from .common import (
    area_cells, column, fill_surface, is_area, level_at, tag_float, way_cells,
)

logger = logging.getLogger(__name__)

# highway=* → (surface block, width in blocks)
ROAD_STYLES = {
    'motorway': (BLACK_CONCRETE, 8),
    'trunk': (BLACK_CONCRETE, 7),
    'primary': (BLACK_CONCRETE, 6),
    'secondary': (BLACK_CONCRETE, 5),
    'tertiary': (BLACK_CONCRETE, 4),
    'motorway_link': (BLACK_CONCRETE, 4),
    'trunk_link': (BLACK_CONCRETE, 4),
    'primary_link': (BLACK_CONCRETE, 4),
    'residential': (BLACK_CONCRETE, 3),
    'unclassified': (BLACK_CONCRETE, 3),
    'living_street': (GRAY_CONCRETE, 3),
    'service': (GRAY_CONCRETE, 2),
    'pedestrian': (GRAY_CONCRETE, 3),
    'footway': (GRAY_CONCRETE, 1),
    'cycleway': (GRAY_CONCRETE, 2),
    'path': (DIRT_PATH, 1),
    'bridleway': (DIRT_PATH, 1),
    'track': (DIRT_PATH, 2),
    'steps': (STONE_BRICKS, 1),
    'corridor': (GRAY_CONCRETE, 1),
}
DEFAULT_STYLE = (GRAY_CONCRETE, 2)

# Roads at least this wide get a dashed centre line.
CENTER_LINE_MIN_WIDTH = 5

AEROWAY_STYLES = {
    'runway': (LIGHT_GRAY_CONCRETE, 16),
    'taxiway': (LIGHT_GRAY_CONCRETE, 6),
}


def _is_underground(tags) -> bool:
    if tags.get('tunnel', 'no') != 'no':
        return True
    try:
        return int(tags.get('layer', '0')) < 0
    except ValueError:
        return False


def _highway_node(editor, node, ground) -> None:
    highway = node.tags.get('highway')
    x, z = node.x, node.z
    y = level_at(ground, x, z) + 1
    if highway == 'street_lamp':
        column(editor, OAK_FENCE, x, y, z, 3)
        editor.set_block(GLOWSTONE, x, y + 3, z)
    elif highway == 'traffic_signals':
        column(editor, COBBLESTONE_WALL, x, y, z, 3)
        editor.set_block(BLACK_CONCRETE, x, y + 3, z)
    elif highway == 'bus_stop':
        column(editor, COBBLESTONE_WALL, x, y, z, 2)
        editor.set_block(YELLOW_CONCRETE, x, y + 2, z)


def _road(editor, ground, way, block, width) -> None:
    center = way_cells(way)
    fill_surface(editor, ground, widen_cells(center, width), block)
    if width >= CENTER_LINE_MIN_WIDTH:
        for i, (x, z) in enumerate(center):
            if i % 4 < 2:
                editor.set_block(WHITE_CONCRETE, x, level_at(ground, x, z), z,
                                 override_whitelist=(block,))


def generate_highways(editor, element, ground, config) -> None:
    if isinstance(element, Node):
        _highway_node(editor, element, ground)
        return

    tags = element.tags
    if _is_underground(tags) or len(element.nodes) < 2:
        return
    block, width = ROAD_STYLES.get(tags.get('highway'), DEFAULT_STYLE)
    if tags.get('area') == 'yes' and element.is_closed:
        fill_surface(editor, ground, area_cells(element), block)
        return
    lanes = tag_float(tags, 'lanes')
    if lanes:
        width = max(width, int(lanes) * 2)
    _road(editor, ground, element, block, width)


def generate_aeroway(editor, element, ground, config) -> None:
    aeroway = element.tags.get('aeroway') or element.tags.get('area:aeroway')
    if aeroway in AEROWAY_STYLES and not element.tags.get('area:aeroway'):
        block, width = AEROWAY_STYLES[aeroway]
        _road(editor, ground, element, block, width)
    elif is_area(element):
        fill_surface(editor, ground, area_cells(element), GRAY_CONCRETE)


def generate_siding(editor, element, ground, config) -> None:
    """Side tracks tagged only ``service=siding``: ballast with rails on top."""
    for x, z in way_cells(element):
        y = level_at(ground, x, z)
        editor.set_block(GRAVEL, x, y, z)
        editor.set_block(RAIL, x, y + 1, z)
