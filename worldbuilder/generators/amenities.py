"""Amenities: parking areas, fountains and small street furniture."""

import logging

from ..blocks import (
    COBBLESTONE_WALL, GRAY_CONCRETE, OAK_FENCE, OAK_SLAB, STONE_BRICKS, WATER,
    WHITE_CONCRETE,
)
from ..geometry import polyline_cells
from ..models import Node
from .common import area_cells, fill_surface, is_area, level_at

logger = logging.getLogger(__name__)

PAVED_AMENITIES = frozenset({'parking', 'parking_space', 'bicycle_parking',
                             'marketplace', 'fuel'})

# Parking bays are marked every n-th column.
BAY_SPACING = 4


def _amenity_node(editor, node, ground) -> None:
    amenity = node.tags.get('amenity')
    x, z = node.x, node.z
    y = level_at(ground, x, z) + 1
    if amenity == 'bench':
        editor.set_block(OAK_SLAB, x, y, z)
    elif amenity in ('waste_basket', 'waste_disposal', 'post_box'):
        editor.set_block(COBBLESTONE_WALL, x, y, z)
    elif amenity == 'bicycle_parking':
        editor.set_block(OAK_FENCE, x, y, z)
    elif amenity == 'fountain':
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                block = WATER if dx == dz == 0 else STONE_BRICKS
                editor.set_block(block, x + dx, y - 1, z + dz)


def generate_amenities(editor, element, ground, config) -> None:
    if isinstance(element, Node):
        _amenity_node(editor, element, ground)
        return
    if not is_area(element):
        return

    amenity = element.tags.get('amenity')
    if amenity in PAVED_AMENITIES:
        cells = area_cells(element)
        if amenity == 'parking':
            bays = [c for c in cells if c[0] % BAY_SPACING == 0]
            fill_surface(editor, ground, bays, WHITE_CONCRETE)
        fill_surface(editor, ground, cells, GRAY_CONCRETE)
    elif amenity == 'fountain':
        fill_surface(editor, ground, polyline_cells(element.points), STONE_BRICKS)
        fill_surface(editor, ground, area_cells(element), WATER)
