"""Land use areas: surface material plus vegetation for forests and orchards."""

import logging

from ..blocks import (
    DIRT, FARMLAND, GRAVEL, GRAY_CONCRETE, PODZOL, SAND, SMOOTH_STONE, STONE,
    WATER,
)
from .common import area_cells, element_rng, fill_surface, green_surface, is_area
from .natural import scatter_trees

logger = logging.getLogger(__name__)

# landuse=* → surface block; None means the green surface for the season.
LANDUSE_SURFACES = {
    'grass': None,
    'meadow': None,
    'greenfield': None,
    'village_green': None,
    'recreation_ground': None,
    'forest': None,
    'orchard': None,
    'vineyard': None,
    'farmland': FARMLAND,
    'commercial': SMOOTH_STONE,
    'retail': SMOOTH_STONE,
    'industrial': STONE,
    'quarry': STONE,
    'military': GRAY_CONCRETE,
    'railway': GRAVEL,
    'construction': DIRT,
    'brownfield': GRAVEL,
    'landfill': DIRT,
    'cemetery': PODZOL,
    'beach': SAND,
    'basin': WATER,
    'reservoir': WATER,
}

TREE_SPACING = {'forest': 10, 'orchard': 25}

# Every n-th row of a field is an irrigation channel.
IRRIGATION_ROW = 6


def generate_landuse(editor, element, ground, config) -> None:
    landuse = element.tags.get('landuse')
    if landuse not in LANDUSE_SURFACES or not is_area(element):
        return

    cells = area_cells(element)
    block = LANDUSE_SURFACES[landuse] or green_surface(config)

    if landuse == 'farmland':
        crop = [c for c in cells if c[0] % IRRIGATION_ROW]
        water = [c for c in cells if not c[0] % IRRIGATION_ROW]
        fill_surface(editor, ground, crop, FARMLAND)
        fill_surface(editor, ground, water, WATER)
        return

    fill_surface(editor, ground, cells, block)
    if landuse in TREE_SPACING:
        conifer = element.tags.get('leaf_type') == 'needleleaved'
        scatter_trees(editor, ground, cells, element_rng(element),
                      TREE_SPACING[landuse], conifer)
