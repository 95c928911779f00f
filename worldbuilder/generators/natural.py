"""Natural features: trees, water bodies, sand, rock and woodland."""

import logging

from ..blocks import (
    GRASS_BLOCK, OAK_LEAVES, OAK_LOG, SAND, SNOW_BLOCK, SPRUCE_LEAVES,
    SPRUCE_LOG, STONE, WATER, GRAVEL, PODZOL,
)
from ..models import Node
from .common import (
    area_cells, element_rng, fill_surface, green_surface, is_area, level_at,
    way_cells,
)

logger = logging.getLogger(__name__)

# Surface per natural=* value; None means the green surface for the season.
NATURAL_SURFACES = {
    'water': WATER,
    'beach': SAND,
    'sand': SAND,
    'dune': SAND,
    'bare_rock': STONE,
    'scree': GRAVEL,
    'shingle': GRAVEL,
    'glacier': SNOW_BLOCK,
    'grassland': None,
    'heath': None,
    'scrub': None,
    'wood': None,
    'wetland': None,
    'fell': PODZOL,
}

# One tree per this many cells, on average.
TREE_SPACING = {'wood': 12, 'scrub': 40, 'wetland': 60}


def place_tree(editor, x, y, z, rng, conifer=False) -> None:
    """Grow a tree whose trunk starts at *y* (the block above the ground)."""
    log, leaves = (SPRUCE_LOG, SPRUCE_LEAVES) if conifer else (OAK_LOG, OAK_LEAVES)
    height = rng.randint(4, 6)
    for dy in range(height):
        editor.set_block(log, x, y + dy, z)
    top = y + height
    for dy in (-2, -1, 0):
        radius = 1 if (conifer and dy == 0) else 2
        for dx in range(-radius, radius + 1):
            for dz in range(-radius, radius + 1):
                if abs(dx) + abs(dz) <= radius + 1:
                    editor.set_block(leaves, x + dx, top + dy, z + dz)
    editor.set_block(leaves, x, top + 1, z)


def scatter_trees(editor, ground, cells, rng, spacing, conifer=False) -> None:
    for x, z in cells:
        if rng.randrange(spacing) == 0:
            place_tree(editor, x, level_at(ground, x, z) + 1, z, rng, conifer)


def generate_natural(editor, element, ground, config) -> None:
    natural = element.tags.get('natural')
    rng = element_rng(element)

    if isinstance(element, Node):
        if natural == 'tree':
            conifer = element.tags.get('leaf_type') == 'needleleaved'
            place_tree(editor, element.x, level_at(ground, element.x, element.z) + 1,
                       element.z, rng, conifer)
        return

    if natural == 'tree_row':
        for i, (x, z) in enumerate(way_cells(element)):
            if i % 4 == 0:
                place_tree(editor, x, level_at(ground, x, z) + 1, z, rng)
        return

    if natural not in NATURAL_SURFACES or not is_area(element):
        return

    cells = area_cells(element)
    block = NATURAL_SURFACES[natural] or green_surface(config)
    fill_surface(editor, ground, cells, block)

    if natural == 'water':
        # Two blocks deep so the surface layer seats beneath it.
        fill_surface(editor, ground, cells, WATER, dy=-1)
    elif natural == 'wetland':
        for x, z in cells:
            if rng.randrange(5) == 0:
                editor.set_block(WATER, x, level_at(ground, x, z), z,
                                 override_whitelist=(GRASS_BLOCK, SNOW_BLOCK))

    if natural in TREE_SPACING:
        conifer = element.tags.get('leaf_type') == 'needleleaved'
        scatter_trees(editor, ground, cells, rng, TREE_SPACING[natural], conifer)
