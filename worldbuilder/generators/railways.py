"""Railway tracks: a gravel bed with rails on top."""

import logging

from ..blocks import GRAVEL, RAIL, SMOOTH_STONE
from .common import area_cells, fill_surface, is_area, level_at, way_cells

logger = logging.getLogger(__name__)

TRACK_TYPES = frozenset({'rail', 'light_rail', 'narrow_gauge', 'tram',
                         'monorail', 'funicular', 'miniature', 'preserved'})


def generate_railways(editor, element, ground, config) -> None:
    tags = element.tags
    railway = tags.get('railway')

    if railway == 'platform' and is_area(element):
        fill_surface(editor, ground, area_cells(element), SMOOTH_STONE, dy=1)
        return
    if railway not in TRACK_TYPES:
        return
    if tags.get('tunnel', 'no') != 'no' or tags.get('layer', '0').startswith('-'):
        return

    for x, z in way_cells(element):
        y = level_at(ground, x, z)
        editor.set_block(GRAVEL, x, y, z)
        editor.set_block(RAIL, x, y + 1, z)
