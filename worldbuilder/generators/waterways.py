"""Rivers, streams, canals and ditches carved along their centre lines."""

import logging

from ..blocks import WATER
from ..geometry import widen_cells
from .common import area_cells, fill_surface, is_area, tag_float, way_cells

logger = logging.getLogger(__name__)

WATERWAY_WIDTHS = {
    'river': 8,
    'canal': 6,
    'stream': 2,
    'tidal_channel': 3,
    'ditch': 1,
    'drain': 1,
}
DEFAULT_WIDTH = 2
MAX_WIDTH = 32


def generate_waterways(editor, element, ground, config) -> None:
    tags = element.tags
    waterway = tags.get('waterway')
    if tags.get('tunnel') in ('culvert', 'yes') or tags.get('layer', '0').startswith('-'):
        return

    if waterway in ('riverbank', 'dock') and is_area(element):
        cells = area_cells(element)
    else:
        width = WATERWAY_WIDTHS.get(waterway, DEFAULT_WIDTH)
        tagged = tag_float(tags, 'width')
        if tagged is not None:
            width = int(max(1, min(round(tagged), MAX_WIDTH)))
        cells = widen_cells(way_cells(element), width)

    fill_surface(editor, ground, cells, WATER)
    fill_surface(editor, ground, cells, WATER, dy=-1)
