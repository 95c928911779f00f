"""Leisure areas: parks, gardens, pitches, playgrounds and pools."""

import logging

from ..blocks import (
    GREEN_TERRACOTTA, SAND, SMOOTH_STONE, STONE_BRICKS, WATER, WHITE_CONCRETE,
)
from ..geometry import polyline_cells
from ..models import Way
from .common import area_cells, element_rng, fill_surface, green_surface, is_area
from .natural import scatter_trees

logger = logging.getLogger(__name__)

GREEN_LEISURE = frozenset({'park', 'garden', 'nature_reserve', 'golf_course',
                           'dog_park', 'common'})

# Park-like areas get a tree per this many cells.
PARK_TREE_SPACING = 30


def _fill_leisure(editor, element, leisure, ground, config) -> None:
    cells = area_cells(element)
    if not cells:
        return
    outline = polyline_cells(element.points) if isinstance(element, Way) else []

    if leisure in GREEN_LEISURE:
        fill_surface(editor, ground, cells, green_surface(config))
        if leisure != 'golf_course':
            scatter_trees(editor, ground, cells, element_rng(element),
                          PARK_TREE_SPACING)
    elif leisure == 'pitch':
        fill_surface(editor, ground, outline, WHITE_CONCRETE)
        fill_surface(editor, ground, cells, GREEN_TERRACOTTA)
    elif leisure in ('playground', 'beach_resort'):
        fill_surface(editor, ground, cells, SAND)
    elif leisure == 'swimming_pool':
        fill_surface(editor, ground, outline, STONE_BRICKS)
        fill_surface(editor, ground, cells, WATER)
    elif leisure in ('track', 'sports_centre', 'stadium'):
        fill_surface(editor, ground, cells, SMOOTH_STONE)


def generate_leisure(editor, element, ground, config) -> None:
    if not is_area(element):
        return
    _fill_leisure(editor, element, element.tags.get('leisure'), ground, config)


def generate_leisure_from_relation(editor, element, ground, config) -> None:
    """Multipolygon parks: outers filled, inner rings left alone."""
    _fill_leisure(editor, element, element.tags.get('leisure'), ground, config)
