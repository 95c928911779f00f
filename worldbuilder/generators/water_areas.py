"""Multipolygon water bodies (lakes with islands, wide rivers)."""

import logging

from ..blocks import WATER
from .common import area_cells, fill_surface

logger = logging.getLogger(__name__)


def generate_water_areas(editor, element, ground, config) -> None:
    cells = area_cells(element)
    if not cells:
        logger.debug(f"Water relation {element.id} has no usable outer ring")
        return
    fill_surface(editor, ground, cells, WATER)
    fill_surface(editor, ground, cells, WATER, dy=-1)
