"""Entrances: a door cut into whatever wall stands at the node."""

import logging

from ..blocks import DARK_OAK_DOOR, GRAY_CONCRETE
from .common import level_at

logger = logging.getLogger(__name__)


def generate_doors(editor, element, ground, config) -> None:
    tags = element.tags
    if tags.get('entrance') == 'no' or tags.get('door') == 'no':
        return
    # Doors on upper or underground levels have no wall to sit in.
    if tags.get('level', '0') not in ('0', ''):
        return

    x, z = element.x, element.z
    y = level_at(ground, x, z)
    editor.set_block(GRAY_CONCRETE, x, y, z, override_blacklist=())
    editor.set_block(DARK_OAK_DOOR, x, y + 1, z, override_blacklist=())
    editor.set_block(DARK_OAK_DOOR, x, y + 2, z, override_blacklist=())
