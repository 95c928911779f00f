"""Tourism nodes: information boards and picnic tables."""

import logging

from ..blocks import OAK_FENCE, OAK_PLANKS, OAK_SLAB
from .common import level_at

logger = logging.getLogger(__name__)


def generate_tourisms(editor, element, ground, config) -> None:
    tourism = element.tags.get('tourism')
    x, z = element.x, element.z
    y = level_at(ground, x, z) + 1

    if tourism == 'information' and element.tags.get('information') == 'board':
        editor.set_block(OAK_FENCE, x, y, z)
        editor.set_block(OAK_PLANKS, x, y + 1, z)
    elif tourism == 'picnic_site':
        editor.set_block(OAK_FENCE, x, y, z)
        editor.set_block(OAK_SLAB, x, y + 1, z)
