"""Bridges.

Ways tagged ``bridge`` and nothing with a higher priority are routed here and
left out of the world; decks need the heights of both approaches, which a
single way does not carry.
"""

import logging

logger = logging.getLogger(__name__)


def generate_bridges(editor, element, ground, config) -> None:
    logger.debug(f"Bridge way {element.id} not generated")
