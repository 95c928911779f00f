"""Route each element to exactly one feature generator.

Routes are checked in order and the first whose predicate matches the
element's tags wins, even if later routes would match too.  Generators are
named here and looked up in a registry at dispatch time.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .generators import GENERATORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    generator: str
    predicate: Callable[[dict], bool]
    description: str


def has_any(*keys):
    return lambda tags: any(k in tags for k in keys)


def tag_equals(key, value):
    return lambda tags: tags.get(key) == value


# ── Route tables, highest priority first ────────────────────────────────

WAY_ROUTES = (
    Route("buildings", has_any("building", "building:part"), "building or building:part"),
    Route("highways", has_any("highway"), "highway"),
    Route("landuse", has_any("landuse"), "landuse"),
    Route("natural", has_any("natural"), "natural"),
    Route("amenities", has_any("amenity"), "amenity"),
    Route("leisure", has_any("leisure"), "leisure"),
    Route("barriers", has_any("barrier"), "barrier"),
    Route("waterways", has_any("waterway"), "waterway"),
    Route("bridges", has_any("bridge"), "bridge"),
    Route("railways", has_any("railway"), "railway"),
    Route("aeroways", has_any("aeroway", "area:aeroway"), "aeroway or area:aeroway"),
    Route("sidings", tag_equals("service", "siding"), "service=siding"),
)

NODE_ROUTES = (
    Route("doors", has_any("door", "entrance"), "door or entrance"),
    Route("natural", tag_equals("natural", "tree"), "natural=tree"),
    Route("amenities", has_any("amenity"), "amenity"),
    Route("barriers", has_any("barrier"), "barrier"),
    Route("highways", has_any("highway"), "highway"),
    Route("tourisms", has_any("tourism"), "tourism"),
)

RELATION_ROUTES = (
    Route("building_relations", has_any("building", "building:part"), "building or building:part"),
    Route("water_areas", has_any("water"), "water"),
    Route("leisure_relations", tag_equals("leisure", "park"), "leisure=park"),
)

ROUTES = {
    "way": WAY_ROUTES,
    "node": NODE_ROUTES,
    "relation": RELATION_ROUTES,
}


def select_route(element, routes=None) -> Optional[Route]:
    """Return the first route matching *element*, or None."""
    table = (routes or ROUTES).get(element.kind, ())
    for route in table:
        if route.predicate(element.tags):
            return route
    return None


def dispatch_element(editor, element, ground, config,
                     generators=None, routes=None) -> Optional[Route]:
    """Run the generator selected for *element*; unmatched elements are skipped."""
    route = select_route(element, routes)
    if route is None:
        return None
    registry = GENERATORS if generators is None else generators
    registry[route.generator](editor, element, ground, config)
    return route
