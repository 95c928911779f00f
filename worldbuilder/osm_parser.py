"""Overpass download and conversion of OSM JSON into grid-projected elements."""

import json
import logging
import pathlib

import requests
from pyproj import Transformer

from .constants import OVERPASS_URL, OVERPASS_TIMEOUT
from .models import BoundingBox, Node, Relation, RelationMember, Way

logger = logging.getLogger(__name__)

# Tag filters requested from Overpass; one nwr clause per entry.
QUERY_FILTERS = [
    '["building"]', '["building:part"]', '["highway"]', '["landuse"]',
    '["natural"]', '["amenity"]', '["leisure"]', '["barrier"]',
    '["waterway"]', '["bridge"]', '["railway"]', '["aeroway"]',
    '["area:aeroway"]', '["service"="siding"]', '["door"]', '["entrance"]',
    '["tourism"]', '["water"]',
]


def build_overpass_query(bbox: BoundingBox, timeout: int = OVERPASS_TIMEOUT) -> str:
    area = f"({bbox.south},{bbox.west},{bbox.north},{bbox.east})"
    clauses = "\n".join(f"  nwr{f}{area};" for f in QUERY_FILTERS)
    return (f"[out:json][timeout:{timeout}];\n(\n{clauses}\n);\n"
            f"(._;>;);\nout body;")


def fetch_overpass_data(bbox: BoundingBox, url: str = OVERPASS_URL,
                        timeout: int = OVERPASS_TIMEOUT) -> dict:
    """Download raw OSM data for *bbox* from an Overpass endpoint."""
    query = build_overpass_query(bbox, timeout)
    logger.info(f"Querying Overpass at {url} ...")
    response = requests.post(url, data={"data": query}, timeout=timeout + 30)
    response.raise_for_status()
    data = response.json()
    logger.info(f"Overpass returned {len(data.get('elements', []))} elements")
    return data


def load_overpass_file(path) -> dict:
    """Read Overpass JSON saved to disk."""
    path = pathlib.Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "elements" not in data:
        raise ValueError(f"{path} is not Overpass JSON (no 'elements' list)")
    return data


def make_transformer(bbox: BoundingBox) -> Transformer:
    """WGS84 → UTM transformer for the zone at the bbox centre."""
    center_lat = (bbox.north + bbox.south) / 2
    center_lon = (bbox.east + bbox.west) / 2
    utm_zone = int((center_lon + 180) / 6) + 1
    utm_epsg = 32600 + utm_zone if center_lat >= 0 else 32700 + utm_zone
    logger.info(f"Using UTM zone {utm_zone} (EPSG:{utm_epsg}) "
                f"for coordinate transform")
    return Transformer.from_crs("EPSG:4326", f"EPSG:{utm_epsg}", always_xy=True)


class GridProjector:
    """Project lat/lon onto the block grid: x grows east, z grows south."""

    def __init__(self, bbox: BoundingBox, scale: float = 1.0):
        self.transformer = make_transformer(bbox)
        self.scale = scale
        corners = [self.transformer.transform(lon, lat)
                   for lon in (bbox.west, bbox.east)
                   for lat in (bbox.south, bbox.north)]
        self.min_x = min(c[0] for c in corners)
        self.max_x = max(c[0] for c in corners)
        self.min_y = min(c[1] for c in corners)
        self.max_y = max(c[1] for c in corners)

    @property
    def scale_x(self) -> float:
        return (self.max_x - self.min_x) * self.scale

    @property
    def scale_z(self) -> float:
        return (self.max_y - self.min_y) * self.scale

    def project(self, lat: float, lon: float):
        ux, uy = self.transformer.transform(lon, lat)
        return (int(round((ux - self.min_x) * self.scale)),
                int(round((self.max_y - uy) * self.scale)))


def parse_osm_data(data: dict, bbox: BoundingBox, scale: float = 1.0):
    """Turn Overpass JSON into elements.

    Returns ``(elements, scale_x, scale_z)``.  Untagged nodes and ways are
    kept only as geometry for the elements that reference them; only
    ``type=multipolygon`` relations are emitted.
    """
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")
    projector = GridProjector(bbox, scale)
    raw = data.get("elements", [])

    nodes = {}
    for item in raw:
        if item.get("type") == "node":
            x, z = projector.project(item["lat"], item["lon"])
            nodes[item["id"]] = Node(item["id"], x, z, item.get("tags", {}))

    ways = {}
    for item in raw:
        if item.get("type") != "way":
            continue
        way_nodes = [nodes[ref] for ref in item.get("nodes", []) if ref in nodes]
        if len(way_nodes) < 2:
            logger.debug(f"Dropping way {item['id']}: fewer than 2 known nodes")
            continue
        ways[item["id"]] = Way(item["id"], way_nodes, item.get("tags", {}))

    elements = []
    dropped_relations = 0
    for item in raw:
        kind = item.get("type")
        tags = item.get("tags", {})
        if kind == "node" and tags:
            elements.append(nodes[item["id"]])
        elif kind == "way" and tags and item["id"] in ways:
            elements.append(ways[item["id"]])
        elif kind == "relation" and tags.get("type") == "multipolygon":
            members = []
            for m in item.get("members", []):
                if m.get("type") != "way" or m.get("ref") not in ways:
                    continue
                role = "inner" if m.get("role") == "inner" else "outer"
                members.append(RelationMember(role, ways[m["ref"]]))
            if any(m.role == "outer" for m in members):
                elements.append(Relation(item["id"], members, tags))
            else:
                dropped_relations += 1

    if dropped_relations:
        logger.info(f"Dropped {dropped_relations} relations without outer ways")
    logger.info(f"Parsed {len(elements)} elements; world extent "
                f"{projector.scale_x:.0f} x {projector.scale_z:.0f} blocks")
    return elements, projector.scale_x, projector.scale_z


def bbox_from_data(data: dict) -> BoundingBox:
    """Bounding box of all node coordinates in Overpass JSON."""
    lats = [e["lat"] for e in data.get("elements", []) if e.get("type") == "node"]
    lons = [e["lon"] for e in data.get("elements", []) if e.get("type") == "node"]
    if not lats:
        raise ValueError("OSM data contains no nodes to derive a bounding box from")
    return BoundingBox(north=max(lats), south=min(lats),
                       east=max(lons), west=min(lons))
