"""Rasterisation of element geometry onto the block grid."""

import math
import logging

import numpy as np
import shapely as _shapely
from shapely.geometry import Polygon

logger = logging.getLogger(__name__)


def bresenham_line(x0, z0, x1, z1):
    """All grid cells on the line from (x0, z0) to (x1, z1), ends included."""
    points = []
    dx = abs(x1 - x0)
    dz = abs(z1 - z0)
    x, z = x0, z0
    sx = 1 if x0 < x1 else -1
    sz = 1 if z0 < z1 else -1
    if dx > dz:
        err = dx // 2
        while x != x1:
            points.append((x, z))
            err -= dz
            if err < 0:
                z += sz
                err += dx
            x += sx
    else:
        err = dz // 2
        while z != z1:
            points.append((x, z))
            err -= dx
            if err < 0:
                x += sx
                err += dz
            z += sz
    points.append((x, z))
    return points


def polyline_cells(points):
    """Cells along consecutive segments of *points*, without duplicates."""
    seen = set()
    cells = []
    if len(points) == 1:
        return [tuple(points[0])]
    for (x0, z0), (x1, z1) in zip(points, points[1:]):
        for cell in bresenham_line(x0, z0, x1, z1):
            if cell not in seen:
                seen.add(cell)
                cells.append(cell)
    return cells


def widen_cells(cells, width: int):
    """Grow line cells into a band roughly *width* blocks wide."""
    if width <= 1:
        return list(cells)
    half = width // 2
    lo, hi = -half, width - half - 1
    seen = set()
    out = []
    for x, z in cells:
        for dx in range(lo, hi + 1):
            for dz in range(lo, hi + 1):
                cell = (x + dx, z + dz)
                if cell not in seen:
                    seen.add(cell)
                    out.append(cell)
    return out


def make_polygon(outer, holes=()):
    """Build a valid polygon from ring coordinates, or None if degenerate."""
    if len(outer) < 3:
        return None
    poly = Polygon(outer)
    if not poly.is_valid:
        poly = poly.buffer(0)
    for ring in holes:
        if len(ring) < 3:
            continue
        hole = Polygon(ring)
        if not hole.is_valid:
            hole = hole.buffer(0)
        poly = poly.difference(hole)
    if poly.is_empty:
        return None
    return poly


def polygon_cells(outer, holes=()):
    """Grid cells covered by the polygon (boundary included), minus holes."""
    poly = make_polygon(outer, holes)
    if poly is None:
        return []
    minx, minz, maxx, maxz = poly.bounds
    xs = np.arange(math.floor(minx), math.ceil(maxx) + 1)
    zs = np.arange(math.floor(minz), math.ceil(maxz) + 1)
    gx, gz = np.meshgrid(xs, zs)
    gx, gz = gx.ravel(), gz.ravel()
    inside = _shapely.intersects_xy(poly, gx, gz)
    return list(zip(gx[inside].tolist(), gz[inside].tolist()))


def centroid_cell(points):
    """Integer cell nearest the mean of *points*."""
    xs = [p[0] for p in points]
    zs = [p[1] for p in points]
    return int(round(sum(xs) / len(xs))), int(round(sum(zs) / len(zs)))
