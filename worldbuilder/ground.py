"""Ground elevation oracle.

Maps a horizontal grid point to a block height.  Without elevation data the
ground is flat at the configured level; with a heightmap the level comes from
bilinear interpolation of the map stretched over the world extent.
"""

import logging
import math
import pathlib

import numpy as np

from .constants import MIN_Y, MAX_Y
from .models import XZPoint

logger = logging.getLogger(__name__)

# Lowest surface whose two dirt layers still fit above the world floor.
_LOWEST_SURFACE = MIN_Y + 2


def load_heightmap(path) -> np.ndarray:
    """Load a 2-D heightmap (rows = z, columns = x, values in metres)."""
    path = pathlib.Path(path)
    if path.suffix == ".npy":
        heights = np.load(path)
    else:
        heights = np.loadtxt(path, delimiter=",")
    heights = np.asarray(heights, dtype=np.float64)
    if heights.ndim != 2 or min(heights.shape) < 1:
        raise ValueError(f"Heightmap {path} must be a non-empty 2-D grid, "
                         f"got shape {heights.shape}")
    logger.info(f"Loaded heightmap {path.name}: {heights.shape[1]}x{heights.shape[0]}, "
                f"range {np.nanmin(heights):.0f}..{np.nanmax(heights):.0f}m")
    return heights


def _axis_cell(pos, axis):
    """Lower sample index along *axis* and the fraction towards the next one."""
    n = len(axis)
    if n < 2 or axis[1] == axis[0]:
        return 0, 0.0
    f = (pos - axis[0]) / (axis[1] - axis[0])
    i = max(0, min(int(math.floor(f)), n - 2))
    return i, max(0.0, min(f - i, 1.0))


def sample_elevation_at(x, z, grid_x, grid_z, elev_2d):
    """Bilinear interpolation of elevation at a grid point.

    *elev_2d* is indexed ``[z, x]`` with sample positions *grid_z* and
    *grid_x*.  Points outside the grid take the nearest edge value; a point
    on the last row or column reads that row or column exactly.
    """
    ix, fx = _axis_cell(x, grid_x)
    iz, fz = _axis_cell(z, grid_z)
    ix1 = min(ix + 1, len(grid_x) - 1)
    iz1 = min(iz + 1, len(grid_z) - 1)

    h00 = elev_2d[iz, ix]
    h10 = elev_2d[iz, ix1]
    h01 = elev_2d[iz1, ix]
    h11 = elev_2d[iz1, ix1]

    return float(h00 * (1 - fx) * (1 - fz) +
                 h10 * fx * (1 - fz) +
                 h01 * (1 - fx) * fz +
                 h11 * fx * fz)


class Ground:
    def __init__(self, ground_level: int, heightmap=None,
                 scale_x: float = 0.0, scale_z: float = 0.0,
                 vertical_scale: float = 1.0):
        """
        ground_level: flat ground height, and the base of the terrain.
        heightmap: optional 2-D array of metres; enables elevation.
        scale_x, scale_z: world extent the heightmap is stretched over.
        vertical_scale: blocks per metre above the lowest heightmap value.
        """
        self.ground_level = int(ground_level)
        self.vertical_scale = vertical_scale
        self.elevation_enabled = heightmap is not None
        self._heights = None
        if heightmap is None:
            return

        heights = np.asarray(heightmap, dtype=np.float64)
        if np.isnan(heights).all():
            logger.warning("Heightmap has no valid samples, using flat terrain")
            self.elevation_enabled = False
            return
        heights = np.where(np.isnan(heights), np.nanmin(heights), heights)
        self._heights = heights - heights.min()
        nz, nx = self._heights.shape
        self._grid_x = np.linspace(0.0, max(scale_x, 0.0), nx)
        self._grid_z = np.linspace(0.0, max(scale_z, 0.0), nz)

    @classmethod
    def from_config(cls, config, heightmap=None):
        """Build the oracle for a run; elevation only applies in terrain mode."""
        if heightmap is not None and not config.terrain:
            logger.info("Heightmap given without terrain mode, ignoring it")
            heightmap = None
        if config.terrain and heightmap is None:
            logger.warning("Terrain mode requested without elevation data, "
                           "using flat ground")
        return cls(config.ground_level, heightmap,
                   scale_x=config.scale_x, scale_z=config.scale_z,
                   vertical_scale=config.vertical_scale)

    def level(self, coord: XZPoint) -> int:
        if not self.elevation_enabled:
            return self.ground_level
        metres = sample_elevation_at(coord.x, coord.z, self._grid_x,
                                     self._grid_z, self._heights)
        y = self.ground_level + int(round(metres * self.vertical_scale))
        return max(_LOWEST_SURFACE, min(y, MAX_Y))

    def min_level(self, coords) -> int:
        """Lowest ground level among *coords*; flat level when empty."""
        levels = [self.level(c) for c in coords]
        return min(levels) if levels else self.ground_level

    def max_level(self, coords) -> int:
        """Highest ground level among *coords*; flat level when empty."""
        levels = [self.level(c) for c in coords]
        return max(levels) if levels else self.ground_level
