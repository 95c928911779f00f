"""WorldBuilder package: voxel worlds generated from OpenStreetMap data.

Import constants FIRST so environment overrides and logging are configured
before any other module reads them.
"""

from worldbuilder import constants as _constants  # noqa: F401

from worldbuilder.builder import generate_world
from worldbuilder.models import BoundingBox, RunConfig
