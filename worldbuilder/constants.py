"""Configuration constants, paths, and logging setup."""

import os
import pathlib
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure base paths
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(
    os.environ.get("WORLDBUILDER_OUTPUT_DIR", str(BASE_DIR / "output")))

# ── World bounds ────────────────────────────────────────────────────────
MIN_Y = -64
MAX_Y = 319

# Default flat ground; also the height of the spawn platform.
DEFAULT_GROUND_LEVEL = -62
SPAWN_Y = -62
SPAWN_SIZE = 20  # spawn region spans 0..=SPAWN_SIZE on both axes

# ── Progress ranges (percent) ───────────────────────────────────────────
PROGRESS_FETCH_ELEVATION = 10.0
PROGRESS_ELEMENTS_START = 11.0
PROGRESS_ELEMENTS_END = 60.0
PROGRESS_GROUND_START = 60.0
PROGRESS_GROUND_END = 90.0
PROGRESS_SAVING = 90.0
PROGRESS_DONE = 100.0

# Emit a GUI update only when progress moved by more than this many points.
PROGRESS_EMIT_THRESHOLD = 0.25
# Target number of console bar refreshes per phase.
CONSOLE_DESIRED_UPDATES = 1500

# ── Overpass ────────────────────────────────────────────────────────────
OVERPASS_URL = os.environ.get(
    "OVERPASS_URL", "https://overpass-api.de/api/interpreter")
OVERPASS_TIMEOUT = int(os.environ.get("OVERPASS_TIMEOUT", "180"))

# Configure logging
logging.basicConfig(
    level=os.environ.get("WORLDBUILDER_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
