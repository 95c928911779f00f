import os
import pathlib

BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(
    os.environ.get("WORLDBUILDER_OUTPUT_DIR", str(BASE_DIR / "output")))

# Largest bbox (in square degrees) a single job may request from Overpass
MAX_BBOX_AREA = float(os.environ.get("WORLDBUILDER_MAX_BBOX_AREA", "0.01"))

CORS_ORIGINS = [
    origin.strip() for origin in os.environ.get(
        "WORLDBUILDER_CORS_ORIGINS",
        "http://localhost:5174,http://127.0.0.1:5174").split(",")
    if origin.strip()
]
