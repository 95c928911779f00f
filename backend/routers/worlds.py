import json
import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, HTTPException

from worldbuilder.world_editor import read_level_info

from backend import config
from backend.models import WorldInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/worlds", tags=["worlds"])


def _world_info(world_dir: Path) -> WorldInfo:
    info = read_level_info(world_dir)
    return WorldInfo(
        name=world_dir.name,
        spawn=info.get("spawn"),
        bounds=info.get("bounds"),
        block_count=info.get("block_count"),
        options=info.get("options"),
    )


@router.get("", response_model=List[WorldInfo])
async def list_worlds():
    """Return metadata for every saved world in the output directory."""
    output_dir: Path = config.OUTPUT_DIR
    if not output_dir.exists():
        return []

    worlds: list[WorldInfo] = []
    for level_file in sorted(output_dir.glob("*/level.json")):
        try:
            worlds.append(_world_info(level_file.parent))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable world {level_file.parent.name}: {e}")
    return worlds


@router.get("/{name}", response_model=WorldInfo)
async def get_world(name: str):
    """Metadata of one saved world."""
    world_dir = config.OUTPUT_DIR / name
    if "/" in name or ".." in name or not (world_dir / "level.json").is_file():
        raise HTTPException(status_code=404, detail="World not found")
    return _world_info(world_dir)
