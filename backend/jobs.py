import asyncio
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from worldbuilder.builder import generate_world
from worldbuilder.models import BoundingBox, RunConfig
from worldbuilder.osm_parser import fetch_overpass_data, parse_osm_data
from worldbuilder.world_editor import read_level_info

from backend import config

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    queued = "queued"
    running = "running"
    completed = "completed"
    failed = "failed"


@dataclass
class Job:
    id: str
    status: JobStatus = JobStatus.queued
    progress: float = 0.0
    message: str = "Queued"
    result: Optional[dict] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class JobProgressSink:
    """ProgressSink that records updates on a job for status polling."""

    def __init__(self, job: Job) -> None:
        self.job = job

    def notify(self, percentage: float, message: str) -> None:
        self.job.progress = percentage
        if message:
            self.job.message = message


def _sync_build(bbox: dict, world_name: str, winter: bool = False,
                fillground: bool = False, scale: float = 1.0,
                progress=None) -> dict:
    """Download, generate and save one world.  Runs in a worker thread."""
    area = BoundingBox(**bbox)
    data = fetch_overpass_data(area)
    elements, scale_x, scale_z = parse_osm_data(data, area, scale)

    world_dir = config.OUTPUT_DIR / world_name
    run_config = RunConfig(path=str(world_dir), winter=winter,
                           fillground=fillground,
                           scale_x=scale_x, scale_z=scale_z)
    generate_world(elements, run_config, scale_x, scale_z, progress=progress)

    info = read_level_info(world_dir)
    return {
        "world": world_name,
        "path": str(world_dir),
        "spawn": info.get("spawn"),
        "block_count": info.get("block_count"),
    }


def world_slug(name: str) -> str:
    """Derive a directory-safe world name from a location name.

    Raises ValueError when nothing usable is left, so a name can never
    point outside the output directory.
    """
    slug = name.lower().replace(",", "").replace("'", "")
    slug = re.sub(r"[^a-z0-9._-]+", "-", slug).strip("-.")
    if not slug:
        raise ValueError(f"Invalid world name: {name!r}")
    return slug


class JobManager:
    def __init__(self) -> None:
        self.jobs: dict[str, Job] = {}

    def create_job(self) -> Job:
        job = Job(id=str(uuid.uuid4()))
        self.jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    async def run_build(self, job: Job, bbox: dict, name: str,
                        winter: bool = False, fillground: bool = False,
                        scale: float = 1.0) -> None:
        """Execute the build pipeline, updating *job* with progress."""
        try:
            job.status = JobStatus.running
            job.progress = 1.0
            job.message = "Downloading map data..."

            world_name = world_slug(name)

            result = await asyncio.to_thread(
                _sync_build,
                bbox,
                world_name,
                winter=winter,
                fillground=fillground,
                scale=scale,
                progress=JobProgressSink(job),
            )

            job.progress = 100.0
            job.message = "Build complete"
            job.status = JobStatus.completed
            job.result = result

        except Exception as exc:
            logger.exception("Build failed for job %s", job.id)
            job.status = JobStatus.failed
            job.message = f"Build failed: {exc}"


# Singleton instance used across the application
job_manager = JobManager()
