import asyncio
import logging

from fastapi import APIRouter, HTTPException

from worldbuilder.models import BoundingBox

from backend import config
from backend.jobs import job_manager, world_slug
from backend.models import BuildByBboxRequest, JobResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/build", tags=["build"])


@router.post("/bbox", response_model=JobResponse)
async def build_by_bbox(request: BuildByBboxRequest):
    """Start a world build from explicit bounding-box coordinates.

    The heavy lifting runs in a background task; the caller receives a job
    ID immediately and can poll ``/status/{job_id}`` for progress.
    """
    try:
        area = BoundingBox(north=request.north, south=request.south,
                           east=request.east, west=request.west)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    size = area.to_polygon().area
    if size > config.MAX_BBOX_AREA:
        raise HTTPException(
            status_code=400,
            detail=f"Area too large ({size:.4f} sq. deg, max {config.MAX_BBOX_AREA})")

    bbox = {
        "north": area.north,
        "south": area.south,
        "east": area.east,
        "west": area.west,
    }
    name = request.name or f"world-{bbox['north']:.4f}-{bbox['west']:.4f}"
    try:
        world_slug(name)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    job = job_manager.create_job()
    asyncio.create_task(job_manager.run_build(
        job, bbox, name,
        winter=request.winter,
        fillground=request.fillground,
        scale=request.scale))

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
        bbox=bbox,
    )


@router.get("/status/{job_id}", response_model=JobResponse)
async def get_build_status(job_id: str):
    """Poll the status of a running or completed build job."""
    job = job_manager.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
    )
