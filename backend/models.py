from pydantic import BaseModel
from typing import Optional


class BuildByBboxRequest(BaseModel):
    north: float
    south: float
    east: float
    west: float
    name: Optional[str] = None
    winter: bool = False
    fillground: bool = False
    scale: float = 1.0          # blocks per metre


class JobResponse(BaseModel):
    job_id: str
    status: str
    progress: float
    message: str
    result: Optional[dict] = None
    bbox: Optional[dict] = None


class WorldInfo(BaseModel):
    name: str
    spawn: Optional[list] = None
    bounds: Optional[dict] = None
    block_count: Optional[int] = None
    options: Optional[dict] = None
