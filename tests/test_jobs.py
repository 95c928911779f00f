import asyncio

import pytest
from fastapi import HTTPException

from backend import config, jobs
from backend.jobs import JobManager, JobProgressSink, JobStatus, world_slug
from backend.models import BuildByBboxRequest
from backend.routers import build, worlds

BBOX = {"north": 51.5010, "south": 51.5000, "east": -0.1200, "west": -0.1215}

OSM = {"elements": [
    {"type": "node", "id": 1, "lat": 51.5008, "lon": -0.1213},
    {"type": "node", "id": 2, "lat": 51.5008, "lon": -0.1210},
    {"type": "node", "id": 3, "lat": 51.5006, "lon": -0.1210},
    {"type": "node", "id": 4, "lat": 51.5006, "lon": -0.1213},
    {"type": "way", "id": 10, "nodes": [1, 2, 3, 4, 1],
     "tags": {"building": "yes"}},
]}


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "OUTPUT_DIR", tmp_path)
    return tmp_path


def test_progress_sink_updates_job():
    job = jobs.Job(id="j")
    sink = JobProgressSink(job)
    sink.notify(42.0, "Generating ground...")
    sink.notify(43.0, "")
    assert job.progress == 43.0
    assert job.message == "Generating ground..."


def test_build_job_completes(output_dir, monkeypatch):
    monkeypatch.setattr(jobs, "fetch_overpass_data", lambda area: OSM)
    manager = JobManager()
    job = manager.create_job()

    asyncio.run(manager.run_build(job, BBOX, "Test Town, UK"))

    assert job.status == JobStatus.completed
    assert job.progress == 100.0
    assert job.result["world"] == "test-town-uk"
    assert (output_dir / "test-town-uk" / "level.json").is_file()
    assert job.result["block_count"] > 0
    assert manager.get_job(job.id) is job

    listed = asyncio.run(worlds.list_worlds())
    assert [w.name for w in listed] == ["test-town-uk"]
    assert asyncio.run(worlds.get_world("test-town-uk")).spawn is not None


def test_build_job_failure(output_dir, monkeypatch):
    def offline(area):
        raise ConnectionError("Overpass unreachable")

    monkeypatch.setattr(jobs, "fetch_overpass_data", offline)
    manager = JobManager()
    job = manager.create_job()

    asyncio.run(manager.run_build(job, BBOX, "nowhere"))

    assert job.status == JobStatus.failed
    assert job.message == "Build failed: Overpass unreachable"
    assert job.result is None


def test_unknown_world(output_dir):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(worlds.get_world("missing"))
    assert exc.value.status_code == 404
    assert asyncio.run(worlds.list_worlds()) == []


def test_invalid_bbox_rejected():
    request = BuildByBboxRequest(north=1.0, south=2.0, east=1.0, west=0.0)
    with pytest.raises(HTTPException) as exc:
        asyncio.run(build.build_by_bbox(request))
    assert exc.value.status_code == 422


def test_large_bbox_rejected():
    request = BuildByBboxRequest(north=1.0, south=0.0, east=1.0, west=0.0)
    with pytest.raises(HTTPException) as exc:
        asyncio.run(build.build_by_bbox(request))
    assert exc.value.status_code == 400


def test_unknown_job():
    with pytest.raises(HTTPException) as exc:
        asyncio.run(build.get_build_status("nope"))
    assert exc.value.status_code == 404


@pytest.mark.parametrize("name, slug", [
    ("Test Town, UK", "test-town-uk"),
    ("St. John's Wood", "st.-johns-wood"),
    ("a/b\\c", "a-b-c"),
    ("../escape", "escape"),
    ("world-51.5010--0.1215", "world-51.5010--0.1215"),
])
def test_world_slug(name, slug):
    assert world_slug(name) == slug


@pytest.mark.parametrize("name", ["..", ".", "/", " ", "../.."])
def test_world_slug_rejects_names_without_a_directory(name):
    with pytest.raises(ValueError):
        world_slug(name)


def test_build_job_stays_inside_output_dir(tmp_path, monkeypatch):
    output = tmp_path / "out"
    output.mkdir()
    monkeypatch.setattr(config, "OUTPUT_DIR", output)
    monkeypatch.setattr(jobs, "fetch_overpass_data", lambda area: OSM)
    manager = JobManager()
    job = manager.create_job()

    asyncio.run(manager.run_build(job, BBOX, ".."))

    assert job.status == JobStatus.failed
    assert not (tmp_path / "level.json").exists()
    assert not (tmp_path / "region").exists()


def test_parent_directory_name_rejected():
    request = BuildByBboxRequest(name="..", **BBOX)
    with pytest.raises(HTTPException) as exc:
        asyncio.run(build.build_by_bbox(request))
    assert exc.value.status_code == 422
