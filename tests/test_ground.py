import numpy as np
import pytest

from worldbuilder.constants import MAX_Y, MIN_Y
from worldbuilder.ground import Ground, load_heightmap, sample_elevation_at
from worldbuilder.models import RunConfig, XZPoint

SLOPE = [[0.0, 10.0], [0.0, 10.0]]


def test_flat_ground():
    ground = Ground(-62)
    assert not ground.elevation_enabled
    assert ground.level(XZPoint(0, 0)) == -62
    assert ground.level(XZPoint(500, -3)) == -62


def test_heightmap_is_interpolated_over_extent():
    ground = Ground(-62, SLOPE, scale_x=10, scale_z=10)
    assert ground.elevation_enabled
    assert ground.level(XZPoint(0, 0)) == -62
    assert ground.level(XZPoint(5, 3)) == -57
    assert ground.level(XZPoint(10, 10)) == -52


def test_heights_are_relative_to_lowest_sample():
    ground = Ground(-62, [[100.0, 110.0], [100.0, 110.0]], scale_x=10, scale_z=10)
    assert ground.level(XZPoint(0, 0)) == -62
    assert ground.level(XZPoint(10, 0)) == -52


def test_vertical_scale():
    ground = Ground(-62, SLOPE, scale_x=10, scale_z=10, vertical_scale=2.0)
    assert ground.level(XZPoint(5, 0)) == -52


def test_levels_are_clamped():
    high = Ground(-62, [[0.0, 1000.0], [0.0, 1000.0]], scale_x=4, scale_z=4)
    assert high.level(XZPoint(4, 0)) == MAX_Y
    low = Ground(-70, SLOPE, scale_x=10, scale_z=10)
    assert low.level(XZPoint(0, 0)) == MIN_Y + 2


def test_nan_samples():
    ground = Ground(-62, [[np.nan, 10.0], [0.0, 10.0]], scale_x=10, scale_z=10)
    assert ground.level(XZPoint(0, 0)) == -62

    empty = Ground(-62, [[np.nan, np.nan], [np.nan, np.nan]], scale_x=10, scale_z=10)
    assert not empty.elevation_enabled
    assert empty.level(XZPoint(3, 3)) == -62


def test_min_and_max_level():
    ground = Ground(-62, SLOPE, scale_x=10, scale_z=10)
    points = [XZPoint(0, 0), XZPoint(10, 0), XZPoint(5, 5)]
    assert ground.min_level(points) == -62
    assert ground.max_level(points) == -52
    assert ground.min_level([]) == -62


def test_sample_single_row_grid():
    elev = np.array([[7.0]])
    assert sample_elevation_at(3, 3, np.array([0.0]), np.array([0.0]), elev) == 7.0


def test_from_config_ignores_heightmap_without_terrain(tmp_path):
    config = RunConfig(path=str(tmp_path), scale_x=10, scale_z=10)
    assert not Ground.from_config(config, SLOPE).elevation_enabled

    terrain = RunConfig(path=str(tmp_path), terrain=True, scale_x=10, scale_z=10)
    assert Ground.from_config(terrain, SLOPE).level(XZPoint(10, 0)) == -52
    assert not Ground.from_config(terrain).elevation_enabled


def test_load_heightmap_formats(tmp_path):
    npy = tmp_path / "dem.npy"
    np.save(npy, np.array(SLOPE))
    assert load_heightmap(npy).shape == (2, 2)

    csv = tmp_path / "dem.csv"
    csv.write_text("1,2,3\n4,5,6\n")
    heights = load_heightmap(csv)
    assert heights.shape == (2, 3)
    assert heights[1, 2] == 6.0


def test_load_heightmap_rejects_1d(tmp_path):
    npy = tmp_path / "line.npy"
    np.save(npy, np.arange(4.0))
    with pytest.raises(ValueError):
        load_heightmap(npy)


def test_far_edge_reads_edge_samples():
    peaks = [[0.0, 0.0, 40.0],
             [0.0, 0.0, 0.0],
             [0.0, 0.0, 0.0],
             [20.0, 0.0, 0.0]]
    ground = Ground(-62, peaks, scale_x=20, scale_z=30)
    assert ground.level(XZPoint(20, 0)) == -22
    assert ground.level(XZPoint(0, 30)) == -42
    assert ground.level(XZPoint(15, 0)) == -42
    assert ground.level(XZPoint(25, -5)) == -22


def test_single_row_heightmap_still_varies_along_x():
    elev = np.array([[0.0, 10.0]])
    assert sample_elevation_at(5, 0, np.array([0.0, 10.0]), np.array([0.0]), elev) == 5.0
    assert sample_elevation_at(10, 7, np.array([0.0, 10.0]), np.array([0.0]), elev) == 10.0


def test_lowest_sample_sits_on_ground_level():
    ground = Ground(-62, np.zeros((3, 3)), scale_x=30, scale_z=30)
    assert ground.level(XZPoint(0, 0)) == -62
    assert ground.level(XZPoint(30, 30)) == -62
