import json

import numpy as np
import pytest

from worldbuilder.blocks import BEDROCK, BRICK, DIRT, GLASS, STONE, WATER
from worldbuilder.constants import MAX_Y, MIN_Y
from worldbuilder.world_editor import WorldEditor, WorldSaveError, read_level_info


@pytest.fixture
def world(tmp_path):
    return WorldEditor(tmp_path / "world", 40, 40)


def test_set_and_get(world):
    world.set_block(STONE, 3, 10, 4)
    assert world.block_at(3, 10, 4)
    assert world.get_block(3, 10, 4) == STONE
    assert not world.block_at(3, 11, 4)


def test_existing_blocks_are_kept_by_default(world):
    world.set_block(STONE, 1, 0, 1)
    world.set_block(DIRT, 1, 0, 1)
    assert world.get_block(1, 0, 1) == STONE


def test_whitelist_controls_overwrite(world):
    world.set_block(STONE, 1, 0, 1)
    world.set_block(DIRT, 1, 0, 1, override_whitelist=(WATER,))
    assert world.get_block(1, 0, 1) == STONE
    world.set_block(DIRT, 1, 0, 1, override_whitelist=(STONE,))
    assert world.get_block(1, 0, 1) == DIRT


def test_blacklist_controls_overwrite(world):
    world.set_block(BEDROCK, 2, MIN_Y, 2)
    world.set_block(STONE, 3, MIN_Y, 3)
    world.set_block(GLASS, 2, MIN_Y, 2, override_blacklist=(BEDROCK,))
    world.set_block(BEDROCK, 3, MIN_Y, 3, override_blacklist=(BEDROCK,))
    assert world.get_block(2, MIN_Y, 2) == BEDROCK
    assert world.get_block(3, MIN_Y, 3) == BEDROCK


def test_out_of_bounds_writes_are_ignored(world):
    world.set_block(STONE, 41, 0, 0)
    world.set_block(STONE, -1, 0, 0)
    world.set_block(STONE, 0, MIN_Y - 1, 0)
    world.set_block(STONE, 0, MAX_Y + 1, 0)
    assert world.block_count() == 0
    assert not world.block_at(41, 0, 0)


def test_fill_spans_sections(world):
    world.fill_blocks(STONE, 10, MIN_Y, 12, 20, MIN_Y + 20, 17)
    assert world.block_count() == 11 * 21 * 6
    assert world.get_block(20, MIN_Y + 20, 17) == STONE
    assert world.get_block(21, MIN_Y, 12) is None


def test_fill_with_reversed_corners(world):
    world.fill_blocks(DIRT, 5, 3, 5, 2, 0, 2)
    assert world.block_count() == 4 * 4 * 4


def test_fill_respects_overwrite_rules(world):
    world.set_block(BRICK, 1, 1, 1)
    world.set_block(BEDROCK, 2, 1, 1)
    world.fill_blocks(STONE, 0, 1, 1, 3, 1, 1)
    assert world.get_block(1, 1, 1) == BRICK

    world.fill_blocks(DIRT, 0, 1, 1, 3, 1, 1, override_blacklist=(BEDROCK,))
    assert [world.get_block(x, 1, 1) for x in range(4)] == [DIRT, DIRT, BEDROCK, DIRT]

    world.fill_blocks(WATER, 0, 1, 1, 3, 1, 1, override_whitelist=(BEDROCK,))
    assert [world.get_block(x, 1, 1) for x in range(4)] == [DIRT, DIRT, WATER, DIRT]


def test_fill_clipped_to_bounds(world):
    world.fill_blocks(STONE, -5, 0, 38, 2, 0, 45)
    assert world.block_count() == 3 * 3


def test_save_writes_regions_and_level(world):
    world.set_block(STONE, 1, MIN_Y, 2)
    world.set_block(WATER, 35, 100, 20)

    world.save({"spawn": [10, -61, 10]})

    region = world.world_dir / "region" / "r.0.0.npz"
    assert region.exists()
    with np.load(region) as data:
        palette = list(data["palette"])
        section = data["c0_0_s0"]
        assert palette[section[0, 2, 1]] == "minecraft:stone"
        upper = data[f"c2_1_s{(100 - MIN_Y) // 16}"]
        assert palette[upper[(100 - MIN_Y) % 16, 20 % 16, 35 % 16]] == "minecraft:water"

    info = read_level_info(world.world_dir)
    assert info["block_count"] == 2
    assert info["spawn"] == [10, -61, 10]
    assert info["bounds"] == {"max_x": 40, "max_z": 40}


def test_save_only_once(world):
    world.save()
    with pytest.raises(WorldSaveError):
        world.save()


def test_save_failure_is_reported(tmp_path):
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory")
    world = WorldEditor(blocker, 4, 4)
    world.set_block(STONE, 0, 0, 0)
    with pytest.raises(WorldSaveError):
        world.save()


def test_level_json_is_plain_json(world):
    world.save()
    with open(world.world_dir / "level.json") as f:
        assert json.load(f)["generator"] == "worldbuilder"
