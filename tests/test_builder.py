import dataclasses

import pytest

from worldbuilder.blocks import DIRT, GRASS_BLOCK
from worldbuilder.builder import generate_world, process_elements
from worldbuilder.constants import DEFAULT_GROUND_LEVEL
from worldbuilder.generators import GENERATORS
from worldbuilder.models import RunConfig
from worldbuilder.world_editor import WorldEditor, WorldSaveError, read_level_info

from conftest import (
    FakeBar, FakeGround, RecordingEditor, RecordingSink, line_way, square_way,
)


def run_config_for(tmp_path):
    return RunConfig(path=str(tmp_path / "world"))


def test_empty_run_writes_ground_and_saves(run_config):
    editor = RecordingEditor()
    sink = RecordingSink()

    generate_world([], run_config, 2, 2, ground=FakeGround(),
                   progress=sink, editor=editor)

    sets = editor.sets()
    assert len(sets) == 18
    assert {c[1] for c in sets} == {GRASS_BLOCK, DIRT}
    assert editor.saved == 1
    assert sink.values[-1] == 100.0


def test_progress_is_monotonic_and_ends_at_100(run_config):
    elements = [square_way(i, 0, 0, 3, 3, {"landuse": "grass"}) for i in range(1, 400)]
    sink = RecordingSink()

    generate_world(elements, run_config, 30, 30, ground=FakeGround(),
                   progress=sink, editor=RecordingEditor())

    values = sink.values
    assert values == sorted(values)
    assert values[0] == 11.0
    assert values[-1] == 100.0
    assert values.count(100.0) == 1
    assert 90.0 in values
    messages = [m for _, m in sink.updates if m]
    assert messages == ["Processing terrain...", "Generating ground...",
                        "Saving world...", "Done! World generation completed."]


def test_terrain_mode_announces_elevation_first(run_config):
    config = dataclasses.replace(run_config, terrain=True)
    sink = RecordingSink()
    generate_world([], config, 1, 1, ground=FakeGround(), progress=sink,
                   editor=RecordingEditor())
    assert sink.updates[0] == (10.0, "Fetching elevation...")


def test_save_failure_skips_completion(run_config):
    class FailingEditor(RecordingEditor):
        def save(self, metadata=None):
            raise WorldSaveError("disk full")

    sink = RecordingSink()
    with pytest.raises(WorldSaveError):
        generate_world([], run_config, 1, 1, ground=FakeGround(),
                       progress=sink, editor=FailingEditor())
    assert 100.0 not in sink.values
    assert sink.values[-1] == 90.0


def test_process_elements_counts_routed(editor, flat_ground, run_config):
    seen = []
    registry = {name: (lambda e, el, g, c: seen.append(el.id)) for name in GENERATORS}
    elements = [
        square_way(1, 0, 0, 4, 4, {"building": "yes"}),
        square_way(2, 0, 0, 4, 4, {"shop": "bakery"}),
        square_way(3, 0, 0, 4, 4, {"highway": "service"}),
    ]
    bar = FakeBar()

    routed = process_elements(editor, elements, flat_ground, run_config,
                              generators=registry, bar=bar)

    assert routed == 2
    assert seen == [1, 3]
    assert sum(bar.updates) == 3


def test_debug_mode_labels_each_element(editor, flat_ground, run_config):
    config = dataclasses.replace(run_config, debug=True)
    bar = FakeBar()
    process_elements(editor, [square_way(7, 0, 0, 2, 2, {})], flat_ground,
                     config, bar=bar)
    assert bar.postfix == "(Element ID: 7 / Type: way)"


def test_world_on_disk(tmp_path):
    config = dataclasses.replace(
        run_config_for(tmp_path), scale_x=12, scale_z=12)
    building = square_way(1, 2, 2, 8, 8, {"building": "house"})

    generate_world([building], config)

    info = read_level_info(config.path)
    assert info["elements"] == 1
    assert info["spawn"] == [10, DEFAULT_GROUND_LEVEL + 1, 10]
    assert info["options"] == {"terrain": False, "winter": False,
                               "fillground": False}
    assert info["block_count"] > 13 * 13 * 2


def test_world_editor_keeps_generator_blocks(tmp_path):
    config = run_config_for(tmp_path)
    world = WorldEditor(config.path, 6, 6)
    road = line_way(1, [(0, 0), (6, 0)], {"highway": "residential"})

    generate_world([road], config, 6, 6, editor=world)

    # The ground layer does not replace the road surface.
    assert world.get_block(3, DEFAULT_GROUND_LEVEL, 0) != GRASS_BLOCK
    assert world.get_block(3, DEFAULT_GROUND_LEVEL, 5) == GRASS_BLOCK
