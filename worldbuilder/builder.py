"""WorldBuilder: thin orchestrator for one generation run."""

import dataclasses
import logging

from .constants import (
    SPAWN_Y,
    PROGRESS_FETCH_ELEVATION, PROGRESS_ELEMENTS_START, PROGRESS_ELEMENTS_END,
    PROGRESS_GROUND_START, PROGRESS_SAVING, PROGRESS_DONE,
)
from .dispatch import dispatch_element
from .ground import Ground
from .models import RunConfig, XZPoint
from .progress import BatchCounter, NullProgressSink, PhaseProgress
from .terrain import generate_ground
from .world_editor import WorldEditor, WorldSaveError

logger = logging.getLogger(__name__)


def process_elements(editor, elements, ground, config: RunConfig,
                     progress=None, generators=None, bar=None) -> int:
    """Dispatch every element to its generator; returns the number routed."""
    sink = progress if progress is not None else NullProgressSink()
    phase = PhaseProgress(sink, PROGRESS_ELEMENTS_START, PROGRESS_ELEMENTS_END,
                          len(elements))
    counter = BatchCounter(len(elements), bar=bar, desc="Processing elements",
                           unit="elements")
    routed = 0

    for element in elements:
        counter.step()
        phase.advance()
        if config.debug:
            counter.set_message(f"(Element ID: {element.id} / Type: {element.kind})")

        if dispatch_element(editor, element, ground, config,
                            generators=generators) is not None:
            routed += 1

    counter.finish()
    logger.info(f"Routed {routed} of {len(elements)} elements to generators")
    return routed


def _spawn_point(ground, config, editor):
    if ground.elevation_enabled:
        return [10, SPAWN_Y + 1, 10]
    x, z = min(10, editor.max_x), min(10, editor.max_z)
    return [x, ground.level(XZPoint(x, z)) + 1, z]


def generate_world(elements, config: RunConfig, scale_x: float = None,
                   scale_z: float = None, *, ground=None, progress=None,
                   generators=None, editor=None) -> None:
    """Generate and save a world from parsed elements.

    scale_x, scale_z: horizontal extents; default to the config's.
    ground: elevation oracle; defaults to one built from *config*.
    progress: ProgressSink receiving percentage updates.
    Raises WorldSaveError if the world cannot be written.
    """
    if scale_x is not None or scale_z is not None:
        config = dataclasses.replace(
            config,
            scale_x=config.scale_x if scale_x is None else scale_x,
            scale_z=config.scale_z if scale_z is None else scale_z)
    sink = progress if progress is not None else NullProgressSink()
    if editor is None:
        editor = WorldEditor(config.path, config.scale_x, config.scale_z)

    logger.info("[3/5] Processing data...")
    if config.terrain:
        sink.notify(PROGRESS_FETCH_ELEVATION, "Fetching elevation...")
    if ground is None:
        ground = Ground.from_config(config)

    sink.notify(PROGRESS_ELEMENTS_START, "Processing terrain...")
    process_elements(editor, elements, ground, config, sink, generators)

    logger.info("[4/5] Generating ground...")
    sink.notify(PROGRESS_GROUND_START, "Generating ground...")
    columns = generate_ground(editor, ground, config,
                              config.scale_x, config.scale_z, sink)
    logger.info(f"Generated ground for {columns} columns")

    logger.info("[5/5] Saving world...")
    sink.notify(PROGRESS_SAVING, "Saving world...")
    metadata = {
        "spawn": _spawn_point(ground, config, editor),
        "options": {
            "terrain": ground.elevation_enabled,
            "winter": config.winter,
            "fillground": config.fillground,
        },
        "elements": len(elements),
    }
    try:
        editor.save(metadata)
    except WorldSaveError as e:
        logger.error(f"Error saving world: {e}")
        raise

    sink.notify(PROGRESS_DONE, "Done! World generation completed.")
    logger.info("Done! World generation completed.")
