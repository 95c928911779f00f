"""Click CLI commands for WorldBuilder."""

import logging

import click

from .builder import generate_world
from .constants import DEFAULT_GROUND_LEVEL
from .ground import Ground, load_heightmap
from .models import BoundingBox, PathManager, RunConfig
from .osm_parser import (
    bbox_from_data, fetch_overpass_data, load_overpass_file, parse_osm_data,
)
from .progress import CallbackProgressSink

logger = logging.getLogger(__name__)


def world_options(f):
    """Options shared by every build command."""
    options = [
        click.option('--path', '-p', default=None,
                     help='Output world directory (default: output/world)'),
        click.option('--terrain', is_flag=True, help='Use elevation data for the ground'),
        click.option('--heightmap', type=click.Path(exists=True, dir_okay=False),
                     default=None, help='Heightmap (.npy or .csv, metres) for --terrain'),
        click.option('--winter', is_flag=True, help='Snow instead of grass'),
        click.option('--fillground', is_flag=True, help='Fill underground with stone and bedrock'),
        click.option('--debug', is_flag=True, help='Show element ids while processing'),
        click.option('--scale', '-s', default=1.0, help='Blocks per metre horizontally'),
        click.option('--ground-level', default=DEFAULT_GROUND_LEVEL, help='Height of flat ground'),
        click.option('--vertical-scale', default=1.0, help='Blocks per metre of elevation'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group()
def cli():
    """WorldBuilder CLI for generating voxel worlds from OpenStreetMap data."""
    pass


@cli.command()
@click.argument('input_json', type=click.Path(exists=True, dir_okay=False))
@click.option('--bbox', nargs=4, type=float, default=None,
              help='NORTH SOUTH EAST WEST of the area (default: extent of the nodes)')
@world_options
def build(input_json, bbox, **options):
    """Build a world from a saved Overpass JSON file."""
    try:
        data = load_overpass_file(input_json)
        area = BoundingBox(*bbox) if bbox else bbox_from_data(data)
        run_build(data, area, **options)
    except Exception as e:
        logger.error(f"Error building world: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument('north', type=float)
@click.argument('south', type=float)
@click.argument('east', type=float)
@click.argument('west', type=float)
@world_options
def build_bbox(north: float, south: float, east: float, west: float, **options):
    """Download OSM data for a bounding box and build a world from it."""
    try:
        area = BoundingBox(north=north, south=south, east=east, west=west)
        data = fetch_overpass_data(area)
        run_build(data, area, **options)
    except Exception as e:
        logger.error(f"Error building world: {e}")
        raise click.ClickException(str(e))


def run_build(data, bbox, path=None, terrain=False, heightmap=None,
              winter=False, fillground=False, debug=False, scale=1.0,
              ground_level=DEFAULT_GROUND_LEVEL, vertical_scale=1.0,
              progress_callback=None) -> str:
    """Parse, generate and save; returns the world directory."""
    def _progress(pct, msg):
        if msg:
            click.echo(f"[{pct:3.0f}%] {msg}")

    path = path or str(PathManager.get_output_path("world"))
    elements, scale_x, scale_z = parse_osm_data(data, bbox, scale)
    config = RunConfig(path=path, terrain=terrain, winter=winter,
                       fillground=fillground, debug=debug,
                       scale_x=scale_x, scale_z=scale_z,
                       ground_level=ground_level, vertical_scale=vertical_scale)
    heights = load_heightmap(heightmap) if heightmap else None
    ground = Ground.from_config(config, heights)

    generate_world(elements, config, scale_x, scale_z, ground=ground,
                   progress=CallbackProgressSink(progress_callback or _progress))
    click.echo(f"World saved to {path}")
    return path
