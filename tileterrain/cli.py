"""Click CLI commands for tileterrain."""

import logging
import pathlib

import click

from .builder import TerrainBuilder
from .errors import TerrainError
from .loader import load_definition
from .maps import cliff_map, render_corner_heights
from .models import CompileOptions

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """Compile tile masks into ground and water triangle meshes."""
    pass


def _describe(label, mesh):
    if not len(mesh):
        return f"{label}: empty"
    lo, hi = mesh.bounds
    return (f"{label}: {len(mesh.vertices)} verts, {len(mesh)} faces, "
            f"bounds=({lo[0]:.2f}, {lo[1]:.2f}, {lo[2]:.2f})"
            f"-({hi[0]:.2f}, {hi[1]:.2f}, {hi[2]:.2f})")


@cli.command('compile')
@click.argument('definition', type=click.Path(exists=True, dir_okay=False))
@click.option('--seed', '-s', type=int, default=None, help='Seed for the cosmetic passes')
@click.option('--flat', is_flag=True, help='Disable rotation, jitter and water nudge')
def compile_definition(definition: str, seed: int | None, flat: bool):
    """Compile a JSON terrain definition and report the meshes."""
    options = CompileOptions()
    if seed is not None:
        options.seed = seed
    if flat:
        options = options.deterministic()

    try:
        result = TerrainBuilder(options).compile(load_definition(definition))
    except TerrainError as e:
        logger.error(f"Error compiling terrain: {e}")
        raise click.ClickException(str(e))

    click.echo(_describe("ground", result.ground))
    click.echo(_describe("water", result.water))


@cli.command()
@click.argument('mapfile', type=click.Path(exists=True, dir_okay=False))
def corners(mapfile: str):
    """Print the resolved corner heights of a cliff text map."""
    try:
        mask = cliff_map(pathlib.Path(mapfile).read_text())
        click.echo(render_corner_heights(mask))
    except TerrainError as e:
        raise click.ClickException(str(e))


if __name__ == '__main__':
    cli()
