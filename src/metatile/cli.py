"""Command-line interface for the metatile calculator.

Prints metatile geometry for slippy map tiles using the Typer framework.
"""
import logging
from typing import Optional

import typer

from . import config
from .area_definitions import lnglat_bounds
from .errors import MetatileError
from .grid import Metatile, TileAddress

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main(
    env: str = typer.Option("DEFAULT", help="Settings environment to use."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
):
    """Metatile grid calculator for Web Mercator slippy tiles.

    Groups tiles into square metatiles and prints their geometry.
    """
    if env != "DEFAULT":
        config.change_env(env)
    if verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")


def _grid(size: Optional[int]) -> Metatile:
    try:
        if size is None:
            return Metatile.from_settings()
        return Metatile(size=size)
    except MetatileError as err:
        raise typer.BadParameter(str(err), param_hint="--size")


def _address(tile: str) -> TileAddress:
    try:
        return TileAddress.parse(tile)
    except MetatileError as err:
        raise typer.BadParameter(str(err), param_hint="TILE")


SIZE_OPTION = typer.Option(None, "--size", "-s",
                           help="Tiles per metatile (default from settings).")


@app.command()
def dimensions(
    zoom: int = typer.Argument(..., help="Zoom level."),
    size: Optional[int] = SIZE_OPTION,
):
    """Print the metatile size in tiles and pixels at a zoom level."""
    grid = _grid(size)
    if zoom < 0:
        raise typer.BadParameter("Zoom must be >= 0", param_hint="ZOOM")
    dx, dy = grid.dimensions(zoom)
    width, height = grid.dimensions_in_pixels(zoom)
    typer.echo(f"tiles {dx} {dy}")
    typer.echo(f"pixels {width} {height}")


@app.command()
def origin(
    tile: str = typer.Argument(..., help="Tile as z/x/y."),
    size: Optional[int] = SIZE_OPTION,
):
    """Print the top-left tile of the metatile containing TILE."""
    grid = _grid(size)
    x0, y0 = grid.origin_of(_address(tile))
    typer.echo(f"{x0} {y0}")


@app.command()
def tiles(
    tile: str = typer.Argument(..., help="Tile as z/x/y."),
    size: Optional[int] = SIZE_OPTION,
):
    """List the tiles of the metatile containing TILE."""
    grid = _grid(size)
    for member in grid.tiles(_address(tile)):
        typer.echo(str(member))


@app.command()
def cover(
    west: float = typer.Argument(..., help="Western bound in degrees."),
    south: float = typer.Argument(..., help="Southern bound in degrees."),
    east: float = typer.Argument(..., help="Eastern bound in degrees."),
    north: float = typer.Argument(..., help="Northern bound in degrees."),
    zoom: int = typer.Argument(..., help="Zoom level."),
    size: Optional[int] = SIZE_OPTION,
):
    """List the metatile origins covering a lon/lat box.

    Use ``--`` before the bounds when they start with a minus sign.
    """
    grid = _grid(size)
    if zoom < 0:
        raise typer.BadParameter("Zoom must be >= 0", param_hint="ZOOM")
    for origin_tile in grid.origins_for_bounds(west, south, east, north, zoom):
        typer.echo(str(origin_tile))


@app.command()
def bbox(
    tile: str = typer.Argument(..., help="Tile as z/x/y."),
    size: Optional[int] = SIZE_OPTION,
    cell: bool = typer.Option(False, "--cell", help="Bounds of the whole metatile."),
    lnglat: bool = typer.Option(False, "--lnglat", help="Print degrees instead of meters."),
):
    """Print the Web Mercator bounding box for TILE."""
    grid = _grid(size)
    address = _address(tile)
    bounds = grid.cell_bounding_box(address) if cell else grid.bounding_box(address)
    if lnglat:
        bounds = lnglat_bounds(bounds)
    typer.echo(" ".join(f"{value:.6f}" for value in bounds))


if __name__ == "__main__":
    app()
