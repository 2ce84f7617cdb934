"""Web Mercator (EPSG:3857) geometry constants.

Attributes
----------
TILE_SIZE : int
    Edge length of a raster tile in pixels.
EARTH_RADIUS : float
    Radius of the Web Mercator sphere in meters.
EARTH_CIRCUMFERENCE : float
    Length of the equator on the Web Mercator sphere in meters.
ORIGIN_SHIFT : float
    Half the circumference, the Mercator coordinate of the map edge.
MAX_RESOLUTION : float
    Meters per pixel at zoom 0.
MAX_ZOOM : int
    Deepest zoom level whose tile count still converts to a float.
"""
import math

TILE_SIZE = 256
MAX_ZOOM = 1023
EARTH_RADIUS = 6378137.0
EARTH_DIAMETER = EARTH_RADIUS * 2
EARTH_CIRCUMFERENCE = EARTH_DIAMETER * math.pi
ORIGIN_SHIFT = EARTH_CIRCUMFERENCE / 2
MAX_RESOLUTION = EARTH_CIRCUMFERENCE / TILE_SIZE


def tile_length(zoom: int) -> int:
    """Number of tile columns (and rows) of the pyramid at `zoom`."""
    return 2**zoom


def resolution(zoom: int) -> float:
    """Convert a zoom level to resolution in meters per pixel.

    Parameters
    ----------
    zoom : int
        Web Mercator zoom level (slippy-map convention).

    Returns
    -------
    float
        Resolution in meters per pixel at the equator.
    """
    return MAX_RESOLUTION / tile_length(zoom)


def span_to_mercator(zoom: int, x: int, y: int, width: int, height: int):
    """Return the Mercator extent of a `width` x `height` tile span at (x, y).

    Tile rows grow southwards while Mercator y grows northwards, so the
    span's top row gives the maximum y.
    """
    meters = TILE_SIZE * resolution(zoom)
    minx = x * meters - ORIGIN_SHIFT
    miny = -(y + height) * meters + ORIGIN_SHIFT
    maxx = (x + width) * meters - ORIGIN_SHIFT
    maxy = -(y * meters - ORIGIN_SHIFT)
    return minx, miny, maxx, maxy
