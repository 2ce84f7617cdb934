"""Metatile grid calculator.

A metatile is a square block of adjacent tiles rendered together as one
raster and sliced into single tiles afterwards. The grid is anchored at
tile (0, 0) of every zoom level::

        <--- dx --->
    ^   +-----+-----+-----+-----+
    |   |x0,y0|x1,y0| ... |     |
   dy   +-----+-----+-----+-----+
    |   |x0,y1|x1,y1| ... |     |
    v   +-----+-----+-----+-----+
        | ... | ... | ... | ... |
        +-----+-----+-----+-----+

With ``size=4`` every cell holds 2 x 2 tiles. Zoom levels whose pyramid
is narrower than a cell fall back to single tiles.
"""
import logging
import math
import numbers
from typing import List, NamedTuple, Tuple

import mercantile
import numpy as np

from . import config
from .errors import InvalidConfig, InvalidCoordinate
from .geometry import MAX_ZOOM, TILE_SIZE, span_to_mercator, tile_length

logger = logging.getLogger(__name__)


class TileAddress(NamedTuple):
    z: int
    x: int
    y: int

    @classmethod
    def parse(cls, text: str) -> "TileAddress":
        """Parse a slippy-map path such as ``"3/4/2"`` into an address."""
        parts = text.strip().strip("/").split("/")
        if len(parts) != 3:
            raise InvalidCoordinate(f"Expected 'z/x/y', got {text!r}")
        try:
            z, x, y = (int(part) for part in parts)
        except ValueError:
            raise InvalidCoordinate(f"Expected 'z/x/y', got {text!r}") from None
        return validate_address(cls(z, x, y))

    def __str__(self):
        return f"{self.z}/{self.x}/{self.y}"


class GridDimensions(NamedTuple):
    dx: int
    dy: int


class PixelDimensions(NamedTuple):
    width: int
    height: int


class Origin(NamedTuple):
    x0: int
    y0: int


class BoundingBox(NamedTuple):
    minx: float
    miny: float
    maxx: float
    maxy: float


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_address(address) -> TileAddress:
    """Return `address` as a TileAddress, rejecting tiles outside the pyramid.

    Parameters
    ----------
    address : TileAddress or object with z, x, y attributes
        Tile to validate, e.g. a ``mercantile.Tile``.

    Raises
    ------
    InvalidCoordinate
        If z is negative, a coordinate is not an integer or x/y lies
        outside ``[0, 2**z)``.
    """
    try:
        z, x, y = address.z, address.x, address.y
    except AttributeError:
        logger.debug("Rejected non-tile address %r", address)
        raise InvalidCoordinate(f"Not a tile address: {address!r}") from None
    if not all(_is_integer(v) for v in (z, x, y)):
        logger.debug("Rejected non-integer tile %r", address)
        raise InvalidCoordinate(f"Tile coordinates must be integers: {address!r}")
    if not 0 <= z <= MAX_ZOOM:
        logger.debug("Rejected zoom of %r", address)
        raise InvalidCoordinate(f"Zoom must be in [0, {MAX_ZOOM}], got {z}")
    length = tile_length(int(z))
    if not (0 <= x < length and 0 <= y < length):
        logger.debug("Rejected out of range tile %r", address)
        raise InvalidCoordinate(
            f"Tile {z}/{x}/{y} outside pyramid, x and y must be in [0, {length})")
    return TileAddress(int(z), int(x), int(y))


def _validate_zoom(zoom) -> int:
    if not _is_integer(zoom) or not 0 <= zoom <= MAX_ZOOM:
        logger.debug("Rejected zoom %r", zoom)
        raise InvalidCoordinate(
            f"Zoom must be an integer in [0, {MAX_ZOOM}], got {zoom!r}")
    return int(zoom)


def tile_bounding_box(address) -> BoundingBox:
    """Return the Web Mercator bounds of a single tile.

    Equivalent to ``mercantile.xy_bounds`` for the same tile.
    """
    z, x, y = validate_address(address)
    return BoundingBox(*span_to_mercator(z, x, y, 1, 1))


class Metatile:
    """Map tiles onto a grid of co-rendered metatiles.

    Parameters
    ----------
    size : int, optional
        Target number of tiles per metatile, by default 1 (no grouping).
        The cell edge is ``floor(sqrt(size))`` tiles.

    Raises
    ------
    InvalidConfig
        If size is not an integer >= 1.
    """

    def __init__(self, size: int = 1):
        if not _is_integer(size) or size < 1:
            logger.debug("Rejected metatile size %r", size)
            raise InvalidConfig(f"Metatile size must be an integer >= 1, got {size!r}")
        self._size = int(size)

    @classmethod
    def from_settings(cls) -> "Metatile":
        """Create a calculator using the configured ``metatile`` size."""
        return cls(size=config.metatile_size())

    @property
    def size(self) -> int:
        return self._size

    def __repr__(self):
        return f"Metatile(size={self._size})"

    def __eq__(self, other):
        if not isinstance(other, Metatile):
            return NotImplemented
        return self._size == other._size

    def __hash__(self):
        return hash(self._size)

    def dimensions(self, zoom: int) -> GridDimensions:
        """Return the cell size in tiles at `zoom`.

        The cell degrades to a single tile when the pyramid at `zoom` is
        narrower than ``floor(sqrt(size))``.
        """
        zoom = _validate_zoom(zoom)
        dimension = math.isqrt(self._size)
        if tile_length(zoom) < dimension:
            dimension = 1
        return GridDimensions(dimension, dimension)

    def dimensions_in_pixels(self, zoom: int) -> PixelDimensions:
        """Return the size of the combined metatile raster at `zoom`."""
        dx, dy = self.dimensions(zoom)
        return PixelDimensions(dx * TILE_SIZE, dy * TILE_SIZE)

    def origin_of(self, address) -> Origin:
        """Return the top-left tile of the cell containing `address`.

        The origin is not clamped against the pyramid, so member tiles of a
        cell on the pyramid edge may lie past the last row or column.
        """
        z, x, y = validate_address(address)
        dx, dy = self.dimensions(z)
        return Origin(x - x % dx, y - y % dy)

    def is_origin(self, address) -> bool:
        """Return True when `address` is the top-left tile of its cell."""
        address = validate_address(address)
        return self.origin_of(address) == (address.x, address.y)

    def tiles(self, address) -> List[TileAddress]:
        """List the tiles of the cell containing `address`.

        Tiles are ordered column by column (x outer, y inner). No bounds
        filtering is applied.
        """
        address = validate_address(address)
        x0, y0 = self.origin_of(address)
        dx, dy = self.dimensions(address.z)
        tiles = [TileAddress(address.z, x0 + i, y0 + j)
                 for i in range(dx)
                 for j in range(dy)]
        logger.debug("Metatile for %s: %d tiles from %d/%d/%d",
                     address, len(tiles), address.z, x0, y0)
        return tiles

    def offsets(self, address) -> List[Tuple[TileAddress, Tuple[int, int]]]:
        """Pixel offset of each member tile inside the combined raster.

        Returns
        -------
        list of (TileAddress, (int, int))
            Tiles in `tiles` order paired with their (column, row) pixel
            offset from the top-left corner of the metatile raster.
        """
        address = validate_address(address)
        x0, y0 = self.origin_of(address)
        return [(tile, ((tile.x - x0) * TILE_SIZE, (tile.y - y0) * TILE_SIZE))
                for tile in self.tiles(address)]

    def split(self, raster, address) -> List[Tuple[TileAddress, np.ndarray]]:
        """Slice a rendered metatile raster into single tile arrays.

        Parameters
        ----------
        raster : array_like
            Array shaped ``(height, width, ...)`` covering the cell of
            `address`. Either the full cell from `dimensions_in_pixels`
            or only its part inside the pyramid, as given by `cell_span`.
        address : TileAddress
            Any tile of the cell.

        Returns
        -------
        list of (TileAddress, numpy.ndarray)
            Views into `raster` for every member tile inside the pyramid.

        Raises
        ------
        ValueError
            If the raster matches neither the full nor the clipped cell.
        """
        address = validate_address(address)
        raster = np.asarray(raster)
        width, height = self.dimensions_in_pixels(address.z)
        columns, rows = self.cell_span(address)
        shapes = {(height, width), (rows * TILE_SIZE, columns * TILE_SIZE)}
        if raster.ndim < 2 or tuple(raster.shape[:2]) not in shapes:
            raise ValueError(
                f"Raster shape {raster.shape} does not match metatile {height}x{width} "
                f"or its in-pyramid part {rows * TILE_SIZE}x{columns * TILE_SIZE}")
        length = tile_length(address.z)
        parts = []
        for tile, (px, py) in self.offsets(address):
            if tile.x >= length or tile.y >= length:
                continue
            parts.append((tile, raster[py:py + TILE_SIZE, px:px + TILE_SIZE]))
        return parts

    def bounding_box(self, address) -> BoundingBox:
        """Return the Web Mercator bounds of the tile span starting at `address`.

        The span is ``size`` tiles wide and high, clipped to the tiles left
        between `address` and the pyramid edge. The raw `address` is used,
        pass the cell origin to get bounds anchored at the cell.

        Returns
        -------
        BoundingBox
            (minx, miny, maxx, maxy) in meters.
        """
        z, x, y = validate_address(address)
        length = tile_length(z)
        width = min(self._size, length, length - x)
        height = min(self._size, length, length - y)
        return BoundingBox(*span_to_mercator(z, x, y, width, height))

    def cell_bounding_box(self, address) -> BoundingBox:
        """Return the Web Mercator bounds of the whole cell containing `address`.

        The box covers ``dx`` x ``dy`` tiles from the cell origin, clipped
        to the pyramid.
        """
        address = validate_address(address)
        x0, y0 = self.origin_of(address)
        width, height = self.cell_span(address)
        return BoundingBox(*span_to_mercator(address.z, x0, y0, width, height))

    def origins_for_bounds(self, west: float, south: float, east: float,
                           north: float, zoom: int) -> List[TileAddress]:
        """Get the metatile origins covering a geographic bounding box.

        Parameters
        ----------
        west, south, east, north : float
            Bounds in degrees.
        zoom : int
            Zoom level for tile calculation.

        Returns
        -------
        list of TileAddress
            Origin tile of every metatile intersecting the bounds, sorted
            by column then row.
        """
        zoom = _validate_zoom(zoom)
        origins = set()
        for tile in mercantile.tiles(west, south, east, north, zooms=zoom):
            x0, y0 = self.origin_of(tile)
            origins.add(TileAddress(zoom, x0, y0))
        return sorted(origins, key=lambda tile: (tile.x, tile.y))

    def cell_span(self, address) -> Tuple[int, int]:
        """Number of columns and rows of the cell that lie inside the pyramid."""
        address = validate_address(address)
        x0, y0 = self.origin_of(address)
        dx, dy = self.dimensions(address.z)
        length = tile_length(address.z)
        return min(dx, length - x0), min(dy, length - y0)
