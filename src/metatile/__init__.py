"""Metatile grid calculator for Web Mercator slippy map tiles.

Maps a tile address onto the square block of tiles ("metatile") that is
rendered together with it, and computes Web Mercator bounds for tiles
and metatiles.
"""
from . import config, geometry
from .errors import InvalidConfig, InvalidCoordinate, MetatileError
from .grid import (BoundingBox, GridDimensions, Metatile, Origin,
                   PixelDimensions, TileAddress, tile_bounding_box,
                   validate_address)

__all__ = [
    "BoundingBox", "GridDimensions", "InvalidConfig", "InvalidCoordinate",
    "Metatile", "MetatileError", "Origin", "PixelDimensions", "TileAddress",
    "tile_bounding_box", "validate_address",
]
