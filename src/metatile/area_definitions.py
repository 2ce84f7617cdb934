"""Area definitions for metatile rendering.

This module turns metatile extents into pyresample AreaDefinition
objects and geographic bounds, which is what a renderer needs to set up
its map extent before drawing a metatile.
"""
from pyresample.geometry import AreaDefinition
from pyproj import CRS, Transformer

from .geometry import TILE_SIZE
from .grid import BoundingBox, Metatile, validate_address

_crs_ll = CRS.from_epsg(4326)
_crs_wm = CRS.from_epsg(3857)
_transformer_to_lnglat = Transformer.from_crs(_crs_wm, _crs_ll, always_xy=True)


def lnglat_bounds(bbox: BoundingBox):
    """Convert a Web Mercator bounding box to longitude/latitude bounds.

    Parameters
    ----------
    bbox : BoundingBox
        (minx, miny, maxx, maxy) in Web Mercator meters.

    Returns
    -------
    tuple of float
        (west, south, east, north) in degrees.
    """
    minx, miny, maxx, maxy = bbox
    west, south = _transformer_to_lnglat.transform(minx, miny)
    east, north = _transformer_to_lnglat.transform(maxx, maxy)
    return west, south, east, north


def metatile_area(grid: Metatile, address, area_id=None, description=None):
    """Create a Web Mercator area definition covering a metatile.

    The area spans the cell containing `address`, clipped to the tile
    pyramid, at the native resolution of its zoom level.

    Parameters
    ----------
    grid : Metatile
        Calculator defining the metatile size.
    address : TileAddress
        Any tile of the metatile.
    area_id : str, optional
        Area identifier, by default ``metatile_<z>_<x0>_<y0>``.
    description : str, optional
        Human-readable description.

    Returns
    -------
    pyresample.AreaDefinition
        Area definition in EPSG:3857.
    """
    address = validate_address(address)
    x0, y0 = grid.origin_of(address)
    columns, rows = grid.cell_span(address)
    area_id = area_id or f"metatile_{address.z}_{x0}_{y0}"
    return AreaDefinition(
        area_id=area_id,
        description=description or area_id,
        proj_id="webmercator_wkt",
        projection=_crs_wm.to_wkt(),
        width=columns * TILE_SIZE,
        height=rows * TILE_SIZE,
        area_extent=tuple(grid.cell_bounding_box(address)),
    )
