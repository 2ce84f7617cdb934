"""Exceptions raised by the metatile calculator."""


class MetatileError(ValueError):
    pass


class InvalidConfig(MetatileError):
    """Raised when the metatile size is not a positive integer."""


class InvalidCoordinate(MetatileError):
    """Raised when a tile address is outside the tile pyramid."""
