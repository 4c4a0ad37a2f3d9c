"""
Error types raised by the parking simulator.

Construction-time problems (bad geometry, bad rectangle extents) and asset
failures are reported with dedicated exception classes so callers can tell
them apart from ordinary programming errors.
"""


class ParkingSimError(Exception):
    """Base class for all simulator errors"""


class ConfigurationError(ParkingSimError, ValueError):
    """Fixed geometric constants cannot produce a valid car (e.g. wheelbase longer than turning radius)"""


class InvalidDimensionError(ParkingSimError, ValueError):
    """A rectangle was given a non-positive width or height"""


class DegenerateMatrixError(ParkingSimError, ArithmeticError):
    """Attempted to invert a singular matrix"""


class AssetLoadError(ParkingSimError, IOError):
    """An image asset could not be read or rasterized"""
