"""Exception types raised by terrain_skyline."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when terrain or extraction parameters are invalid."""


class OutOfRangeError(IndexError):
    """Raised when a lattice lookup falls outside the gradient field."""
