"""Exception types raised by the Wasteland rules layer.

Only malformed input is exceptional.  Missing paths and missing targets are
ordinary results (``None`` or an empty list) and never raise.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a caller hands the core data it cannot interpret."""


class InvalidCoordinateError(InvalidInputError):
    """Raised when a coordinate token cannot be decoded."""


class UnknownTerrainError(InvalidInputError):
    """Raised for terrain names outside the closed terrain enumeration."""


class UnknownPoiKindError(InvalidInputError):
    """Raised for point-of-interest kinds outside the closed enumeration."""


class InvalidActionError(InvalidInputError):
    """Raised when an action set would overdraw a faction's holdings."""
