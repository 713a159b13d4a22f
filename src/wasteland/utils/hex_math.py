"""
Hexagonal coordinate system mathematics for the Wasteland world grid.

This module implements the coordinate operations shared by world generation,
pathfinding and the faction AI:
- Encoding coordinates as the canonical ``"qqq.rrr"`` token and back
- Distance calculations between hexes
- Finding adjacent hexes
- Finding all hexes within a range (for exploration and visibility)
- Converting screen positions to hexes

Coordinate Systems:
-------------------
1. Axial Coordinates (q, r) - for storage and representation
   - Used in the HexCoord dataclass and in coordinate tokens

2. Cube Coordinates (x, y, z) - for rounding and range iteration
   - x, y, z: three coordinates with constraint x + y + z = 0
   - Conversion: x = q, z = r, y = -x - z

Coordinate Tokens:
------------------
Every location that leaves the core (faction garrisons, explored sets,
starting locations, action payloads) is keyed by a token.  Each component is
zero-padded to three characters; negative components keep their sign inside
the width, so ``(5, -5)`` encodes as ``"005.-05"`` and decodes back exactly.

References:
-----------
Based on the excellent guide at: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from wasteland.domain.errors import InvalidCoordinateError

TOKEN_WIDTH = 3
# Largest map radius whose tokens all keep the fixed width ("-99" is three characters)
MAX_MAP_RADIUS = 10 ** (TOKEN_WIDTH - 1) - 1

_TOKEN_PATTERN = re.compile(r"^(-?\d+)\.(-?\d+)$")


@dataclass(frozen=True, slots=True)
class HexCoord:
    """
    A hexagonal coordinate using the axial coordinate system.

    Attributes:
        q: Column coordinate (horizontal axis)
        r: Row coordinate (diagonal axis)

    Example:
        >>> HexCoord(q=5, r=-3).token
        '005.-03'
    """

    q: int
    r: int

    @property
    def token(self) -> str:
        """Canonical ``"qqq.rrr"`` token for this coordinate."""
        return encode_coord(self.q, self.r)

    @classmethod
    def from_token(cls, token: str) -> HexCoord:
        """Decode a coordinate token (see :func:`decode_coord`)."""
        return decode_coord(token)


ORIGIN = HexCoord(q=0, r=0)


def encode_coord(q: int, r: int) -> str:
    """
    Encode an axial coordinate as a fixed-width token.

    Example:
        >>> encode_coord(50, 7)
        '050.007'
        >>> encode_coord(-5, 12)
        '-05.012'
    """
    return f"{q:0{TOKEN_WIDTH}d}.{r:0{TOKEN_WIDTH}d}"


def decode_coord(token: str) -> HexCoord:
    """
    Decode a coordinate token produced by :func:`encode_coord`.

    Args:
        token: A ``"qqq.rrr"`` token

    Returns:
        The decoded HexCoord

    Raises:
        InvalidCoordinateError: If the token is not two dot-separated integers

    Example:
        >>> decode_coord("-05.012")
        HexCoord(q=-5, r=12)
    """
    if not isinstance(token, str):
        raise InvalidCoordinateError(f"coordinate token must be a string, got {token!r}")
    match = _TOKEN_PATTERN.match(token.strip())
    if match is None:
        raise InvalidCoordinateError(f"malformed coordinate token: {token!r}")
    return HexCoord(q=int(match.group(1)), r=int(match.group(2)))


def axial_to_cube(coord: HexCoord) -> tuple[int, int, int]:
    """
    Convert axial coordinates (q, r) to cube coordinates (x, y, z).

    Example:
        >>> axial_to_cube(HexCoord(q=1, r=2))
        (1, -3, 2)
    """
    x = coord.q
    z = coord.r
    y = -x - z
    return x, y, z


def cube_to_axial(x: int, y: int, z: int) -> HexCoord:  # noqa: ARG001
    """
    Convert cube coordinates (x, y, z) back to axial coordinates (q, r).

    The y parameter is accepted for symmetry with :func:`axial_to_cube`; it is
    redundant because y = -x - z.
    """
    return HexCoord(q=x, r=z)


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps to move from a to b:
        distance = (|dq| + |dq + dr| + |dr|) / 2

    Example:
        >>> hex_distance(HexCoord(q=0, r=0), HexCoord(q=2, r=1))
        3
    """
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def is_within_radius(coord: HexCoord, radius: int) -> bool:
    """Return True when ``coord`` lies inside a circular map of ``radius``."""
    return hex_distance(ORIGIN, coord) <= radius


# Direction vectors for the 6 neighbors in axial coordinates, clockwise
_NEIGHBOR_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
)


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex.

    The order is fixed: East, Northeast, Northwest, West, Southwest,
    Southeast.  Neighbors are returned whether or not they exist on a map;
    callers filter against the map they are working with.

    Example:
        >>> len(hex_neighbors(HexCoord(q=0, r=0)))
        6
    """
    return [HexCoord(q=coord.q + dq, r=coord.r + dr) for dq, dr in _NEIGHBOR_DIRECTIONS]


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    The number of hexes follows the formula: 3n^2 + 3n + 1

    Args:
        center: The center hex coordinate
        n: The maximum distance (range)

    Returns:
        A list of HexCoord objects within the range, ordered by q then r

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    hexes = []
    for dq in range(-n, n + 1):
        for dr in range(max(-n, -dq - n), min(n, -dq + n) + 1):
            hexes.append(HexCoord(q=center.q + dq, r=center.r + dr))
    return hexes


def hex_round(q: float, r: float) -> HexCoord:
    """
    Round fractional axial coordinates to the nearest hex.

    Rounds all three cube components and then repairs the one with the
    largest rounding error so that x + y + z stays 0.
    """
    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return HexCoord(q=int(rq), r=int(rr))


def pixel_to_hex(
    x: float, y: float, size: float, offset_x: float = 0.0, offset_y: float = 0.0
) -> HexCoord:
    """
    Convert a pixel position on a pointy-top hex layout to the hex under it.

    Args:
        x: Horizontal pixel position
        y: Vertical pixel position
        size: Hex radius in pixels (must be positive)
        offset_x: Pixel position of the origin hex center
        offset_y: Pixel position of the origin hex center

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    adjusted_x = (x - offset_x) / size
    adjusted_y = (y - offset_y) / size
    q = math.sqrt(3) / 3 * adjusted_x - adjusted_y / 3
    r = 2 / 3 * adjusted_y
    return hex_round(q, r)
