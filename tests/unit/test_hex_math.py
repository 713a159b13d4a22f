"""
Test suite for hex coordinate math operations.

This module tests the hexagonal coordinate system used by the Wasteland map:
- Coordinate tokens ("qqq.rrr") and their decoding
- Axial and cube coordinates
- Distance calculations
- Neighbor finding
- Range queries for exploration and visibility
- Pixel to hex conversion
"""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wasteland.domain.errors import InvalidCoordinateError, InvalidInputError
from wasteland.utils.hex_math import (
    MAX_MAP_RADIUS,
    ORIGIN,
    HexCoord,
    axial_to_cube,
    cube_to_axial,
    decode_coord,
    encode_coord,
    hex_distance,
    hex_neighbors,
    hex_round,
    hexes_in_range,
    is_within_radius,
    pixel_to_hex,
)

coords = st.builds(
    HexCoord,
    q=st.integers(min_value=-999, max_value=999),
    r=st.integers(min_value=-999, max_value=999),
)


class TestCoordinateTokens:
    """Test encoding and decoding of coordinate tokens."""

    def test_positive_components_are_zero_padded(self) -> None:
        assert encode_coord(50, 7) == "050.007"
        assert encode_coord(0, 0) == "000.000"

    def test_negative_components_keep_sign_inside_width(self) -> None:
        assert encode_coord(-5, 12) == "-05.012"
        assert encode_coord(5, -5) == "005.-05"

    def test_wide_components_are_not_truncated(self) -> None:
        assert encode_coord(-100, 3) == "-100.003"
        assert decode_coord("-100.003") == HexCoord(q=-100, r=3)

    @given(
        st.integers(min_value=-MAX_MAP_RADIUS, max_value=MAX_MAP_RADIUS),
        st.integers(min_value=-MAX_MAP_RADIUS, max_value=MAX_MAP_RADIUS),
    )
    def test_tokens_are_fixed_width_up_to_max_radius(self, q: int, r: int) -> None:
        assert len(encode_coord(q, r)) == 7

    def test_decode_known_tokens(self) -> None:
        assert decode_coord("050.007") == HexCoord(q=50, r=7)
        assert decode_coord("-05.012") == HexCoord(q=-5, r=12)

    def test_token_property_and_from_token(self) -> None:
        coord = HexCoord(q=5, r=-3)
        assert coord.token == "005.-03"
        assert HexCoord.from_token(coord.token) == coord

    @pytest.mark.parametrize("token", ["", "abc", "1,2", "1.2.3", "1.", ".2", "a.b", "1 .2"])
    def test_malformed_tokens_raise(self, token: str) -> None:
        with pytest.raises(InvalidCoordinateError):
            decode_coord(token)

    def test_non_string_token_raises(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            decode_coord(12)  # type: ignore[arg-type]

    def test_coordinate_error_is_invalid_input(self) -> None:
        with pytest.raises(InvalidInputError):
            decode_coord("nowhere")
        with pytest.raises(ValueError):
            decode_coord("nowhere")

    @given(coord=coords)
    def test_round_trip(self, coord: HexCoord) -> None:
        assert decode_coord(encode_coord(coord.q, coord.r)) == coord


class TestCoordinateConversion:
    """Test conversion between axial and cube coordinates."""

    def test_axial_to_cube(self) -> None:
        assert axial_to_cube(HexCoord(q=1, r=2)) == (1, -3, 2)

    def test_cube_components_sum_to_zero(self) -> None:
        x, y, z = axial_to_cube(HexCoord(q=-4, r=7))
        assert x + y + z == 0

    def test_cube_to_axial_round_trip(self) -> None:
        coord = HexCoord(q=-3, r=5)
        assert cube_to_axial(*axial_to_cube(coord)) == coord


class TestHexDistance:
    """Test distance calculations between hexes."""

    def test_distance_to_self_is_zero(self) -> None:
        assert hex_distance(HexCoord(q=3, r=-2), HexCoord(q=3, r=-2)) == 0

    def test_known_distances(self) -> None:
        assert hex_distance(ORIGIN, HexCoord(q=2, r=1)) == 3
        assert hex_distance(ORIGIN, HexCoord(q=3, r=-3)) == 3
        assert hex_distance(HexCoord(q=-2, r=0), HexCoord(q=2, r=0)) == 4

    @given(a=coords, b=coords)
    def test_distance_is_symmetric(self, a: HexCoord, b: HexCoord) -> None:
        assert hex_distance(a, b) == hex_distance(b, a)

    @given(a=coords, b=coords, c=coords)
    def test_triangle_inequality(self, a: HexCoord, b: HexCoord, c: HexCoord) -> None:
        assert hex_distance(a, c) <= hex_distance(a, b) + hex_distance(b, c)

    def test_is_within_radius(self) -> None:
        assert is_within_radius(HexCoord(q=2, r=-1), 2)
        assert not is_within_radius(HexCoord(q=2, r=1), 2)


class TestNeighbors:
    """Test finding adjacent hexes."""

    def test_six_neighbors_at_distance_one(self) -> None:
        center = HexCoord(q=4, r=-1)
        neighbors = hex_neighbors(center)
        assert len(neighbors) == 6
        assert len(set(neighbors)) == 6
        assert all(hex_distance(center, n) == 1 for n in neighbors)

    def test_neighbor_order_starts_east(self) -> None:
        assert hex_neighbors(ORIGIN)[0] == HexCoord(q=1, r=0)
        assert hex_neighbors(ORIGIN)[3] == HexCoord(q=-1, r=0)


class TestHexesInRange:
    """Test range queries."""

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_count_follows_formula(self, n: int) -> None:
        assert len(hexes_in_range(ORIGIN, n)) == 3 * n * n + 3 * n + 1

    def test_all_hexes_within_range(self) -> None:
        center = HexCoord(q=-2, r=3)
        result = hexes_in_range(center, 3)
        assert center in result
        assert all(hex_distance(center, coord) <= 3 for coord in result)
        assert len(set(result)) == len(result)

    def test_negative_range_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            hexes_in_range(ORIGIN, -1)


class TestPixelConversion:
    """Test converting pixel positions back to hexes."""

    @staticmethod
    def _center(coord: HexCoord, size: float) -> tuple[float, float]:
        x = size * math.sqrt(3) * (coord.q + coord.r / 2)
        y = size * 1.5 * coord.r
        return x, y

    @pytest.mark.parametrize("coord", [ORIGIN, HexCoord(q=3, r=-2), HexCoord(q=-4, r=5)])
    def test_hex_centers_map_back(self, coord: HexCoord) -> None:
        x, y = self._center(coord, 20.0)
        assert pixel_to_hex(x, y, 20.0) == coord

    def test_offset_is_applied(self) -> None:
        x, y = self._center(HexCoord(q=1, r=1), 10.0)
        assert pixel_to_hex(x + 100, y + 50, 10.0, offset_x=100, offset_y=50) == HexCoord(q=1, r=1)

    def test_non_positive_size_raises(self) -> None:
        with pytest.raises(ValueError, match="size must be positive"):
            pixel_to_hex(1.0, 1.0, 0)

    def test_hex_round_keeps_cube_constraint(self) -> None:
        assert hex_round(0.4, 0.0) == ORIGIN
        assert hex_round(0.9, 0.05) == HexCoord(q=1, r=0)
