"""Tests for the seeded gradient noise used by world generation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wasteland.utils.noise import build_permutation, fade, lerp, make_noise, noise_grid


def test_fade_fixed_points():
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == pytest.approx(0.5)


def test_lerp():
    assert lerp(2.0, 4.0, 0.25) == pytest.approx(2.5)


def test_permutation_is_doubled_permutation():
    perm = build_permutation(17)
    assert len(perm) == 512
    assert sorted(perm[:256]) == list(range(256))
    assert perm[:256] == perm[256:]


def test_permutation_depends_on_seed():
    assert build_permutation(1) != build_permutation(2)


def test_same_seed_same_field():
    a = make_noise(42)
    b = make_noise(42)
    points = [(x * 0.37, y * 0.53) for x in range(-5, 6) for y in range(-5, 6)]
    assert [a(x, y) for x, y in points] == [b(x, y) for x, y in points]


def test_different_seeds_differ():
    a = make_noise(1)
    b = make_noise(2)
    points = [(x * 0.37, y * 0.53) for x in range(10) for y in range(10)]
    assert [a(x, y) for x, y in points] != [b(x, y) for x, y in points]


def test_lattice_points_are_zero():
    field = make_noise(7)
    assert field(3.0, 5.0) == 0.0
    assert field(-2.0, 4.0) == 0.0


def test_field_is_continuous():
    field = make_noise(9)
    assert abs(field(1.30, 2.70) - field(1.3001, 2.7001)) < 0.01


@given(
    seed=st.integers(min_value=0, max_value=10_000),
    x=st.floats(min_value=-500, max_value=500, allow_nan=False),
    y=st.floats(min_value=-500, max_value=500, allow_nan=False),
)
def test_values_are_clamped(seed, x, y):
    assert -1.0 <= make_noise(seed)(x, y) <= 1.0


def test_noise_grid_shape():
    grid = noise_grid(4, 3, seed=5)
    assert len(grid) == 3
    assert all(len(row) == 4 for row in grid)
    assert grid[0][0] == 0.0


def test_noise_grid_rejects_negative_dimensions():
    with pytest.raises(ValueError, match="non-negative"):
        noise_grid(-1, 3, seed=5)
