"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`wasteland` package (e.g., `from wasteland.api.app import create_app`) without
requiring an editable install in CI.
"""

import sys
from pathlib import Path

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import pytest  # noqa: E402

from wasteland.domain.enums import TerrainKind  # noqa: E402
from wasteland.domain.models import HexCell, PointOfInterest, WorldMap  # noqa: E402
from wasteland.utils.hex_math import ORIGIN, decode_coord, hexes_in_range  # noqa: E402


def build_world(
    radius: int,
    *,
    terrain: dict[str, TerrainKind] | None = None,
    pois: dict[str, PointOfInterest] | None = None,
    starts: tuple[str, ...] = (),
    default: TerrainKind = TerrainKind.PLAINS,
    seed: int = 0,
) -> WorldMap:
    """Hand-built world: ``default`` terrain everywhere except the overrides."""

    terrain = terrain or {}
    pois = pois or {}
    cells = {}
    for coord in hexes_in_range(ORIGIN, radius):
        token = coord.token
        cells[coord] = HexCell(
            q=coord.q,
            r=coord.r,
            terrain=terrain.get(token, default),
            poi=pois.get(token),
        )
    for token in list(terrain) + list(pois):
        assert decode_coord(token) in cells, f"{token} is off the test map"
    return WorldMap(radius=radius, seed=seed, cells=cells, starting_locations=starts)


def ring_tokens(distance: int) -> list[str]:
    """Tokens of every hex exactly ``distance`` from the origin."""

    return [
        coord.token
        for coord in hexes_in_range(ORIGIN, distance)
        if max(abs(coord.q), abs(coord.r), abs(coord.q + coord.r)) == distance
    ]


@pytest.fixture
def plains_world() -> WorldMap:
    return build_world(6)
