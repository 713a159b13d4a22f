"""Procedural world generation.

A world is fully determined by ``(radius, seed, settings)``: every random
decision is drawn from a single :class:`~wasteland.utils.rng.LcgStream`
seeded with ``seed``, in a fixed order.  Generating twice with the same
inputs yields the same cells, the same points of interest and the same
starting-location order, so an admin regeneration can be checked against the
world it replaced.

Pipeline:

1. Base terrain from two averaged noise fields, split into five bands.
2. A fixed fraction of land hexes reclassified as ruins.
3. Points of interest placed on compatible terrain.
4. Spaced starting locations picked from the habitable middle ring.
"""

from __future__ import annotations

import logging
import math
from collections import Counter

from wasteland.utils.hex_math import MAX_MAP_RADIUS, ORIGIN, HexCoord, hex_distance
from wasteland.utils.noise import make_noise
from wasteland.utils.rng import LcgStream

from .enums import PoiKind, TerrainKind
from .errors import InvalidInputError
from .models import HexCell, MapSettings, PointOfInterest, PoiID, WorldMap
from .poi_data import POI_RARITY, POI_TARGET_COUNTS, POI_TERRAIN_COMPATIBILITY
from .rules_config import DEFAULT_RULES, RulesConfig, WorldgenRules

logger = logging.getLogger(__name__)

# ``None`` marks the wildcard slot: a second draw over every terrain,
# weighted by the map settings.
TerrainBand = tuple[tuple[TerrainKind | None, float], ...]

TERRAIN_BANDS: tuple[tuple[float, TerrainBand], ...] = (
    (-0.5, ((TerrainKind.WATER, 0.7), (TerrainKind.SWAMP, 0.3))),
    (-0.2, ((TerrainKind.FOREST, 0.6), (TerrainKind.SWAMP, 0.4))),
    (0.2, ((TerrainKind.PLAINS, 0.8), (None, 0.2))),
    (0.5, ((TerrainKind.WASTELAND, 0.6), (TerrainKind.DESERT, 0.4))),
    (
        math.inf,
        (
            (TerrainKind.MOUNTAINS, 0.7),
            (TerrainKind.RADIATION, 0.15),
            (TerrainKind.CRATER, 0.15),
        ),
    ),
)

STARTING_TERRAIN: frozenset[TerrainKind] = frozenset({TerrainKind.PLAINS, TerrainKind.FOREST})


def generate_world(
    radius: int,
    seed: int,
    settings: MapSettings | None = None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> WorldMap:
    """Generate a complete world map.

    Args:
        radius: Map radius in hexes; a hex is on the map iff its distance
            from the origin is at most ``radius``
        seed: Seed for every random decision
        settings: Terrain bias weights (defaults to :meth:`MapSettings.default`)
        rules: Rule constants

    Returns:
        The generated world, including its ordered starting locations (which
        may be empty on small or hostile maps)

    Raises:
        InvalidInputError: If radius is negative or above ``MAX_MAP_RADIUS``
    """

    if not 0 <= radius <= MAX_MAP_RADIUS:
        raise InvalidInputError(f"radius must be between 0 and {MAX_MAP_RADIUS}, got {radius}")

    settings = settings if settings is not None else MapSettings.default()
    worldgen = rules.worldgen
    stream = LcgStream(seed)

    cells = _generate_base_terrain(radius, stream, settings, worldgen)
    _scatter_ruins(cells, stream, worldgen)
    _place_points_of_interest(cells, stream)
    starting_locations = _find_starting_locations(cells, radius, stream, worldgen)

    world = WorldMap(
        radius=radius,
        seed=seed,
        cells=cells,
        starting_locations=tuple(starting_locations),
        settings=settings,
    )
    logger.info(
        "generated world radius=%s seed=%s hexes=%s pois=%s starts=%s",
        radius,
        seed,
        len(cells),
        len(world.points_of_interest()),
        len(starting_locations),
    )
    return world


def min_start_spacing(radius: int, rules: RulesConfig = DEFAULT_RULES) -> float:
    """Minimum distance kept between any two starting locations."""

    return radius * rules.worldgen.start_spacing_fraction


def terrain_histogram(world: WorldMap) -> Counter[TerrainKind]:
    """Count hexes per terrain kind."""

    return Counter(cell.terrain for cell in world)


def _generate_base_terrain(
    radius: int,
    stream: LcgStream,
    settings: MapSettings,
    worldgen: WorldgenRules,
) -> dict[HexCoord, HexCell]:
    noise_seed = int(stream.next_float() * worldgen.noise_seed_range)
    primary = make_noise(noise_seed)
    secondary = make_noise(noise_seed + worldgen.second_noise_offset)
    factors = settings.normalized_factors()
    scale = worldgen.noise_scale

    cells: dict[HexCoord, HexCell] = {}
    for q in range(-radius, radius + 1):
        for r in range(-radius, radius + 1):
            coord = HexCoord(q=q, r=r)
            if hex_distance(ORIGIN, coord) > radius:
                continue
            combined = (primary(q * scale, r * scale) + secondary(q * scale, r * scale)) / 2
            terrain = _pick_terrain(_band_for(combined), stream, settings, factors)
            cells[coord] = HexCell(q=q, r=r, terrain=terrain)
    return cells


def _band_for(value: float) -> TerrainBand:
    for upper, band in TERRAIN_BANDS:
        if value < upper:
            return band
    return TERRAIN_BANDS[-1][1]


def _pick_terrain(
    band: TerrainBand,
    stream: LcgStream,
    settings: MapSettings,
    factors: dict[TerrainKind, float],
) -> TerrainKind:
    weighted = [
        (kind, base if kind is None else base * factors[kind]) for kind, base in band
    ]
    if all(weight <= 0 for _, weight in weighted):
        weighted = list(band)

    picked = stream.weighted_choice(weighted)
    if picked is not None:
        return picked
    return stream.weighted_choice([(kind, settings.weight_for(kind)) for kind in TerrainKind])


def _scatter_ruins(
    cells: dict[HexCoord, HexCell], stream: LcgStream, worldgen: WorldgenRules
) -> None:
    """Turn a fixed share of land hexes into ruins regardless of noise."""

    land = [cell for cell in cells.values() if cell.terrain != TerrainKind.WATER]
    count = math.floor(len(land) * worldgen.ruins_fraction)
    for _ in range(count):
        cell = land.pop(stream.next_int(len(land)))
        cell.terrain = TerrainKind.RUINS


def _place_points_of_interest(cells: dict[HexCoord, HexCell], stream: LcgStream) -> None:
    for kind, target in POI_TARGET_COUNTS:
        compatible = POI_TERRAIN_COMPATIBILITY[kind]
        candidates = [
            cell for cell in cells.values() if cell.terrain in compatible and cell.poi is None
        ]
        placed = 0
        while placed < target and candidates:
            cell = candidates.pop(stream.next_int(len(candidates)))
            cell.poi = _make_poi(kind, cell, stream)
            placed += 1


def _make_poi(kind: PoiKind, cell: HexCell, stream: LcgStream) -> PointOfInterest:
    return PointOfInterest(
        id=PoiID(f"poi-{kind}-{cell.token}"),
        kind=kind,
        difficulty=stream.next_int(10) + 1,
        rarity=POI_RARITY[kind],
    )


def _find_starting_locations(
    cells: dict[HexCoord, HexCell],
    radius: int,
    stream: LcgStream,
    worldgen: WorldgenRules,
) -> list[str]:
    inner = radius * worldgen.start_min_radius_fraction
    outer = radius * worldgen.start_max_radius_fraction
    spacing = radius * worldgen.start_spacing_fraction

    candidates = [
        cell
        for cell in cells.values()
        if cell.terrain in STARTING_TERRAIN
        and cell.poi is None
        and inner <= hex_distance(ORIGIN, cell.coord) <= outer
    ]
    stream.shuffle(candidates)

    accepted: list[HexCoord] = []
    for cell in candidates:
        coord = cell.coord
        if all(hex_distance(coord, other) >= spacing for other in accepted):
            accepted.append(coord)
            if len(accepted) >= worldgen.max_starting_locations:
                break

    return [coord.token for coord in accepted]
