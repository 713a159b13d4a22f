"""Tests for procedural world generation and world snapshots."""

import math
from itertools import combinations

import pytest

from wasteland.domain.enums import PoiKind, TerrainKind
from wasteland.domain.errors import InvalidInputError, UnknownTerrainError
from wasteland.domain.models import MapSettings
from wasteland.domain.poi_data import POI_TARGET_COUNTS, POI_TERRAIN_COMPATIBILITY
from wasteland.domain.worldgen import (
    STARTING_TERRAIN,
    generate_world,
    min_start_spacing,
    terrain_histogram,
)
from wasteland.savegame import world_from_json, world_to_json
from wasteland.utils.hex_math import MAX_MAP_RADIUS, ORIGIN, decode_coord, hex_distance


@pytest.fixture(scope="module")
def world():
    return generate_world(12, 42)


def test_hex_count_matches_radius(world):
    assert len(world) == 3 * 12 * 12 + 3 * 12 + 1
    assert all(hex_distance(ORIGIN, cell.coord) <= 12 for cell in world)


def test_generation_is_deterministic(world):
    again = generate_world(12, 42)
    assert world_to_json(again) == world_to_json(world)
    assert again.starting_locations == world.starting_locations


def test_different_seeds_give_different_maps(world):
    other = generate_world(12, 43)
    assert world_to_json(other) != world_to_json(world)


def test_radius_zero_is_a_single_hex():
    tiny = generate_world(0, 5)
    assert len(tiny) == 1
    assert set(tiny.starting_locations) <= {"000.000"}


def test_negative_radius_raises():
    with pytest.raises(InvalidInputError):
        generate_world(-1, 5)


def test_radius_beyond_token_width_raises():
    with pytest.raises(InvalidInputError, match="between 0 and 99"):
        generate_world(MAX_MAP_RADIUS + 1, 5)


def test_every_terrain_is_known(world):
    assert all(isinstance(cell.terrain, TerrainKind) for cell in world)


def test_ruins_share_of_land(world):
    histogram = terrain_histogram(world)
    land = len(world) - histogram[TerrainKind.WATER]
    assert histogram[TerrainKind.RUINS] >= math.floor(land * 0.05)


def test_histogram_covers_every_hex(world):
    assert sum(terrain_histogram(world).values()) == len(world)


class TestPointsOfInterest:
    def test_poi_ids_are_unique(self, world):
        ids = [cell.poi.id for cell in world.points_of_interest()]
        assert len(ids) == len(set(ids))

    def test_poi_id_names_kind_and_hex(self, world):
        for cell in world.points_of_interest():
            assert cell.poi.id == f"poi-{cell.poi.kind}-{cell.token}"

    def test_pois_sit_on_compatible_terrain(self, world):
        for cell in world.points_of_interest():
            assert cell.terrain in POI_TERRAIN_COMPATIBILITY[cell.poi.kind]

    def test_counts_never_exceed_targets(self, world):
        placed = {kind: 0 for kind in PoiKind}
        for cell in world.points_of_interest():
            placed[cell.poi.kind] += 1
        for kind, target in POI_TARGET_COUNTS:
            assert placed[kind] <= target

    def test_difficulty_range(self, world):
        assert all(1 <= cell.poi.difficulty <= 10 for cell in world.points_of_interest())


class TestStartingLocations:
    def test_at_least_one_start_on_a_normal_map(self, world):
        assert world.starting_locations

    def test_starts_are_habitable(self, world):
        for token in world.starting_locations:
            cell = world.cell_at(token)
            assert cell is not None
            assert cell.terrain in STARTING_TERRAIN
            assert cell.poi is None

    def test_starts_lie_in_middle_ring(self, world):
        for token in world.starting_locations:
            distance = hex_distance(ORIGIN, decode_coord(token))
            assert 0.3 * 12 <= distance <= 0.8 * 12

    def test_starts_are_spaced(self, world):
        spacing = min_start_spacing(12)
        for a, b in combinations(world.starting_locations, 2):
            assert hex_distance(decode_coord(a), decode_coord(b)) >= spacing

    def test_starts_are_unique_and_capped(self):
        big = generate_world(30, 9)
        assert len(big.starting_locations) <= 16
        assert len(set(big.starting_locations)) == len(big.starting_locations)

    def test_min_start_spacing(self):
        assert min_start_spacing(40) == 10.0


class TestMapSettings:
    def test_zero_water_bias_removes_water(self):
        settings = MapSettings(biases={TerrainKind.WATER: 0.0})
        world = generate_world(12, 42, settings)
        assert terrain_histogram(world)[TerrainKind.WATER] == 0

    def test_string_keys_are_parsed(self):
        settings = MapSettings(biases={"plains": 2})
        assert settings.weight_for(TerrainKind.PLAINS) == 2.0

    def test_unknown_terrain_key_raises(self):
        with pytest.raises(UnknownTerrainError):
            MapSettings(biases={"lava": 1.0})

    def test_negative_weight_raises(self):
        with pytest.raises(InvalidInputError):
            MapSettings(biases={TerrainKind.DESERT: -0.5})

    def test_zero_bias_excludes_terrain_from_its_band(self):
        settings = MapSettings(biases={TerrainKind.RADIATION: 0.0, TerrainKind.CRATER: 0.0})
        histogram = terrain_histogram(generate_world(12, 42, settings))
        assert histogram[TerrainKind.RADIATION] == 0
        assert histogram[TerrainKind.CRATER] == 0


class TestSnapshot:
    def test_round_trip_restores_world(self, world):
        restored = world_from_json(world_to_json(world))
        assert restored == world

    def test_invalid_payload_raises(self):
        with pytest.raises(InvalidInputError):
            world_from_json(b"not json")

    def test_unknown_start_raises(self, world):
        key = b'"starting_locations":['
        payload = world_to_json(world).replace(key, key + b'"090.090",', 1)
        with pytest.raises(InvalidInputError):
            world_from_json(payload)
