"""Tests for domain dataclasses and their invariants."""

import pytest
from conftest import build_world

from wasteland.domain.enums import ActionType, RationLevel, TerrainKind
from wasteland.domain.errors import InvalidActionError
from wasteland.domain.models import (
    PAYLOAD_TYPES,
    Attack,
    Faction,
    FactionID,
    Garrison,
    MapSettings,
    PlannedAction,
    Recruit,
    Scavenge,
    SetRations,
)
from wasteland.utils.hex_math import HexCoord


class TestPlannedAction:
    def test_of_takes_tag_from_payload(self):
        action = PlannedAction.of("f:1:0:recruit", Recruit(food_offered=10, location="000.000"))
        assert action.action_type == ActionType.RECRUIT

    def test_mismatched_tag_is_rejected(self):
        with pytest.raises(InvalidActionError):
            PlannedAction(
                id="x",
                action_type=ActionType.ATTACK,
                data=Recruit(food_offered=10, location="000.000"),
            )

    def test_subclass_payloads_are_not_interchangeable(self):
        scavenge = Scavenge(
            troops=5, weapons=1, start_location="000.000", target_location="001.000"
        )
        with pytest.raises(InvalidActionError):
            PlannedAction(id="x", action_type=ActionType.ATTACK, data=scavenge)

    def test_every_action_type_has_a_payload(self):
        assert set(PAYLOAD_TYPES) == set(ActionType)

    def test_detachment_defaults(self):
        attack = Attack(troops=5, weapons=2, start_location="000.000", target_location="002.000")
        assert attack.leaders == ()
        assert Scavenge(
            troops=1, weapons=0, start_location="000.000", target_location="001.000"
        ).resource_type == "food"

    def test_actions_are_immutable(self):
        action = PlannedAction.of("a", SetRations(ration_level=RationLevel.HARD))
        with pytest.raises(AttributeError):
            action.id = "b"  # type: ignore[misc]


class TestMapSettings:
    def test_default_factors_average_one(self):
        factors = MapSettings.default().normalized_factors()
        assert sum(factors.values()) / len(factors) == pytest.approx(1.0)
        assert factors[TerrainKind.RADIATION] < factors[TerrainKind.PLAINS]

    def test_missing_terrain_counts_as_one(self):
        assert MapSettings().weight_for(TerrainKind.SWAMP) == 1.0

    def test_all_zero_weights_give_neutral_factors(self):
        settings = MapSettings(biases=dict.fromkeys(TerrainKind, 0.0))
        assert set(settings.normalized_factors().values()) == {1.0}


class TestFaction:
    def _faction(self, **overrides):
        values = {
            "id": FactionID("f-1"),
            "name": "Dust Nomads",
            "location": "000.000",
            "garrisons": {
                "000.000": Garrison(troops=10, weapons=4),
                "003.000": Garrison(troops=25, weapons=6),
            },
        }
        values.update(overrides)
        return Faction(**values)

    def test_totals(self):
        faction = self._faction()
        assert faction.total_troops == 35
        assert faction.total_weapons == 10

    def test_home_is_capital_when_garrisoned(self):
        assert self._faction().home_location() == "000.000"

    def test_home_falls_back_to_largest_garrison(self):
        faction = self._faction(location="-03.000")
        assert faction.home_location() == "003.000"

    def test_no_garrisons_means_no_home(self):
        assert self._faction(garrisons={}).home_location() is None


class TestWorldMap:
    def test_cell_lookup_by_token_or_coord(self):
        world = build_world(2, terrain={"001.-01": TerrainKind.SWAMP})
        assert world.terrain_at("001.-01") == TerrainKind.SWAMP
        assert world.terrain_at(HexCoord(q=1, r=-1)) == TerrainKind.SWAMP
        assert world.cell_at("009.000") is None
        assert world.terrain_at("009.000") is None

    def test_iteration_and_length(self):
        world = build_world(2)
        assert len(world) == 19
        assert len(list(world)) == 19
