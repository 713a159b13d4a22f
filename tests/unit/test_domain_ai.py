"""Tests for the rule-based faction AI."""

import random

import pytest
from conftest import build_world, ring_tokens

from wasteland.domain.ai import decide_actions
from wasteland.domain.enums import (
    ActionType,
    AIArchetype,
    DiplomaticStatus,
    PoiKind,
    PoiRarity,
    RationLevel,
    TerrainKind,
)
from wasteland.domain.factions import initial_explored
from wasteland.domain.models import (
    DiplomaticRelation,
    Faction,
    FactionID,
    Garrison,
    PoiID,
    PointOfInterest,
    ResearchProject,
    Resources,
    TechnologyID,
)
from wasteland.domain.orders import tally_commitments
from wasteland.domain.rules_config import (
    TERRAIN_MOVEMENT_COSTS,
    AIRules,
    NavigationRules,
    RulesConfig,
)

HOME = "000.000"


class FixedRng:
    """Stand-in for ``random.Random`` whose rolls always come out the same."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


def _ai_faction(
    *,
    food: int,
    scrap: int,
    troops: int,
    weapons: int,
    explored_range: int = 2,
    researching: bool = False,
    archetype: AIArchetype = AIArchetype.WANDERER,
) -> Faction:
    return Faction(
        id=FactionID("ai-1"),
        name="Rust Wolves",
        location=HOME,
        garrisons={HOME: Garrison(troops=troops, weapons=weapons)},
        resources=Resources(food=food, scrap=scrap),
        explored=initial_explored(HOME, explored_range),
        is_ai=True,
        archetype=archetype,
        current_research=(
            ResearchProject(tech_id=TechnologyID("agriculture"), location=HOME, assigned_troops=5)
            if researching
            else None
        ),
    )


def _types(actions):
    return [action.action_type for action in actions]


class TestDecideActions:
    def test_human_factions_get_nothing(self, plains_world):
        human = Faction(id=FactionID("f-1"), name="Ash Clan", location=HOME)
        assert decide_actions(human, [human], plains_world, rng=FixedRng(0.0)) == []

    def test_short_troops_and_weapons_recruit_and_arm(self, plains_world):
        faction = _ai_faction(food=150, scrap=36, troops=30, weapons=15)

        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99), turn=3)

        assert _types(actions) == [ActionType.RECRUIT, ActionType.BUILD_WEAPONS]
        assert actions[0].data.food_offered == 45
        assert actions[1].data.scrap == 18
        assert [a.id for a in actions] == ["ai-1:3:0:recruit", "ai-1:3:1:build_weapons"]

    def test_same_state_and_rolls_give_same_actions(self, plains_world):
        faction = _ai_faction(food=150, scrap=36, troops=30, weapons=15)
        first = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99), turn=3)
        second = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99), turn=3)
        assert first == second

    def test_rests_when_nothing_else_applies(self, plains_world):
        faction = _ai_faction(food=150, scrap=35, troops=60, weapons=40, researching=True)

        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99))

        assert _types(actions) == [ActionType.REST]
        assert actions[0].data.troops == 30
        assert actions[0].data.location == HOME

    def test_rest_share_follows_rules(self, plains_world):
        faction = _ai_faction(food=150, scrap=35, troops=60, weapons=40, researching=True)
        rules = RulesConfig(ai=AIRules(rest_troop_fraction=0.25))

        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99), rules=rules)

        assert actions[0].data.troops == 15

    @pytest.mark.parametrize("troops", [0, 1])
    def test_too_few_troops_to_rest_gives_no_actions(self, plains_world, troops):
        faction = _ai_faction(food=50, scrap=0, troops=troops, weapons=0)
        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99))
        assert actions == []

    def test_always_draws_three_rolls(self, plains_world):
        faction = _ai_faction(food=150, scrap=35, troops=60, weapons=40, researching=True)
        rng = FixedRng(0.99)
        decide_actions(faction, [faction], plains_world, rng=rng)
        assert rng.calls == 3

    def test_starving_faction_switches_to_hard_rations(self, plains_world):
        faction = _ai_faction(food=40, scrap=10, troops=60, weapons=40, researching=True)
        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.99))
        assert actions[0].action_type == ActionType.SET_RATIONS
        assert actions[0].data.ration_level == RationLevel.HARD

    def test_full_turn_never_overcommits(self, plains_world):
        faction = _ai_faction(food=80, scrap=40, troops=60, weapons=20)
        enemy = Faction(
            id=FactionID("ai-2"),
            name="Bone Riders",
            location="002.000",
            garrisons={"002.000": Garrison(troops=10, weapons=2)},
            is_ai=True,
        )
        faction.diplomacy[enemy.id] = DiplomaticRelation(status=DiplomaticStatus.WAR)

        actions = decide_actions(faction, [faction, enemy], plains_world, rng=FixedRng(0.0))

        assert _types(actions) == [
            ActionType.BUILD_WEAPONS,
            ActionType.START_RESEARCH,
            ActionType.SCAVENGE,
            ActionType.SCOUT,
            ActionType.ATTACK,
        ]
        research = actions[1].data
        assert research.tech_id == "agriculture"
        assert research.assigned_troops == 7
        scavenge = actions[2].data
        assert (scavenge.troops, scavenge.weapons) == (20, 6)
        assert scavenge.resource_type == "food"
        attack = actions[4].data
        assert attack.target_location == "002.000"
        assert (attack.troops, attack.weapons) == (16, 8)

        totals = tally_commitments(actions)
        assert totals.troops[HOME] <= 60
        assert totals.weapons[HOME] <= 20
        assert totals.food <= 80
        assert totals.scrap <= 40

    def test_neutral_neighbours_are_not_attacked(self, plains_world):
        faction = _ai_faction(food=150, scrap=35, troops=60, weapons=40, researching=True)
        neighbour = Faction(
            id=FactionID("f-9"),
            name="Glass Monks",
            location="002.000",
            garrisons={"002.000": Garrison(troops=5)},
        )
        actions = decide_actions(faction, [faction, neighbour], plains_world, rng=FixedRng(0.0))
        assert ActionType.ATTACK not in _types(actions)

    def test_settler_prefers_resource_site_for_outpost(self):
        site = "000.-03"
        world = build_world(
            6,
            pois={
                site: PointOfInterest(
                    id=PoiID("poi-1"),
                    kind=PoiKind.SCRAPYARD,
                    difficulty=2,
                    rarity=PoiRarity.COMMON,
                )
            },
        )
        faction = _ai_faction(
            food=150,
            scrap=100,
            troops=60,
            weapons=40,
            explored_range=4,
            researching=True,
            archetype=AIArchetype.SETTLER,
        )

        actions = decide_actions(faction, [faction], world, rng=FixedRng(0.0))

        assert _types(actions) == [ActionType.SCOUT, ActionType.BUILD_OUTPOST]
        assert actions[1].data.target_location == site
        assert (actions[1].data.troops, actions[1].data.weapons) == (15, 8)

    def test_stranded_faction_only_rests(self):
        world = build_world(6, terrain=dict.fromkeys(ring_tokens(1), TerrainKind.WATER))
        rules = RulesConfig(
            navigation=NavigationRules(
                terrain_costs={**TERRAIN_MOVEMENT_COSTS, TerrainKind.WATER: 99.0}
            )
        )
        faction = _ai_faction(food=80, scrap=10, troops=60, weapons=40, researching=True)

        actions = decide_actions(faction, [faction], world, rng=FixedRng(0.0), rules=rules)

        assert _types(actions) == [ActionType.REST]

    def test_faction_without_garrisons_only_sets_rations(self, plains_world):
        faction = _ai_faction(food=20, scrap=0, troops=0, weapons=0)
        faction.garrisons.clear()
        actions = decide_actions(faction, [faction], plains_world, rng=FixedRng(0.0))
        assert _types(actions) == [ActionType.SET_RATIONS]


@pytest.mark.parametrize("seed", range(5))
def test_random_rolls_respect_holdings(seed, plains_world):
    faction = _ai_faction(food=60, scrap=45, troops=45, weapons=18)
    actions = decide_actions(faction, [faction], plains_world, rng=random.Random(seed))
    totals = tally_commitments(actions)
    assert totals.troops[HOME] <= 45
    assert totals.weapons[HOME] <= 18
    assert totals.scrap <= 45
