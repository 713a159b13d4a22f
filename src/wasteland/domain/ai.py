"""Rule-based decision making for AI-controlled factions.

:func:`decide_actions` walks a fixed list of rules (rations, recruitment,
weapons, research, scavenging, scouting, outposts, attacks) and emits at most
one action per rule.  Every rule draws from a scratch :class:`_Ledger` of the
faction's holdings and decrements it when it commits, so the combined action
set never spends the same troop, weapon, food or scrap twice.

All randomness comes from the ``rng`` argument.  Given the same faction
state, world and rng sequence the decision is identical.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from wasteland.utils.hex_math import HexCoord, decode_coord, hex_distance, hex_neighbors

from .enums import DiplomaticStatus, RationLevel, ResourceKind, TechnologyEffectType, TerrainKind
from .faction_data import personality_for
from .models import (
    ActionData,
    Attack,
    BuildOutpost,
    BuildWeapons,
    Faction,
    PlannedAction,
    Recruit,
    Rest,
    Scavenge,
    Scout,
    SetRations,
    StartResearch,
    Technology,
    WorldMap,
)
from .orders import ActionIdSequence, validate_action_set
from .pathfinding import Navigator
from .poi_data import OUTPOST_POI_KINDS, SCAVENGE_POI_KINDS
from .rules_config import DEFAULT_RULES, AIRules, RulesConfig
from .technology_data import TECHNOLOGIES, available_technologies

logger = logging.getLogger(__name__)

SCAVENGE_TERRAIN = frozenset({TerrainKind.FOREST, TerrainKind.PLAINS, TerrainKind.RUINS})
OUTPOST_EXCLUDED_TERRAIN = frozenset({TerrainKind.WATER, TerrainKind.RADIATION})
OUTPOST_GOOD_TERRAIN = frozenset({TerrainKind.PLAINS, TerrainKind.FOREST})

FOOD_TECH_EFFECTS = (TechnologyEffectType.PASSIVE_FOOD_GENERATION,)
COMBAT_TECH_EFFECTS = (
    TechnologyEffectType.COMBAT_BONUS_ATTACK,
    TechnologyEffectType.COMBAT_BONUS_DEFENSE,
)


@dataclass(slots=True)
class _Ledger:
    """Holdings still uncommitted while a decision is being built."""

    food: int
    scrap: int
    troops: dict[str, int]
    weapons: dict[str, int]

    @classmethod
    def from_faction(cls, faction: Faction) -> _Ledger:
        return cls(
            food=faction.resources.food,
            scrap=faction.resources.scrap,
            troops={loc: g.troops for loc, g in faction.garrisons.items()},
            weapons={loc: g.weapons for loc, g in faction.garrisons.items()},
        )

    def troops_at(self, location: str) -> int:
        return self.troops.get(location, 0)

    def weapons_at(self, location: str) -> int:
        return self.weapons.get(location, 0)

    def commit_detachment(self, location: str, troops: int, weapons: int) -> None:
        self.troops[location] -= troops
        self.weapons[location] -= weapons


@dataclass(frozen=True, slots=True)
class _Needs:
    food: bool
    scrap: bool
    troops: bool
    weapons: bool

    @classmethod
    def assess(cls, faction: Faction, ai: AIRules) -> _Needs:
        return cls(
            food=faction.resources.food < ai.food_short_below,
            scrap=faction.resources.scrap < ai.scrap_short_below,
            troops=faction.total_troops < ai.troops_short_below,
            weapons=faction.total_weapons < ai.weapons_short_below,
        )


@dataclass(slots=True)
class _Context:
    faction: Faction
    factions: Sequence[Faction]
    world: WorldMap
    navigator: Navigator
    ai: AIRules
    ledger: _Ledger
    needs: _Needs
    home: str
    home_coord: HexCoord
    ids: ActionIdSequence
    actions: list[PlannedAction]

    def commit(self, data: ActionData) -> None:
        action = self.ids.issue(data)
        self.actions.append(action)
        logger.debug("faction %s commits %s: %s", self.faction.id, action.action_type, data)

    def reachable(self, coord: HexCoord) -> bool:
        return self.navigator.is_reachable(self.home_coord, coord)


def decide_actions(
    faction: Faction,
    factions: Sequence[Faction],
    world: WorldMap,
    *,
    rng: random.Random,
    turn: int = 0,
    catalog: Sequence[Technology] = TECHNOLOGIES,
    navigator: Navigator | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[PlannedAction]:
    """Decide this turn's actions for an AI faction.

    Args:
        faction: Faction to decide for; non-AI factions get no actions
        factions: Every faction in the game, used for diplomacy and targets
        world: Current world map
        rng: Source of every random roll made by the decision
        turn: Turn number, embedded in action ids
        catalog: Technology catalog to research from
        navigator: Shared pathfinder for ``world``; built on demand if omitted
        rules: Rule constants

    Returns:
        Actions in rule order.  The set never commits more than the faction
        holds; when no rule fires a single rest action is returned, or nothing
        when there are too few troops to rest.
    """
    if not faction.is_ai:
        return []

    ai = rules.ai
    ids = ActionIdSequence(faction.id, turn)
    actions: list[PlannedAction] = []
    ledger = _Ledger.from_faction(faction)
    needs = _Needs.assess(faction, ai)

    rations = _choose_rations(faction, ai)
    if rations is not None and rations != faction.ration_level:
        actions.append(ids.issue(SetRations(ration_level=rations)))

    home = faction.home_location()
    if home is None:
        logger.debug("faction %s has no garrisons; only rations considered", faction.id)
        return actions

    if navigator is None:
        navigator = Navigator(
            world,
            costs=rules.navigation.terrain_costs,
            impassable_at=rules.navigation.impassable_threshold,
        )
    ctx = _Context(
        faction=faction,
        factions=factions,
        world=world,
        navigator=navigator,
        ai=ai,
        ledger=ledger,
        needs=needs,
        home=home,
        home_coord=decode_coord(home),
        ids=ids,
        actions=actions,
    )
    personality = personality_for(faction.archetype)

    _plan_recruitment(ctx)
    _plan_weapons(ctx)
    _plan_research(ctx, catalog)
    _plan_scavenging(ctx)

    # All three rolls are always drawn so the rng advances identically
    scout_roll = rng.random()
    expand_roll = rng.random()
    attack_roll = rng.random()
    if scout_roll < ai.scout_chance:
        _plan_scouting(ctx)
    if expand_roll < personality.expansionism:
        _plan_outpost(ctx)
    if attack_roll < personality.aggressiveness:
        _plan_attack(ctx)

    if not actions:
        troops = min(
            math.floor(faction.total_troops * ai.rest_troop_fraction), ledger.troops_at(home)
        )
        if troops > 0:
            ctx.commit(Rest(troops=troops, location=home))

    validate_action_set(faction, actions, catalog=catalog)
    logger.debug(
        "faction %s decided %s actions for turn %s: %s",
        faction.id,
        len(actions),
        turn,
        [action.action_type.value for action in actions],
    )
    return actions


def _choose_rations(faction: Faction, ai: AIRules) -> RationLevel | None:
    food = faction.resources.food
    if food < ai.hard_rations_below_food:
        return RationLevel.HARD
    if food > ai.normal_rations_above_food:
        return RationLevel.NORMAL
    return None


def _plan_recruitment(ctx: _Context) -> None:
    ai, ledger = ctx.ai, ctx.ledger
    if not (ctx.faction.resources.food > ai.recruit_min_food and ctx.needs.troops):
        return
    food = min(
        math.floor(ctx.faction.resources.food * ai.recruit_food_fraction),
        ai.recruit_food_cap,
        ledger.food,
    )
    if food <= 0:
        return
    ledger.food -= food
    ctx.commit(Recruit(food_offered=food, location=ctx.home))


def _plan_weapons(ctx: _Context) -> None:
    ai, ledger = ctx.ai, ctx.ledger
    if not (ctx.faction.resources.scrap > ai.weapons_min_scrap and ctx.needs.weapons):
        return
    scrap = min(
        math.floor(ctx.faction.resources.scrap * ai.weapons_scrap_fraction),
        ai.weapons_scrap_cap,
        ledger.scrap,
    )
    if scrap <= 0:
        return
    ledger.scrap -= scrap
    ctx.commit(BuildWeapons(scrap=scrap, location=ctx.home))


def _plan_research(ctx: _Context, catalog: Sequence[Technology]) -> None:
    ai, ledger, faction = ctx.ai, ctx.ledger, ctx.faction
    if faction.current_research is not None or ledger.scrap < ai.research_min_scrap:
        return
    options = available_technologies(faction.completed_techs, catalog)
    if not options:
        return

    chosen = options[0]
    if ctx.needs.food:
        chosen = next((t for t in options if t.has_effect(*FOOD_TECH_EFFECTS)), chosen)
    elif ctx.needs.weapons:
        chosen = next((t for t in options if t.has_effect(*COMBAT_TECH_EFFECTS)), chosen)

    if ledger.scrap < chosen.scrap_cost:
        return
    home_troops = ledger.troops_at(ctx.home)
    assignable = min(
        math.floor(home_troops * ai.research_troop_fraction),
        chosen.required_troops + ai.research_extra_troops,
    )
    if assignable < chosen.required_troops or assignable <= 0:
        return

    ledger.scrap -= chosen.scrap_cost
    ledger.troops[ctx.home] -= assignable
    ctx.commit(StartResearch(tech_id=chosen.id, location=ctx.home, assigned_troops=assignable))


def _plan_scavenging(ctx: _Context) -> None:
    ai, ledger, faction = ctx.ai, ctx.ledger, ctx.faction
    if not (ctx.needs.food or ctx.needs.scrap):
        return
    if faction.total_troops <= ai.scavenge_min_total_troops:
        return
    home_troops = ledger.troops_at(ctx.home)
    if home_troops < ai.scavenge_min_home_troops:
        return

    target = _nearest(ctx, _scavenge_targets(ctx))
    if target is None:
        return

    troops = min(math.floor(home_troops * ai.scavenge_troop_fraction), ai.scavenge_troop_cap)
    weapons = min(
        math.floor(ledger.weapons_at(ctx.home) * ai.scavenge_weapon_fraction), troops // 2
    )
    if troops <= 0:
        return
    resource = ResourceKind.FOOD if ctx.needs.food else ResourceKind.SCRAP
    ledger.commit_detachment(ctx.home, troops, weapons)
    ctx.commit(
        Scavenge(
            troops=troops,
            weapons=weapons,
            start_location=ctx.home,
            target_location=target.token,
            resource_type=resource,
        )
    )


def _scavenge_targets(ctx: _Context) -> list[HexCoord]:
    explored = ctx.faction.explored
    targets = []
    for cell in ctx.world:
        token = cell.token
        if token not in explored or token == ctx.faction.location:
            continue
        if token in ctx.faction.garrisons:
            continue
        good_poi = cell.poi is not None and cell.poi.kind in SCAVENGE_POI_KINDS
        if not (good_poi or cell.terrain in SCAVENGE_TERRAIN):
            continue
        if ctx.reachable(cell.coord):
            targets.append(cell.coord)
    return targets


def _plan_scouting(ctx: _Context) -> None:
    ai, ledger = ctx.ai, ctx.ledger
    if ctx.faction.total_troops <= ai.scout_min_total_troops:
        return
    if ledger.troops_at(ctx.home) < ai.scout_troops:
        return

    target = _nearest(ctx, _scout_targets(ctx))
    if target is None:
        return

    weapons = min(ai.scout_weapons, ledger.weapons_at(ctx.home))
    ledger.commit_detachment(ctx.home, ai.scout_troops, weapons)
    ctx.commit(
        Scout(
            troops=ai.scout_troops,
            weapons=weapons,
            start_location=ctx.home,
            target_location=target.token,
        )
    )


def _scout_targets(ctx: _Context) -> list[HexCoord]:
    explored = ctx.faction.explored
    targets = []
    for cell in ctx.world:
        if cell.token in explored:
            continue
        on_frontier = any(n.token in explored for n in hex_neighbors(cell.coord))
        if on_frontier and ctx.reachable(cell.coord):
            targets.append(cell.coord)
    return targets


def _plan_outpost(ctx: _Context) -> None:
    ai, ledger = ctx.ai, ctx.ledger
    if ledger.scrap < ai.outpost_min_scrap:
        return
    if ctx.faction.total_troops <= ai.outpost_min_total_troops:
        return
    if ledger.troops_at(ctx.home) < ai.outpost_troops:
        return

    candidates = _outpost_targets(ctx)
    if not candidates:
        return
    # Nearest first, richer site on ties
    candidates.sort(key=lambda item: (hex_distance(ctx.home_coord, item[0]), -item[1]))
    target = candidates[0][0]

    weapons = min(ai.outpost_weapons, ledger.weapons_at(ctx.home))
    ledger.commit_detachment(ctx.home, ai.outpost_troops, weapons)
    ctx.commit(
        BuildOutpost(
            troops=ai.outpost_troops,
            weapons=weapons,
            start_location=ctx.home,
            target_location=target.token,
        )
    )


def _outpost_targets(ctx: _Context) -> list[tuple[HexCoord, int]]:
    occupied = {loc for other in ctx.factions for loc in other.garrisons}
    occupied.update(ctx.faction.garrisons)
    own_garrisons = [decode_coord(loc) for loc in ctx.faction.garrisons]
    explored = ctx.faction.explored

    targets = []
    for cell in ctx.world:
        token = cell.token
        if token not in explored or token in occupied:
            continue
        if cell.terrain in OUTPOST_EXCLUDED_TERRAIN:
            continue
        coord = cell.coord
        if any(
            hex_distance(coord, garrison) < ctx.ai.outpost_min_garrison_distance
            for garrison in own_garrisons
        ):
            continue
        if not ctx.reachable(coord):
            continue
        score = 0
        if cell.poi is not None and cell.poi.kind in OUTPOST_POI_KINDS:
            score += 5
        if cell.terrain in OUTPOST_GOOD_TERRAIN:
            score += 3
        targets.append((coord, score))
    return targets


def _plan_attack(ctx: _Context) -> None:
    ai, ledger, faction = ctx.ai, ctx.ledger, ctx.faction
    if faction.total_troops <= ai.attack_min_total_troops:
        return
    if faction.total_weapons <= ai.attack_min_total_weapons:
        return
    home_troops = ledger.troops_at(ctx.home)
    if home_troops < ai.attack_min_home_troops:
        return

    target = _nearest(ctx, _attack_targets(ctx))
    if target is None:
        return

    troops = min(math.floor(home_troops * ai.attack_troop_fraction), ai.attack_troop_cap)
    weapons = min(math.floor(ledger.weapons_at(ctx.home) * ai.attack_weapon_fraction), troops)
    if troops <= 0:
        return
    ledger.commit_detachment(ctx.home, troops, weapons)
    ctx.commit(
        Attack(
            troops=troops,
            weapons=weapons,
            start_location=ctx.home,
            target_location=target.token,
        )
    )


def _attack_targets(ctx: _Context) -> list[HexCoord]:
    faction = ctx.faction
    max_target = faction.total_troops * ctx.ai.attack_max_target_ratio
    targets = []
    for other in ctx.factions:
        if other.id == faction.id:
            continue
        if faction.relation_with(other.id) != DiplomaticStatus.WAR:
            continue
        for location, garrison in other.garrisons.items():
            if location not in faction.explored or garrison.troops > max_target:
                continue
            coord = decode_coord(location)
            if ctx.reachable(coord):
                targets.append(coord)
    return targets


def _nearest(ctx: _Context, targets: list[HexCoord]) -> HexCoord | None:
    # min() keeps the first of equally distant targets
    return min(targets, key=lambda coord: hex_distance(ctx.home_coord, coord), default=None)
