"""Turn planning: collect submitted action sets and fill in the AI's.

Each faction's actions are produced independently.  AI factions get their own
``random.Random`` seeded from ``(world seed, turn, faction id)``, so the plan
for one faction never depends on the order in which the others were planned
and a turn can be replayed exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from wasteland.utils.rng import generate_seed, make_rng

from .ai import decide_actions
from .errors import InvalidActionError
from .models import Faction, FactionID, PlannedAction, Technology, WorldMap
from .orders import validate_action_set
from .pathfinding import Navigator
from .rules_config import DEFAULT_RULES, RulesConfig
from .technology_data import TECHNOLOGIES

if TYPE_CHECKING:
    from wasteland.interfaces import ITurnResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnPlan:
    """Every faction's action set for one turn."""

    turn: int
    actions: Mapping[FactionID, tuple[PlannedAction, ...]]

    def for_faction(self, faction_id: FactionID | str) -> tuple[PlannedAction, ...]:
        return self.actions.get(FactionID(faction_id), ())


def faction_rng_seed(world: WorldMap, turn: int, faction_id: str) -> str:
    return generate_seed(world.seed, turn, faction_id)


def plan_turn(
    world: WorldMap,
    factions: Sequence[Faction],
    submitted: Mapping[FactionID, Sequence[PlannedAction]],
    *,
    turn: int,
    catalog: Sequence[Technology] = TECHNOLOGIES,
    navigator: Navigator | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> TurnPlan:
    """Build the plan for ``turn``.

    Submitted sets are validated and kept as they are.  AI factions without a
    submitted set get one from the AI engine; human factions without one get
    an empty set.

    Raises:
        InvalidActionError: If a submitted set overdraws its faction or names
            an unknown faction
    """
    by_id = {faction.id: faction for faction in factions}
    unknown = [faction_id for faction_id in submitted if faction_id not in by_id]
    if unknown:
        raise InvalidActionError(f"actions submitted for unknown factions: {sorted(unknown)}")

    if navigator is None:
        navigator = Navigator(
            world,
            costs=rules.navigation.terrain_costs,
            impassable_at=rules.navigation.impassable_threshold,
        )

    planned: dict[FactionID, tuple[PlannedAction, ...]] = {}
    for faction in factions:
        if faction.id in submitted:
            actions = list(submitted[faction.id])
            validate_action_set(faction, actions, catalog=catalog)
        elif faction.is_ai:
            rng = make_rng(faction_rng_seed(world, turn, faction.id))
            actions = decide_actions(
                faction,
                factions,
                world,
                rng=rng,
                turn=turn,
                catalog=catalog,
                navigator=navigator,
                rules=rules,
            )
        else:
            actions = []
        planned[faction.id] = tuple(actions)

    logger.info(
        "planned turn %s: %s factions, %s actions",
        turn,
        len(planned),
        sum(len(actions) for actions in planned.values()),
    )
    return TurnPlan(turn=turn, actions=MappingProxyType(planned))


def advance_turn(
    world: WorldMap,
    factions: Sequence[Faction],
    submitted: Mapping[FactionID, Sequence[PlannedAction]],
    resolver: ITurnResolver,
    *,
    turn: int,
    catalog: Sequence[Technology] = TECHNOLOGIES,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Faction]:
    """Plan ``turn`` and hand the plan to ``resolver``."""

    plan = plan_turn(world, factions, submitted, turn=turn, catalog=catalog, rules=rules)
    resolved = resolver.resolve(world, factions, plan.actions, turn)
    logger.info("resolved turn %s", turn)
    return resolved
