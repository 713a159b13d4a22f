"""Runtime primitives backing the Wasteland HTTP API."""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Mapping, Sequence

from pydantic import TypeAdapter, ValidationError

from wasteland.config import Settings, get_settings
from wasteland.domain import models as dm
from wasteland.domain.enums import AIArchetype, TerrainKind
from wasteland.domain.errors import InvalidActionError
from wasteland.domain.factions import (
    create_ai_faction,
    create_player_faction,
    next_starting_location,
    register_faction,
)
from wasteland.domain.orders import ActionIdSequence, validate_action_set
from wasteland.domain.pathfinding import Navigator
from wasteland.domain.rules_config import DEFAULT_RULES, RulesConfig
from wasteland.domain.turn import TurnPlan, plan_turn
from wasteland.domain.worldgen import generate_world
from wasteland.schemas import ActionSubmission
from wasteland.utils.rng import generate_seed, make_rng

logger = logging.getLogger(__name__)

SEED_LIMIT = 2**31


class NoStartingLocationError(RuntimeError):
    """Raised when every starting location is already taken."""


class GameRuntime:
    """In-memory game state: the current world, its factions and this turn's orders."""

    def __init__(
        self,
        world: dm.WorldMap,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        visibility_range: int | None = None,
    ) -> None:
        self.rules = rules
        self.visibility_range = (
            rules.factions.visibility_range if visibility_range is None else visibility_range
        )
        self.lock = asyncio.Lock()
        self._reset(world)

    def _reset(self, world: dm.WorldMap) -> None:
        self.world = world
        self.navigator = Navigator(
            world,
            costs=self.rules.navigation.terrain_costs,
            impassable_at=self.rules.navigation.impassable_threshold,
        )
        self.factions: list[dm.Faction] = []
        self.submitted: dict[dm.FactionID, tuple[dm.PlannedAction, ...]] = {}
        self.turn = 1
        self._rng = make_rng(generate_seed(world.seed, "factions"))

    async def regenerate(
        self,
        *,
        radius: int,
        seed: int,
        biases: Mapping[TerrainKind, float] | None = None,
    ) -> dm.WorldMap:
        """Replace the world with a freshly generated one and start a new game."""

        settings = dm.MapSettings(biases=dict(biases)) if biases is not None else None
        world = await asyncio.to_thread(
            generate_world, radius, seed, settings, rules=self.rules
        )
        if self.factions:
            logger.warning(
                "regenerating world discards %s factions and turn %s",
                len(self.factions),
                self.turn,
            )
        self._reset(world)
        return world

    def get_faction(self, faction_id: str) -> dm.Faction:
        """Return a faction or raise ``KeyError``."""

        for faction in self.factions:
            if faction.id == faction_id:
                return faction
        raise KeyError(faction_id)

    def join(self, name: str) -> dm.Faction:
        location = self._claim_start()
        faction = create_player_faction(
            name,
            location,
            visibility_range=self.visibility_range,
            rng=self._rng,
            rules=self.rules.factions,
        )
        register_faction(self.factions, faction)
        return faction

    def add_ai(self, archetype: AIArchetype = AIArchetype.WANDERER) -> dm.Faction:
        location = self._claim_start()
        faction = create_ai_faction(
            location,
            [existing.name for existing in self.factions],
            rng=self._rng,
            archetype=archetype,
            visibility_range=self.visibility_range,
            rules=self.rules.factions,
        )
        register_faction(self.factions, faction)
        return faction

    def _claim_start(self) -> str:
        location = next_starting_location(self.world, self.factions)
        if location is None:
            raise NoStartingLocationError("no starting locations left on this map")
        return location

    def submit(
        self, faction_id: str, submissions: Sequence[ActionSubmission]
    ) -> tuple[dm.PlannedAction, ...]:
        """Validate and store a faction's action set for the current turn.

        A later submission replaces an earlier one.

        Raises:
            KeyError: If the faction does not exist
            InvalidActionError: If a payload is malformed or the set overdraws
        """
        faction = self.get_faction(faction_id)
        ids = ActionIdSequence(faction.id, self.turn)
        actions = tuple(ids.issue(_build_payload(submission)) for submission in submissions)
        validate_action_set(faction, actions)
        self.submitted[faction.id] = actions
        logger.info(
            "faction %s submitted %s actions for turn %s", faction.id, len(actions), self.turn
        )
        return actions

    def plan(self) -> TurnPlan:
        return plan_turn(
            self.world,
            self.factions,
            self.submitted,
            turn=self.turn,
            navigator=self.navigator,
            rules=self.rules,
        )


def _build_payload(submission: ActionSubmission) -> dm.ActionData:
    payload_type = dm.PAYLOAD_TYPES[submission.action_type]
    try:
        return TypeAdapter(payload_type).validate_python(submission.data)
    except ValidationError as exc:
        raise InvalidActionError(
            f"invalid {submission.action_type} payload: {exc.error_count()} errors"
        ) from exc


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        seed = self.settings.map_seed if self.settings.map_seed is not None else random_seed()
        world = generate_world(self.settings.map_radius, seed, rules=rules)
        self.game = GameRuntime(
            world, rules=rules, visibility_range=self.settings.visibility_range
        )

    async def shutdown(self) -> None:
        logger.info("shutting down at turn %s", self.game.turn)


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()


def random_seed() -> int:
    return secrets.randbelow(SEED_LIMIT)
