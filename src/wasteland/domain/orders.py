"""Action-set bookkeeping shared by the AI engine and turn planning."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from wasteland.utils.hex_math import decode_coord

from .chief_data import CHIEFS, get_chief
from .errors import InvalidActionError
from .models import (
    ActionData,
    ActionID,
    BuildWeapons,
    Chief,
    DetachmentOrder,
    Faction,
    PlannedAction,
    Recruit,
    Rest,
    SetRations,
    StartResearch,
    Technology,
)
from .technology_data import TECHNOLOGIES, get_technology


@dataclass(slots=True)
class ActionIdSequence:
    """Issues ``"<faction_id>:<turn>:<seq>:<action_type>"`` action ids.

    Ids are unique per faction and turn and never depend on the wall clock,
    so replaying a turn reproduces them exactly.
    """

    faction_id: str
    turn: int
    _next: int = field(default=0, init=False)

    def issue(self, data: ActionData) -> PlannedAction:
        action_id = ActionID(f"{self.faction_id}:{self.turn}:{self._next}:{data.action_type}")
        self._next += 1
        return PlannedAction.of(action_id, data)


@dataclass(slots=True)
class Commitments:
    """Totals an action set draws from a faction."""

    troops: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    weapons: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    food: int = 0
    scrap: int = 0


def tally_commitments(
    actions: Iterable[PlannedAction], catalog: Sequence[Technology] = TECHNOLOGIES
) -> Commitments:
    """Sum the troops, weapons, food and scrap committed by ``actions``.

    Raises:
        InvalidActionError: If any amount is negative, a detachment has no
            troops, or research names an unknown technology
        InvalidCoordinateError: If a detachment names a malformed location
    """
    totals = Commitments()
    for action in actions:
        data = action.data
        if isinstance(data, SetRations):
            continue
        if isinstance(data, Recruit):
            _require_non_negative(action, food_offered=data.food_offered)
            totals.food += data.food_offered
        elif isinstance(data, BuildWeapons):
            _require_non_negative(action, scrap=data.scrap)
            totals.scrap += data.scrap
        elif isinstance(data, StartResearch):
            _require_non_negative(action, assigned_troops=data.assigned_troops)
            tech = get_technology(data.tech_id, catalog)
            if tech is None:
                raise InvalidActionError(f"{action.id}: unknown technology {data.tech_id!r}")
            totals.scrap += tech.scrap_cost
            totals.troops[data.location] += data.assigned_troops
        elif isinstance(data, Rest):
            _require_non_negative(action, troops=data.troops)
            totals.troops[data.location] += data.troops
        elif isinstance(data, DetachmentOrder):
            _require_non_negative(action, troops=data.troops, weapons=data.weapons)
            if data.troops == 0:
                raise InvalidActionError(f"{action.id}: a detachment needs at least one troop")
            decode_coord(data.start_location)
            decode_coord(data.target_location)
            totals.troops[data.start_location] += data.troops
            totals.weapons[data.start_location] += data.weapons
    return totals


def validate_action_set(
    faction: Faction,
    actions: Sequence[PlannedAction],
    *,
    catalog: Sequence[Technology] = TECHNOLOGIES,
    chiefs: Sequence[Chief] = CHIEFS,
) -> None:
    """Check that ``actions`` can all be carried out together.

    Troops and weapons are checked per garrison, food and scrap against the
    faction-wide pool.  Leaders sent with a detachment must be catalogued
    chiefs stationed at its start garrison, and each may lead only once.

    Raises:
        InvalidActionError: On negative amounts, empty detachments, duplicate
            ids, actions at a location the faction holds no garrison in,
            misplaced leaders, or any overdraft
        InvalidCoordinateError: If a detachment names a malformed location
    """
    ids = [action.id for action in actions]
    if len(set(ids)) != len(ids):
        raise InvalidActionError(f"duplicate action ids in set for faction {faction.id}")

    totals = tally_commitments(actions, catalog)

    for location in set(totals.troops) | set(totals.weapons):
        garrison = faction.garrisons.get(location)
        if garrison is None:
            raise InvalidActionError(f"faction {faction.id} has no garrison at {location}")
        if totals.troops[location] > garrison.troops:
            raise InvalidActionError(
                f"faction {faction.id} commits {totals.troops[location]} troops at {location} "
                f"but only has {garrison.troops}"
            )
        if totals.weapons[location] > garrison.weapons:
            raise InvalidActionError(
                f"faction {faction.id} commits {totals.weapons[location]} weapons at {location} "
                f"but only has {garrison.weapons}"
            )

    for action in actions:
        location = _action_location(action.data)
        if location is not None and location not in faction.garrisons:
            raise InvalidActionError(f"faction {faction.id} has no garrison at {location}")

    _check_leaders(faction, actions, chiefs)

    if totals.food > faction.resources.food:
        raise InvalidActionError(
            f"faction {faction.id} commits {totals.food} food but only has {faction.resources.food}"
        )
    if totals.scrap > faction.resources.scrap:
        raise InvalidActionError(
            f"faction {faction.id} commits {totals.scrap} scrap "
            f"but only has {faction.resources.scrap}"
        )


def _action_location(data: ActionData) -> str | None:
    if isinstance(data, DetachmentOrder):
        return data.start_location
    if isinstance(data, SetRations):
        return None
    return data.location


def _require_non_negative(action: PlannedAction, **amounts: int) -> None:
    for name, value in amounts.items():
        if value < 0:
            raise InvalidActionError(f"{action.id}: {name} must be non-negative, got {value}")


def _check_leaders(
    faction: Faction, actions: Sequence[PlannedAction], chiefs: Sequence[Chief]
) -> None:
    assigned: set[str] = set()
    for action in actions:
        data = action.data
        if not isinstance(data, DetachmentOrder):
            continue
        stationed = faction.garrisons[data.start_location].leaders
        for leader in data.leaders:
            if get_chief(leader, chiefs) is None:
                raise InvalidActionError(f"{action.id}: unknown chief {leader!r}")
            if leader not in stationed:
                raise InvalidActionError(
                    f"{action.id}: chief {leader} is not stationed at {data.start_location}"
                )
            if leader in assigned:
                raise InvalidActionError(f"{action.id}: chief {leader} already leads a detachment")
            assigned.add(leader)
