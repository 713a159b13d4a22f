"""Dataclasses describing the Wasteland world, its factions and their actions.

The rules layer (world generation, navigation, AI) only ever works with these
types.  Locations that leave the core are always coordinate tokens (see
:mod:`wasteland.utils.hex_math`); the map itself is keyed by ``HexCoord``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import ClassVar, NewType

from wasteland.utils.hex_math import HexCoord, decode_coord, encode_coord

from .enums import (
    ActionType,
    AIArchetype,
    DiplomaticStatus,
    PoiKind,
    PoiRarity,
    RationLevel,
    ResourceKind,
    TechnologyEffectType,
    TerrainKind,
    parse_terrain,
)
from .errors import InvalidActionError, InvalidInputError

# --- Strongly typed identifiers -------------------------------------------------

FactionID = NewType("FactionID", str)
ActionID = NewType("ActionID", str)
PoiID = NewType("PoiID", str)
TechnologyID = NewType("TechnologyID", str)
AssetID = NewType("AssetID", str)
ChiefID = NewType("ChiefID", str)


# --- World ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PointOfInterest:
    """Feature placed on a hex during world generation."""

    id: PoiID
    kind: PoiKind
    difficulty: int
    rarity: PoiRarity


@dataclass(slots=True)
class HexCell:
    """Single map hex."""

    q: int
    r: int
    terrain: TerrainKind
    poi: PointOfInterest | None = None

    @property
    def coord(self) -> HexCoord:
        return HexCoord(q=self.q, r=self.r)

    @property
    def token(self) -> str:
        return encode_coord(self.q, self.r)


@dataclass(slots=True)
class MapSettings:
    """Terrain bias weights used during generation.

    Weights are non-negative and need not sum to anything in particular; they
    are compared against their mean, so a terrain weighted 2 is twice as
    favoured as one weighted 1.  Terrain kinds that are absent count as 1.
    """

    biases: dict[TerrainKind, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        parsed: dict[TerrainKind, float] = {}
        for raw_kind, raw_weight in self.biases.items():
            kind = parse_terrain(raw_kind)
            weight = float(raw_weight)
            if weight < 0:
                raise InvalidInputError(f"bias for {kind} must be non-negative, got {weight}")
            parsed[kind] = weight
        self.biases = parsed

    @classmethod
    def default(cls) -> MapSettings:
        return cls(
            biases={
                TerrainKind.PLAINS: 1.0,
                TerrainKind.DESERT: 1.0,
                TerrainKind.MOUNTAINS: 1.0,
                TerrainKind.FOREST: 1.0,
                TerrainKind.RUINS: 0.8,
                TerrainKind.WASTELAND: 1.0,
                TerrainKind.WATER: 1.0,
                TerrainKind.RADIATION: 0.5,
                TerrainKind.CRATER: 0.7,
                TerrainKind.SWAMP: 0.9,
            }
        )

    def weight_for(self, kind: TerrainKind) -> float:
        return self.biases.get(kind, 1.0)

    def normalized_factors(self) -> dict[TerrainKind, float]:
        """Return each terrain's weight divided by the mean weight."""

        weights = {kind: self.weight_for(kind) for kind in TerrainKind}
        mean = sum(weights.values()) / len(weights)
        if mean <= 0:
            return dict.fromkeys(TerrainKind, 1.0)
        return {kind: weight / mean for kind, weight in weights.items()}


@dataclass(slots=True)
class WorldMap:
    """Generated hex map plus its ordered starting locations.

    Produced once per game epoch and then only read.  ``starting_locations``
    is ordered: earlier entries are handed out first.
    """

    radius: int
    seed: int
    cells: dict[HexCoord, HexCell]
    starting_locations: tuple[str, ...] = ()
    settings: MapSettings = field(default_factory=MapSettings.default)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[HexCell]:
        return iter(self.cells.values())

    def contains(self, coord: HexCoord) -> bool:
        return coord in self.cells

    def cell_at(self, location: HexCoord | str) -> HexCell | None:
        """Return the cell at a coordinate or token, or None when off the map."""

        coord = decode_coord(location) if isinstance(location, str) else location
        return self.cells.get(coord)

    def terrain_at(self, location: HexCoord | str) -> TerrainKind | None:
        cell = self.cell_at(location)
        return cell.terrain if cell is not None else None

    def points_of_interest(self) -> list[HexCell]:
        return [cell for cell in self.cells.values() if cell.poi is not None]


# --- Factions -------------------------------------------------------------------


@dataclass(slots=True)
class Garrison:
    """Troops stationed at one location."""

    troops: int = 0
    weapons: int = 0
    leaders: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Resources:
    """Faction-wide resource pool."""

    food: int = 0
    scrap: int = 0
    morale: int = 50


@dataclass(slots=True)
class DiplomaticRelation:
    """This faction's stance towards another faction."""

    status: DiplomaticStatus = DiplomaticStatus.NEUTRAL


@dataclass(slots=True)
class ResearchProject:
    """Technology currently under research."""

    tech_id: TechnologyID
    location: str
    assigned_troops: int
    progress: int = 0


@dataclass(slots=True)
class FactionStats:
    """Leadership attributes rolled when a faction is founded."""

    charisma: int = 1
    intelligence: int = 1
    leadership: int = 1
    strength: int = 1

    @property
    def total(self) -> int:
        return self.charisma + self.intelligence + self.leadership + self.strength


@dataclass(slots=True)
class Faction:
    """A tribe, controlled either by a player or by the AI engine."""

    id: FactionID
    name: str
    location: str
    garrisons: dict[str, Garrison] = field(default_factory=dict)
    resources: Resources = field(default_factory=Resources)
    explored: set[str] = field(default_factory=set)
    ration_level: RationLevel = RationLevel.NORMAL
    completed_techs: list[TechnologyID] = field(default_factory=list)
    current_research: ResearchProject | None = None
    assets: list[str] = field(default_factory=list)
    diplomacy: dict[FactionID, DiplomaticRelation] = field(default_factory=dict)
    is_ai: bool = False
    archetype: AIArchetype | None = None
    stats: FactionStats = field(default_factory=FactionStats)

    @property
    def total_troops(self) -> int:
        return sum(garrison.troops for garrison in self.garrisons.values())

    @property
    def total_weapons(self) -> int:
        return sum(garrison.weapons for garrison in self.garrisons.values())

    def home_location(self) -> str | None:
        """Token of the garrison treated as home.

        The capital when it still holds a garrison, otherwise the garrison
        with the most troops (first one wins on ties).
        """

        if self.location in self.garrisons:
            return self.location
        if not self.garrisons:
            return None
        return max(self.garrisons.items(), key=lambda item: item[1].troops)[0]

    def relation_with(self, other_id: FactionID) -> DiplomaticStatus:
        relation = self.diplomacy.get(other_id)
        return relation.status if relation is not None else DiplomaticStatus.NEUTRAL


@dataclass(frozen=True, slots=True)
class Personality:
    """Decision weights for an AI archetype, each in ``[0, 1]``."""

    aggressiveness: float
    expansionism: float
    trading_affinity: float


# --- Technologies ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TechnologyEffect:
    """One effect granted by a completed technology."""

    kind: TechnologyEffectType
    value: float
    resource: ResourceKind | None = None
    terrain: TerrainKind | None = None


@dataclass(frozen=True, slots=True)
class Technology:
    """Static catalog entry for a researchable technology."""

    id: TechnologyID
    name: str
    description: str
    scrap_cost: int
    research_points: int
    required_troops: int
    prerequisites: frozenset[TechnologyID] = frozenset()
    effects: tuple[TechnologyEffect, ...] = ()

    def has_effect(self, *kinds: TechnologyEffectType) -> bool:
        return any(effect.kind in kinds for effect in self.effects)


@dataclass(frozen=True, slots=True)
class Asset:
    """Static catalog entry for a salvaged item a faction can hold."""

    id: AssetID
    name: str
    description: str
    effects: tuple[TechnologyEffect, ...] = ()


@dataclass(frozen=True, slots=True)
class Chief:
    """Static catalog entry for a named leader that can head a garrison."""

    id: ChiefID
    name: str
    description: str
    stats: FactionStats


# --- Planned actions ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SetRations:
    action_type: ClassVar[ActionType] = ActionType.SET_RATIONS

    ration_level: RationLevel


@dataclass(frozen=True, slots=True)
class Recruit:
    action_type: ClassVar[ActionType] = ActionType.RECRUIT

    food_offered: int
    location: str


@dataclass(frozen=True, slots=True)
class BuildWeapons:
    action_type: ClassVar[ActionType] = ActionType.BUILD_WEAPONS

    scrap: int
    location: str


@dataclass(frozen=True, slots=True)
class StartResearch:
    action_type: ClassVar[ActionType] = ActionType.START_RESEARCH

    tech_id: TechnologyID
    location: str
    assigned_troops: int


@dataclass(frozen=True, slots=True)
class Rest:
    action_type: ClassVar[ActionType] = ActionType.REST

    troops: int
    location: str


@dataclass(frozen=True, slots=True)
class DetachmentOrder:
    """Payload shared by every action that sends troops from one hex to another."""

    troops: int
    weapons: int
    start_location: str
    target_location: str
    leaders: tuple[str, ...] = field(default=(), kw_only=True)


@dataclass(frozen=True, slots=True)
class Scavenge(DetachmentOrder):
    action_type: ClassVar[ActionType] = ActionType.SCAVENGE

    resource_type: ResourceKind = field(default=ResourceKind.FOOD, kw_only=True)


@dataclass(frozen=True, slots=True)
class Scout(DetachmentOrder):
    action_type: ClassVar[ActionType] = ActionType.SCOUT


@dataclass(frozen=True, slots=True)
class BuildOutpost(DetachmentOrder):
    action_type: ClassVar[ActionType] = ActionType.BUILD_OUTPOST


@dataclass(frozen=True, slots=True)
class Attack(DetachmentOrder):
    action_type: ClassVar[ActionType] = ActionType.ATTACK


@dataclass(frozen=True, slots=True)
class Move(DetachmentOrder):
    action_type: ClassVar[ActionType] = ActionType.MOVE


ActionData = (
    SetRations
    | Recruit
    | BuildWeapons
    | StartResearch
    | Scavenge
    | Scout
    | BuildOutpost
    | Attack
    | Move
    | Rest
)

PAYLOAD_TYPES: Mapping[ActionType, type] = {
    payload.action_type: payload
    for payload in (
        SetRations,
        Recruit,
        BuildWeapons,
        StartResearch,
        Scavenge,
        Scout,
        BuildOutpost,
        Attack,
        Move,
        Rest,
    )
}


@dataclass(frozen=True, slots=True)
class PlannedAction:
    """Action a faction intends to take this turn.

    ``action_type`` is the tag and ``data`` the matching payload; a mismatch is
    rejected at construction so the resolver can dispatch on the tag alone.
    """

    id: ActionID
    action_type: ActionType
    data: ActionData

    def __post_init__(self) -> None:
        expected = PAYLOAD_TYPES.get(self.action_type)
        if expected is None or type(self.data) is not expected:
            raise InvalidActionError(
                f"payload {type(self.data).__name__} does not match action type {self.action_type}"
            )

    @classmethod
    def of(cls, action_id: ActionID | str, data: ActionData) -> PlannedAction:
        """Build an action whose tag is taken from the payload type."""

        return cls(id=ActionID(str(action_id)), action_type=data.action_type, data=data)
