"""Enumerations shared by world generation, navigation and the AI engine."""

from __future__ import annotations

from enum import StrEnum

from .errors import UnknownPoiKindError, UnknownTerrainError


class TerrainKind(StrEnum):
    """Terrain covering a single hex."""

    PLAINS = "plains"
    DESERT = "desert"
    MOUNTAINS = "mountains"
    FOREST = "forest"
    RUINS = "ruins"
    WASTELAND = "wasteland"
    WATER = "water"
    RADIATION = "radiation"
    CRATER = "crater"
    SWAMP = "swamp"


class PoiKind(StrEnum):
    """Point-of-interest categories placed during world generation."""

    SCRAPYARD = "scrapyard"
    FOOD_SOURCE = "food_source"
    WEAPONS_CACHE = "weapons_cache"
    RESEARCH_LAB = "research_lab"
    SETTLEMENT = "settlement"
    RUINS = "ruins"
    BANDIT_CAMP = "bandit_camp"
    MINE = "mine"
    VAULT = "vault"
    BATTLEFIELD = "battlefield"
    FACTORY = "factory"
    CRATER = "crater"
    RADIATION = "radiation"


class PoiRarity(StrEnum):
    """Rarity tier attached to every point of interest."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very_rare"


class DiplomaticStatus(StrEnum):
    """Relationship states between two factions."""

    NEUTRAL = "neutral"
    ALLIANCE = "alliance"
    WAR = "war"


class RationLevel(StrEnum):
    """Food ration policy, from strictest to most lavish."""

    HARD = "hard"
    NORMAL = "normal"
    GENEROUS = "generous"


class ActionType(StrEnum):
    """Closed set of action tags understood by the turn resolver."""

    SET_RATIONS = "set_rations"
    RECRUIT = "recruit"
    BUILD_WEAPONS = "build_weapons"
    START_RESEARCH = "start_research"
    SCAVENGE = "scavenge"
    SCOUT = "scout"
    BUILD_OUTPOST = "build_outpost"
    ATTACK = "attack"
    MOVE = "move"
    REST = "rest"


class ResourceKind(StrEnum):
    """Resources a faction can gather."""

    FOOD = "food"
    SCRAP = "scrap"
    WEAPONS = "weapons"


class TechnologyEffectType(StrEnum):
    """Effect categories carried by technologies."""

    PASSIVE_FOOD_GENERATION = "passive_food_generation"
    SCAVENGE_YIELD_BONUS = "scavenge_yield_bonus"
    COMBAT_BONUS_ATTACK = "combat_bonus_attack"
    COMBAT_BONUS_DEFENSE = "combat_bonus_defense"
    MOVEMENT_SPEED_BONUS = "movement_speed_bonus"


class AIArchetype(StrEnum):
    """Behavioural archetype of an AI-controlled faction."""

    WANDERER = "wanderer"
    WARLORD = "warlord"
    SETTLER = "settler"
    TRADER = "trader"


def parse_terrain(value: str | TerrainKind) -> TerrainKind:
    """Return the terrain kind for ``value`` or raise ``UnknownTerrainError``."""

    try:
        return TerrainKind(value)
    except ValueError as exc:
        raise UnknownTerrainError(f"unknown terrain kind: {value!r}") from exc


def parse_poi_kind(value: str | PoiKind) -> PoiKind:
    """Return the POI kind for ``value`` or raise ``UnknownPoiKindError``."""

    try:
        return PoiKind(value)
    except ValueError as exc:
        raise UnknownPoiKindError(f"unknown point-of-interest kind: {value!r}") from exc
