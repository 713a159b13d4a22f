"""Declarative rule configuration for world generation, navigation and AI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import TerrainKind

TERRAIN_MOVEMENT_COSTS: Mapping[TerrainKind, float] = MappingProxyType(
    {
        TerrainKind.PLAINS: 1.0,
        TerrainKind.DESERT: 1.5,
        TerrainKind.MOUNTAINS: 3.0,
        TerrainKind.FOREST: 1.5,
        TerrainKind.RUINS: 1.5,
        TerrainKind.WASTELAND: 2.0,
        TerrainKind.WATER: 5.0,
        TerrainKind.RADIATION: 4.0,
        TerrainKind.CRATER: 2.0,
        TerrainKind.SWAMP: 2.5,
    }
)


@dataclass(frozen=True, slots=True)
class WorldgenRules:
    """Constants shaping generated worlds."""

    noise_scale: float = 0.1
    noise_seed_range: int = 10000
    second_noise_offset: int = 10000
    ruins_fraction: float = 0.05
    start_min_radius_fraction: float = 0.3
    start_max_radius_fraction: float = 0.8
    start_spacing_fraction: float = 0.25
    max_starting_locations: int = 16


@dataclass(frozen=True, slots=True)
class NavigationRules:
    """Movement costs and the threshold at which terrain blocks movement."""

    terrain_costs: Mapping[TerrainKind, float] = field(
        default_factory=lambda: TERRAIN_MOVEMENT_COSTS
    )
    impassable_threshold: float = 10.0


@dataclass(frozen=True, slots=True)
class AIRules:
    """Thresholds and fractions used by the faction AI."""

    food_short_below: int = 100
    scrap_short_below: int = 30
    troops_short_below: int = 50
    weapons_short_below: int = 30

    hard_rations_below_food: int = 50
    normal_rations_above_food: int = 200

    recruit_min_food: int = 50
    recruit_food_fraction: float = 0.3
    recruit_food_cap: int = 100

    weapons_min_scrap: int = 30
    weapons_scrap_fraction: float = 0.5
    weapons_scrap_cap: int = 50

    research_min_scrap: int = 20
    research_troop_fraction: float = 0.3
    research_extra_troops: int = 2

    scavenge_min_total_troops: int = 10
    scavenge_min_home_troops: int = 10
    scavenge_troop_fraction: float = 0.4
    scavenge_troop_cap: int = 20
    scavenge_weapon_fraction: float = 0.3

    scout_chance: float = 0.3
    scout_min_total_troops: int = 15
    scout_troops: int = 5
    scout_weapons: int = 2

    outpost_min_scrap: int = 30
    outpost_min_total_troops: int = 30
    outpost_troops: int = 15
    outpost_weapons: int = 8
    outpost_min_garrison_distance: int = 3

    attack_min_total_troops: int = 40
    attack_min_total_weapons: int = 15
    attack_min_home_troops: int = 25
    attack_troop_fraction: float = 0.6
    attack_troop_cap: int = 40
    attack_weapon_fraction: float = 0.7
    attack_max_target_ratio: float = 0.7

    rest_troop_fraction: float = 0.5


@dataclass(frozen=True, slots=True)
class FactionRules:
    """Starting packages for newly founded factions."""

    visibility_range: int = 2
    starting_food: int = 100
    starting_scrap: int = 20
    starting_morale: int = 50
    starting_troops: int = 20
    starting_weapons: int = 10
    ai_food_multiplier: float = 1.5
    ai_scrap_multiplier: float = 1.2
    ai_starting_troops: int = 30
    ai_starting_weapons: int = 15
    ai_stat_points_min: int = 20
    ai_stat_points_max: int = 25
    name_attempts: int = 100


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    worldgen: WorldgenRules = WorldgenRules()
    navigation: NavigationRules = NavigationRules()
    ai: AIRules = AIRules()
    factions: FactionRules = FactionRules()


DEFAULT_RULES = RulesConfig()
