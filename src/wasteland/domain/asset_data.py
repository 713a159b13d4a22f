"""Catalog of salvaged assets a faction can hold."""

from __future__ import annotations

from collections.abc import Sequence

from .enums import ResourceKind, TechnologyEffectType, TerrainKind
from .models import Asset, AssetID, TechnologyEffect

_FOOD = TechnologyEffectType.PASSIVE_FOOD_GENERATION
_YIELD = TechnologyEffectType.SCAVENGE_YIELD_BONUS
_ATTACK = TechnologyEffectType.COMBAT_BONUS_ATTACK
_DEFENSE = TechnologyEffectType.COMBAT_BONUS_DEFENSE
_SPEED = TechnologyEffectType.MOVEMENT_SPEED_BONUS


def _asset(asset_id: str, name: str, description: str, *effects: TechnologyEffect) -> Asset:
    return Asset(id=AssetID(asset_id), name=name, description=description, effects=effects)


ASSETS: tuple[Asset, ...] = (
    _asset(
        "farming_tools",
        "Ancient Farming Tools",
        "Pre-war agricultural tools that significantly improve food production.",
        TechnologyEffect(_FOOD, 15),
    ),
    _asset(
        "scrap_detector",
        "Scrap Detector",
        "A modified pre-war metal detector that helps locate valuable scrap.",
        TechnologyEffect(_YIELD, 0.25, resource=ResourceKind.SCRAP),
    ),
    _asset(
        "combat_manual",
        "Tactical Combat Manual",
        "A military handbook with combat strategies that improve fighting effectiveness.",
        TechnologyEffect(_ATTACK, 0.2),
    ),
    _asset(
        "barricade_plans",
        "Reinforced Barricade Plans",
        "Technical drawings for constructing superior defensive structures.",
        TechnologyEffect(_DEFENSE, 0.25),
    ),
    _asset(
        "survival_guide",
        "Wasteland Survival Guide",
        "A comprehensive guide to surviving in radiation zones.",
        TechnologyEffect(_DEFENSE, 0.15, terrain=TerrainKind.RADIATION),
        TechnologyEffect(_SPEED, 0.1),
    ),
    _asset(
        "rifle_schematics",
        "Hunting Rifle Schematics",
        "Detailed plans for crafting accurate long-range weapons.",
        TechnologyEffect(_YIELD, 0.2, resource=ResourceKind.FOOD),
        TechnologyEffect(_ATTACK, 0.1),
    ),
    _asset(
        "water_purifier",
        "Water Purification System",
        "A device that makes contaminated water safe to drink, improving tribe health.",
        TechnologyEffect(_FOOD, 10),
        TechnologyEffect(_DEFENSE, 0.1),
    ),
    _asset(
        "climbing_gear",
        "Mountain Climbing Gear",
        "Equipment that makes traversing mountainous terrain much easier.",
        TechnologyEffect(_SPEED, 0.3, terrain=TerrainKind.MOUNTAINS),
    ),
    _asset(
        "defense_turret",
        "Automated Defense Turret",
        "A salvaged security turret that can be deployed to protect outposts.",
        TechnologyEffect(_DEFENSE, 0.35),
    ),
    _asset(
        "radio_network",
        "Salvaged Radio Network",
        "A communications system that allows coordination across long distances.",
        TechnologyEffect(_SPEED, 0.15),
        TechnologyEffect(_ATTACK, 0.1),
    ),
    _asset(
        "weapon_cache",
        "Ancient Weapon Cache",
        "A stockpile of pre-war weapons in good condition.",
        TechnologyEffect(_YIELD, 0.3, resource=ResourceKind.WEAPONS),
    ),
    _asset(
        "desert_kit",
        "Desert Survival Kit",
        "Specialized equipment for surviving in harsh desert environments.",
        TechnologyEffect(_SPEED, 0.2, terrain=TerrainKind.DESERT),
        TechnologyEffect(_ATTACK, 0.15, terrain=TerrainKind.DESERT),
    ),
)


def get_asset(asset_id: str, catalog: Sequence[Asset] = ASSETS) -> Asset | None:
    return next((asset for asset in catalog if asset.id == asset_id), None)
