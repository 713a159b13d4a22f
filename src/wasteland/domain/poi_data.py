"""Static point-of-interest tables used by world generation."""

from __future__ import annotations

from collections.abc import Mapping

from .enums import PoiKind, PoiRarity, TerrainKind

POI_RARITY: Mapping[PoiKind, PoiRarity] = {
    PoiKind.SCRAPYARD: PoiRarity.COMMON,
    PoiKind.FOOD_SOURCE: PoiRarity.COMMON,
    PoiKind.WEAPONS_CACHE: PoiRarity.UNCOMMON,
    PoiKind.RESEARCH_LAB: PoiRarity.RARE,
    PoiKind.SETTLEMENT: PoiRarity.UNCOMMON,
    PoiKind.RUINS: PoiRarity.COMMON,
    PoiKind.BANDIT_CAMP: PoiRarity.COMMON,
    PoiKind.MINE: PoiRarity.UNCOMMON,
    PoiKind.VAULT: PoiRarity.VERY_RARE,
    PoiKind.BATTLEFIELD: PoiRarity.UNCOMMON,
    PoiKind.FACTORY: PoiRarity.RARE,
    PoiKind.CRATER: PoiRarity.UNCOMMON,
    PoiKind.RADIATION: PoiRarity.RARE,
}

# Placement order matters: earlier kinds get first pick of shared terrain.
POI_TARGET_COUNTS: tuple[tuple[PoiKind, int], ...] = (
    (PoiKind.SCRAPYARD, 12),
    (PoiKind.FOOD_SOURCE, 15),
    (PoiKind.WEAPONS_CACHE, 8),
    (PoiKind.RESEARCH_LAB, 5),
    (PoiKind.SETTLEMENT, 6),
    (PoiKind.RUINS, 10),
    (PoiKind.BANDIT_CAMP, 7),
    (PoiKind.MINE, 4),
    (PoiKind.VAULT, 2),
    (PoiKind.BATTLEFIELD, 3),
    (PoiKind.FACTORY, 4),
    (PoiKind.CRATER, 3),
    (PoiKind.RADIATION, 2),
)

POI_TERRAIN_COMPATIBILITY: Mapping[PoiKind, frozenset[TerrainKind]] = {
    PoiKind.SCRAPYARD: frozenset({TerrainKind.PLAINS, TerrainKind.WASTELAND, TerrainKind.RUINS}),
    PoiKind.FOOD_SOURCE: frozenset({TerrainKind.PLAINS, TerrainKind.FOREST, TerrainKind.SWAMP}),
    PoiKind.WEAPONS_CACHE: frozenset(
        {TerrainKind.RUINS, TerrainKind.MOUNTAINS, TerrainKind.WASTELAND}
    ),
    PoiKind.RESEARCH_LAB: frozenset({TerrainKind.RUINS, TerrainKind.PLAINS}),
    PoiKind.SETTLEMENT: frozenset({TerrainKind.PLAINS, TerrainKind.FOREST}),
    PoiKind.RUINS: frozenset({TerrainKind.RUINS}),
    PoiKind.BANDIT_CAMP: frozenset(
        {TerrainKind.WASTELAND, TerrainKind.DESERT, TerrainKind.MOUNTAINS}
    ),
    PoiKind.MINE: frozenset({TerrainKind.MOUNTAINS}),
    PoiKind.VAULT: frozenset({TerrainKind.RUINS, TerrainKind.MOUNTAINS}),
    PoiKind.BATTLEFIELD: frozenset({TerrainKind.PLAINS, TerrainKind.WASTELAND}),
    PoiKind.FACTORY: frozenset({TerrainKind.RUINS, TerrainKind.PLAINS}),
    PoiKind.CRATER: frozenset({TerrainKind.CRATER}),
    PoiKind.RADIATION: frozenset({TerrainKind.RADIATION}),
}

# POIs worth sending a scavenging party to
SCAVENGE_POI_KINDS: frozenset[PoiKind] = frozenset(
    {
        PoiKind.SCRAPYARD,
        PoiKind.FOOD_SOURCE,
        PoiKind.WEAPONS_CACHE,
        PoiKind.MINE,
        PoiKind.FACTORY,
    }
)

# POIs that make a hex attractive for an outpost
OUTPOST_POI_KINDS: frozenset[PoiKind] = frozenset(
    {PoiKind.SCRAPYARD, PoiKind.FOOD_SOURCE, PoiKind.MINE}
)
