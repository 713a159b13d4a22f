"""Faction content: AI personalities, name parts and starting packages."""

from __future__ import annotations

from collections.abc import Mapping

from .enums import AIArchetype
from .models import Personality

PERSONALITIES: Mapping[AIArchetype, Personality] = {
    AIArchetype.WANDERER: Personality(aggressiveness=0.7, expansionism=0.5, trading_affinity=0.3),
    AIArchetype.WARLORD: Personality(aggressiveness=0.9, expansionism=0.3, trading_affinity=0.1),
    AIArchetype.SETTLER: Personality(aggressiveness=0.2, expansionism=0.8, trading_affinity=0.5),
    AIArchetype.TRADER: Personality(aggressiveness=0.3, expansionism=0.4, trading_affinity=0.9),
}

DEFAULT_PERSONALITY = Personality(aggressiveness=0.5, expansionism=0.5, trading_affinity=0.5)


def personality_for(archetype: AIArchetype | None) -> Personality:
    """Return the decision weights for ``archetype`` (neutral when unknown)."""

    if archetype is None:
        return DEFAULT_PERSONALITY
    return PERSONALITIES.get(archetype, DEFAULT_PERSONALITY)


FACTION_NAME_PREFIXES: tuple[str, ...] = (
    "Iron", "Steel", "Rust", "Scrap", "Savage", "Rogue", "Shadow", "Wasteland",
    "Dust", "Ash", "Bone", "Blood", "Venom", "Toxic", "Radiant", "Thunder",
    "Storm", "Flame", "Ember", "Frost", "Night", "Dusk", "Dawn", "Phantom",
)  # fmt: skip

FACTION_NAME_SUFFIXES: tuple[str, ...] = (
    "Raiders", "Marauders", "Bandits", "Wolves", "Vipers", "Scorpions", "Jackals",
    "Vultures", "Ghosts", "Stalkers", "Hunters", "Nomads", "Outcasts", "Scavengers",
    "Ravagers", "Reavers", "Warband", "Horde", "Clan", "Tribe", "Legion", "Pack",
)  # fmt: skip
