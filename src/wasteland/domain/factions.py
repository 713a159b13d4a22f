"""Founding factions and maintaining their diplomatic ties."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Collection, Iterable, MutableSequence

from wasteland.utils.hex_math import decode_coord, hexes_in_range

from .enums import AIArchetype, DiplomaticStatus
from .errors import InvalidInputError
from .faction_data import FACTION_NAME_PREFIXES, FACTION_NAME_SUFFIXES
from .models import (
    DiplomaticRelation,
    Faction,
    FactionID,
    FactionStats,
    Garrison,
    Resources,
    WorldMap,
)
from .rules_config import DEFAULT_RULES, FactionRules

logger = logging.getLogger(__name__)

_STAT_NAMES = ("charisma", "intelligence", "leadership", "strength")


def next_starting_location(world: WorldMap, factions: Iterable[Faction]) -> str | None:
    """First starting location not already used as a faction capital."""

    taken = {faction.location for faction in factions}
    return next((loc for loc in world.starting_locations if loc not in taken), None)


def initial_explored(location: str, visibility_range: int) -> set[str]:
    """Tokens of every hex within ``visibility_range`` of ``location``."""

    return {coord.token for coord in hexes_in_range(decode_coord(location), visibility_range)}


def create_player_faction(
    name: str,
    location: str,
    *,
    visibility_range: int | None = None,
    rng: random.Random,
    rules: FactionRules = DEFAULT_RULES.factions,
) -> Faction:
    """Found a human-controlled faction at ``location``.

    Raises:
        InvalidInputError: If the name is blank
        InvalidCoordinateError: If the location is not a coordinate token
    """
    name = name.strip()
    if not name:
        raise InvalidInputError("faction name cannot be blank")
    visibility = rules.visibility_range if visibility_range is None else visibility_range

    faction = Faction(
        id=FactionID(f"faction-{rng.getrandbits(64):016x}"),
        name=name,
        location=location,
        garrisons={
            location: Garrison(troops=rules.starting_troops, weapons=rules.starting_weapons)
        },
        resources=Resources(
            food=rules.starting_food,
            scrap=rules.starting_scrap,
            morale=rules.starting_morale,
        ),
        explored=initial_explored(location, visibility),
    )
    logger.info("founded faction %s (%s) at %s", faction.id, faction.name, location)
    return faction


def create_ai_faction(
    location: str,
    existing_names: Collection[str],
    *,
    rng: random.Random,
    archetype: AIArchetype = AIArchetype.WANDERER,
    visibility_range: int | None = None,
    rules: FactionRules = DEFAULT_RULES.factions,
) -> Faction:
    """Found an AI-controlled faction with a unique generated name."""

    visibility = rules.visibility_range if visibility_range is None else visibility_range
    faction = Faction(
        id=FactionID(f"ai-{rng.getrandbits(64):016x}"),
        name=generate_faction_name(existing_names, rng=rng, attempts=rules.name_attempts),
        location=location,
        garrisons={
            location: Garrison(troops=rules.ai_starting_troops, weapons=rules.ai_starting_weapons)
        },
        resources=Resources(
            food=math.floor(rules.starting_food * rules.ai_food_multiplier),
            scrap=math.floor(rules.starting_scrap * rules.ai_scrap_multiplier),
            morale=rules.starting_morale,
        ),
        explored=initial_explored(location, visibility),
        is_ai=True,
        archetype=archetype,
        stats=roll_ai_stats(rng, rules),
    )
    logger.info(
        "founded AI faction %s (%s, %s) at %s", faction.id, faction.name, archetype, location
    )
    return faction


def generate_faction_name(
    existing_names: Collection[str], *, rng: random.Random, attempts: int = 100
) -> str:
    """Draw prefix + suffix names until one is unused.

    After ``attempts`` collisions a numbered ``"AI Tribe <n>"`` name is
    returned instead.
    """
    taken = set(existing_names)
    for _ in range(attempts):
        name = f"{rng.choice(FACTION_NAME_PREFIXES)} {rng.choice(FACTION_NAME_SUFFIXES)}"
        if name not in taken:
            return name

    number = 1
    while f"AI Tribe {number}" in taken:
        number += 1
    return f"AI Tribe {number}"


def roll_ai_stats(rng: random.Random, rules: FactionRules = DEFAULT_RULES.factions) -> FactionStats:
    """Spread 20-25 points over the four stats, each starting at 1."""

    total = rng.randint(rules.ai_stat_points_min, rules.ai_stat_points_max)
    points = dict.fromkeys(_STAT_NAMES, 1)
    for _ in range(total - len(_STAT_NAMES)):
        points[rng.choice(_STAT_NAMES)] += 1
    return FactionStats(**points)


def set_diplomatic_status(a: Faction, b: Faction, status: DiplomaticStatus) -> None:
    """Set the relation between two factions on both sides."""

    a.diplomacy[b.id] = DiplomaticRelation(status=status)
    b.diplomacy[a.id] = DiplomaticRelation(status=status)


def register_faction(factions: MutableSequence[Faction], new: Faction) -> None:
    """Add ``new`` to the game and set its initial relations.

    AI factions start at war with everyone; two human factions start neutral.

    Raises:
        InvalidInputError: If a faction with the same id is already registered
    """
    if any(existing.id == new.id for existing in factions):
        raise InvalidInputError(f"faction {new.id} is already registered")

    for existing in factions:
        at_war = existing.is_ai or new.is_ai
        status = DiplomaticStatus.WAR if at_war else DiplomaticStatus.NEUTRAL
        set_diplomatic_status(new, existing, status)
    factions.append(new)
