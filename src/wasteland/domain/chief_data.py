"""Catalog of named chiefs that can lead garrisons and detachments."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Chief, ChiefID, FactionStats


def _chief(
    chief_id: str,
    name: str,
    description: str,
    *,
    charisma: int,
    intelligence: int,
    leadership: int,
    strength: int,
) -> Chief:
    return Chief(
        id=ChiefID(chief_id),
        name=name,
        description=description,
        stats=FactionStats(
            charisma=charisma,
            intelligence=intelligence,
            leadership=leadership,
            strength=strength,
        ),
    )


CHIEFS: tuple[Chief, ...] = (
    _chief(
        "karn",
        "Karn the Scavenger",
        "A resourceful survivor known for finding valuable scrap in the most unlikely places.",
        charisma=2, intelligence=4, leadership=3, strength=3,
    ),
    _chief(
        "valeria",
        "Valeria the Hunter",
        "An expert tracker and hunter who can find food in even the most barren wastelands.",
        charisma=3, intelligence=3, leadership=2, strength=4,
    ),
    _chief(
        "thorne",
        "Thorne the Warlord",
        "A fearsome warrior who inspires both loyalty and terror in equal measure.",
        charisma=3, intelligence=2, leadership=5, strength=5,
    ),
    _chief(
        "sybil",
        "Sybil the Sage",
        "A keeper of old-world knowledge and technology, invaluable for research and development.",
        charisma=2, intelligence=6, leadership=3, strength=1,
    ),
    _chief(
        "marcus",
        "Marcus the Diplomat",
        "A charismatic negotiator who can forge alliances with even the most hostile tribes.",
        charisma=6, intelligence=4, leadership=3, strength=1,
    ),
    _chief(
        "rook",
        "Rook the Tactician",
        "A brilliant military strategist who can turn the tide of any battle.",
        charisma=2, intelligence=5, leadership=4, strength=3,
    ),
    _chief(
        "zara",
        "Zara the Healer",
        "A skilled medic whose knowledge of herbs and medicine keeps troops fighting longer.",
        charisma=4, intelligence=5, leadership=2, strength=1,
    ),
    _chief(
        "grim",
        "Grim the Enforcer",
        "A ruthless enforcer who maintains discipline through fear and respect.",
        charisma=1, intelligence=2, leadership=4, strength=6,
    ),
    _chief(
        "echo",
        "Echo the Scout",
        "A stealthy scout who can move undetected through enemy territory.",
        charisma=2, intelligence=4, leadership=2, strength=4,
    ),
    _chief(
        "nova",
        "Nova the Engineer",
        "A mechanical genius who can turn scrap into formidable weapons and tools.",
        charisma=2, intelligence=6, leadership=2, strength=2,
    ),
    _chief(
        "orion",
        "Orion the Pathfinder",
        "An expert navigator who can find safe passages through the most dangerous terrain.",
        charisma=3, intelligence=4, leadership=3, strength=3,
    ),
    _chief(
        "lyra",
        "Lyra the Beastmaster",
        "A mysterious figure who has a supernatural connection with wasteland creatures.",
        charisma=5, intelligence=3, leadership=3, strength=3,
    ),
)


def get_chief(chief_id: str, catalog: Sequence[Chief] = CHIEFS) -> Chief | None:
    """Look up a chief by id."""

    return next((chief for chief in catalog if chief.id == chief_id), None)
