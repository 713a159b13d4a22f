"""Technology catalog consumed by the AI engine and the turn resolver."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from .enums import ResourceKind, TechnologyEffectType, TerrainKind
from .models import Technology, TechnologyEffect, TechnologyID


def _tech(
    tech_id: str,
    name: str,
    description: str,
    *,
    scrap_cost: int,
    research_points: int,
    required_troops: int,
    prerequisites: Collection[str] = (),
    effects: Sequence[TechnologyEffect] = (),
) -> Technology:
    return Technology(
        id=TechnologyID(tech_id),
        name=name,
        description=description,
        scrap_cost=scrap_cost,
        research_points=research_points,
        required_troops=required_troops,
        prerequisites=frozenset(TechnologyID(p) for p in prerequisites),
        effects=tuple(effects),
    )


TECHNOLOGIES: tuple[Technology, ...] = (
    _tech(
        "agriculture",
        "Agriculture",
        "Basic farming techniques to produce food more efficiently.",
        scrap_cost=15,
        research_points=20,
        required_troops=5,
        effects=[TechnologyEffect(TechnologyEffectType.PASSIVE_FOOD_GENERATION, 10)],
    ),
    _tech(
        "scavenging",
        "Scavenging Techniques",
        "Improved methods for finding and salvaging useful materials.",
        scrap_cost=20,
        research_points=25,
        required_troops=8,
        effects=[
            TechnologyEffect(
                TechnologyEffectType.SCAVENGE_YIELD_BONUS, 0.2, resource=ResourceKind.SCRAP
            )
        ],
    ),
    _tech(
        "weapon_smithing",
        "Weapon Smithing",
        "Advanced techniques for crafting more effective weapons.",
        scrap_cost=30,
        research_points=35,
        required_troops=10,
        prerequisites=["scavenging"],
        effects=[TechnologyEffect(TechnologyEffectType.COMBAT_BONUS_ATTACK, 0.15)],
    ),
    _tech(
        "fortification",
        "Fortification",
        "Techniques for building defensive structures and positions.",
        scrap_cost=25,
        research_points=30,
        required_troops=12,
        prerequisites=["scavenging"],
        effects=[TechnologyEffect(TechnologyEffectType.COMBAT_BONUS_DEFENSE, 0.2)],
    ),
    _tech(
        "hunting",
        "Hunting",
        "Improved methods for hunting wasteland creatures for food.",
        scrap_cost=15,
        research_points=20,
        required_troops=6,
        effects=[
            TechnologyEffect(
                TechnologyEffectType.SCAVENGE_YIELD_BONUS, 0.25, resource=ResourceKind.FOOD
            )
        ],
    ),
    _tech(
        "advanced_agriculture",
        "Advanced Agriculture",
        "Sophisticated farming techniques adapted to wasteland conditions.",
        scrap_cost=40,
        research_points=45,
        required_troops=15,
        prerequisites=["agriculture"],
        effects=[TechnologyEffect(TechnologyEffectType.PASSIVE_FOOD_GENERATION, 20)],
    ),
    _tech(
        "wasteland_adaptation",
        "Wasteland Adaptation",
        "Techniques for surviving and thriving in harsh wasteland environments.",
        scrap_cost=35,
        research_points=40,
        required_troops=12,
        prerequisites=["hunting"],
        effects=[
            TechnologyEffect(TechnologyEffectType.MOVEMENT_SPEED_BONUS, 0.2),
            TechnologyEffect(
                TechnologyEffectType.COMBAT_BONUS_ATTACK, 0.1, terrain=TerrainKind.WASTELAND
            ),
        ],
    ),
    _tech(
        "arms_manufacturing",
        "Arms Manufacturing",
        "Mass production techniques for weapons.",
        scrap_cost=50,
        research_points=60,
        required_troops=20,
        prerequisites=["weapon_smithing", "scavenging"],
        effects=[
            TechnologyEffect(
                TechnologyEffectType.SCAVENGE_YIELD_BONUS, 0.3, resource=ResourceKind.WEAPONS
            )
        ],
    ),
)


def get_technology(
    tech_id: str, catalog: Sequence[Technology] = TECHNOLOGIES
) -> Technology | None:
    """Look up a technology by id."""

    return next((tech for tech in catalog if tech.id == tech_id), None)


def all_technologies(catalog: Sequence[Technology] = TECHNOLOGIES) -> list[Technology]:
    return list(catalog)


def available_technologies(
    completed: Collection[str], catalog: Sequence[Technology] = TECHNOLOGIES
) -> list[Technology]:
    """Technologies not yet completed whose prerequisites are all completed.

    Catalog order is preserved.
    """

    done = set(completed)
    return [
        tech for tech in catalog if tech.id not in done and tech.prerequisites <= done
    ]
