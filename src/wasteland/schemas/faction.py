from pydantic import BaseModel, Field

from wasteland.domain import models as dm
from wasteland.domain.enums import AIArchetype, DiplomaticStatus, RationLevel


class FactionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)


class AIFactionCreate(BaseModel):
    archetype: AIArchetype = AIArchetype.WANDERER


class GarrisonRead(BaseModel):
    troops: int
    weapons: int
    leaders: list[str] = Field(default_factory=list)


class ResourcesRead(BaseModel):
    food: int
    scrap: int
    morale: int


class FactionRead(BaseModel):
    id: str
    name: str
    location: str
    is_ai: bool
    archetype: AIArchetype | None = None
    ration_level: RationLevel
    resources: ResourcesRead
    garrisons: dict[str, GarrisonRead]
    explored_count: int = Field(..., description="Number of explored hexes")
    completed_techs: list[str] = Field(default_factory=list)
    diplomacy: dict[str, DiplomaticStatus] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, faction: dm.Faction) -> "FactionRead":
        return cls(
            id=faction.id,
            name=faction.name,
            location=faction.location,
            is_ai=faction.is_ai,
            archetype=faction.archetype,
            ration_level=faction.ration_level,
            resources=ResourcesRead(
                food=faction.resources.food,
                scrap=faction.resources.scrap,
                morale=faction.resources.morale,
            ),
            garrisons={
                location: GarrisonRead(
                    troops=garrison.troops,
                    weapons=garrison.weapons,
                    leaders=list(garrison.leaders),
                )
                for location, garrison in faction.garrisons.items()
            },
            explored_count=len(faction.explored),
            completed_techs=list(faction.completed_techs),
            diplomacy={
                other_id: relation.status for other_id, relation in faction.diplomacy.items()
            },
        )
