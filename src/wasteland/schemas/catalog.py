from pydantic import BaseModel, Field

from wasteland.domain import models as dm
from wasteland.domain.enums import ResourceKind, TechnologyEffectType, TerrainKind


class EffectRead(BaseModel):
    kind: TechnologyEffectType
    value: float
    resource: ResourceKind | None = None
    terrain: TerrainKind | None = Field(
        default=None, description="Terrain the effect is limited to"
    )


class AssetRead(BaseModel):
    id: str
    name: str
    description: str
    effects: list[EffectRead]

    @classmethod
    def from_domain(cls, asset: dm.Asset) -> "AssetRead":
        return cls(
            id=asset.id,
            name=asset.name,
            description=asset.description,
            effects=[
                EffectRead(
                    kind=effect.kind,
                    value=effect.value,
                    resource=effect.resource,
                    terrain=effect.terrain,
                )
                for effect in asset.effects
            ],
        )


class ChiefRead(BaseModel):
    id: str
    name: str
    description: str
    charisma: int
    intelligence: int
    leadership: int
    strength: int

    @classmethod
    def from_domain(cls, chief: dm.Chief) -> "ChiefRead":
        stats = chief.stats
        return cls(
            id=chief.id,
            name=chief.name,
            description=chief.description,
            charisma=stats.charisma,
            intelligence=stats.intelligence,
            leadership=stats.leadership,
            strength=stats.strength,
        )
