from pydantic import BaseModel, Field

from wasteland.domain.enums import PoiKind, PoiRarity, TerrainKind
from wasteland.utils.hex_math import MAX_MAP_RADIUS


class PoiRead(BaseModel):
    id: str = Field(..., description="Point-of-interest identifier")
    kind: PoiKind
    difficulty: int = Field(..., ge=1, le=10, description="Difficulty rating from 1 to 10")
    rarity: PoiRarity


class HexRead(BaseModel):
    token: str = Field(..., description='Canonical coordinate token ("qqq.rrr")')
    q: int = Field(..., description="Axial coordinate q")
    r: int = Field(..., description="Axial coordinate r")
    terrain: TerrainKind
    movement_cost: float = Field(..., description="Cost of entering this hex")
    poi: PoiRead | None = None


class WorldSummary(BaseModel):
    radius: int
    seed: int
    hex_count: int
    poi_count: int
    starting_locations: list[str]
    terrain_counts: dict[TerrainKind, int] = Field(
        default_factory=dict, description="Number of hexes per terrain kind"
    )


class RegenerateWorldRequest(BaseModel):
    radius: int | None = Field(
        default=None, ge=0, le=MAX_MAP_RADIUS, description="Defaults to the current radius"
    )
    seed: int | None = Field(default=None, description="Random when omitted")
    biases: dict[TerrainKind, float] | None = Field(
        default=None, description="Terrain bias weights; missing terrains count as 1"
    )


class PathRead(BaseModel):
    start: str
    goal: str
    steps: list[str]
    cost: int = Field(..., description="Total movement cost rounded up")
    exact_cost: float
    hexes_moved: int
