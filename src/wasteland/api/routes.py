"""HTTP routes for the Wasteland API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from wasteland.api.runtime import ApiState, NoStartingLocationError, random_seed
from wasteland.domain import models as dm
from wasteland.domain.asset_data import ASSETS
from wasteland.domain.chief_data import CHIEFS
from wasteland.domain.pathfinding import movement_cost
from wasteland.domain.worldgen import terrain_histogram
from wasteland.schemas import (
    ActionRead,
    ActionSetSubmit,
    AIFactionCreate,
    AssetRead,
    ChiefRead,
    FactionCreate,
    FactionRead,
    HexRead,
    PathRead,
    PoiRead,
    RegenerateWorldRequest,
    TurnPlanRead,
    WorldSummary,
)
from wasteland.utils.hex_math import decode_coord

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _world_summary(world: dm.WorldMap) -> WorldSummary:
    return WorldSummary(
        radius=world.radius,
        seed=world.seed,
        hex_count=len(world),
        poi_count=len(world.points_of_interest()),
        starting_locations=list(world.starting_locations),
        terrain_counts=dict(terrain_histogram(world)),
    )


def _faction_or_404(state: ApiState, faction_id: str) -> dm.Faction:
    try:
        return state.game.get_faction(faction_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="faction not found"
        ) from exc


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "turn": state.game.turn,
        "faction_count": len(state.game.factions),
        "map_radius": state.game.world.radius,
    }


@router.get("/world", response_model=WorldSummary)
async def get_world(state: ApiStateDep) -> WorldSummary:
    return _world_summary(state.game.world)


@router.get("/world/hexes/{token}", response_model=HexRead)
async def get_hex(token: str, state: ApiStateDep) -> HexRead:
    cell = state.game.world.cell_at(decode_coord(token))
    if cell is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="hex not on map")
    poi = cell.poi
    return HexRead(
        token=cell.token,
        q=cell.q,
        r=cell.r,
        terrain=cell.terrain,
        movement_cost=movement_cost(cell.terrain, state.game.rules.navigation.terrain_costs),
        poi=(
            PoiRead(id=poi.id, kind=poi.kind, difficulty=poi.difficulty, rarity=poi.rarity)
            if poi is not None
            else None
        ),
    )


@router.post("/world/regenerate", response_model=WorldSummary)
async def regenerate_world(request: RegenerateWorldRequest, state: ApiStateDep) -> WorldSummary:
    game = state.game
    async with game.lock:
        radius = request.radius if request.radius is not None else game.world.radius
        seed = request.seed if request.seed is not None else random_seed()
        world = await game.regenerate(radius=radius, seed=seed, biases=request.biases)
    return _world_summary(world)


@router.get("/path", response_model=PathRead)
async def get_path(
    state: ApiStateDep,
    start: Annotated[str, Query(description="Start coordinate token")],
    goal: Annotated[str, Query(description="Goal coordinate token")],
) -> PathRead:
    start_coord = decode_coord(start)
    goal_coord = decode_coord(goal)
    result = state.game.navigator.find_path(start_coord, goal_coord)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="no path")
    return PathRead(
        start=start_coord.token,
        goal=goal_coord.token,
        steps=result.tokens,
        cost=result.cost,
        exact_cost=result.exact_cost,
        hexes_moved=result.hexes_moved,
    )


@router.post("/factions", response_model=FactionRead, status_code=status.HTTP_201_CREATED)
async def join_game(request: FactionCreate, state: ApiStateDep) -> FactionRead:
    async with state.game.lock:
        try:
            faction = state.game.join(request.name)
        except NoStartingLocationError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return FactionRead.from_domain(faction)


@router.post("/factions/ai", response_model=FactionRead, status_code=status.HTTP_201_CREATED)
async def add_ai_faction(request: AIFactionCreate, state: ApiStateDep) -> FactionRead:
    async with state.game.lock:
        try:
            faction = state.game.add_ai(request.archetype)
        except NoStartingLocationError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return FactionRead.from_domain(faction)


@router.get("/factions/{faction_id}", response_model=FactionRead)
async def get_faction(faction_id: str, state: ApiStateDep) -> FactionRead:
    return FactionRead.from_domain(_faction_or_404(state, faction_id))


@router.post("/factions/{faction_id}/actions", response_model=list[ActionRead])
async def submit_actions(
    faction_id: str, request: ActionSetSubmit, state: ApiStateDep
) -> list[ActionRead]:
    async with state.game.lock:
        _faction_or_404(state, faction_id)
        actions = state.game.submit(faction_id, request.actions)
    return [ActionRead.from_domain(action) for action in actions]


@router.post("/turn/plan", response_model=TurnPlanRead)
async def plan_turn(state: ApiStateDep) -> TurnPlanRead:
    async with state.game.lock:
        plan = state.game.plan()
    return TurnPlanRead(
        turn=plan.turn,
        actions={
            faction_id: [ActionRead.from_domain(action) for action in actions]
            for faction_id, actions in plan.actions.items()
        },
    )


@router.get("/catalog/assets", response_model=list[AssetRead])
async def list_assets() -> list[AssetRead]:
    return [AssetRead.from_domain(asset) for asset in ASSETS]


@router.get("/catalog/chiefs", response_model=list[ChiefRead])
async def list_chiefs() -> list[ChiefRead]:
    return [ChiefRead.from_domain(chief) for chief in CHIEFS]
