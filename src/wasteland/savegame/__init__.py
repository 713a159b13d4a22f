"""JSON snapshots of generated worlds.

A snapshot holds everything needed to rebuild a :class:`WorldMap` without
regenerating it.  Cells are stored as a list in map order because coordinate
keys cannot be JSON object keys.  Encoding the same world twice gives
byte-identical output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError, model_validator

from wasteland.domain import models as dm
from wasteland.domain.enums import TerrainKind
from wasteland.domain.errors import InvalidInputError
from wasteland.utils.hex_math import decode_coord

FORMAT_VERSION = 1


class CellRecord(BaseModel):
    """One hex as stored in a snapshot."""

    q: int
    r: int
    terrain: TerrainKind
    poi: dm.PointOfInterest | None = None


class WorldSnapshot(BaseModel):
    """Top-level document written by :func:`world_to_json`."""

    format_version: int = FORMAT_VERSION
    radius: int = Field(ge=0)
    seed: int
    biases: dict[TerrainKind, float] = Field(default_factory=dict)
    starting_locations: list[str] = Field(default_factory=list)
    cells: list[CellRecord]

    @model_validator(mode="after")
    def _check_consistency(self) -> WorldSnapshot:
        seen: set[tuple[int, int]] = set()
        for cell in self.cells:
            key = (cell.q, cell.r)
            if key in seen:
                raise ValueError(f"duplicate cell at {key}")
            seen.add(key)
        for token in self.starting_locations:
            coord = decode_coord(token)
            if (coord.q, coord.r) not in seen:
                raise ValueError(f"starting location {token} is not on the map")
        return self

    @classmethod
    def from_world(cls, world: dm.WorldMap) -> WorldSnapshot:
        return cls(
            radius=world.radius,
            seed=world.seed,
            biases=dict(world.settings.biases),
            starting_locations=list(world.starting_locations),
            cells=[
                CellRecord(q=cell.q, r=cell.r, terrain=cell.terrain, poi=cell.poi)
                for cell in world
            ],
        )

    def to_world(self) -> dm.WorldMap:
        cells = {}
        for record in self.cells:
            cell = dm.HexCell(q=record.q, r=record.r, terrain=record.terrain, poi=record.poi)
            cells[cell.coord] = cell
        return dm.WorldMap(
            radius=self.radius,
            seed=self.seed,
            cells=cells,
            starting_locations=tuple(self.starting_locations),
            settings=dm.MapSettings(biases=dict(self.biases)),
        )


def world_to_json(world: dm.WorldMap) -> bytes:
    """Encode ``world`` as a JSON snapshot."""

    return WorldSnapshot.from_world(world).model_dump_json().encode("utf-8")


def world_from_json(payload: bytes | str) -> dm.WorldMap:
    """Rebuild a world from :func:`world_to_json` output.

    Raises:
        InvalidInputError: If the payload is not a valid snapshot
    """
    try:
        snapshot = WorldSnapshot.model_validate_json(payload)
    except ValidationError as exc:
        raise InvalidInputError(f"invalid world snapshot: {exc}") from exc
    if snapshot.format_version != FORMAT_VERSION:
        raise InvalidInputError(f"unsupported snapshot format {snapshot.format_version}")
    return snapshot.to_world()
