"""Pathfinding and reachability over the generated hex map.

This module implements A* over the hex grid.  Entering a hex costs that hex's
terrain movement cost; terrain whose cost reaches the impassable threshold
cannot be entered at all.  The heuristic is the hex distance multiplied by the
cheapest passable cost in the table, which never overestimates and keeps the
search optimal.

A missing route is an ordinary outcome and is reported as ``None``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from heapq import heappop, heappush
from itertools import count

from wasteland.utils.hex_math import HexCoord, hex_distance, hex_neighbors

from .enums import TerrainKind
from .models import WorldMap
from .rules_config import TERRAIN_MOVEMENT_COSTS

logger = logging.getLogger(__name__)

DEFAULT_IMPASSABLE_AT = 10.0


def movement_cost(
    terrain: TerrainKind, costs: Mapping[TerrainKind, float] = TERRAIN_MOVEMENT_COSTS
) -> float:
    """Cost of entering a hex of ``terrain``; unknown terrain counts as 1."""
    return costs.get(terrain, 1.0)


def is_passable(
    terrain: TerrainKind,
    costs: Mapping[TerrainKind, float] = TERRAIN_MOVEMENT_COSTS,
    impassable_at: float = DEFAULT_IMPASSABLE_AT,
) -> bool:
    return movement_cost(terrain, costs) < impassable_at


@dataclass(frozen=True, slots=True)
class PathResult:
    """Route found by :func:`find_path`.

    Attributes:
        steps: Hexes from start to goal, both inclusive
        exact_cost: Sum of the entry costs of every hex after the start
    """

    steps: tuple[HexCoord, ...]
    exact_cost: float

    @property
    def cost(self) -> int:
        """Total cost rounded up to a whole number."""
        return math.ceil(self.exact_cost)

    @property
    def tokens(self) -> list[str]:
        return [step.token for step in self.steps]

    @property
    def hexes_moved(self) -> int:
        return len(self.steps) - 1


def find_path(
    start: HexCoord,
    goal: HexCoord,
    world: WorldMap,
    *,
    costs: Mapping[TerrainKind, float] | None = None,
    impassable_at: float = DEFAULT_IMPASSABLE_AT,
) -> PathResult | None:
    """Find the cheapest route between two hexes.

    Args:
        start: Starting hex
        goal: Destination hex
        world: Map to search
        costs: Terrain movement costs (defaults to the standard table)
        impassable_at: Terrain costing at least this much cannot be entered

    Returns:
        The cheapest route, or None when either end is off the map or no
        passable route exists.  ``start == goal`` yields a single-step path
        of cost 0.
    """
    costs = TERRAIN_MOVEMENT_COSTS if costs is None else costs
    if not world.contains(start) or not world.contains(goal):
        return None
    if start == goal:
        return PathResult(steps=(start,), exact_cost=0.0)

    goal_cell = world.cells[goal]
    if not is_passable(goal_cell.terrain, costs, impassable_at):
        return None

    cheapest_step = _cheapest_step(costs, impassable_at)
    tie_breaker = count()

    # Priority queue: (estimated_total, tie_breaker, coord)
    frontier: list[tuple[float, int, HexCoord]] = [(0.0, next(tie_breaker), start)]
    best_cost: dict[HexCoord, float] = {start: 0.0}
    came_from: dict[HexCoord, HexCoord] = {}
    closed: set[HexCoord] = set()

    while frontier:
        _, _, current = heappop(frontier)
        if current in closed:
            continue
        if current == goal:
            return PathResult(
                steps=_reconstruct(came_from, start, goal), exact_cost=best_cost[goal]
            )
        closed.add(current)

        for neighbor in hex_neighbors(current):
            cell = world.cells.get(neighbor)
            if cell is None or neighbor in closed:
                continue
            step_cost = movement_cost(cell.terrain, costs)
            if step_cost >= impassable_at:
                continue
            tentative = best_cost[current] + step_cost
            if tentative < best_cost.get(neighbor, math.inf):
                best_cost[neighbor] = tentative
                came_from[neighbor] = current
                estimate = tentative + hex_distance(neighbor, goal) * cheapest_step
                heappush(frontier, (estimate, next(tie_breaker), neighbor))

    return None


def _cheapest_step(costs: Mapping[TerrainKind, float], impassable_at: float) -> float:
    passable = [cost for cost in costs.values() if cost < impassable_at]
    # Terrain missing from the table costs 1
    if len(costs) < len(TerrainKind):
        passable.append(1.0)
    return max(0.0, min(passable, default=0.0))


def _reconstruct(
    came_from: dict[HexCoord, HexCoord], start: HexCoord, goal: HexCoord
) -> tuple[HexCoord, ...]:
    path = [goal]
    while path[-1] != start:
        path.append(came_from[path[-1]])
    path.reverse()
    return tuple(path)


@dataclass(slots=True)
class Navigator:
    """Memoizing pathfinder bound to one world.

    Worlds are never mutated after generation, so every answer can be cached
    for the navigator's lifetime.  Build a fresh navigator after regenerating
    the map.
    """

    world: WorldMap
    costs: Mapping[TerrainKind, float] = field(default_factory=lambda: TERRAIN_MOVEMENT_COSTS)
    impassable_at: float = DEFAULT_IMPASSABLE_AT
    _paths: dict[tuple[HexCoord, HexCoord], PathResult | None] = field(
        default_factory=dict, init=False, repr=False
    )
    _regions: dict[HexCoord, frozenset[HexCoord]] = field(
        default_factory=dict, init=False, repr=False
    )

    def find_path(self, start: HexCoord, goal: HexCoord) -> PathResult | None:
        key = (start, goal)
        if key not in self._paths:
            self._paths[key] = find_path(
                start, goal, self.world, costs=self.costs, impassable_at=self.impassable_at
            )
        return self._paths[key]

    def is_reachable(self, start: HexCoord, goal: HexCoord) -> bool:
        """Cheap reachability check that avoids running A*."""
        return goal in self.reachable_from(start)

    def reachable_from(self, start: HexCoord) -> frozenset[HexCoord]:
        """Every hex reachable from ``start``, including ``start`` itself.

        Off-map starts reach nothing.  The start hex is included even when its
        own terrain is impassable, since a unit already standing there can
        leave it.
        """
        cached = self._regions.get(start)
        if cached is not None:
            return cached
        if not self.world.contains(start):
            return frozenset()

        region = {start}
        pending = [start]
        while pending:
            current = pending.pop()
            for neighbor in hex_neighbors(current):
                if neighbor in region:
                    continue
                cell = self.world.cells.get(neighbor)
                if cell is None or not is_passable(cell.terrain, self.costs, self.impassable_at):
                    continue
                region.add(neighbor)
                pending.append(neighbor)

        result = frozenset(region)
        if is_passable(self.world.cells[start].terrain, self.costs, self.impassable_at):
            # Passable regions are symmetric: every member reaches the same set
            for coord in result:
                self._regions.setdefault(coord, result)
        self._regions[start] = result
        logger.debug("flood fill from %s reached %s hexes", start.token, len(result))
        return result
