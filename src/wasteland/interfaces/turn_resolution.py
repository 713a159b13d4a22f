"""Turn Resolution Protocol Interface.

This module defines the protocol for the collaborator that applies a planned
turn to the game state.  Combat, scavenging yields, research progress and
food upkeep all live behind this boundary.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol

from wasteland.domain.models import Faction, FactionID, PlannedAction, WorldMap


class ITurnResolver(Protocol):
    """Protocol for services that resolve a turn's actions."""

    def resolve(
        self,
        world: WorldMap,
        factions: Sequence[Faction],
        actions: Mapping[FactionID, Sequence[PlannedAction]],
        turn: int,
    ) -> list[Faction]:
        """Apply every faction's actions for ``turn``.

        Args:
            world: Current world map (read only)
            factions: Factions as they stood before the turn
            actions: Validated action set per faction id
            turn: Turn being resolved

        Returns:
            The factions as they stand after the turn
        """
        ...
