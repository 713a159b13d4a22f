from .actions import ActionRead, ActionSetSubmit, ActionSubmission, TurnPlanRead
from .catalog import AssetRead, ChiefRead, EffectRead
from .faction import AIFactionCreate, FactionCreate, FactionRead, GarrisonRead, ResourcesRead
from .world import HexRead, PathRead, PoiRead, RegenerateWorldRequest, WorldSummary

__all__ = [
    "AIFactionCreate",
    "ActionRead",
    "ActionSetSubmit",
    "ActionSubmission",
    "AssetRead",
    "ChiefRead",
    "EffectRead",
    "FactionCreate",
    "FactionRead",
    "GarrisonRead",
    "HexRead",
    "PathRead",
    "PoiRead",
    "RegenerateWorldRequest",
    "ResourcesRead",
    "TurnPlanRead",
    "WorldSummary",
]
