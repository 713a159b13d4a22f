"""Rules layer for Wasteland.

This package hosts every game rule that runs purely in memory:

* Dataclasses describing the world, factions and planned actions (see
  :mod:`models`), with enumerations in :mod:`enums`.
* Static content tables (technologies, points of interest, personalities).
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions: world generation, pathfinding, the faction AI and turn
  planning.

Submodules are imported explicitly by callers; importing the package itself
has no side effects.
"""
