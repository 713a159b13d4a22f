"""Protocol-based interfaces for Wasteland collaborators.

This module exports the protocols the core depends on but does not
implement, so hosts can plug in their own implementations and tests can
substitute fakes.
"""

from wasteland.interfaces.turn_resolution import ITurnResolver

__all__ = ["ITurnResolver"]
