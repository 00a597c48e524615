"""Dead-end detection and single-step backtracking."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..prototiles import MAX_CIRCUMRADIUS

if TYPE_CHECKING:
    from .placement import PenroseTiler

logger = logging.getLogger(__name__)

# A new tile can only change the candidate set of a tile whose candidates
# reach it: anchor to candidate and candidate to new tile are each at most
# two circumradii apart.
DEFAULT_VALIDITY_RADIUS = 4.0 * MAX_CIRCUMRADIUS + 1.0

DeadEnd = Tuple[int, int]  # (handle, side)


def _scope(tiler: "PenroseTiler", near: Optional[int]) -> List[int]:
    frontier = tiler.frontier()
    if near is None or tiler.config.validity_scope == "all":
        return frontier
    radius = tiler.config.validity_radius or DEFAULT_VALIDITY_RADIUS
    close = set(tiler.nearby_handles(tiler.tile(near).centre, radius))
    return [handle for handle in frontier if handle in close]


def find_dead_ends(tiler: "PenroseTiler", near: Optional[int] = None) -> List[DeadEnd]:
    """Return free sides that no prototile can legally occupy.

    With ``near`` set and a ``"local"`` validity scope only frontier tiles
    around that tile are examined.
    """

    dead: List[DeadEnd] = []
    for handle in _scope(tiler, near):
        tile = tiler.tile(handle)
        open_sides = {side for side, _ in tiler.legal_placements(handle)}
        for side in tile.get_free_sides():
            if side not in open_sides:
                dead.append((handle, side))
    return dead


def retract_if_dead_end(tiler: "PenroseTiler", handle: int) -> bool:
    """Undo ``handle`` (the newest tile) when it left any dead end behind."""

    dead = find_dead_ends(tiler, near=handle)
    if not dead:
        return False
    logger.info(
        "Retracting #%d: %d dead-end side(s), first at #%d side %d",
        handle,
        len(dead),
        dead[0][0],
        dead[0][1],
    )
    tiler.undo_last()
    return True
