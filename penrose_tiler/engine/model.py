"""Core data structures for the placement engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..edges import DEFAULT_EPSILON, world_points
from ..prototiles import NUM_SIDES, PrototileType, check_side
from ..transforms import Transform

ALL_SIDES_MASK = (1 << NUM_SIDES) - 1

# (anchor side, new tile type)
Candidate = Tuple[int, PrototileType]
# (handle, world transform, tile type)
PlacementResult = Tuple[int, Transform, PrototileType]


class PlacementError(ValueError):
    """Raised when a caller breaks a placement contract."""

    def __init__(self, message: str, *, handle: Optional[int] = None, side: Optional[int] = None):
        super().__init__(message)
        self.handle = handle
        self.side = side


@dataclass
class TileInstance:
    """A placed tile. ``used_sides`` is a bit set, bit ``i`` for side ``i``."""

    handle: int
    tile_type: PrototileType
    transform: Transform
    parent: Optional[int] = None
    attach_side: Optional[int] = None
    used_sides: int = 0

    def get_side_used(self, side: int) -> bool:
        return bool(self.used_sides & (1 << check_side(side)))

    def set_side_used(self, side: int) -> None:
        self.used_sides |= 1 << check_side(side)

    def set_side_free(self, side: int) -> None:
        self.used_sides &= ~(1 << check_side(side))

    def has_free_sides(self) -> bool:
        return self.used_sides & ALL_SIDES_MASK != ALL_SIDES_MASK

    def get_free_sides(self) -> List[int]:
        return [side for side in range(NUM_SIDES) if not self.get_side_used(side)]

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def world_points(self) -> np.ndarray:
        return world_points(self.tile_type, self.transform)

    @property
    def centre(self) -> np.ndarray:
        return self.transform.translation


@dataclass
class EngineConfig:
    """Tunables for :class:`~penrose_tiler.engine.placement.PenroseTiler`.

    ``validity_scope`` is ``"local"`` to re-check only frontier tiles within
    ``validity_radius`` of the newest tile (defaults to four circumradii) or
    ``"all"`` to re-check the whole frontier after every random placement.
    """

    epsilon: float = DEFAULT_EPSILON
    random_seed: Optional[int] = None
    check_validity: bool = True
    validity_scope: str = "local"
    validity_radius: Optional[float] = None

    def __post_init__(self) -> None:
        if self.epsilon <= 0.0:
            raise ValueError("epsilon must be positive")
        if self.validity_scope not in ("local", "all"):
            raise ValueError(f"validity_scope must be 'local' or 'all', got {self.validity_scope!r}")
