"""Prototile shapes for the two Penrose rhombi."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np

FAT_SMALL_ANGLE = 72.0
SKINNY_SMALL_ANGLE = 36.0
FAT_LARGE_ANGLE = 180.0 - FAT_SMALL_ANGLE
SKINNY_LARGE_ANGLE = 180.0 - SKINNY_SMALL_ANGLE

LEG_LENGTH = 100.0
NUM_SIDES = 4

UPPER_LEFT_SIDE = 0
UPPER_RIGHT_SIDE = 1
LOWER_RIGHT_SIDE = 2
LOWER_LEFT_SIDE = 3

LEFT_INDEX = 0
TOP_INDEX = 1
RIGHT_INDEX = 2
BOTTOM_INDEX = 3


class PrototileType(IntEnum):
    FAT = 0
    SKINNY = 1

    @classmethod
    def from_name(cls, name: str) -> "PrototileType":
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"unknown prototile type {name!r}") from exc

    @property
    def label(self) -> str:
        return self.name.lower()


ALL_TYPES: Tuple[PrototileType, ...] = tuple(PrototileType)


def check_side(side: int) -> int:
    """Return ``side`` as an ``int``.

    Raises ``TypeError`` for non-integral values and ``IndexError`` when out
    of range.
    """

    side = operator.index(side)
    if not 0 <= side < NUM_SIDES:
        raise IndexError(f"side index {side} out of range 0..{NUM_SIDES - 1}")
    return side


@dataclass(frozen=True)
class Prototile:
    """Immutable rhombus description centred on the origin.

    The long diagonal lies on the x axis, so the small angle sits at the left
    and right vertices.  Vertices are ordered left, top, right, bottom and
    side ``i`` joins vertex ``i`` to vertex ``(i + 1) % 4``.
    """

    tile_type: PrototileType
    small_angle: float
    leg_length: float = LEG_LENGTH
    points: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.small_angle > math.pi / 2.0:
            raise ValueError("small angle must not exceed 90 degrees")
        pts = np.array(
            [
                (-self.half_long_diagonal, 0.0),
                (0.0, self.half_small_diagonal),
                (self.half_long_diagonal, 0.0),
                (0.0, -self.half_small_diagonal),
            ],
            dtype=float,
        )
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @property
    def long_diagonal(self) -> float:
        return self.leg_length * math.sqrt(2.0 + 2.0 * math.cos(self.small_angle))

    @property
    def small_diagonal(self) -> float:
        return self.leg_length * math.sqrt(2.0 - 2.0 * math.cos(self.small_angle))

    @property
    def half_long_diagonal(self) -> float:
        return self.long_diagonal / 2.0

    @property
    def half_small_diagonal(self) -> float:
        return self.small_diagonal / 2.0

    @property
    def left(self) -> np.ndarray:
        return self.points[LEFT_INDEX]

    @property
    def top(self) -> np.ndarray:
        return self.points[TOP_INDEX]

    @property
    def right(self) -> np.ndarray:
        return self.points[RIGHT_INDEX]

    @property
    def bottom(self) -> np.ndarray:
        return self.points[BOTTOM_INDEX]

    def side_points(self, side: int) -> Tuple[np.ndarray, np.ndarray]:
        side = check_side(side)
        return self.points[side], self.points[(side + 1) % NUM_SIDES]


def _build_prototiles() -> Dict[PrototileType, Prototile]:
    return {
        PrototileType.FAT: Prototile(PrototileType.FAT, math.radians(FAT_SMALL_ANGLE)),
        PrototileType.SKINNY: Prototile(PrototileType.SKINNY, math.radians(SKINNY_SMALL_ANGLE)),
    }


PROTOTILES: Dict[PrototileType, Prototile] = _build_prototiles()

# Largest distance from a tile centre to any of its vertices.
MAX_CIRCUMRADIUS = max(p.half_long_diagonal for p in PROTOTILES.values())


def get_prototile(tile_type: PrototileType) -> Prototile:
    return PROTOTILES[PrototileType(tile_type)]


def points(tile_type: PrototileType) -> np.ndarray:
    """Return the four local-space vertices of ``tile_type`` (read-only array)."""

    return get_prototile(tile_type).points


def side_list() -> List[int]:
    return list(range(NUM_SIDES))


__all__ = [
    "ALL_TYPES",
    "BOTTOM_INDEX",
    "FAT_LARGE_ANGLE",
    "FAT_SMALL_ANGLE",
    "LEFT_INDEX",
    "LEG_LENGTH",
    "LOWER_LEFT_SIDE",
    "LOWER_RIGHT_SIDE",
    "MAX_CIRCUMRADIUS",
    "NUM_SIDES",
    "PROTOTILES",
    "Prototile",
    "PrototileType",
    "RIGHT_INDEX",
    "SKINNY_LARGE_ANGLE",
    "SKINNY_SMALL_ANGLE",
    "TOP_INDEX",
    "UPPER_LEFT_SIDE",
    "UPPER_RIGHT_SIDE",
    "check_side",
    "get_prototile",
    "points",
    "side_list",
]
