"""Rigid planar transforms and the prototile connection table."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from .prototiles import (
    FAT_LARGE_ANGLE,
    FAT_SMALL_ANGLE,
    PROTOTILES,
    SKINNY_LARGE_ANGLE,
    SKINNY_SMALL_ANGLE,
    PrototileType,
    check_side,
)


@dataclass(frozen=True, eq=False)
class Transform:
    """Rotation followed by translation, stored as a 3x3 homogeneous matrix."""

    matrix: np.ndarray

    def __post_init__(self) -> None:
        m = np.array(self.matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"transform matrix must be 3x3, got {m.shape}")
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @classmethod
    def identity(cls) -> "Transform":
        return cls(np.eye(3))

    @classmethod
    def from_rotation_translation(cls, angle: float, translation: Sequence[float]) -> "Transform":
        c = math.cos(angle)
        s = math.sin(angle)
        tx, ty = float(translation[0]), float(translation[1])
        return cls(np.array([[c, -s, tx], [s, c, ty], [0.0, 0.0, 1.0]]))

    @property
    def rotation(self) -> float:
        return math.atan2(self.matrix[1, 0], self.matrix[0, 0])

    @property
    def translation(self) -> np.ndarray:
        return self.matrix[:2, 2].copy()

    def __matmul__(self, other: "Transform") -> "Transform":
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self.matrix @ other.matrix)

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map an ``(N, 2)`` array (or a single point) into this frame."""

        pts = np.asarray(points, dtype=float)
        single = pts.ndim == 1
        pts = np.atleast_2d(pts)
        out = pts @ self.matrix[:2, :2].T + self.matrix[:2, 2]
        return out[0] if single else out

    def isclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, rtol=0.0, atol=atol))

    def __repr__(self) -> str:
        tx, ty = self.matrix[:2, 2]
        return f"Transform(angle={math.degrees(self.rotation):.4f}deg, translation=({tx:.4f}, {ty:.4f}))"


def make_rotation_transform(angle: float, anchor: Sequence[float], centre_offset: float) -> Transform:
    """Place a tile whose centre sits ``centre_offset`` above its pivot vertex.

    The tile is shifted by ``(0, centre_offset)`` so the pivot vertex lands on the
    origin, rotated by ``angle`` and finally moved so the pivot meets ``anchor``.
    """

    rotation = Transform.from_rotation_translation(angle, (0.0, 0.0))
    centre = rotation.apply(np.array([0.0, centre_offset]))
    return Transform.from_rotation_translation(
        angle, (centre[0] + float(anchor[0]), centre[1] + float(anchor[1]))
    )


ConnectionTable = Dict[Tuple[PrototileType, PrototileType], Tuple[Transform, ...]]


def _build_connection_transforms() -> ConnectionTable:
    fat = PROTOTILES[PrototileType.FAT]
    skinny = PROTOTILES[PrototileType.SKINNY]
    fat_half = fat.half_small_diagonal
    skinny_half = skinny.half_small_diagonal
    rad = math.radians

    fat_vert = rad(180.0 - FAT_LARGE_ANGLE / 2.0 - FAT_LARGE_ANGLE / 2.0)
    skinny_fat_horizontal = rad(180.0 + FAT_SMALL_ANGLE / 2.0 - SKINNY_SMALL_ANGLE / 2.0)
    skinny_fat_vert = rad(180.0 - SKINNY_LARGE_ANGLE / 2.0 - FAT_LARGE_ANGLE / 2.0)
    fat_skinny_horizontal = rad(180.0 + FAT_LARGE_ANGLE / 2.0 - SKINNY_LARGE_ANGLE / 2.0)
    skinny_skinny = rad(360.0 - SKINNY_LARGE_ANGLE / 2.0 - SKINNY_LARGE_ANGLE / 2.0)

    table: ConnectionTable = {}
    table[PrototileType.FAT, PrototileType.FAT] = (
        make_rotation_transform(fat_vert, fat.top, fat_half),
        make_rotation_transform(-fat_vert, fat.top, fat_half),
        make_rotation_transform(fat_vert, fat.bottom, -fat_half),
        make_rotation_transform(-fat_vert, fat.bottom, -fat_half),
    )
    table[PrototileType.FAT, PrototileType.SKINNY] = (
        make_rotation_transform(skinny_fat_horizontal, fat.left, -skinny_half),
        make_rotation_transform(-skinny_fat_vert, fat.top, skinny_half),
        make_rotation_transform(skinny_fat_vert + rad(180.0), fat.bottom, skinny_half),
        make_rotation_transform(-rad(SKINNY_SMALL_ANGLE / 2.0), fat.left, -skinny_half),
    )
    table[PrototileType.SKINNY, PrototileType.FAT] = (
        make_rotation_transform(fat_skinny_horizontal, skinny.left, -fat_half),
        make_rotation_transform(rad(SKINNY_SMALL_ANGLE / 2.0), skinny.right, fat_half),
        make_rotation_transform(rad(FAT_LARGE_ANGLE / 2.0), skinny.bottom, -fat_half),
        make_rotation_transform(
            rad(90.0 + FAT_LARGE_ANGLE / 2.0 - SKINNY_SMALL_ANGLE / 2.0), skinny.bottom, fat_half
        ),
    )
    table[PrototileType.SKINNY, PrototileType.SKINNY] = (
        make_rotation_transform(skinny_skinny, skinny.top, -skinny_half),
        make_rotation_transform(-skinny_skinny, skinny.top, -skinny_half),
        make_rotation_transform(skinny_skinny, skinny.bottom, skinny_half),
        make_rotation_transform(-skinny_skinny, skinny.bottom, skinny_half),
    )
    return table


CONNECTION_TRANSFORMS: ConnectionTable = _build_connection_transforms()


def connection_transform(
    anchor_type: PrototileType, side: int, other_type: PrototileType
) -> Transform:
    """Return the local transform placing ``other_type`` against ``side`` of ``anchor_type``."""

    side = check_side(side)
    return CONNECTION_TRANSFORMS[PrototileType(anchor_type), PrototileType(other_type)][side]


__all__ = [
    "CONNECTION_TRANSFORMS",
    "Transform",
    "connection_transform",
    "make_rotation_transform",
]
