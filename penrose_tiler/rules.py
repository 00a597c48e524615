"""Penrose matching rules for the rhombus pair.

``MATCHING_RULES[anchor][other][side]`` is the side of a tile of type
``other`` that must touch ``side`` of an anchor of type ``anchor``.
"""

from __future__ import annotations

from typing import Tuple

from .prototiles import PrototileType, check_side

MATCHING_RULES: Tuple[Tuple[Tuple[int, ...], ...], ...] = (
    (
        # fat -> fat
        (3, 2, 1, 0),
        # fat -> skinny
        (0, 2, 3, 1),
    ),
    (
        # skinny -> fat
        (0, 3, 1, 2),
        # skinny -> skinny
        (1, 0, 3, 2),
    ),
)


def matching_side(anchor_type: PrototileType, anchor_side: int, other_type: PrototileType) -> int:
    """Return the side of ``other_type`` that touches ``anchor_side`` of ``anchor_type``."""

    anchor_side = check_side(anchor_side)
    return MATCHING_RULES[PrototileType(anchor_type)][PrototileType(other_type)][anchor_side]


def sides_match(
    type_a: PrototileType, side_a: int, type_b: PrototileType, side_b: int
) -> bool:
    """Return ``True`` when ``side_b`` of ``type_b`` is the legal partner of ``side_a``."""

    return matching_side(type_a, side_a, type_b) == check_side(side_b)


__all__ = ["MATCHING_RULES", "matching_side", "sides_match"]
