import itertools

import pytest

from penrose_tiler.prototiles import PrototileType
from penrose_tiler.rules import MATCHING_RULES, matching_side, sides_match

FAT = PrototileType.FAT
SKINNY = PrototileType.SKINNY


def test_table_values():
    assert [matching_side(FAT, s, FAT) for s in range(4)] == [3, 2, 1, 0]
    assert [matching_side(FAT, s, SKINNY) for s in range(4)] == [0, 2, 3, 1]
    assert [matching_side(SKINNY, s, FAT) for s in range(4)] == [0, 3, 1, 2]
    assert [matching_side(SKINNY, s, SKINNY) for s in range(4)] == [1, 0, 3, 2]


@pytest.mark.parametrize(
    'anchor, other, side', list(itertools.product(PrototileType, PrototileType, range(4)))
)
def test_rule_reads_the_same_from_either_tile(anchor, other, side):
    partner = matching_side(anchor, side, other)

    assert matching_side(other, partner, anchor) == side
    assert sides_match(anchor, side, other, partner)


def test_every_row_is_a_permutation():
    for anchor_rows in MATCHING_RULES:
        for row in anchor_rows:
            assert sorted(row) == [0, 1, 2, 3]


def test_out_of_range_side_is_fatal():
    with pytest.raises(IndexError):
        matching_side(FAT, 4, SKINNY)
