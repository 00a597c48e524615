from dataclasses import dataclass, field
from itertools import combinations
from typing import TYPE_CHECKING, List, Tuple

from .collision import overlap
from .rules import sides_match
from .transforms import connection_transform

if TYPE_CHECKING:
    from .engine import PenroseTiler


@dataclass
class TilingWarning:
    kind: str
    message: str
    handles: Tuple[int, ...] = field(default_factory=tuple)

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        return self.message


def _overlap_warnings(tiler: "PenroseTiler") -> List[TilingWarning]:
    warnings: List[TilingWarning] = []
    polys = [tile.world_points() for tile in tiler.tiles]
    for a, b in combinations(range(len(polys)), 2):
        if overlap(polys[a], polys[b], tiler.config.epsilon):
            warnings.append(TilingWarning('overlap', f'tiles #{a} and #{b} overlap', (a, b)))
    return warnings


def _edge_warnings(tiler: "PenroseTiler") -> List[TilingWarning]:
    warnings: List[TilingWarning] = []
    for result in tiler.edges:
        records = result.records
        handles = tuple(r.handle for r in records)
        if len(records) > 2:
            warnings.append(
                TilingWarning('crowded-edge', f'edge {result.edge} is held by {len(records)} tiles', handles)
            )
            continue
        if len(records) != 2:
            continue
        first, second = records
        if not sides_match(first.tile_type, first.side, second.tile_type, second.side):
            warnings.append(
                TilingWarning('mismatch', f'edge {result.edge} joins {first} and {second} against the matching rules', handles)
            )
        for record in records:
            if not tiler.tile(record.handle).get_side_used(record.side):
                warnings.append(
                    TilingWarning('unmarked-side', f'side {record.side} of #{record.handle} is shared but not marked used', handles)
                )
    return warnings


def _transform_warnings(tiler: "PenroseTiler") -> List[TilingWarning]:
    warnings: List[TilingWarning] = []
    tiles = tiler.tiles
    for tile in tiles:
        if tile.is_root:
            continue
        parent = tiles[tile.parent]
        expected = parent.transform @ connection_transform(parent.tile_type, tile.attach_side, tile.tile_type)
        if not tile.transform.isclose(expected):
            warnings.append(
                TilingWarning('transform', f'tile #{tile.handle} drifted from its parent #{parent.handle}', (tile.handle,))
            )
    return warnings


def check_tiling(tiler: "PenroseTiler") -> List[TilingWarning]:
    """Audit a live tiling for overlaps, edge rule violations and stale transforms."""

    return _overlap_warnings(tiler) + _edge_warnings(tiler) + _transform_warnings(tiler)
