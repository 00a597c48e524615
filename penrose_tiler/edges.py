"""Fuzzy spatial index from world-space edges to the tiles touching them."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

import numpy as np

from .prototiles import NUM_SIDES, PrototileType, points
from .transforms import Transform

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 0.004

Point = Tuple[float, float]


def _point_before(p1: Point, p2: Point, epsilon: float) -> bool:
    if abs(p1[0] - p2[0]) > epsilon:
        return p1[0] < p2[0]
    return p1[1] < p2[1]


@dataclass(frozen=True)
class Edge:
    """Unordered segment stored with its lexicographically smaller endpoint first.

    The x comparison falls back to y when the two x values lie within
    ``epsilon``, so recomputing a vertical edge along another placement chain
    yields the same endpoint order.
    """

    start: Point
    end: Point

    @classmethod
    def between(cls, p1: Sequence[float], p2: Sequence[float], epsilon: float = DEFAULT_EPSILON) -> "Edge":
        a = (float(p1[0]), float(p1[1]))
        b = (float(p2[0]), float(p2[1]))
        if _point_before(b, a, epsilon):
            a, b = b, a
        return cls(a, b)

    def isclose(self, other: "Edge", epsilon: float = DEFAULT_EPSILON) -> bool:
        return _points_close(self.start, other.start, epsilon) and _points_close(self.end, other.end, epsilon)

    def isclose_unordered(self, other: "Edge", epsilon: float = DEFAULT_EPSILON) -> bool:
        if self.isclose(other, epsilon):
            return True
        return _points_close(self.start, other.end, epsilon) and _points_close(self.end, other.start, epsilon)

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    def __str__(self) -> str:
        return f"({self.start[0]:.3f}, {self.start[1]:.3f})-({self.end[0]:.3f}, {self.end[1]:.3f})"


def _points_close(a: Point, b: Point, epsilon: float) -> bool:
    return abs(a[0] - b[0]) <= epsilon and abs(a[1] - b[1]) <= epsilon


@dataclass(frozen=True)
class EdgeRecord:
    handle: int
    side: int
    tile_type: PrototileType

    def __str__(self) -> str:
        return f"#{self.handle}:{PrototileType(self.tile_type).label}[{self.side}]"


@dataclass
class EdgeResult:
    edge: Edge
    records: List[EdgeRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def world_points(tile_type: PrototileType, transform: Transform) -> np.ndarray:
    """Return the four world-space vertices of a tile."""

    return transform.apply(points(tile_type))


def world_edges(
    tile_type: PrototileType, transform: Transform, epsilon: float = DEFAULT_EPSILON
) -> List[Edge]:
    """Return the tile's edges in side order."""

    pts = world_points(tile_type, transform)
    return [Edge.between(pts[i], pts[(i + 1) % NUM_SIDES], epsilon) for i in range(NUM_SIDES)]


@dataclass
class _Entry:
    edge: Edge
    records: List[EdgeRecord]


class EdgeIndex:
    """Maps edges to :class:`EdgeRecord` lists using fuzzy endpoint equality.

    Entries are bucketed on an ``epsilon``-scaled grid under both endpoints, so
    a lookup only compares against entries from the 3x3 cells around the
    probe's start point.  Entries keep their insertion sequence number and
    lookups prefer the oldest match, which makes ambiguous hits deterministic.
    """

    def __init__(self, epsilon: float = DEFAULT_EPSILON):
        if epsilon <= 0.0:
            raise ValueError("epsilon must be positive")
        self.epsilon = float(epsilon)
        self._cell_size = 2.0 * self.epsilon
        self._entries: Dict[int, _Entry] = {}
        self._buckets: Dict[Tuple[int, int], List[int]] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EdgeResult]:
        for entry in self._entries.values():
            yield EdgeResult(entry.edge, list(entry.records))

    def _cell(self, point: Point) -> Tuple[int, int]:
        return (math.floor(point[0] / self._cell_size), math.floor(point[1] / self._cell_size))

    def _bucket_keys(self, edge: Edge) -> Set[Tuple[int, int]]:
        return {self._cell(edge.start), self._cell(edge.end)}

    def _search(self, edge: Edge) -> Optional[int]:
        cx, cy = self._cell(edge.start)
        candidates: Set[int] = set()
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                candidates.update(self._buckets.get((cx + dx, cy + dy), ()))
        for entry_id in sorted(candidates):
            if self._entries[entry_id].edge.isclose_unordered(edge, self.epsilon):
                return entry_id
        return None

    def find(self, edge: Edge) -> Optional[List[EdgeRecord]]:
        """Return a copy of the records at ``edge``, or ``None`` when it is unknown."""

        entry_id = self._search(edge)
        if entry_id is None:
            return None
        return list(self._entries[entry_id].records)

    def find_excluding(self, edge: Edge, exclude: Optional[int] = None) -> Optional[EdgeResult]:
        records = self.find(edge)
        if records is None:
            return None
        return EdgeResult(edge, [r for r in records if r.handle != exclude])

    def add(self, edge: Edge, record: EdgeRecord) -> None:
        entry_id = self._search(edge)
        if entry_id is not None:
            entry = self._entries[entry_id]
            entry.records.append(record)
            logger.debug("Adding %s to existing edge %s (now %d records)", record, entry.edge, len(entry.records))
            return

        entry_id = self._next_id
        self._next_id += 1
        self._entries[entry_id] = _Entry(edge, [record])
        for key in self._bucket_keys(edge):
            self._buckets.setdefault(key, []).append(entry_id)
        logger.debug("Adding %s to new edge %s", record, edge)

    def add_tile(self, handle: int, tile_type: PrototileType, transform: Transform) -> List[Edge]:
        edges = world_edges(tile_type, transform, self.epsilon)
        for side, edge in enumerate(edges):
            self.add(edge, EdgeRecord(handle, side, PrototileType(tile_type)))
        return edges

    def _drop_entry(self, entry_id: int) -> None:
        entry = self._entries.pop(entry_id)
        for key in self._bucket_keys(entry.edge):
            bucket = self._buckets.get(key)
            if bucket is None:
                continue
            bucket.remove(entry_id)
            if not bucket:
                del self._buckets[key]

    def remove_tile(self, handle: int, edges: Optional[Iterable[Edge]] = None) -> int:
        """Strip the records of ``handle``; return how many records were removed.

        With ``edges`` given only the entries at those edges are visited,
        otherwise the whole index is scanned.
        """

        if edges is None:
            entry_ids = list(self._entries)
        else:
            entry_ids = []
            for edge in edges:
                entry_id = self._search(edge)
                if entry_id is not None and entry_id not in entry_ids:
                    entry_ids.append(entry_id)

        removed = 0
        for entry_id in entry_ids:
            entry = self._entries[entry_id]
            kept = [r for r in entry.records if r.handle != handle]
            removed += len(entry.records) - len(kept)
            if kept:
                entry.records = kept
            else:
                self._drop_entry(entry_id)
        logger.debug("Removed %d edge record(s) for tile #%d", removed, handle)
        return removed

    def edges_of(
        self,
        tile_type: PrototileType,
        transform: Transform,
        exclude: Optional[int] = None,
    ) -> List[EdgeResult]:
        """Return, in side order, the records already indexed on each edge of a tile."""

        results: List[EdgeResult] = []
        for edge in world_edges(tile_type, transform, self.epsilon):
            hit = self.find_excluding(edge, exclude)
            results.append(hit if hit is not None else EdgeResult(edge, []))
        return results

    def clear(self) -> None:
        self._entries.clear()
        self._buckets.clear()
        self._next_id = 0


__all__ = [
    "DEFAULT_EPSILON",
    "Edge",
    "EdgeIndex",
    "EdgeRecord",
    "EdgeResult",
    "world_edges",
    "world_points",
]
