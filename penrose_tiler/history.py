from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .prototiles import PrototileType, check_side


class HistoryFormatError(ValueError):
    """Raised when a placement log cannot describe a tiling."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(f"[line {line}] {message}" if line is not None else message)
        self.line = line


@dataclass(frozen=True)
class PlacementRecord:
    """One placement decision: a root, or a tile attached to ``anchor`` on ``side``."""

    tile_type: PrototileType
    anchor: Optional[int] = None
    side: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tile_type", PrototileType(self.tile_type))
        if (self.anchor is None) != (self.side is None):
            raise ValueError("attached records need both anchor and side")
        if self.side is not None:
            object.__setattr__(self, "side", check_side(self.side))
        if self.anchor is not None:
            if int(self.anchor) < 0:
                raise ValueError(f"anchor handle must be non-negative, got {self.anchor}")
            object.__setattr__(self, "anchor", int(self.anchor))

    @classmethod
    def root(cls, tile_type: PrototileType) -> "PlacementRecord":
        return cls(tile_type)

    @classmethod
    def attached(cls, anchor: int, side: int, tile_type: PrototileType) -> "PlacementRecord":
        return cls(tile_type, anchor, side)

    @property
    def is_root(self) -> bool:
        return self.anchor is None


class HistoryLog:
    """Ordered, append-only sequence of :class:`PlacementRecord` entries.

    Record ``i`` produced the tile with handle ``i``.
    """

    def __init__(self, records: Iterable[PlacementRecord] = ()):
        self._records: List[PlacementRecord] = []
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PlacementRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> PlacementRecord:
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HistoryLog):
            return self._records == other._records
        return NotImplemented

    def append(self, record: PlacementRecord) -> None:
        check_record(record, len(self._records))
        self._records.append(record)

    def pop(self) -> PlacementRecord:
        if not self._records:
            raise IndexError("pop from empty history")
        return self._records.pop()

    def truncate(self, length: int) -> None:
        del self._records[length:]

    def records(self) -> Tuple[PlacementRecord, ...]:
        return tuple(self._records)


def check_record(record: PlacementRecord, index: int, line: Optional[int] = None) -> None:
    if record.is_root:
        if index != 0:
            raise HistoryFormatError(f"root record must come first, found at position {index}", line)
    else:
        if index == 0:
            raise HistoryFormatError("history must start with a root record", line)
        if record.anchor >= index:
            raise HistoryFormatError(
                f"record {index} attaches to handle {record.anchor}, which is not placed yet", line
            )


def check_history(records: Sequence[PlacementRecord]) -> None:
    for index, record in enumerate(records):
        check_record(record, index)


__all__ = [
    "HistoryFormatError",
    "HistoryLog",
    "PlacementRecord",
    "check_history",
    "check_record",
]
