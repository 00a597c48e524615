"""Constraint-driven placement of Penrose rhombi."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..collision import overlap
from ..edges import Edge, EdgeIndex, EdgeRecord, world_points
from ..history import HistoryLog, PlacementRecord, check_history
from ..logging_utils import apply_debug_logging
from ..prototiles import ALL_TYPES, MAX_CIRCUMRADIUS, PrototileType, check_side
from ..rules import matching_side
from ..transforms import Transform, connection_transform
from .config import get_engine_config
from .model import Candidate, EngineConfig, PlacementError, PlacementResult, TileInstance
from .validity import retract_if_dead_end

logger = logging.getLogger(__name__)

# Tiles whose centres are further apart than this cannot share interior area.
_CONTACT_DISTANCE = 2.0 * MAX_CIRCUMRADIUS

_INITIAL_CAPACITY = 64


class PenroseTiler:
    """Owns the live tiles, the edge index and the placement history.

    Handles are dense: the tile with handle ``h`` was produced by history
    record ``h``.  Undo and dead-end retraction both remove the newest tile,
    so the recorded log always describes exactly the live tiling.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config if config is not None else get_engine_config()
        self.edges = EdgeIndex(self.config.epsilon)
        self.history = HistoryLog()
        self.rng = np.random.default_rng(self.config.random_seed)
        self._tiles: List[TileInstance] = []
        self._centres = np.empty((_INITIAL_CAPACITY, 2))
        self._replaying = False

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._tiles)

    @property
    def tiles(self) -> Tuple[TileInstance, ...]:
        return tuple(self._tiles)

    @property
    def is_replaying(self) -> bool:
        return self._replaying

    @property
    def replay_remaining(self) -> int:
        if not self._replaying:
            return 0
        return len(self.history) - len(self._tiles)

    def reseed(self, seed: Optional[int]) -> None:
        self.rng = np.random.default_rng(seed)

    def tile(self, handle: int) -> TileInstance:
        if not 0 <= handle < len(self._tiles):
            raise PlacementError(f"no live tile with handle {handle}", handle=handle)
        return self._tiles[handle]

    def get_side_used(self, handle: int, side: int) -> bool:
        return self.tile(handle).get_side_used(side)

    def tile_world_polygon(self, handle: int) -> np.ndarray:
        return self.tile(handle).world_points()

    def frontier(self) -> List[int]:
        """Handles of live tiles that still have at least one free side."""

        return [tile.handle for tile in self._tiles if tile.has_free_sides()]

    def find(self, edge: Edge) -> Optional[List[EdgeRecord]]:
        return self.edges.find(edge)

    # ------------------------------------------------------------------
    # Candidate generation
    # ------------------------------------------------------------------

    def candidate_transform(self, anchor_handle: int, side: int, tile_type: PrototileType) -> Transform:
        anchor = self.tile(anchor_handle)
        return anchor.transform @ connection_transform(anchor.tile_type, side, tile_type)

    def nearby_handles(self, centre: Sequence[float], radius: float) -> List[int]:
        if not self._tiles:
            return []
        deltas = self._centres[: len(self._tiles)] - np.asarray(centre, dtype=float)
        dist = np.hypot(deltas[:, 0], deltas[:, 1])
        return [int(h) for h in np.flatnonzero(dist < radius)]

    def overlaps_existing(self, tile_type: PrototileType, transform: Transform) -> bool:
        """Return ``True`` when a tile at ``transform`` would overlap any live tile."""

        poly = world_points(tile_type, transform)
        for handle in self.nearby_handles(transform.translation, _CONTACT_DISTANCE):
            if overlap(poly, self._tiles[handle].world_points(), self.config.epsilon):
                logger.debug("Candidate %s at %s collides with #%d", tile_type.label, transform, handle)
                return True
        return False

    def edges_allow(self, tile_type: PrototileType, transform: Transform, touching_side: int) -> bool:
        """Check every edge of a hypothetical tile except the one against its anchor.

        An open edge is fine.  An edge held by one tile is fine only when that
        tile's matching rule names this side for ``tile_type``.  An edge already
        held by two tiles cannot take a third.
        """

        for new_side, result in enumerate(self.edges.edges_of(tile_type, transform)):
            if new_side == touching_side or not result.records:
                continue
            if len(result.records) > 1:
                logger.debug("Edge %s already shared by %d tiles", result.edge, len(result.records))
                return False
            existing = result.records[0]
            if matching_side(existing.tile_type, existing.side, tile_type) != new_side:
                logger.debug(
                    "Side %d of %s does not match %s on edge %s",
                    new_side,
                    tile_type.label,
                    existing,
                    result.edge,
                )
                return False
        return True

    def legal_placements(
        self, anchor_handle: int, sides: Optional[Iterable[int]] = None
    ) -> List[Candidate]:
        """Return every ``(anchor side, new type)`` that may be attached to the anchor.

        Candidates are enumerated side-major, fat before skinny, over the
        anchor's free sides (optionally restricted to ``sides``).
        """

        anchor = self.tile(anchor_handle)
        free_sides = anchor.get_free_sides()
        if sides is not None:
            wanted = {check_side(side) for side in sides}
            free_sides = [side for side in free_sides if side in wanted]

        legal: List[Candidate] = []
        for side in free_sides:
            for tile_type in ALL_TYPES:
                transform = anchor.transform @ connection_transform(anchor.tile_type, side, tile_type)
                if self.overlaps_existing(tile_type, transform):
                    continue
                touching = matching_side(anchor.tile_type, side, tile_type)
                if not self.edges_allow(tile_type, transform, touching):
                    continue
                legal.append((side, tile_type))
        return legal

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _check_recording(self) -> None:
        if self._replaying:
            raise PlacementError("history is read-only while replaying; call leave_replay() first")

    def _register(self, tile: TileInstance, record: PlacementRecord) -> int:
        if tile.handle == len(self._centres):
            self._centres = np.concatenate((self._centres, np.empty_like(self._centres)))
        self._centres[tile.handle] = tile.centre
        self._tiles.append(tile)
        self.edges.add_tile(tile.handle, tile.tile_type, tile.transform)
        if not self._replaying:
            self.history.append(record)
        self._mark_sides_used(tile)
        logger.info(
            "Placed #%d %s%s",
            tile.handle,
            tile.tile_type.label,
            "" if tile.is_root else f" on #{tile.parent} side {tile.attach_side}",
        )
        return tile.handle

    def _mark_sides_used(self, tile: TileInstance) -> None:
        for result in self.edges.edges_of(tile.tile_type, tile.transform):
            if len(result.records) < 2:
                continue
            for record in result.records:
                self._tiles[record.handle].set_side_used(record.side)
                logger.debug("Marked side %d of #%d used", record.side, record.handle)

    def _place_root(self, tile_type: PrototileType) -> int:
        if self._tiles:
            raise PlacementError("a root tile can only be placed on an empty tiling")
        tile_type = PrototileType(tile_type)
        tile = TileInstance(handle=0, tile_type=tile_type, transform=Transform.identity())
        return self._register(tile, PlacementRecord.root(tile_type))

    def _attach(self, anchor_handle: int, side: int, tile_type: PrototileType) -> int:
        anchor = self.tile(anchor_handle)
        side = check_side(side)
        if anchor.get_side_used(side):
            raise PlacementError(
                f"side {side} of tile #{anchor_handle} is already used", handle=anchor_handle, side=side
            )
        tile_type = PrototileType(tile_type)
        transform = anchor.transform @ connection_transform(anchor.tile_type, side, tile_type)
        tile = TileInstance(
            handle=len(self._tiles),
            tile_type=tile_type,
            transform=transform,
            parent=anchor.handle,
            attach_side=side,
        )
        tile.set_side_used(matching_side(anchor.tile_type, side, tile_type))
        return self._register(tile, PlacementRecord.attached(anchor.handle, side, tile_type))

    def place_root(self, tile_type: PrototileType) -> int:
        self._check_recording()
        return self._place_root(tile_type)

    def place_random_root(self) -> int:
        self._check_recording()
        tile_type = ALL_TYPES[int(self.rng.integers(len(ALL_TYPES)))]
        return self._place_root(tile_type)

    def place(self, anchor_handle: int, side: int, tile_type: PrototileType) -> int:
        """Attach a tile to ``side`` of the anchor without checking legality."""

        self._check_recording()
        return self._attach(anchor_handle, side, tile_type)

    def place_random_legal(self) -> Optional[PlacementResult]:
        """Place one random legal tile on a random frontier anchor.

        Returns ``None`` when no anchor admits a legal tile, or when the chosen
        tile created a dead end and was retracted.
        """

        if self._replaying:
            if self.replay_remaining:
                raise PlacementError(
                    f"{self.replay_remaining} replay record(s) still pending; replay or leave_replay() first"
                )
            self.leave_replay()
        if not self._tiles:
            raise PlacementError("place a root tile before growing the tiling")

        frontier = self.frontier()
        for idx in self.rng.permutation(len(frontier)):
            anchor_handle = frontier[int(idx)]
            candidates = self.legal_placements(anchor_handle)
            if not candidates:
                logger.debug("No legal placement on #%d", anchor_handle)
                continue
            side, tile_type = candidates[int(self.rng.integers(len(candidates)))]
            handle = self._attach(anchor_handle, side, tile_type)
            if self.config.check_validity and retract_if_dead_end(self, handle):
                return None
            tile = self._tiles[handle]
            return handle, tile.transform, tile.tile_type

        logger.info("No legal placement on any of %d frontier tile(s)", len(frontier))
        return None

    def grow(self, steps: int) -> int:
        """Run ``steps`` random placement attempts; return how many tiles were added."""

        placed = 0
        for _ in range(steps):
            if self.place_random_legal() is not None:
                placed += 1
        return placed

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def undo_last(self) -> TileInstance:
        """Remove the newest tile and free the neighbour sides it was covering."""

        if not self._tiles:
            raise PlacementError("no tile to undo")
        tile = self._tiles[-1]
        results = self.edges.edges_of(tile.tile_type, tile.transform, exclude=tile.handle)
        for result in results:
            if len(result.records) == 1:
                neighbour = result.records[0]
                self._tiles[neighbour.handle].set_side_free(neighbour.side)
                logger.debug("Freed side %d of #%d", neighbour.side, neighbour.handle)
        self.edges.remove_tile(tile.handle, [result.edge for result in results])
        self._tiles.pop()
        if not self._replaying:
            self.history.pop()
        logger.info("Removed #%d %s", tile.handle, tile.tile_type.label)
        return tile

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def export_history(self) -> Tuple[PlacementRecord, ...]:
        return self.history.records()

    def reset(self) -> None:
        self._tiles.clear()
        self._centres = np.empty((_INITIAL_CAPACITY, 2))
        self.edges.clear()
        self.history = HistoryLog()
        self._replaying = False

    def import_history(self, records: Sequence[PlacementRecord]) -> None:
        """Discard the current tiling and load ``records`` for replay."""

        check_history(records)
        self.reset()
        self.history = HistoryLog(records)
        self._replaying = True
        logger.info("Loaded %d placement record(s) for replay", len(records))

    def replay_next(self) -> Optional[PlacementResult]:
        if not self._replaying:
            raise PlacementError("no history loaded for replay")
        index = len(self._tiles)
        if index >= len(self.history):
            logger.info("Replay finished after %d tile(s)", index)
            return None
        record = self.history[index]
        if record.is_root:
            handle = self._place_root(record.tile_type)
        else:
            handle = self._attach(record.anchor, record.side, record.tile_type)
        tile = self._tiles[handle]
        return handle, tile.transform, tile.tile_type

    def replay_all(self) -> int:
        count = 0
        while self.replay_next() is not None:
            count += 1
        return count

    def leave_replay(self) -> None:
        """Keep the tiles replayed so far and resume recording new placements."""

        self.history.truncate(len(self._tiles))
        self._replaying = False


apply_debug_logging(globals(), logger=logger)
