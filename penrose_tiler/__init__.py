from .prototiles import PrototileType, Prototile, get_prototile, points
from .rules import MATCHING_RULES, matching_side
from .transforms import Transform, connection_transform
from .edges import Edge, EdgeIndex, EdgeRecord, EdgeResult, world_edges, world_points
from .collision import overlap
from .history import HistoryFormatError, HistoryLog, PlacementRecord
from .parser import parse_history, read_history
from .printer import format_record, print_history, write_history
from .consistency import check_tiling, TilingWarning
from .engine import (
    EngineConfig,
    PenroseTiler,
    PlacementError,
    TileInstance,
    find_dead_ends,
    get_engine_config,
    set_engine_config,
)

__all__ = [
    'PrototileType',
    'Prototile',
    'get_prototile',
    'points',
    'MATCHING_RULES',
    'matching_side',
    'Transform',
    'connection_transform',
    'Edge',
    'EdgeIndex',
    'EdgeRecord',
    'EdgeResult',
    'world_edges',
    'world_points',
    'overlap',
    'HistoryFormatError',
    'HistoryLog',
    'PlacementRecord',
    'parse_history',
    'read_history',
    'format_record',
    'print_history',
    'write_history',
    'check_tiling',
    'TilingWarning',
    'EngineConfig',
    'PenroseTiler',
    'PlacementError',
    'TileInstance',
    'find_dead_ends',
    'get_engine_config',
    'set_engine_config',
]
