"""Placement engine façade."""

from __future__ import annotations

import logging

from .config import get_engine_config, set_engine_config
from .model import (
    Candidate,
    EngineConfig,
    PlacementError,
    PlacementResult,
    TileInstance,
)
from .placement import PenroseTiler
from .validity import DEFAULT_VALIDITY_RADIUS, find_dead_ends, retract_if_dead_end

logger = logging.getLogger(__name__)

if not logging.getLogger().handlers:  # pragma: no cover - depends on host application
    logging.basicConfig(level=logging.INFO)


__all__ = [
    "Candidate",
    "DEFAULT_VALIDITY_RADIUS",
    "EngineConfig",
    "PenroseTiler",
    "PlacementError",
    "PlacementResult",
    "TileInstance",
    "find_dead_ends",
    "get_engine_config",
    "retract_if_dead_end",
    "set_engine_config",
]
