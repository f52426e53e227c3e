"""Public SDK surface for ndquery.

This module provides a stable import path for library users.
It re-exports the data manager and typed condition models.
"""

from __future__ import annotations

from core.config import NdQueryConfig
from core.errors import (
    NdQueryConditionError,
    NdQueryConfigError,
    NdQueryDecodeError,
    NdQueryError,
    NdQueryMemoryLimitError,
    NdQueryModeError,
    NdQuerySourceError,
)
from core.types import FilterCondition, LoadSummary
from ingest.reload_scheduler import ReloadOutcome, ReloadScheduler
from query.condition_evaluator import evaluate_condition, supported_operators
from query.condition_loading import load_conditions_file
from query.record_matcher import matches
from store.data_manager import DataManager

__all__ = [
    "DataManager",
    "FilterCondition",
    "LoadSummary",
    "NdQueryConditionError",
    "NdQueryConfig",
    "NdQueryConfigError",
    "NdQueryDecodeError",
    "NdQueryError",
    "NdQueryMemoryLimitError",
    "NdQueryModeError",
    "NdQuerySourceError",
    "ReloadOutcome",
    "ReloadScheduler",
    "evaluate_condition",
    "load_conditions_file",
    "matches",
    "supported_operators",
]
