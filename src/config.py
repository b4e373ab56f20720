"""Configuration for the payments ledger command line."""

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    log_level: int
    sort_output: bool
    report_stats: bool


def load_config() -> EngineConfig:
    return EngineConfig(
        log_level=_get_log_level("PAYMENTS_LOG_LEVEL", logging.WARNING),
        sort_output=_get_bool("PAYMENTS_SORT_OUTPUT", True),
        report_stats=_get_bool("PAYMENTS_REPORT_STATS", False),
    )


def _get_log_level(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return default


def _get_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}
