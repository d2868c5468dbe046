from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_TABLE_NAME_ENV = "COOLING_RUNS_TABLE_NAME"
_TABLE_PATH_ENV = "COOLING_RUNS_PERSISTENCE_PATH"
_TARGET_TEMP_ENV = "COOLING_TARGET_TEMP"
_JITTER_SEED_ENV = "COOLING_JITTER_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    table_name: str
    table_persistence_path: Optional[str]
    target_temp: float
    jitter_seed: Optional[int]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_target_temp(default: float) -> float:
    value = os.getenv(_TARGET_TEMP_ENV)
    if value is None:
        return default
    candidate = value.strip().replace(",", ".")
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) else default


def _read_jitter_seed() -> Optional[int]:
    value = os.getenv(_JITTER_SEED_ENV)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        table_name=_read_str_env(_TABLE_NAME_ENV, "cooling_runs"),
        table_persistence_path=_read_optional_env(_TABLE_PATH_ENV, "./tmp/cooling_runs.json"),
        target_temp=_read_target_temp(4.0),
        jitter_seed=_read_jitter_seed(),
        log_level=_read_log_level("INFO"),
    )
