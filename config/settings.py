from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str

    # Core/runtime
    run_env: str

    # Validation behaviour
    strict_variants: bool = False
    dedupe_ids: bool = True

    processed_output_dir: str = "processed"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise RuntimeError(
            f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
        )
    return Settings(
        log_level=log_level,
        run_env=os.getenv("RUN_ENV", "local"),
        strict_variants=_flag("ENTITY_STRICT_VARIANTS", "false"),
        dedupe_ids=_flag("ENTITY_DEDUPE", "true"),
        processed_output_dir=os.getenv("PROCESSED_OUTPUT_DIR", "processed"),
    )
