"""Environment-driven settings and store selection."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from football.persistence import InMemoryPlayerStore, PlayerStore, SqlitePlayerStore


STORE_KINDS = ("memory", "sqlite")
# Names accepted by both logging.Logger.setLevel and uvicorn's --log-level.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    store: str = "memory"
    db_path: str = "football.sqlite"
    log_level: str = "INFO"
    seed_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.store not in STORE_KINDS:
            raise ValueError(
                f"Unsupported store '{self.store}', expected one of {', '.join(STORE_KINDS)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unsupported log level '{self.log_level}', expected one of {', '.join(LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        seed = env.get("FOOTBALL_SEED_PATH")
        return cls(
            store=env.get("FOOTBALL_STORE", "memory").strip().lower(),
            db_path=env.get("FOOTBALL_DB_PATH", "football.sqlite"),
            log_level=env.get("FOOTBALL_LOG_LEVEL", "INFO").strip().upper(),
            seed_path=Path(seed) if seed else None,
        )


def build_store(settings: Settings) -> PlayerStore:
    if settings.store == "sqlite":
        return SqlitePlayerStore(settings.db_path)
    return InMemoryPlayerStore()
