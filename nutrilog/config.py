from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


def _env_flag(name: str) -> bool:
    return (os.environ.get(name) or "").strip() in {"1", "true", "True", "yes"}


@dataclass(frozen=True)
class StoreConfig:
    """Locations of the two durable documents plus store behaviour switches."""

    users_file: Path
    foods_file: Path
    lock_writes: bool = False
    strict_reads: bool = False


class Settings:
    """Centralized configuration for the nutrilog backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("NUTRILOG_DATA_ROOT") or data_root_default
        ).expanduser()
        self.users_file: Path = Path(
            os.environ.get("NUTRILOG_USERS_FILE") or (self.data_root / "users.json")
        ).expanduser()
        self.foods_file: Path = Path(
            os.environ.get("NUTRILOG_FOODS_FILE") or (self.data_root / "foods.json")
        ).expanduser()
        # Off by default: concurrent writers race last-writer-wins on the whole document.
        self.lock_writes: bool = _env_flag("NUTRILOG_LOCK_WRITES")
        self.strict_reads: bool = _env_flag("NUTRILOG_STRICT_READS")

        self.log_level: str = os.environ.get("NUTRILOG_LOG_LEVEL", "INFO")
        self.log_file: Optional[str] = os.environ.get("NUTRILOG_LOG_FILE") or None
        self.host: str = os.environ.get("NUTRILOG_HOST", "0.0.0.0")
        self.port: int = int(os.environ.get("NUTRILOG_PORT") or "5000")

        cors = os.environ.get("NUTRILOG_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    def store_config(self) -> StoreConfig:
        return StoreConfig(
            users_file=self.users_file,
            foods_file=self.foods_file,
            lock_writes=self.lock_writes,
            strict_reads=self.strict_reads,
        )


settings = Settings()
