"""Location of the local state database.

The state database remembers which backup definitions were applied or
imported, so ``apply`` can soft-delete definitions dropped from the declared
file. ``DATABASE_URI`` wins over ``CLOUDBACK_SYNC_DATA_DIR``, which wins over
the per-user data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

STATE_DIR_NAME: Final[str] = "cloudback-sync"
STATE_DB_FILENAME: Final[str] = "state.db"

DATA_DIR_ENV: Final[str] = "CLOUDBACK_SYNC_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    state_filename: str = STATE_DB_FILENAME

    def state_path(self, *, create_dir: bool = True) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        if create_dir:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.state_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.state_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def user_data_dir() -> Path:
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
    else:
        root = os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(root) / STATE_DIR_NAME


def get_storage_config() -> StorageConfig:
    explicit_dir = os.getenv(DATA_DIR_ENV)
    return StorageConfig(data_dir=Path(explicit_dir) if explicit_dir else user_data_dir())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    explicit_uri = os.getenv(DATABASE_URI_ENV)
    if explicit_uri:
        return DatabaseConfig(uri=explicit_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
