"""
Configuration helpers for the PastePouch service.

Settings are read from environment variables (optionally loaded from a .env
file) so that routers/repositories never touch os.environ directly.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
import logging
import os
import sys
from typing import Callable, Optional, TextIO

from dotenv import load_dotenv
from sqlalchemy.engine import URL

from pastepouch.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_DATABASE_URL = "postgresql+psycopg2:///pastepouch?sslmode=disable"


class StorageTarget(IntEnum):
    LOCAL = 0
    REMOTE = 1


class FrontEnd(IntEnum):
    HTTP = 0
    CLI = 1


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    log_level: str
    database_url: str
    db_user: str
    db_password: str
    remote_db_host: str
    remote_db_port: int
    remote_db_name: str
    http_host: str
    http_port: int
    cors_origins: tuple[str, ...]

    def remote_database_url(self) -> str:
        if not self.db_user:
            raise ConfigurationError("DB_USER must be set to use the remote database.")
        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password or None,
            host=self.remote_db_host,
            port=self.remote_db_port,
            database=self.remote_db_name,
        )
        return url.render_as_string(hide_password=False)

    def database_url_for(self, target: StorageTarget) -> str:
        if target is StorageTarget.REMOTE:
            return self.remote_database_url()
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        database_url=(os.getenv("DATABASE_URL") or DEFAULT_LOCAL_DATABASE_URL).strip(),
        db_user=os.getenv("DB_USER", ""),
        db_password=os.getenv("DB_PASS", ""),
        remote_db_host=os.getenv("REMOTE_DB_HOST", "aws-0-us-east-1.pooler.supabase.com"),
        remote_db_port=_int(os.getenv("REMOTE_DB_PORT", "6543"), 6543),
        remote_db_name=os.getenv("REMOTE_DB_NAME", "postgres"),
        http_host=os.getenv("HTTP_HOST", "localhost"),
        http_port=_int(os.getenv("HTTP_PORT", "8080"), 8080),
        cors_origins=_list(os.getenv("CORS_ORIGINS", "http://localhost:5173")),
    )


def load_environment(path: str | Path = ".env") -> Path:
    """Load ``path`` into os.environ; a missing file is a configuration error."""
    env_file = Path(path)
    if not env_file.is_file():
        raise ConfigurationError(f"Error loading {env_file}: file not found")
    load_dotenv(env_file)
    get_settings.cache_clear()
    logger.debug("Loaded environment from %s", env_file)
    return env_file


def prompt_choice(
    options: dict[int, str],
    default: int,
    *,
    read_line: Optional[Callable[[], str]] = None,
    out: Optional[TextIO] = None,
) -> int:
    """
    Ask for one of ``options`` by number.

    Anything that is not a number (or end of input) selects ``default``;
    a number outside ``options`` asks again.
    """
    out = out or sys.stdout
    read_line = read_line or sys.stdin.readline
    lines = ["Choose: "]
    for key, label in options.items():
        prefix = f"({key} / Default)" if key == default else f"({key})"
        lines.append(f"{prefix} {label}")
    menu = "\n".join(lines) + "\n"
    while True:
        out.write(menu)
        out.flush()
        raw = read_line()
        try:
            value = int(raw.strip())
        except (AttributeError, ValueError):
            out.write(f"Defaulting to {options[default]}\n")
            return default
        if value in options:
            return value


def choose_storage_target(**kwargs) -> StorageTarget:
    value = prompt_choice(
        options={StorageTarget.LOCAL: "Local PostgreSQL", StorageTarget.REMOTE: "Supabase PostgreSQL"},
        default=StorageTarget.LOCAL,
        **kwargs,
    )
    return StorageTarget(value)


def choose_front_end(**kwargs) -> FrontEnd:
    settings = get_settings()
    value = prompt_choice(
        options={FrontEnd.HTTP: f"{settings.http_host}:{settings.http_port} endpoints", FrontEnd.CLI: "CLI interaction"},
        default=FrontEnd.HTTP,
        **kwargs,
    )
    return FrontEnd(value)
