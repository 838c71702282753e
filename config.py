# config.py
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from sqlalchemy.engine import URL


class ConfigError(RuntimeError):
    """Raised at startup when required environment values are missing."""


_TRUTHY = {"1", "true", "yes", "on", "y"}


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_size: int = 10
    user_id: str = "demo"
    create_schema: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        DATABASE_URL wins when present; otherwise DB_HOST, DB_USER and DB_NAME
        are required (DB_PASS may be empty) and a MySQL URL is assembled.
        """
        env = os.environ if env is None else env

        database_url = (env.get("DATABASE_URL") or "").strip()
        if not database_url:
            missing = [k for k in ("DB_HOST", "DB_USER", "DB_NAME") if not (env.get(k) or "").strip()]
            if missing:
                raise ConfigError("Missing database settings: " + ", ".join(missing))
            database_url = URL.create(
                "mysql+pymysql",
                username=env["DB_USER"].strip(),
                password=env.get("DB_PASS") or None,
                host=env["DB_HOST"].strip(),
                database=env["DB_NAME"].strip(),
            ).render_as_string(hide_password=False)

        return cls(
            database_url=database_url,
            pool_size=_env_int(env, "DB_POOL_SIZE", 10),
            user_id=(env.get("WEBHOOK_USER_ID") or "").strip() or "demo",
            create_schema=_env_bool(env.get("DB_CREATE_SCHEMA")),
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """One stream handler on the root logger; safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
