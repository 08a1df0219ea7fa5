# src/config.py

"""Settings loaded from environment variables (+ optional local .env).

All variables use the TASKBOARD_ prefix, e.g. TASKBOARD_LOG_LEVEL=DEBUG.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str
    log_dir: Path

    demo_email: str
    demo_password: str
    seed_demo_data: bool

    due_soon_days: int
    window_width: int
    window_height: int


def get_settings(load_env_file: bool = True) -> Settings:
    if load_env_file:
        load_dotenv(override=False)
    return Settings(
        app_name=_env(_k("APP_NAME"), "Taskboard"),
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        log_dir=_env_path(_k("LOG_DIR"), Path.home() / ".taskboard" / "logs"),
        demo_email=_env(_k("DEMO_EMAIL"), "demo@example.com"),
        demo_password=_env(_k("DEMO_PASSWORD"), "password"),
        seed_demo_data=_env_bool(_k("SEED_DEMO_DATA"), True),
        due_soon_days=max(0, _env_int(_k("DUE_SOON_DAYS"), 7)),
        window_width=_env_int(_k("WINDOW_WIDTH"), 1200),
        window_height=_env_int(_k("WINDOW_HEIGHT"), 760),
    )
