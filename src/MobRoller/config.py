"""Settings loader for MobRoller."""

from pathlib import Path
from typing import Any

import tomllib
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from MobRoller.gateway import DEFAULT_CHUNK_SIZE, TextStyle


def _toml_settings_source() -> dict[str, Any]:
    """Load settings from config.toml with keys mapped to Settings fields.

    This source has LOWER priority than env/.env so those can override TOML.
    """
    cfg_path = Path("config.toml")
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        t = tomllib.load(f)
    roller_cfg = t.get("roller", {}) or {}
    out: dict[str, Any] = {
        "env": t.get("app", {}).get("env", "dev"),
        # Scene policy: strict aborts before rolling when no scene is open
        "strict_scene_check": roller_cfg.get("strict_scene_check", False),
        # Echo click/summary toasts around each roll
        "verbose_toasts": roller_cfg.get("verbose_toasts", False),
        "message_chunk_size": roller_cfg.get("message_chunk_size", DEFAULT_CHUNK_SIZE),
        "anchor_jitter": roller_cfg.get("anchor_jitter", 40),
        # Logging config
        "logging_level": t.get("logging", {}).get("level", "INFO"),
        "logging_console": None,
        "logging_file": None,
        "logging_file_path": t.get("logging", {}).get("file_path", "logs/mobroller.jsonl"),
        "logging_max_bytes": t.get("logging", {}).get("max_bytes", 5_000_000),
        "logging_backup_count": t.get("logging", {}).get("backup_count", 5),
    }

    style_cfg = roller_cfg.get("style", {}) or {}
    if style_cfg:
        out["annotation_style"] = style_cfg

    log_cfg = t.get("logging", {}) or {}
    # Per-handler levels: strings INFO|DEBUG|WARNING|ERROR|CRITICAL|NONE, or bools
    console_val = log_cfg.get("console", None)
    file_val = log_cfg.get("to_file", None)
    overall = out["logging_level"]

    def _norm_level(v, default):
        if isinstance(v, str):
            return v.upper()
        if isinstance(v, bool):
            return default if v else "NONE"
        return default

    out["logging_console"] = _norm_level(console_val, overall)
    out["logging_file"] = "NONE" if file_val is None else _norm_level(file_val, overall)
    return out


class Settings(BaseSettings):
    env: str = Field(default="dev")

    # --- Roller behavior ---
    strict_scene_check: bool = False
    verbose_toasts: bool = False
    message_chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)
    anchor_jitter: int = Field(default=40, ge=0)
    annotation_style: TextStyle = TextStyle()
    permission_denied_message: str = "Only the GM can use this roller."
    no_scene_message: str = "Open a scene first to place the GM-only note."
    placed_message: str = "GM-only roll created."

    # --- Logging ---
    logging_level: str = "INFO"
    logging_console: str = "INFO"
    # File logging is opt-in for a plugin; the host owns the working directory
    logging_file: str = "NONE"
    logging_file_path: str = "logs/mobroller.jsonl"
    logging_max_bytes: int = 5_000_000
    logging_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="MOBROLLER_",
        case_sensitive=False,
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",  # Safely ignore any extra env vars
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Precedence (highest to lowest):
        # 1) init_settings (explicit overrides in code/tests)
        # 2) dotenv (.env in cwd)
        # 3) env_settings (OS env)
        # 4) TOML (config.toml)
        # 5) file_secret_settings
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            _toml_settings_source,
            file_secret_settings,
        )


def load_settings() -> Settings:
    return Settings()
