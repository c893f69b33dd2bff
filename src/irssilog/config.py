"""Configuration via pydantic-settings, from env vars or a JSON config file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Seconds after a log open in which join + names are taken as our own join
DEFAULT_OWN_NICK_WINDOW = 2.0


class Settings(BaseSettings):
    """irssilog configuration — loaded from env vars / .env file / keyword args."""

    model_config = SettingsConfigDict(env_prefix="IRSSILOG_", env_file=".env", extra="ignore")

    default_nick: str = Field(default="logging client", description="Own nick shown when none is known")
    own_nick: str | None = Field(default=None, description="Logging client's starting nick, if known")
    debug: bool = Field(default=False, description="Report unmatched lines")
    patterns: dict[str, str] = Field(default_factory=dict, description="Pattern overrides (tag -> regex)")
    own_nick_window: float = Field(
        default=DEFAULT_OWN_NICK_WINDOW, gt=0, description="Own-nick inference window in seconds"
    )
    chunk_size: int = Field(default=4096, gt=0, description="Bytes read per chunk")
    encoding: str = Field(default="utf-8", description="Log file encoding")


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> Settings:
    """Build Settings from an optional JSON config file plus explicit overrides.

    The config file is the base; any override that is not ``None`` is layered
    on top. ``.json`` is appended to the path when missing. A config file that
    cannot be read or decoded is reported and skipped.
    """
    values: dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if path.suffix != ".json":
            path = path.with_name(path.name + ".json")
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to parse JSON from %s (%s); continuing without parsed config", path, exc)
        else:
            if isinstance(loaded, dict):
                values.update(loaded)
            else:
                logger.warning("Config %s is not a JSON object; ignored", path)

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
