"""
Settings for the scheduled check and the CLI.

Precedence, lowest first: built-in defaults, a TOML file, environment
variables. The file is ``path`` when given, else ``$RENEWCAL_CONFIG``; with
neither, only defaults and the environment apply. A named file that does
not exist is an error. Keys may sit at the top level or under a
``[renewcal]`` table:

    [renewcal]
    timezone = "Asia/Shanghai"
    default_reminder_days = 7
    store_path = "subscriptions.json"
    log_level = "INFO"
    max_workers = 4
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .core.errors import ConfigError
from .core.time import resolve_timezone

logger = logging.getLogger(__name__)

ENV_CONFIG = "RENEWCAL_CONFIG"
ENV_OVERRIDES = {
    "RENEWCAL_TIMEZONE": "timezone",
    "RENEWCAL_STORE": "store_path",
    "RENEWCAL_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class Settings:
    timezone: str = "UTC"
    default_reminder_days: int = 7
    store_path: str = "subscriptions.json"
    log_level: str = "WARNING"
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        resolve_timezone(self.timezone)
        if self.default_reminder_days < 0:
            raise ConfigError("default_reminder_days must be >= 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError("max_workers must be >= 1")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"unknown log level {self.log_level!r}")


def _read_toml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"config parse failed for {path}: {e}") from e
    section = data.get("renewcal", data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [renewcal] must be a table")
    return section


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            logger.warning("ignoring unknown config key %r", key)
            continue
        if key in ("default_reminder_days", "max_workers") and value is not None:
            try:
                value = int(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{key} must be an integer, got {value!r}") from e
        out[key] = str(value) if key in ("timezone", "store_path", "log_level") else value
    return out


def load_settings(path: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    settings = Settings()

    cfg_path = path or env.get(ENV_CONFIG)
    if cfg_path:
        cfg_path = os.path.abspath(os.path.expanduser(cfg_path))
        if not os.path.isfile(cfg_path):
            raise ConfigError(f"config file not found: {cfg_path}")
        settings = replace(settings, **_coerce(_read_toml(cfg_path)))

    overrides = {attr: env[var] for var, attr in ENV_OVERRIDES.items() if env.get(var)}
    if overrides:
        settings = replace(settings, **_coerce(overrides))
    return settings
