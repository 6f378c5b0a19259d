"""Editor configuration.

Settings are layered: dataclass defaults, then ``<config dir>/config.json``
(``$TERMEDIT_CONFIG_DIR`` or ``~/.termedit``), then environment variables.
Command-line options are applied last by :mod:`termedit.cli`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from termedit.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TAB_STOP = 8
DEFAULT_STATUS_MESSAGE_TIMEOUT = 5.0


@dataclass
class EditorConfig:
    """Tunables for one editing session."""

    tab_stop: int = DEFAULT_TAB_STOP
    status_message_timeout: float = DEFAULT_STATUS_MESSAGE_TIMEOUT
    # termios VTIME, in tenths of a second
    read_timeout_ds: int = 1
    version: str = "0.0.1"
    help_message: str = "HELP: Ctrl-Q = quit"
    log_file: str | None = None

    @property
    def welcome(self) -> str:
        return f"termEdit editor -- version {self.version}"

    def validate(self) -> EditorConfig:
        if self.tab_stop < 1:
            raise ConfigError(f"tab stop must be >= 1, got {self.tab_stop}")
        if not 1 <= self.read_timeout_ds <= 255:
            raise ConfigError(
                f"read timeout must be 1..255 deciseconds, got {self.read_timeout_ds}"
            )
        return self


def get_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    return Path(env.get("TERMEDIT_CONFIG_DIR", Path.home() / ".termedit"))


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _from_file(config: EditorConfig, path: Path) -> EditorConfig:
    if not path.exists():
        return config
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return config
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return config

    changes: dict[str, Any] = {}
    if "tabStop" in data:
        changes["tab_stop"] = _parse_int("tabStop", data["tabStop"])
    if "statusMessageTimeout" in data:
        try:
            changes["status_message_timeout"] = float(data["statusMessageTimeout"])
        except (TypeError, ValueError):
            raise ConfigError(
                f"statusMessageTimeout must be a number, got {data['statusMessageTimeout']!r}"
            ) from None
    if "readTimeout" in data:
        changes["read_timeout_ds"] = _parse_int("readTimeout", data["readTimeout"])
    if data.get("logFile"):
        changes["log_file"] = str(data["logFile"])
    return replace(config, **changes)


def _from_env(config: EditorConfig, environ: Mapping[str, str]) -> EditorConfig:
    changes: dict[str, Any] = {}
    if environ.get("TERMEDIT_TAB_STOP"):
        changes["tab_stop"] = _parse_int("TERMEDIT_TAB_STOP", environ["TERMEDIT_TAB_STOP"])
    if environ.get("TERMEDIT_LOG"):
        changes["log_file"] = environ["TERMEDIT_LOG"]
    return replace(config, **changes)


def load_config(environ: Mapping[str, str] | None = None) -> EditorConfig:
    """Build the effective configuration from file and environment."""
    env = os.environ if environ is None else environ
    config = _from_file(EditorConfig(), get_config_dir(env) / "config.json")
    return _from_env(config, env).validate()
