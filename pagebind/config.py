"""Configuration loader for the binding runtime."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "PAGEBIND_"
CONFIG_FILE = Path("pagebind.toml")
CONFIG_TABLE = "pagebind"

DEFAULTS: Dict[str, Any] = {
    "wait_for_still_element_before_clicking": False,
    "default_element_timeout_ms": 10000,
    "poll_interval_ms": 100,
    "highlight_mode": False,
    "event_log_root": None,
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


@dataclass(slots=True, frozen=True)
class BindingConfig:
    wait_for_still_element_before_clicking: bool = DEFAULTS["wait_for_still_element_before_clicking"]
    default_element_timeout_ms: int = DEFAULTS["default_element_timeout_ms"]
    poll_interval_ms: int = DEFAULTS["poll_interval_ms"]
    highlight_mode: bool = DEFAULTS["highlight_mode"]
    event_log_root: Optional[Path] = DEFAULTS["event_log_root"]

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "BindingConfig":
        data = dict(DEFAULTS)
        data.update({k: v for k, v in mapping.items() if k in DEFAULTS})
        poll_interval = int(data["poll_interval_ms"])
        if poll_interval <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        log_root = data["event_log_root"]
        return cls(
            wait_for_still_element_before_clicking=_as_bool(data["wait_for_still_element_before_clicking"]),
            default_element_timeout_ms=int(data["default_element_timeout_ms"]),
            poll_interval_ms=poll_interval,
            highlight_mode=_as_bool(data["highlight_mode"]),
            event_log_root=Path(log_root) if log_root else None,
        )


def _file_settings(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as fh:
        return dict(tomllib.load(fh).get(CONFIG_TABLE, {}))


def _env_settings(environ: Mapping[str, str]) -> Dict[str, Any]:
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }


def load_config(config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> BindingConfig:
    """Read settings once: defaults, then the TOML file's ``[pagebind]`` table, then ``PAGEBIND_*`` variables."""

    settings = _file_settings(Path(config_path) if config_path else CONFIG_FILE)
    settings.update(_env_settings(os.environ if environ is None else environ))
    return BindingConfig.from_mapping(settings)
