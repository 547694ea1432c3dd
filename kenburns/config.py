# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Any, ClassVar

import tomllib
import yaml


DEFAULT_CONFIG: dict[str, Any] = {
    "presentation": {
        "show_duration_us": 3_000_000,  # time a picture is the primary subject
        "transition_duration_us": 300_000,  # cross-fade overlap, must be < show_duration_us
        "zoom_amount": 0.1,  # max extra scale applied by the zoom
    },
    "display": {
        "width": 1280,
        "height": 720,
        "fullscreen": True,
        "fps": 60,
        "title": "KenBurns",
    },
    "walker": {
        "max_depth": None,  # None = unbounded recursion through directories/feeds
        "pass_delay_s": 0.0,  # sleep after a full pass over the roots
    },
    "image": {
        "max_bytes": 50 * 1024 * 1024,  # 50MB - reject larger images
    },
    "net": {
        "timeout_s": None,  # None = wait for slow endpoints indefinitely
        "user_agent": "Mozilla/5.0 (X11; Linux x86_64) KenBurns/0.1",
    },
    "log": {
        "level": "info",
        "frame_counter": True,
        "rate_ms": 1000,
    },
}


def load_config_file(path: str) -> dict[str, Any]:
    """Load configuration from a file (YAML, TOML, or JSON)."""
    logger = logging.getLogger("config")
    path_obj = Path(path)
    ext = path_obj.suffix.lower()

    if not path_obj.exists():
        logger.warning(f"Config file not found: {path}")
        return {}

    try:
        if ext in (".yaml", ".yml"):
            with path_obj.open(encoding="utf-8") as f:
                return yaml.safe_load(f) or {}

        elif ext == ".toml":
            with path_obj.open("rb") as f:
                return tomllib.load(f) or {}

        elif ext == ".json":
            with path_obj.open(encoding="utf-8") as f:
                return json.load(f) or {}

        else:
            logger.warning(f"Unknown config extension: {ext}")
            return {}

    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load {path}: {e}")
        return {}


def deep_update(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    """Deep merge configuration dictionaries."""
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def validate_config(cfg: dict[str, Any]) -> None:
    """Reject timing settings the presentation state machine cannot honour."""
    show = cfg["presentation"]["show_duration_us"]
    transition = cfg["presentation"]["transition_duration_us"]
    if transition <= 0:
        raise ValueError(f"presentation.transition_duration_us must be positive, got {transition}")
    if transition >= show:
        raise ValueError(
            f"presentation.transition_duration_us ({transition}) must be shorter than "
            f"presentation.show_duration_us ({show})"
        )


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration with defaults and optional file override."""
    cfg = json.loads(json.dumps(DEFAULT_CONFIG))  # Deep copy

    if path:
        deep_update(cfg, load_config_file(path))

    validate_config(cfg)
    return cfg


class Config:
    """Configuration singleton."""

    _instance: ClassVar["Config | None"] = None
    _config: ClassVar[dict[str, Any]] = load_config()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def load(cls, path: str | None = None) -> None:
        """Load configuration from file."""
        cls._config = load_config(path)

    @classmethod
    def get(cls, key: str | None = None) -> Any:
        """Get configuration value by key path (e.g., 'display.width')."""
        if key is None:
            return cls._config

        keys = key.split(".")
        value = cls._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                raise KeyError(f"Configuration key not found: {key}")

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key path."""
        keys = key.split(".")
        target = self._config

        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]

        target[keys[-1]] = value
