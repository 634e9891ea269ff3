from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises the declarative rules of the toolkit (tag allow-list,
tree-builder options, logging).  It loads YAML files packaged with
*layout_toolkit* and merges them with optional user overrides.

User overrides live in ``$LAYOUT_TOOLKIT_CONFIG_DIR`` when set, otherwise in
``~/.layout_toolkit/``.  A user file only needs the keys it changes; top-level
keys replace the packaged ones.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]


def _get_user_config_dir() -> Path:
    """Return the directory searched for user override files."""
    override = os.environ.get("LAYOUT_TOOLKIT_CONFIG_DIR", "").strip()
    if override:
        return Path(override)
    return Path.home() / ".layout_toolkit"


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "tag_map": "tag_map.yml",
        "tree_options": "tree_builder.yml",
        "logging": "logging.yml",
    }

    def __init__(self, user_config_dir: Optional[Path] = None) -> None:
        self._user_config_dir = Path(user_config_dir) if user_config_dir else _get_user_config_dir()
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_tag_map(self) -> Dict[str, Any]:
        return self._data.get("tag_map", {})

    def get_tree_options(self) -> Dict[str, Any]:
        return self._data.get("tree_options", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    @property
    def user_config_dir(self) -> Path:
        return self._user_config_dir

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                text = pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")
                packaged_data = yaml.safe_load(text) or {}
                if not isinstance(packaged_data, dict):
                    raise ValueError(f"expected a mapping, got {type(packaged_data).__name__}")
                merged_cfg.update(packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
                status = "missing"
            except (yaml.YAMLError, ValueError) as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides
            user_path = self._user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    if not isinstance(user_data, dict):
                        raise ValueError(f"expected a mapping, got {type(user_data).__name__}")
                    merged_cfg.update(user_data)
                    status = f"{status}+overrides"
                except (OSError, yaml.YAMLError, ValueError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.debug("Config startup: %s", " | ".join(startup_summary))
