"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Config caching with reset support
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from sharedtree.config.merge import merge_configs
from sharedtree.config.paths import (
    SHORT_NAME,
    get_config_paths,
    get_project_config_path,
)
from sharedtree.config.schema import (
    Config,
    GoalConfig,
    LoggingConfig,
    SessionDefaults,
    StorageConfig,
    TaskDefaults,
)

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("sharedtree.config")

_cached_config: Config | None = None

_KNOWN_KEYS = {"storage", "sessions", "tasks", "goals", "logging"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables (highest priority)."""
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("SHAREDTREE_LOG")
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    state_dir = os.environ.get("SHAREDTREE_DIR")
    if state_dir:
        overrides.setdefault("storage", {})["dir"] = state_dir

    return overrides


def _str_list(value: Any, default: list[str]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    return [str(item) for item in value if item is not None]


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass.

    Raises:
        ValueError: If a value is out of range (see the schema dataclasses).
    """
    storage_data = _section(data, "storage")
    storage = StorageConfig(dir=str(storage_data.get("dir", ".sharedtree")))

    session_data = _section(data, "sessions")
    defaults = SessionDefaults()
    sessions = SessionDefaults(
        max_name_length=int(session_data.get("max_name_length", defaults.max_name_length)),
        focus_tags=_str_list(session_data.get("focus_tags"), defaults.focus_tags),
        directories=_str_list(session_data.get("directories"), defaults.directories),
        file_patterns=_str_list(session_data.get("file_patterns"), defaults.file_patterns),
    )

    task_data = _section(data, "tasks")
    tasks = TaskDefaults(default_priority=str(task_data.get("default_priority", "medium")))

    goal_data = _section(data, "goals")
    goals = GoalConfig(
        min_length=int(goal_data.get("min_length", 10)),
        max_length=int(goal_data.get("max_length", 2000)),
        history_limit=int(goal_data.get("history_limit", 50)),
        word_sample=int(goal_data.get("word_sample", 10)),
    )

    log_data = _section(data, "logging")
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    extra = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}

    return Config(
        storage=storage,
        sessions=sessions,
        tasks=tasks,
        goals=goals,
        logging=logging_config,
        extra=extra,
    )


def load_config(root: str | Path | None = None, reload: bool = False) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Project config ($root/<state dir>/config.yaml, the state dir being
       `storage.dir` from the user, system or environment layers)
    3. User config (~/.config/sharedtree/config.yaml or %APPDATA%)
    4. System config (/etc/sharedtree/ or %PROGRAMDATA%)

    Args:
        root: Project directory for project-level config.
        reload: Force reload even if cached.

    Returns:
        Merged Config object.
    """
    global _cached_config

    if _cached_config is not None and not reload and root is None:
        return _cached_config

    configs: list[dict[str, Any]] = []

    for path in get_config_paths():
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    env_config = env_overrides()

    if root is not None:
        # The project config sits in the state directory chosen by the outer layers
        state_dir = _section(merge_configs(*configs, env_config), "storage").get("dir")
        path = get_project_config_path(root, str(state_dir or SHORT_NAME))
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    if env_config:
        configs.append(env_config)

    config = dict_to_config(merge_configs(*configs))

    # Cache only global config (no root)
    if root is None:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config (useful for testing)."""
    global _cached_config
    _cached_config = None
