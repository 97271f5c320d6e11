"""Configuration management for sharedtree.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/sharedtree/ or %PROGRAMDATA%)
- User-level config (~/.config/sharedtree/ or %APPDATA%)
- Project-level config ($root/.sharedtree/)
- Environment variable overrides (highest priority)

Example usage:
    from sharedtree.config import load_config

    config = load_config(root="/path/to/project")
    print(config.goals.history_limit)
"""

from sharedtree.config.loader import (
    get_config,
    load_config,
    reset_config,
)
from sharedtree.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from sharedtree.config.schema import (
    Config,
    GoalConfig,
    LoggingConfig,
    SessionDefaults,
    StorageConfig,
    TaskDefaults,
)

__all__ = [
    # Main API
    "Config",
    "load_config",
    "get_config",
    "reset_config",
    # Schema types
    "GoalConfig",
    "LoggingConfig",
    "SessionDefaults",
    "StorageConfig",
    "TaskDefaults",
    # Path utilities
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
]
