"""Platform-aware configuration path resolution.

Handles config file locations for:
- Windows: %PROGRAMDATA% (system), %APPDATA% (user)
- Unix: /etc/ (system), ~/.config/sharedtree/ or ~/.sharedtree/ (user)
- Project: $root/.sharedtree/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "config.yaml"
APP_NAME = "sharedtree"
SHORT_NAME = ".sharedtree"


def get_system_config_path() -> Path | None:
    """Get system-level config path (the file may not exist)."""
    if sys.platform == "win32":
        program_data = os.environ.get("PROGRAMDATA")
        if program_data:
            return Path(program_data) / APP_NAME / CONFIG_FILENAME
    else:
        return Path("/etc") / APP_NAME / CONFIG_FILENAME
    return None


def get_user_config_path() -> Path | None:
    """Get user-level config path (the file may not exist)."""
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME / CONFIG_FILENAME
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / APP_NAME / CONFIG_FILENAME

        home = Path.home()

        xdg_default = home / ".config"
        if xdg_default.exists():
            return xdg_default / APP_NAME / CONFIG_FILENAME

        return home / SHORT_NAME / CONFIG_FILENAME

    return None


def get_project_config_path(root: str | Path, state_dir: str = SHORT_NAME) -> Path:
    """Get project-level config path (may not exist).

    The file lives in the project's state directory, `.sharedtree` unless
    `storage.dir` or SHAREDTREE_DIR moves it.
    """
    return Path(root) / state_dir / CONFIG_FILENAME


def get_config_paths(
    root: str | Path | None = None, state_dir: str = SHORT_NAME
) -> list[Path]:
    """Get all config paths in priority order (lowest to highest).

    Args:
        root: Optional project directory for project-level config.
        state_dir: State directory name under `root` holding the project config.

    Returns:
        List of config paths in order: system, user, project.
        Later paths override earlier ones when merging.
    """
    paths: list[Path] = []

    system_path = get_system_config_path()
    if system_path:
        paths.append(system_path)

    user_path = get_user_config_path()
    if user_path:
        paths.append(user_path)

    if root:
        paths.append(get_project_config_path(root, state_dir))

    return paths
