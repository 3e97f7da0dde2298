"""
Configuration management for cloudaudit.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. ``.cloudaudit.env`` in the working directory
3. Global config file (~/.cloudaudit/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    PROJECT_ENV_FILENAME,
    global_config_path,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    get_config,
    get_path,
    get_tool_timeout,
    get_verbose,
    load_audit_settings,
)

__all__ = [
    # env_loader
    "PROJECT_ENV_FILENAME",
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_config",
    "get_path",
    "get_tool_timeout",
    "get_verbose",
    "load_audit_settings",
]
