"""Environment file and global configuration loading."""

from pathlib import Path
from typing import Any

import yaml

PROJECT_ENV_FILENAME = ".cloudaudit.env"


def global_config_path() -> Path:
    """Return the location of ``~/.cloudaudit/config.yml``."""
    return Path.home() / ".cloudaudit" / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load KEY=VALUE pairs from a dotenv-style file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    if key.startswith("export "):
                        key = key[len("export ") :].strip()
                    # Remove quotes if present
                    env_vars[key] = value.strip().strip("\"'")
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.cloudaudit/config.yml."""
    config_path = global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}
    return {}


def load_project_config(work_dir: Path | None = None) -> dict[str, str]:
    """Load ``.cloudaudit.env`` from the working directory."""
    base = work_dir if work_dir is not None else Path.cwd()
    return load_env_file(base / PROJECT_ENV_FILENAME)
