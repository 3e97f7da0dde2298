"""Configuration getter functions."""

import logging
import os
from pathlib import Path
from typing import Any

from cloudaudit.models import AuditSettings, Provider

from .env_loader import load_global_config, load_project_config

logger = logging.getLogger(__name__)

DEFAULT_TOOL_TIMEOUT = 3600.0
DEFAULT_CLOUDSPLOIT_REPO = "https://github.com/aquasecurity/cloudsploit.git"

TRUTHY = {"1", "true", "yes", "on"}


def get_config(key: str, work_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. ``.cloudaudit.env`` in the working directory
    3. Global config file
    4. Default value
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    project_config = load_project_config(work_dir)
    if key in project_config:
        return project_config[key]

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def get_tool_timeout(work_dir: Path | None = None) -> float | None:
    """Per-subprocess timeout in seconds; ``None`` when disabled with 0."""
    raw = get_config("CLOUDAUDIT_TOOL_TIMEOUT", work_dir, default=DEFAULT_TOOL_TIMEOUT)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid CLOUDAUDIT_TOOL_TIMEOUT %r, using %s", raw, DEFAULT_TOOL_TIMEOUT)
        return DEFAULT_TOOL_TIMEOUT
    if value < 0:
        logger.warning("Negative CLOUDAUDIT_TOOL_TIMEOUT %r, using %s", raw, DEFAULT_TOOL_TIMEOUT)
        return DEFAULT_TOOL_TIMEOUT
    return value or None


def get_path(key: str, default: str, work_dir: Path | None = None) -> Path:
    """Resolve a path setting relative to the working directory."""
    base = work_dir if work_dir is not None else Path.cwd()
    path = Path(str(get_config(key, work_dir, default=default))).expanduser()
    return path if path.is_absolute() else base / path


def get_verbose(work_dir: Path | None = None) -> bool:
    return str(get_config("CLOUDAUDIT_VERBOSE", work_dir, default="")).lower() in TRUTHY


def load_audit_settings(
    work_dir: Path | None = None,
    timeout_override: float | None = None,
) -> AuditSettings:
    """Build :class:`AuditSettings` from environment, files and defaults."""
    base = work_dir if work_dir is not None else Path.cwd()
    timeout = get_tool_timeout(base) if timeout_override is None else (timeout_override or None)

    compliance = {}
    for provider in Provider.ALL.expand():
        key = f"CLOUDAUDIT_PROWLER_COMPLIANCE_{provider.value.upper()}"
        compliance[provider.value] = str(
            get_config(key, base, default=f"cis_2.0_{provider.value}")
        )

    return AuditSettings(
        tool_timeout=timeout,
        report_root=get_path("CLOUDAUDIT_REPORT_ROOT", ".", base),
        iac_root=get_path("CLOUDAUDIT_IAC_ROOT", ".", base),
        cloudsploit_dir=get_path("CLOUDAUDIT_CLOUDSPLOIT_DIR", "cloudsploit", base),
        cloudsploit_repo=str(
            get_config("CLOUDAUDIT_CLOUDSPLOIT_REPO", base, default=DEFAULT_CLOUDSPLOIT_REPO)
        ),
        prowler_compliance=compliance,
    )
