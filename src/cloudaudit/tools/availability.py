"""External tool registry and availability checking."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

# ---------------------------------------------------------------------------
# External tool registry (binary name + install instructions)
# ---------------------------------------------------------------------------

EXTERNAL_TOOLS: dict[str, dict[str, str]] = {
    "jq": {"binary": "jq", "install": "sudo apt install jq"},
    "git": {"binary": "git", "install": "sudo apt install git"},
    "python3": {"binary": "python3", "install": "sudo apt install python3"},
    "pip3": {"binary": "pip3", "install": "sudo apt install python3-pip"},
    "prowler": {"binary": "prowler", "install": "pip3 install prowler", "package": "prowler"},
    "scoutsuite": {"binary": "scout", "install": "pip3 install scoutsuite", "package": "scoutsuite"},
    "checkov": {"binary": "checkov", "install": "pip3 install checkov", "package": "checkov"},
    "node": {"binary": "node", "install": "sudo apt install nodejs"},
    "npm": {"binary": "npm", "install": "sudo apt install npm"},
}

# Utilities that must exist before any run, install mode included.
REQUIRED_UTILITIES: tuple[str, ...] = ("jq", "git", "python3", "pip3")

# Scanners that install mode provisions through pip3.
INSTALLABLE_SCANNERS: tuple[str, ...] = ("prowler", "scoutsuite", "checkov")


def find_binary(name: str) -> str | None:
    """Find a binary via PATH + common user install locations."""
    found = shutil.which(name)
    if found:
        return found
    home = Path.home()
    for d in [home / ".local" / "bin", Path("/usr/local/bin")]:
        candidate = d / name
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return None


def check_tool_availability(names: tuple[str, ...] | None = None) -> dict[str, bool]:
    """Return {tool_name: is_installed} for the given (or every known) tool."""
    selected = names if names is not None else tuple(EXTERNAL_TOOLS)
    return {name: find_binary(EXTERNAL_TOOLS[name]["binary"]) is not None for name in selected}


def missing_dependencies(required: tuple[str, ...] = REQUIRED_UTILITIES) -> list[str]:
    """Return every required utility that is not installed, in declared order."""
    status = check_tool_availability(required)
    return [name for name in required if not status[name]]


def install_hint(missing: list[str]) -> str:
    """One-line apt command covering the missing system utilities."""
    packages = []
    for name in missing:
        hint = EXTERNAL_TOOLS[name]["install"]
        if hint.startswith("sudo apt install "):
            packages.append(hint.removeprefix("sudo apt install "))
    if not packages:
        return ""
    return "sudo apt install " + " ".join(packages)
