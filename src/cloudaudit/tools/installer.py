"""Install mode: provision scanners through pip3."""

from __future__ import annotations

from cloudaudit.models import ToolResult
from cloudaudit.output import StatusPrinter

from .availability import EXTERNAL_TOOLS, INSTALLABLE_SCANNERS, find_binary
from .base import DISPLAY_NAMES
from .runtime import run_tool


def install_command(package: str) -> list[str]:
    return ["pip3", "install", package, "--quiet"]


async def install_scanners(
    printer: StatusPrinter,
    timeout: float | None = None,
) -> list[ToolResult]:
    """Install every scanner whose binary is missing; already-present ones are left alone."""
    results: list[ToolResult] = []
    for name in INSTALLABLE_SCANNERS:
        info = EXTERNAL_TOOLS[name]
        display = DISPLAY_NAMES.get(name, name)
        if find_binary(info["binary"]):
            printer.success(f"{display} already installed")
            continue

        printer.status(f"Installing {display}...")
        command = install_command(info["package"])
        outcome = await run_tool(
            command,
            label=f"install:{name}",
            timeout=timeout,
            echo=lambda line, label=f"install:{name}": printer.tool_line(label, line),
        )
        result = ToolResult(
            tool=name,
            provider=None,
            command=outcome.command,
            returncode=outcome.returncode,
            elapsed=outcome.elapsed,
            timed_out=outcome.timed_out,
            error=outcome.error,
        )
        if result.ok:
            printer.success(f"{display} installed")
        else:
            printer.error(f"{display} installation {result.describe()}")
        results.append(result)
    return results
