"""Checkov Infrastructure-as-Code runner."""

from __future__ import annotations

from pathlib import Path

from cloudaudit.models import IacResult, ReportLayout

from .base import ToolContext

IAC_MARKER_DIRS: tuple[str, ...] = ("terraform", "cloudformation", "kubernetes")
FRAMEWORKS: tuple[str, ...] = ("terraform", "cloudformation", "kubernetes")


def results_path(layout: ReportLayout) -> Path:
    return layout.checkov / "iac_results.json"


def find_iac_directories(root: Path) -> list[str]:
    """Return the IaC marker directories present under *root*."""
    return [name for name in IAC_MARKER_DIRS if (root / name).is_dir()]


def build_command(layout: ReportLayout) -> list[str]:
    return [
        "checkov",
        "-d",
        ".",
        "--framework",
        *FRAMEWORKS,
        "--output",
        "json",
        "--output-file",
        str(results_path(layout).resolve()),
    ]


async def run_checkov(ctx: ToolContext) -> IacResult:
    """Scan the IaC root once when any marker directory exists."""
    ctx.printer.status("Scanning Infrastructure as Code with Checkov...")
    iac_root = ctx.settings.iac_root
    if not find_iac_directories(iac_root):
        markers = "/".join(IAC_MARKER_DIRS)
        ctx.printer.warning(f"No IaC directories found ({markers}) in {iac_root}")
        return IacResult(skipped_reason="no IaC directories")

    result = await ctx.run(
        "checkov",
        build_command(ctx.layout),
        cwd=iac_root,
        log_path=ctx.layout.log_path("checkov"),
    )
    ctx.report(result)
    return IacResult(result=result)
