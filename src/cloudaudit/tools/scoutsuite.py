"""ScoutSuite runner."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from cloudaudit.models import Provider, ReportLayout, ToolResult

from .base import ToolContext


def report_dir(layout: ReportLayout, provider: Provider) -> Path:
    return layout.scoutsuite / provider.value


def build_command(
    provider: Provider,
    layout: ReportLayout,
    environ: Mapping[str, str],
) -> list[str]:
    """Assemble the scout CLI invocation, passing provider credentials through."""
    cmd = ["scout", provider.value, "--report-dir", str(report_dir(layout, provider)), "--force"]
    if provider is Provider.AZURE:
        cmd.extend(
            [
                "--client-id",
                environ.get("AZURE_CLIENT_ID", ""),
                "--client-secret",
                environ.get("AZURE_CLIENT_SECRET", ""),
                "--tenant-id",
                environ.get("AZURE_TENANT_ID", ""),
            ]
        )
    elif provider is Provider.GCP:
        cmd.extend(["--service-account", environ.get("GOOGLE_APPLICATION_CREDENTIALS", "")])
    return cmd


async def run_scoutsuite(ctx: ToolContext) -> ToolResult:
    assert ctx.provider is not None
    ctx.printer.status(f"Running ScoutSuite for {ctx.target_name()}...")
    result = await ctx.run("scoutsuite", build_command(ctx.provider, ctx.layout, ctx.environ))
    ctx.report(result)
    return result
