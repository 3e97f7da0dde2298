"""Prowler CIS benchmark runner."""

from __future__ import annotations

from pathlib import Path

from cloudaudit.models import AuditSettings, Provider, ReportLayout, ToolResult

from .base import ToolContext

OUTPUT_FORMATS = ("json", "html", "csv")


def output_dir(layout: ReportLayout, provider: Provider) -> Path:
    return layout.prowler / provider.value


def build_command(provider: Provider, layout: ReportLayout, settings: AuditSettings) -> list[str]:
    """Assemble the prowler CLI invocation."""
    cmd = ["prowler", provider.value, "--compliance", settings.compliance_for(provider)]
    if provider is Provider.AZURE:
        # Service principal credentials come from AZURE_CLIENT_ID/SECRET/TENANT_ID.
        cmd.append("--sp-env-auth")
    cmd.extend(["--output-formats", *OUTPUT_FORMATS])
    cmd.extend(["--output-directory", str(output_dir(layout, provider)), "--verbose"])
    return cmd


async def run_prowler(ctx: ToolContext) -> ToolResult:
    assert ctx.provider is not None
    ctx.printer.status(f"Running Prowler for {ctx.target_name()}...")
    out_dir = output_dir(ctx.layout, ctx.provider)
    out_dir.mkdir(parents=True, exist_ok=True)

    result = await ctx.run("prowler", build_command(ctx.provider, ctx.layout, ctx.settings))
    ctx.report(result)
    if result.ok:
        ctx.printer.status(f"Reports saved to: {out_dir}")
    return result
