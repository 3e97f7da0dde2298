"""CloudSploit runner with clone-on-demand checkout management."""

from __future__ import annotations

from pathlib import Path

from cloudaudit.models import Provider, ReportLayout, ToolResult

from .base import ToolContext


def results_path(layout: ReportLayout, provider: Provider) -> Path:
    return layout.cloudsploit / f"{provider.value}_results.json"


def build_command(provider: Provider, layout: ReportLayout) -> list[str]:
    """Assemble the CloudSploit invocation; runs from inside the checkout."""
    return [
        "node",
        "index.js",
        "--cloud",
        provider.value,
        "--compliance",
        "cis",
        "--json",
        str(results_path(layout, provider).resolve()),
    ]


def clone_command(repo: str, checkout: Path) -> list[str]:
    return ["git", "clone", repo, str(checkout)]


async def ensure_checkout(ctx: ToolContext) -> ToolResult | None:
    """Clone CloudSploit and install its dependencies when needed.

    Returns the failing step's result, or ``None`` when the checkout is ready.
    """
    checkout = ctx.settings.cloudsploit_dir
    if not checkout.is_dir():
        ctx.printer.status("Cloning CloudSploit...")
        checkout.parent.mkdir(parents=True, exist_ok=True)
        cloned = await ctx.run(
            "cloudsploit", clone_command(ctx.settings.cloudsploit_repo, checkout), append=True
        )
        if not cloned.ok:
            return cloned

    if not (checkout / "node_modules").is_dir():
        ctx.printer.status("Installing CloudSploit dependencies...")
        installed = await ctx.run("cloudsploit", ["npm", "install"], cwd=checkout, append=True)
        if not installed.ok:
            return installed
    return None


async def run_cloudsploit(ctx: ToolContext) -> ToolResult:
    assert ctx.provider is not None
    failed_setup = await ensure_checkout(ctx)
    if failed_setup is not None:
        ctx.printer.error(f"CloudSploit setup failed: {failed_setup.describe()}")
        return failed_setup

    ctx.printer.status(f"Running CloudSploit for {ctx.target_name()}...")
    result = await ctx.run(
        "cloudsploit",
        build_command(ctx.provider, ctx.layout),
        cwd=ctx.settings.cloudsploit_dir,
        append=True,
    )
    ctx.report(result)
    return result
