"""cloudaudit CLI - CIS benchmark audits with external cloud security scanners."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from cloudaudit.audit import AuditOrchestrator
from cloudaudit.audit.credentials import CREDENTIAL_SETS, OPTIONAL_VARIABLES
from cloudaudit.config import get_tool_timeout, get_verbose, load_audit_settings
from cloudaudit.models import Provider, RunConfig
from cloudaudit.output import StatusPrinter, configure_logging
from cloudaudit.tools.availability import install_hint, missing_dependencies
from cloudaudit.tools.base import PROVIDER_NAMES
from cloudaudit.tools.installer import install_scanners

app = typer.Typer(
    name="cloudaudit",
    help="Run Prowler, ScoutSuite, CloudSploit and Checkov CIS audits against cloud providers.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def environment_help() -> str:
    """Describe the credential variables each provider reads."""
    lines = ["Environment variables:"]
    for provider, required in CREDENTIAL_SETS.items():
        lines.append(f"  {PROVIDER_NAMES[provider] + ':':<7}{', '.join(required)}")
        optional = OPTIONAL_VARIABLES[provider]
        if optional:
            lines.append(f"         ({', '.join(optional)} optional)")
    return "\n".join(lines)


def check_dependencies(printer: StatusPrinter) -> None:
    """Abort with exit code 1 when any required local utility is missing."""
    printer.status("Checking dependencies...")
    missing = missing_dependencies()
    if missing:
        printer.error(f"Missing dependencies: {' '.join(missing)}")
        hint = install_hint(missing)
        if hint:
            printer.status(f"Install them with: {hint}")
        raise typer.Exit(1)
    printer.success("All basic dependencies installed")


def run_install(printer: StatusPrinter, timeout: float | None) -> None:
    """Install mode: provision scanners and exit."""
    printer.status("Installing security tools...")
    results = asyncio.run(install_scanners(printer, timeout=timeout))
    failed = [r for r in results if not r.ok]
    if failed:
        printer.error(f"Failed to install: {', '.join(r.tool for r in failed)}")
        raise typer.Exit(1)
    printer.success("All tools installed successfully")
    raise typer.Exit(0)


@app.command()
def audit(
    ctx: typer.Context,
    provider: Optional[Provider] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Cloud provider: aws, azure, gcp or all",
        case_sensitive=False,
    ),
    install: bool = typer.Option(False, "--install", "-i", help="Install security tools and exit"),
    scan_iac: bool = typer.Option(
        False, "--scan-iac", "-s", help="Scan Infrastructure as Code with Checkov"
    ),
    parallel: bool = typer.Option(
        True, "--parallel/--sequential", help="Audit providers concurrently"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 when any scan failed or was skipped"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", min=0, help="Per-tool timeout in seconds (0 disables)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose diagnostics"),
) -> None:
    """Audit cloud environments against CIS controls."""
    printer = StatusPrinter(console)
    printer.banner()
    try:
        verbose = verbose or get_verbose()
    except Exception as e:
        printer.error(f"Cannot read configuration: {e}")
        raise typer.Exit(1)
    configure_logging(verbose)

    run_config = RunConfig(
        provider=provider,
        install_mode=install,
        scan_iac=scan_iac,
        parallel=parallel,
        strict=strict,
    )

    check_dependencies(printer)

    if run_config.install_mode:
        effective_timeout = get_tool_timeout() if timeout is None else (timeout or None)
        run_install(printer, effective_timeout)

    if run_config.provider is None:
        printer.error("Cloud provider not specified")
        typer.echo(ctx.get_help())
        typer.echo(environment_help())
        raise typer.Exit(1)

    try:
        settings = load_audit_settings(timeout_override=timeout)
        orchestrator = AuditOrchestrator(run_config, settings, printer)
        outcome = asyncio.run(orchestrator.run())
    except Exception as e:
        printer.error(f"Audit failed: {e}")
        raise typer.Exit(1)

    printer.success("Security audit completed!")
    printer.status(f"All reports saved to: {outcome.layout.root}")

    failures = outcome.failures()
    if failures:
        printer.warning(f"{failures} of {outcome.steps()} steps failed or were skipped")
        if run_config.strict:
            raise typer.Exit(1)


def main():
    """Entry point for the CLI."""
    app()
