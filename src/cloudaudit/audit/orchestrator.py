"""Audit orchestration: credential gate, provider dispatch, IaC step, summary."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from datetime import datetime

from cloudaudit.models import (
    AuditOutcome,
    AuditSettings,
    IacResult,
    Provider,
    ProviderResult,
    ReportLayout,
    RunConfig,
    ToolResult,
)
from cloudaudit.output import StatusPrinter
from cloudaudit.tools.base import PROVIDER_NAMES, ToolContext
from cloudaudit.tools.checkov import run_checkov

from .credentials import missing_credentials
from .layout import create_report_layout
from .providers import PROVIDER_PLANS, ProviderPlan
from .summary import write_summary

logger = logging.getLogger(__name__)


class AuditOrchestrator:
    """Runs the configured provider audits into one report layout."""

    def __init__(
        self,
        run_config: RunConfig,
        settings: AuditSettings,
        printer: StatusPrinter,
        environ: Mapping[str, str] | None = None,
        plans: Mapping[Provider, ProviderPlan] | None = None,
    ):
        if run_config.provider is None:
            raise ValueError("An audit run requires a provider")
        self.run_config = run_config
        self.settings = settings
        self.printer = printer
        self.environ = dict(os.environ if environ is None else environ)
        self.plans = dict(PROVIDER_PLANS if plans is None else plans)

    def _context(self, layout: ReportLayout, provider: Provider | None) -> ToolContext:
        return ToolContext(
            layout=layout,
            settings=self.settings,
            printer=self.printer,
            provider=provider,
            environ=self.environ,
        )

    async def audit_provider(self, provider: Provider, layout: ReportLayout) -> ProviderResult:
        """Run every tool for *provider* in order; failures never stop later tools."""
        plan = self.plans[provider]
        name = PROVIDER_NAMES[provider]
        self.printer.status(f"Starting {name} Security Audit...")

        missing = missing_credentials(provider, self.environ)
        if missing:
            self.printer.error(
                f"{name} credentials not set. Export {', '.join(plan.credentials)} "
                f"(missing: {', '.join(missing)})"
            )
            return ProviderResult(provider=provider, missing_credentials=missing)

        self.printer.success(f"{name} credentials detected")
        ctx = self._context(layout, provider)
        outcome = ProviderResult(provider=provider)
        for tool, runner in plan.steps:
            try:
                result = await runner(ctx)
            except Exception as exc:  # noqa: BLE001
                logger.exception("%s step for %s raised", tool, provider.value)
                self.printer.error(f"{tool} {name} scan failed: {exc}")
                result = ToolResult(
                    tool=tool,
                    provider=provider,
                    command=[],
                    returncode=None,
                    log_path=layout.log_path(tool, provider),
                    error=str(exc) or exc.__class__.__name__,
                )
            outcome.results.append(result)
        return outcome

    async def dispatch(self, layout: ReportLayout) -> list[ProviderResult]:
        """Audit every selected provider, concurrently unless sequential mode is set."""
        selector = self.run_config.provider
        assert selector is not None
        providers = selector.expand()
        if selector is Provider.ALL:
            self.printer.status("Running audits for all cloud providers...")

        if self.run_config.parallel and len(providers) > 1:
            results = await asyncio.gather(
                *(self.audit_provider(provider, layout) for provider in providers)
            )
            return list(results)

        results = []
        for provider in providers:
            results.append(await self.audit_provider(provider, layout))
        return results

    async def scan_iac(self, layout: ReportLayout) -> IacResult:
        return await run_checkov(self._context(layout, None))

    async def run(self, now: datetime | None = None) -> AuditOutcome:
        """Create the report tree, dispatch audits, then always write the summary."""
        self.printer.status("Setting up environment...")
        layout = create_report_layout(self.settings.report_root, now)
        self.printer.success(f"Report directory created: {layout.root}")

        outcome = AuditOutcome(run_config=self.run_config, layout=layout)
        outcome.providers = await self.dispatch(layout)
        if self.run_config.scan_iac:
            outcome.iac = await self.scan_iac(layout)

        self.printer.status("Generating summary report...")
        content = write_summary(outcome)
        self.printer.block(content)
        self.printer.success(f"Summary report generated: {outcome.summary_path}")
        return outcome
