"""Shared context for scanner runners."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from cloudaudit.models import AuditSettings, Provider, ReportLayout, ToolResult
from cloudaudit.output import StatusPrinter

from .runtime import run_tool

DISPLAY_NAMES = {
    "prowler": "Prowler",
    "scoutsuite": "ScoutSuite",
    "cloudsploit": "CloudSploit",
    "checkov": "Checkov",
}

PROVIDER_NAMES = {
    Provider.AWS: "AWS",
    Provider.AZURE: "Azure",
    Provider.GCP: "GCP",
    Provider.ALL: "all providers",
}


@dataclass
class ToolContext:
    """Everything a scanner runner needs for one provider (or the IaC step)."""

    layout: ReportLayout
    settings: AuditSettings
    printer: StatusPrinter
    provider: Provider | None = None
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def target_name(self) -> str:
        return PROVIDER_NAMES[self.provider] if self.provider else "IaC"

    async def run(
        self,
        tool: str,
        command: list[str],
        *,
        cwd: Path | None = None,
        append: bool = False,
        log_path: Path | None = None,
    ) -> ToolResult:
        """Run one scanner command and convert the outcome into a :class:`ToolResult`."""
        log = log_path or self.layout.log_path(tool, self.provider)
        label = f"{tool}:{self.provider.value}" if self.provider else tool
        result = await run_tool(
            command,
            label=label,
            log_path=log,
            cwd=cwd,
            timeout=self.settings.tool_timeout,
            env=self.environ,
            append=append,
            echo=lambda line: self.printer.tool_line(label, line),
        )
        return ToolResult(
            tool=tool,
            provider=self.provider,
            command=result.command,
            returncode=result.returncode,
            log_path=log,
            elapsed=result.elapsed,
            timed_out=result.timed_out,
            error=result.error,
        )

    def report(self, result: ToolResult) -> None:
        """Print the completion line for a scanner step."""
        name = f"{DISPLAY_NAMES.get(result.tool, result.tool)} {self.target_name()}"
        if result.ok:
            self.printer.success(f"{name} scan completed")
        else:
            self.printer.error(f"{name} scan {result.describe()}")
