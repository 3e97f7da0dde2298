"""Console status output and logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

STATUS_ICONS = {
    "status": "[blue][*][/blue]",
    "success": "[green][✓][/green]",
    "error": "[red][✗][/red]",
    "warning": "[yellow][!][/yellow]",
}


class StatusPrinter:
    """Prints ``[*]``/``[✓]``/``[✗]``/``[!]`` status lines and tool output."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _emit(self, kind: str, message: str) -> None:
        # Messages may carry exception text; only the icon is markup.
        text = Text.from_markup(STATUS_ICONS[kind])
        text.append(f" {message}")
        self.console.print(text)

    def status(self, message: str) -> None:
        self._emit("status", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def tool_line(self, label: str, line: str) -> None:
        """Echo one line of subprocess output, never interpreting markup."""
        text = Text(f"{label} | ", style="dim")
        text.append(line)
        self.console.print(text, highlight=False)

    def block(self, content: str) -> None:
        self.console.print(Text(content), highlight=False)

    def banner(self) -> None:
        self.console.print(
            Panel(
                "[bold]Cloud Security CIS Controls Audit[/bold]\n"
                "[dim]Multi-tool security assessment: Prowler, ScoutSuite, CloudSploit, Checkov[/dim]",
                title="cloudaudit",
                border_style="blue",
            )
        )


def configure_logging(verbose: bool) -> None:
    """Route diagnostics through rich; DEBUG when verbose, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=verbose, show_path=False)],
        force=True,
    )
