"""Test configuration and fixtures for cloudaudit."""

import io
import tempfile
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from cloudaudit.audit.layout import create_report_layout
from cloudaudit.models import AuditSettings, ReportLayout
from cloudaudit.output import StatusPrinter
from cloudaudit.tools.runtime import CommandResult

CREDENTIAL_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AZURE_CLIENT_ID",
    "AZURE_CLIENT_SECRET",
    "AZURE_TENANT_ID",
    "GOOGLE_APPLICATION_CREDENTIALS",
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env(monkeypatch, temp_dir: Path) -> Path:
    """Isolate credentials, config files and HOME from the developer machine."""
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in (
        "CLOUDAUDIT_TOOL_TIMEOUT",
        "CLOUDAUDIT_REPORT_ROOT",
        "CLOUDAUDIT_IAC_ROOT",
        "CLOUDAUDIT_CLOUDSPLOIT_DIR",
        "CLOUDAUDIT_CLOUDSPLOIT_REPO",
        "CLOUDAUDIT_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    work = temp_dir / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def settings(temp_dir: Path) -> AuditSettings:
    """Settings pointing every path into the temp directory."""
    checkout = temp_dir / "cloudsploit"
    (checkout / "node_modules").mkdir(parents=True)
    iac_root = temp_dir / "iac"
    iac_root.mkdir()
    return AuditSettings(
        tool_timeout=30.0,
        report_root=temp_dir / "reports",
        iac_root=iac_root,
        cloudsploit_dir=checkout,
    )


@pytest.fixture
def layout(settings: AuditSettings) -> ReportLayout:
    return create_report_layout(settings.report_root, datetime(2024, 5, 1, 12, 30, 45))


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def printer(console_output: io.StringIO) -> StatusPrinter:
    return StatusPrinter(Console(file=console_output, force_terminal=False, width=200))


class FakeRunner:
    """Stand-in for ``run_tool`` that records invocations instead of spawning them."""

    def __init__(self, failing: set[str] | None = None):
        self.calls: list[dict] = []
        self.failing = failing or set()

    async def __call__(
        self,
        command,
        *,
        label,
        log_path=None,
        cwd=None,
        timeout=None,
        env=None,
        append=False,
        echo=None,
    ):
        self.calls.append(
            {
                "command": list(command),
                "label": label,
                "log_path": log_path,
                "cwd": cwd,
                "timeout": timeout,
                "append": append,
            }
        )
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(log_path, "a" if append else "w", encoding="utf-8") as f:
                f.write(f"fake output for {label}\n")
        code = 1 if command[0] in self.failing or label in self.failing else 0
        return CommandResult(command=list(command), returncode=code, elapsed=0.01)

    @property
    def labels(self) -> list[str]:
        return [call["label"] for call in self.calls]

    @property
    def binaries(self) -> list[str]:
        return [call["command"][0] for call in self.calls]


@pytest.fixture
def fake_runner(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("cloudaudit.tools.base.run_tool", runner)
    return runner
