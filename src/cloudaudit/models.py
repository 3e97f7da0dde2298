"""Data models shared across the audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class Provider(str, Enum):
    """Cloud provider selector accepted on the command line."""

    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"
    ALL = "all"

    def expand(self) -> tuple[Provider, ...]:
        """Return the concrete providers this selector stands for."""
        if self is Provider.ALL:
            return (Provider.AWS, Provider.AZURE, Provider.GCP)
        return (self,)


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunConfig:
    """Options for one invocation, built once from CLI arguments."""

    provider: Provider | None = None
    install_mode: bool = False
    scan_iac: bool = False
    parallel: bool = True
    strict: bool = False


@dataclass(frozen=True)
class AuditSettings:
    """Resolved configuration values consumed by the tool runners."""

    tool_timeout: float | None = 3600.0
    report_root: Path = Path(".")
    iac_root: Path = Path(".")
    cloudsploit_dir: Path = Path("cloudsploit")
    cloudsploit_repo: str = "https://github.com/aquasecurity/cloudsploit.git"
    prowler_compliance: dict[str, str] = field(
        default_factory=lambda: {
            "aws": "cis_2.0_aws",
            "azure": "cis_2.0_azure",
            "gcp": "cis_2.0_gcp",
        }
    )

    def compliance_for(self, provider: Provider) -> str:
        return self.prowler_compliance.get(provider.value, f"cis_2.0_{provider.value}")


# ---------------------------------------------------------------------------
# Report layout
# ---------------------------------------------------------------------------

REPORT_SUBDIRS: tuple[str, ...] = ("prowler", "scoutsuite", "cloudsploit", "checkov", "pacu", "logs")
SUMMARY_FILENAME = "SECURITY_SUMMARY.txt"
REPORT_DIR_PREFIX = "security_reports_"


@dataclass(frozen=True)
class ReportLayout:
    """Directory tree that collects every output of one audit run."""

    root: Path
    timestamp: str

    @property
    def prowler(self) -> Path:
        return self.root / "prowler"

    @property
    def scoutsuite(self) -> Path:
        return self.root / "scoutsuite"

    @property
    def cloudsploit(self) -> Path:
        return self.root / "cloudsploit"

    @property
    def checkov(self) -> Path:
        return self.root / "checkov"

    @property
    def pacu(self) -> Path:
        return self.root / "pacu"

    @property
    def logs(self) -> Path:
        return self.root / "logs"

    @property
    def summary_file(self) -> Path:
        return self.root / SUMMARY_FILENAME

    def subdirectories(self) -> list[Path]:
        return [self.root / name for name in REPORT_SUBDIRS]

    def log_path(self, tool: str, provider: Provider | None = None) -> Path:
        """Return ``logs/<tool>_<provider>.log`` (``logs/<tool>.log`` without a provider)."""
        if provider is None:
            return self.logs / f"{tool}.log"
        return self.logs / f"{tool}_{provider.value}.log"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class ToolResult:
    """Outcome of a single scanner step."""

    tool: str
    provider: Provider | None
    command: list[str]
    returncode: int | None
    log_path: Path | None = None
    elapsed: float = 0.0
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and self.error is None

    @property
    def label(self) -> str:
        scope = self.provider.value if self.provider else "iac"
        return f"{self.tool} ({scope})"

    def describe(self) -> str:
        """Short status text used in console output and the summary file."""
        if self.ok:
            return "ok"
        if self.timed_out:
            return f"failed (timed out after {self.elapsed:.0f}s)"
        if self.error:
            return f"failed ({self.error})"
        return f"failed (exit {self.returncode})"


@dataclass
class ProviderResult:
    """Outcome of every step attempted for one provider."""

    provider: Provider
    missing_credentials: list[str] = field(default_factory=list)
    results: list[ToolResult] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return bool(self.missing_credentials)

    @property
    def ok(self) -> bool:
        return not self.skipped and all(r.ok for r in self.results)


@dataclass
class IacResult:
    """Outcome of the optional IaC step."""

    result: ToolResult | None = None
    skipped_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None and self.result.ok


@dataclass
class AuditOutcome:
    """Everything produced by a full audit run."""

    run_config: RunConfig
    layout: ReportLayout
    providers: list[ProviderResult] = field(default_factory=list)
    iac: IacResult | None = None
    summary_path: Path | None = None

    def steps(self) -> int:
        """Count provider skips, tool runs and the IaC step."""
        count = 0
        for provider in self.providers:
            count += 1 if provider.skipped else len(provider.results)
        if self.iac is not None:
            count += 1
        return count

    def failures(self) -> int:
        count = 0
        for provider in self.providers:
            if provider.skipped:
                count += 1
            else:
                count += sum(1 for r in provider.results if not r.ok)
        if self.iac is not None and self.iac.result is not None and not self.iac.result.ok:
            count += 1
        return count

    @property
    def ok(self) -> bool:
        return self.failures() == 0
