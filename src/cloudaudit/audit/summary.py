"""Plain-text summary manifest written at the end of every audit."""

from __future__ import annotations

from cloudaudit.models import AuditOutcome

RULE = "=" * 47


def _result_lines(outcome: AuditOutcome) -> list[str]:
    lines: list[str] = []
    for provider in outcome.providers:
        if provider.skipped:
            missing = ", ".join(provider.missing_credentials)
            lines.append(f"  - {provider.provider.value}: skipped (missing {missing})")
            continue
        for result in provider.results:
            lines.append(f"  - {result.label}: {result.describe()}")
    if outcome.iac is not None:
        if outcome.iac.result is not None:
            lines.append(f"  - {outcome.iac.result.label}: {outcome.iac.result.describe()}")
        else:
            lines.append(f"  - checkov (iac): skipped ({outcome.iac.skipped_reason})")
    return lines


def render_summary(outcome: AuditOutcome) -> str:
    layout = outcome.layout
    provider = outcome.run_config.provider.value if outcome.run_config.provider else ""
    lines = [
        RULE,
        "Cloud Security Audit Summary",
        RULE,
        f"Timestamp: {layout.timestamp}",
        f"Cloud Provider: {provider}",
        "",
        "Reports Generated:",
        f"  - Prowler: {layout.prowler}/",
        f"  - ScoutSuite: {layout.scoutsuite}/",
        f"  - CloudSploit: {layout.cloudsploit}/",
        f"  - Checkov: {layout.checkov}/",
        "",
        f"Logs: {layout.logs}/",
        "",
        "Audit Results:",
        *_result_lines(outcome),
        f"Failures: {outcome.failures()} of {outcome.steps()} steps",
        RULE,
    ]
    return "\n".join(lines) + "\n"


def write_summary(outcome: AuditOutcome) -> str:
    """Write ``SECURITY_SUMMARY.txt`` and return its content."""
    content = render_summary(outcome)
    outcome.layout.summary_file.write_text(content, encoding="utf-8")
    outcome.summary_path = outcome.layout.summary_file
    return content
