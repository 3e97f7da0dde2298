"""Tests for the scanner command builders and runners."""

from pathlib import Path

import pytest

from cloudaudit.models import AuditSettings, Provider, ReportLayout
from cloudaudit.tools import checkov, cloudsploit, prowler, scoutsuite
from cloudaudit.tools.base import ToolContext

# -- Command builders --


class TestProwlerCommand:
    def test_aws(self, layout: ReportLayout):
        cmd = prowler.build_command(Provider.AWS, layout, AuditSettings())
        assert cmd == [
            "prowler",
            "aws",
            "--compliance",
            "cis_2.0_aws",
            "--output-formats",
            "json",
            "html",
            "csv",
            "--output-directory",
            str(layout.prowler / "aws"),
            "--verbose",
        ]

    def test_azure_uses_service_principal_env_auth(self, layout: ReportLayout):
        cmd = prowler.build_command(Provider.AZURE, layout, AuditSettings())
        assert cmd[:5] == ["prowler", "azure", "--compliance", "cis_2.0_azure", "--sp-env-auth"]

    def test_gcp_has_no_auth_flag(self, layout: ReportLayout):
        cmd = prowler.build_command(Provider.GCP, layout, AuditSettings())
        assert "--sp-env-auth" not in cmd
        assert "cis_2.0_gcp" in cmd


class TestScoutSuiteCommand:
    ENV = {
        "AZURE_CLIENT_ID": "cid",
        "AZURE_CLIENT_SECRET": "csecret",
        "AZURE_TENANT_ID": "tid",
        "GOOGLE_APPLICATION_CREDENTIALS": "/keys/sa.json",
    }

    def test_aws(self, layout: ReportLayout):
        cmd = scoutsuite.build_command(Provider.AWS, layout, self.ENV)
        assert cmd == ["scout", "aws", "--report-dir", str(layout.scoutsuite / "aws"), "--force"]

    def test_azure_passes_client_credentials(self, layout: ReportLayout):
        cmd = scoutsuite.build_command(Provider.AZURE, layout, self.ENV)
        assert cmd[-6:] == [
            "--client-id",
            "cid",
            "--client-secret",
            "csecret",
            "--tenant-id",
            "tid",
        ]

    def test_gcp_passes_service_account(self, layout: ReportLayout):
        cmd = scoutsuite.build_command(Provider.GCP, layout, self.ENV)
        assert cmd[-2:] == ["--service-account", "/keys/sa.json"]


class TestCloudSploitCommand:
    def test_run_command(self, layout: ReportLayout):
        cmd = cloudsploit.build_command(Provider.AWS, layout)
        assert cmd[:6] == ["node", "index.js", "--cloud", "aws", "--compliance", "cis"]
        assert cmd[6] == "--json"
        assert Path(cmd[7]).is_absolute()
        assert cmd[7].endswith("cloudsploit/aws_results.json")

    def test_clone_command(self, temp_dir: Path):
        assert cloudsploit.clone_command("https://example.invalid/cs.git", temp_dir / "cs") == [
            "git",
            "clone",
            "https://example.invalid/cs.git",
            str(temp_dir / "cs"),
        ]


class TestCheckovCommand:
    def test_command(self, layout: ReportLayout):
        cmd = checkov.build_command(layout)
        assert cmd[:3] == ["checkov", "-d", "."]
        assert cmd[3:7] == ["--framework", "terraform", "cloudformation", "kubernetes"]
        assert cmd[7:9] == ["--output", "json"]
        assert cmd[9] == "--output-file"
        assert cmd[10].endswith("checkov/iac_results.json")

    def test_find_iac_directories(self, temp_dir: Path):
        (temp_dir / "kubernetes").mkdir()
        (temp_dir / "terraform").write_text("not a directory")
        assert checkov.find_iac_directories(temp_dir) == ["kubernetes"]


# -- Runners --


def _ctx(layout, settings, printer, provider=Provider.AWS, environ=None) -> ToolContext:
    return ToolContext(
        layout=layout,
        settings=settings,
        printer=printer,
        provider=provider,
        environ=environ or {},
    )


@pytest.mark.asyncio
async def test_prowler_runner_logs_to_provider_log(layout, settings, printer, fake_runner):
    result = await prowler.run_prowler(_ctx(layout, settings, printer, Provider.GCP))

    assert result.ok
    assert result.log_path == layout.logs / "prowler_gcp.log"
    assert (layout.prowler / "gcp").is_dir()
    call = fake_runner.calls[0]
    assert call["label"] == "prowler:gcp"
    assert call["timeout"] == 30.0


@pytest.mark.asyncio
async def test_scoutsuite_failure_is_reported(layout, settings, printer, fake_runner, console_output):
    fake_runner.failing.add("scout")
    result = await scoutsuite.run_scoutsuite(_ctx(layout, settings, printer, Provider.AWS))

    assert not result.ok
    assert result.returncode == 1
    assert "ScoutSuite AWS scan failed (exit 1)" in console_output.getvalue()


@pytest.mark.asyncio
async def test_cloudsploit_clones_when_checkout_missing(layout, temp_dir, printer, fake_runner):
    settings = AuditSettings(
        report_root=temp_dir / "reports",
        cloudsploit_dir=temp_dir / "fresh" / "cloudsploit",
        cloudsploit_repo="https://example.invalid/cloudsploit.git",
    )
    result = await cloudsploit.run_cloudsploit(_ctx(layout, settings, printer))

    assert result.ok
    assert fake_runner.binaries == ["git", "npm", "node"]
    assert fake_runner.calls[0]["command"][2] == "https://example.invalid/cloudsploit.git"
    assert fake_runner.calls[1]["cwd"] == settings.cloudsploit_dir
    assert fake_runner.calls[2]["cwd"] == settings.cloudsploit_dir
    assert all(call["append"] for call in fake_runner.calls)
    assert {call["log_path"] for call in fake_runner.calls} == {layout.logs / "cloudsploit_aws.log"}


@pytest.mark.asyncio
async def test_cloudsploit_skips_setup_for_ready_checkout(layout, settings, printer, fake_runner):
    result = await cloudsploit.run_cloudsploit(_ctx(layout, settings, printer))
    assert result.ok
    assert fake_runner.binaries == ["node"]


@pytest.mark.asyncio
async def test_cloudsploit_failed_clone_skips_invocation(layout, temp_dir, printer, fake_runner):
    fake_runner.failing.add("git")
    settings = AuditSettings(cloudsploit_dir=temp_dir / "missing-checkout")
    result = await cloudsploit.run_cloudsploit(_ctx(layout, settings, printer))

    assert not result.ok
    assert result.tool == "cloudsploit"
    assert fake_runner.binaries == ["git"]


@pytest.mark.asyncio
async def test_cloudsploit_failed_npm_install_skips_invocation(layout, temp_dir, printer, fake_runner):
    fake_runner.failing.add("npm")
    checkout = temp_dir / "no-modules"
    checkout.mkdir()
    settings = AuditSettings(cloudsploit_dir=checkout)
    result = await cloudsploit.run_cloudsploit(_ctx(layout, settings, printer))

    assert not result.ok
    assert fake_runner.binaries == ["npm"]


@pytest.mark.asyncio
async def test_checkov_skips_without_iac_directories(layout, settings, printer, fake_runner, console_output):
    outcome = await checkov.run_checkov(_ctx(layout, settings, printer, provider=None))

    assert outcome.result is None
    assert outcome.skipped_reason == "no IaC directories"
    assert fake_runner.calls == []
    assert "No IaC directories found" in console_output.getvalue()


@pytest.mark.asyncio
async def test_checkov_runs_from_iac_root(layout, settings, printer, fake_runner):
    (settings.iac_root / "terraform").mkdir()
    outcome = await checkov.run_checkov(_ctx(layout, settings, printer, provider=None))

    assert outcome.ok
    call = fake_runner.calls[0]
    assert call["cwd"] == settings.iac_root
    assert call["log_path"] == layout.logs / "checkov.log"
    assert call["label"] == "checkov"
