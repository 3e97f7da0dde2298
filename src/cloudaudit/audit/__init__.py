"""Audit orchestration for cloud security scanners."""

from .credentials import CREDENTIAL_SETS, missing_credentials
from .layout import create_report_layout
from .orchestrator import AuditOrchestrator
from .providers import PROVIDER_PLANS, ProviderPlan
from .summary import render_summary, write_summary

__all__ = [
    "AuditOrchestrator",
    "CREDENTIAL_SETS",
    "PROVIDER_PLANS",
    "ProviderPlan",
    "create_report_layout",
    "missing_credentials",
    "render_summary",
    "write_summary",
]
