"""Provider dispatch table: credentials and ordered scanner steps."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from cloudaudit.models import Provider, ToolResult
from cloudaudit.tools.base import ToolContext
from cloudaudit.tools.cloudsploit import run_cloudsploit
from cloudaudit.tools.prowler import run_prowler
from cloudaudit.tools.scoutsuite import run_scoutsuite

from .credentials import CREDENTIAL_SETS

ToolRunner = Callable[[ToolContext], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ProviderPlan:
    """Required credentials and the fixed tool order for one provider."""

    provider: Provider
    credentials: tuple[str, ...]
    steps: tuple[tuple[str, ToolRunner], ...]

    @property
    def tool_names(self) -> list[str]:
        return [name for name, _ in self.steps]


PROVIDER_PLANS: dict[Provider, ProviderPlan] = {
    Provider.AWS: ProviderPlan(
        Provider.AWS,
        CREDENTIAL_SETS[Provider.AWS],
        (
            ("prowler", run_prowler),
            ("scoutsuite", run_scoutsuite),
            ("cloudsploit", run_cloudsploit),
        ),
    ),
    Provider.AZURE: ProviderPlan(
        Provider.AZURE,
        CREDENTIAL_SETS[Provider.AZURE],
        (("prowler", run_prowler), ("scoutsuite", run_scoutsuite)),
    ),
    Provider.GCP: ProviderPlan(
        Provider.GCP,
        CREDENTIAL_SETS[Provider.GCP],
        (("prowler", run_prowler), ("scoutsuite", run_scoutsuite)),
    ),
}
