"""Per-provider credential presence checks."""

from __future__ import annotations

import os
from collections.abc import Mapping

from cloudaudit.models import Provider

CREDENTIAL_SETS: dict[Provider, tuple[str, ...]] = {
    Provider.AWS: ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"),
    Provider.AZURE: ("AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET", "AZURE_TENANT_ID"),
    Provider.GCP: ("GOOGLE_APPLICATION_CREDENTIALS",),
}

# Documented for users, never enforced.
OPTIONAL_VARIABLES: dict[Provider, tuple[str, ...]] = {
    Provider.AWS: ("AWS_SESSION_TOKEN", "AWS_DEFAULT_REGION"),
    Provider.AZURE: ("AZURE_SUBSCRIPTION_ID",),
    Provider.GCP: (),
}


def missing_credentials(
    provider: Provider,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the required variables for *provider* that are unset or empty."""
    env = os.environ if environ is None else environ
    return [name for name in CREDENTIAL_SETS[provider] if not env.get(name)]
