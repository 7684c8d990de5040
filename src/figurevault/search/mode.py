"""Search mode selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from figurevault.models.query import SearchMode

if TYPE_CHECKING:
    from figurevault.config.settings import DeploymentSettings


def select_mode(deployment: DeploymentSettings) -> SearchMode:
    """Choose the backend for a deployment.

    The managed index is used only in production, and only when neither the
    in-memory test marker nor the integration-test marker is set.
    """
    if (
        deployment.environment == "production"
        and deployment.test_mode != "memory"
        and not deployment.integration_test
    ):
        return SearchMode.MANAGED
    return SearchMode.LOCAL
