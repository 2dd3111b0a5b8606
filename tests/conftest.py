# tests/conftest.py

import pytest

from ktop.core import k8s_client


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`) so the
    configuration is predictable and isolated from the real environment.
    """
    monkeypatch.setenv("SPOT_TOLERATION_KEY", "kubernetes.azure.com/scalesetpriority")
    monkeypatch.setenv("SPOT_TOLERATION_VALUE", "spot")
    monkeypatch.setenv("UNMATCHED_CONTAINERS", "drop")
    monkeypatch.delenv("KTOP_NO_COLOR", raising=False)


@pytest.fixture(autouse=True)
def reset_cluster_config():
    """Each test starts without a loaded cluster configuration."""
    k8s_client.reset_cluster_config()
    yield
    k8s_client.reset_cluster_config()
