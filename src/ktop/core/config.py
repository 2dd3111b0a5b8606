# src/ktop/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

UNMATCHED_POLICIES = ("drop", "report")


def _env_flag(key: str, default: str = "False") -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    # Tables go to stdout and logs to stderr; keep the default quiet.
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

    # --- Metrics API ---
    METRICS_API_GROUP = os.getenv("METRICS_API_GROUP", "metrics.k8s.io")
    METRICS_API_VERSION = os.getenv("METRICS_API_VERSION", "v1beta1")

    # SPOT_TOLERATION_*, UNMATCHED_CONTAINERS and NO_COLOR are properties so
    # they are resolved at access time and tests can change them with monkeypatch.
    @property
    def SPOT_TOLERATION_KEY(self) -> str:
        return os.getenv("SPOT_TOLERATION_KEY", "kubernetes.azure.com/scalesetpriority")

    @property
    def SPOT_TOLERATION_VALUE(self) -> str:
        return os.getenv("SPOT_TOLERATION_VALUE", "spot")

    @property
    def UNMATCHED_CONTAINERS(self) -> str:
        """What to do with usage entries that have no matching container spec: 'drop' or 'report'."""
        return os.getenv("UNMATCHED_CONTAINERS", "drop").lower()

    @property
    def NO_COLOR(self) -> bool:
        return _env_flag("KTOP_NO_COLOR")

    def validate_instance(self):
        if self.UNMATCHED_CONTAINERS not in UNMATCHED_POLICIES:
            raise ValueError("UNMATCHED_CONTAINERS must be 'drop' or 'report'.")
        if not self.SPOT_TOLERATION_KEY:
            raise ValueError("SPOT_TOLERATION_KEY must not be empty.")
        if not self.METRICS_API_GROUP or not self.METRICS_API_VERSION:
            logging.getLogger(__name__).warning("Metrics API group/version is empty; pod metrics will fail.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
