# src/ktop/core/k8s_client.py
"""
Loads the cluster credentials once and hands out kubernetes_asyncio API objects.
"""

import asyncio
import logging
from typing import Optional

from kubernetes_asyncio import client, config

from .exceptions import ClusterAccessError

logger = logging.getLogger(__name__)

# Global lock to prevent race conditions during config loading
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_SOURCE: Optional[str] = None


async def load_cluster_config(kubeconfig: Optional[str] = None, context: Optional[str] = None) -> str:
    """
    Loads the Kubernetes configuration exactly once.

    An explicit kubeconfig path or context skips the in-cluster attempt.
    Otherwise the in-cluster service account is tried first, then the default
    kubeconfig (``$KUBECONFIG`` or ``~/.kube/config``).

    Returns:
        str: where the configuration came from ("in-cluster" or "kubeconfig").

    Raises:
        ClusterAccessError: if no configuration could be loaded.
    """
    global _CONFIG_SOURCE

    if _CONFIG_SOURCE:
        return _CONFIG_SOURCE

    async with _CONFIG_LOCK:
        # Double-check locking pattern
        if _CONFIG_SOURCE:
            return _CONFIG_SOURCE

        if not kubeconfig and not context:
            try:
                logger.debug("Attempting to load in-cluster Kubernetes config...")
                config.load_incluster_config()
                _CONFIG_SOURCE = "in-cluster"
                logger.info("Loaded in-cluster Kubernetes configuration.")
                return _CONFIG_SOURCE
            except config.ConfigException:
                logger.debug("In-cluster config not found.")

        try:
            logger.debug("Attempting to load kubeconfig (file=%s, context=%s)...", kubeconfig, context)
            await config.load_kube_config(config_file=kubeconfig, context=context)
        except config.ConfigException as e:
            raise ClusterAccessError(f"Could not load Kubernetes configuration: {e}") from e
        except OSError as e:
            raise ClusterAccessError(f"Could not read kubeconfig file: {e}") from e

        _CONFIG_SOURCE = "kubeconfig"
        logger.info("Loaded Kubernetes configuration from kubeconfig file.")
        return _CONFIG_SOURCE


def reset_cluster_config() -> None:
    """Forgets the loaded configuration so the next call loads it again."""
    global _CONFIG_SOURCE
    _CONFIG_SOURCE = None


async def get_core_v1_api() -> client.CoreV1Api:
    """Returns a CoreV1Api bound to the loaded configuration."""
    await load_cluster_config()
    return client.CoreV1Api()


async def get_custom_objects_api() -> client.CustomObjectsApi:
    """Returns a CustomObjectsApi, used to read metrics.k8s.io objects."""
    await load_cluster_config()
    return client.CustomObjectsApi()
