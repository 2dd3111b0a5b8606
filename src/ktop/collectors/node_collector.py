# src/ktop/collectors/node_collector.py

import logging
from typing import List

from kubernetes_asyncio.client.rest import ApiException

from ..core.exceptions import NodeListError
from ..core.k8s_client import get_core_v1_api
from ..models.node import NodeResourceSnapshot
from ..utils.k8s_utils import cpu_milli, memory_bytes
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Lists the cluster nodes with their capacity and allocatable resources."""

    def __init__(self):
        self._api = None

    async def _ensure_client(self):
        """
        Lazily initialize the Kubernetes Async client using the centralized loader.
        """
        if self._api:
            return self._api

        self._api = await get_core_v1_api()
        return self._api

    async def collect(self) -> List[NodeResourceSnapshot]:
        """
        Lists every node in the cluster, in API order.

        Raises:
            NodeListError: if the API call fails. Without nodes there is nothing to report.
        """
        api = await self._ensure_client()

        try:
            nodes = await api.list_node(watch=False)
        except ApiException as e:
            raise NodeListError(f"Kubernetes API error while listing nodes: {e.status} {e.reason}") from e
        except Exception as e:
            raise NodeListError(f"Error retrieving nodes: {e}") from e

        snapshots = [self._to_snapshot(node) for node in nodes.items or []]
        if not snapshots:
            logger.warning("No nodes found in the cluster.")
        return snapshots

    @staticmethod
    def _to_snapshot(node) -> NodeResourceSnapshot:
        status = getattr(node, "status", None)
        capacity = (status and status.capacity) or {}
        allocatable = (status and status.allocatable) or {}

        snapshot = NodeResourceSnapshot(
            name=node.metadata.name,
            cpu_capacity=cpu_milli(capacity.get("cpu")),
            cpu_allocatable=cpu_milli(allocatable.get("cpu")),
            memory_capacity=memory_bytes(capacity.get("memory")),
            memory_allocatable=memory_bytes(allocatable.get("memory")),
        )
        logger.debug(
            " -> Node '%s': cpu=%sm/%sm, mem=%s/%s",
            snapshot.name,
            snapshot.cpu_capacity,
            snapshot.cpu_allocatable,
            snapshot.memory_capacity,
            snapshot.memory_allocatable,
        )
        return snapshot

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("NodeCollector Kubernetes client closed.")
            self._api = None
