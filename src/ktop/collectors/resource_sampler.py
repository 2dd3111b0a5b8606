# src/ktop/collectors/resource_sampler.py
"""
Samples the live usage of every container on one node and pairs it with the
requests and limits declared in the pod spec.
"""

import logging
from typing import List, Optional, Tuple

from kubernetes_asyncio.client.rest import ApiException

from ..core.config import config
from ..core.errors import ReportErrors
from ..core.exceptions import MetricsUnavailableError
from ..core.k8s_client import get_core_v1_api, get_custom_objects_api
from ..models.metrics import ContainerSample, ResourceAmounts, SampleResult
from ..reporters.progress import ProgressNotifier
from ..utils.k8s_utils import cpu_milli, memory_bytes
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


def is_spot_tolerant(pod, key: str, value: str) -> bool:
    """True if the pod tolerates the given taint key/value pair."""
    tolerations = (pod.spec and pod.spec.tolerations) or []
    return any(t.key == key and t.value == value for t in tolerations)


def _amounts(resources: Optional[dict]) -> ResourceAmounts:
    resources = resources or {}
    return ResourceAmounts(cpu=cpu_milli(resources.get("cpu")), memory=memory_bytes(resources.get("memory")))


class ResourceSampler(BaseCollector):
    """
    Connects to the core and metrics APIs to build one ContainerSample per
    container that both reports usage and is declared in its pod spec.
    """

    def __init__(
        self,
        progress: Optional[ProgressNotifier] = None,
        unmatched_policy: Optional[str] = None,
        spot_key: Optional[str] = None,
        spot_value: Optional[str] = None,
    ):
        self._core_api = None
        self._metrics_api = None
        self.progress = progress or ProgressNotifier()
        self.unmatched_policy = unmatched_policy or config.UNMATCHED_CONTAINERS
        self.spot_key = spot_key or config.SPOT_TOLERATION_KEY
        self.spot_value = spot_value or config.SPOT_TOLERATION_VALUE

    async def _ensure_clients(self):
        """Lazily initialize both Kubernetes clients."""
        if not self._core_api:
            self._core_api = await get_core_v1_api()
        if not self._metrics_api:
            self._metrics_api = await get_custom_objects_api()
        return self._core_api, self._metrics_api

    async def collect(self, node_name: str, errors: ReportErrors) -> SampleResult:
        """
        Samples all pods bound to ``node_name``.

        Samples are ordered by pod listing order, then by the container order of
        each pod's usage reading. A pod whose metrics cannot be fetched adds one
        entry to ``errors`` and contributes no samples.
        """
        core_api, _ = await self._ensure_clients()

        try:
            pod_list = await core_api.list_pod_for_all_namespaces(
                watch=False, field_selector=f"spec.nodeName={node_name}"
            )
        except Exception as e:
            logger.warning("Could not list pods on node '%s': %s", node_name, e)
            errors.add(f"Could not list pods on node {node_name}: {e}")
            return SampleResult(node_name=node_name)

        pods = pod_list.items or []
        samples: List[ContainerSample] = []
        unmatched = 0

        self.progress.start(total=len(pods), description=f"Sampling pods on {node_name}")
        try:
            for pod in pods:
                self.progress.advance()
                try:
                    usage = await self._fetch_pod_usage(pod)
                except MetricsUnavailableError as e:
                    logger.warning("%s", e)
                    errors.add(e)
                    continue

                pod_samples, misses = self._match_containers(pod, usage, errors)
                samples.extend(pod_samples)
                unmatched += misses
        finally:
            self.progress.stop()

        logger.debug(
            "Collected %d container samples from %d pods on node '%s' (%d unmatched).",
            len(samples),
            len(pods),
            node_name,
            unmatched,
        )
        return SampleResult(node_name=node_name, samples=samples, pod_count=len(pods), unmatched=unmatched)

    async def _fetch_pod_usage(self, pod) -> dict:
        """Returns the metrics.k8s.io PodMetrics object of a pod as a dict."""
        _, metrics_api = await self._ensure_clients()
        namespace, pod_name = pod.metadata.namespace, pod.metadata.name
        try:
            return await metrics_api.get_namespaced_custom_object(
                group=config.METRICS_API_GROUP,
                version=config.METRICS_API_VERSION,
                namespace=namespace,
                plural="pods",
                name=pod_name,
            )
        except ApiException as e:
            raise MetricsUnavailableError(namespace, pod_name, f"{e.status} {e.reason}") from e
        except Exception as e:
            raise MetricsUnavailableError(namespace, pod_name, e) from e

    def _match_containers(self, pod, usage: dict, errors: ReportErrors) -> Tuple[List[ContainerSample], int]:
        namespace, pod_name = pod.metadata.namespace, pod.metadata.name
        specs = {c.name: c for c in (pod.spec and pod.spec.containers) or []}
        spot = is_spot_tolerant(pod, self.spot_key, self.spot_value)

        samples: List[ContainerSample] = []
        unmatched = 0
        for entry in (usage or {}).get("containers") or []:
            name = entry.get("name")
            spec = specs.get(name)
            if spec is None:
                unmatched += 1
                if self.unmatched_policy == "report":
                    errors.add(f"No container named '{name}' in the spec of pod {namespace}/{pod_name}; usage dropped")
                continue

            resources = spec.resources
            samples.append(
                ContainerSample(
                    pod_name=pod_name,
                    namespace=namespace,
                    container_name=name,
                    usage=_amounts(entry.get("usage")),
                    request=_amounts(resources and resources.requests),
                    limit=_amounts(resources and resources.limits),
                    spot_tolerant=spot,
                )
            )
        return samples, unmatched

    async def close(self):
        """Close both Kubernetes API clients if they exist."""
        if self._core_api:
            await self._core_api.api_client.close()
            self._core_api = None
        if self._metrics_api:
            await self._metrics_api.api_client.close()
            self._metrics_api = None
        logger.debug("ResourceSampler Kubernetes clients closed.")
