# src/ktop/models/metrics.py
"""
This module defines the Pydantic data models for the container samples and
the totals computed from them. They are created fresh for every report and
never persisted.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ResourceAmounts(BaseModel):
    """A CPU/memory pair: usage, request or limit of one container."""

    model_config = ConfigDict(frozen=True)

    cpu: int = Field(0, ge=0, description="CPU in millicores.")
    memory: int = Field(0, ge=0, description="Memory in bytes.")


class ContainerSample(BaseModel):
    """
    Live usage of one container paired with the requests and limits declared
    for it in the pod spec.
    """

    model_config = ConfigDict(frozen=True)

    pod_name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field(..., description="The namespace the pod belongs to.")
    container_name: str = Field(..., description="The name of the container within the pod.")
    usage: ResourceAmounts = Field(default_factory=ResourceAmounts, description="Current usage.")
    request: ResourceAmounts = Field(default_factory=ResourceAmounts, description="Declared requests.")
    limit: ResourceAmounts = Field(default_factory=ResourceAmounts, description="Declared limits.")
    spot_tolerant: bool = Field(False, description="Whether the pod tolerates spot/preemptible nodes.")


class SampleResult(BaseModel):
    """Everything the sampler gathered for one node."""

    model_config = ConfigDict(frozen=True)

    node_name: str
    samples: List[ContainerSample] = Field(default_factory=list)
    pod_count: int = Field(0, description="Number of pods bound to the node.")
    unmatched: int = Field(0, description="Usage entries without a matching container spec.")


class AggregateRow(BaseModel):
    """Summed usage, requests and limits over a group of container samples."""

    model_config = ConfigDict(frozen=True)

    name: str
    cpu_usage: int = 0
    cpu_request: int = 0
    cpu_limit: int = 0
    memory_usage: int = 0
    memory_request: int = 0
    memory_limit: int = 0
