from .node_collector import NodeCollector
from .resource_sampler import ResourceSampler

__all__ = [
    "NodeCollector",
    "ResourceSampler",
]
