class KtopError(Exception):
    """Base exception for ktop."""

    pass


class ClusterAccessError(KtopError):
    """Raised when no Kubernetes configuration could be loaded."""

    pass


class NodeListError(KtopError):
    """Raised when the cluster nodes cannot be listed."""

    pass


class NodeNotFoundError(KtopError):
    """Raised when the requested node does not exist."""

    def __init__(self, node_name: str):
        super().__init__(f"Node '{node_name}' not found in the cluster.")
        self.node_name = node_name


class MetricsUnavailableError(KtopError):
    """Raised when the usage metrics of a pod cannot be fetched."""

    def __init__(self, namespace: str, pod_name: str, reason):
        super().__init__(f"Could not get metrics for pod {namespace}/{pod_name}: {reason}")
        self.namespace = namespace
        self.pod_name = pod_name
