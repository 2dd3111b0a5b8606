# src/ktop/core/aggregator.py
"""
Folds container samples into table rows and totals, and builds the three
table shapes of the report.
"""

from typing import Iterable, List, Sequence

from ..models.metrics import AggregateRow, ContainerSample
from ..models.node import NodeResourceSnapshot
from ..models.table import TableModel
from ..utils.formatting import bytes_human, format_millicores, spot_cell

POD_DETAIL_COLUMNS = [
    "Container",
    "CPU Usage",
    "CPU Request",
    "CPU Limit",
    "Mem Usage",
    "Mem Request",
    "Mem Limit",
    "Spot Tolerance",
]
NODE_TOTALS_HEADER = ["Pod total capacity on Node", "CPU Usage", "CPU Request", "Mem Usage", "Mem Request"]
NODE_SUMMARY_HEADER = ["Node", "CPU Capacity", "CPU Allocatable", "Mem Capacity", "Mem Allocatable"]


def pod_rows(samples: Iterable[ContainerSample]) -> List[List[str]]:
    """One formatted row per sample, in input order."""
    return [
        [
            s.pod_name,
            s.container_name,
            format_millicores(s.usage.cpu),
            format_millicores(s.request.cpu),
            format_millicores(s.limit.cpu),
            bytes_human(s.usage.memory),
            bytes_human(s.request.memory),
            bytes_human(s.limit.memory),
            spot_cell(s.spot_tolerant),
        ]
        for s in samples
    ]


def node_total(samples: Iterable[ContainerSample], name: str = "Total") -> AggregateRow:
    """
    Sums usage, requests and limits over all samples. Empty input gives zeros.
    """
    samples = list(samples)
    return AggregateRow(
        name=name,
        cpu_usage=sum(s.usage.cpu for s in samples),
        cpu_request=sum(s.request.cpu for s in samples),
        cpu_limit=sum(s.limit.cpu for s in samples),
        memory_usage=sum(s.usage.memory for s in samples),
        memory_request=sum(s.request.memory for s in samples),
        memory_limit=sum(s.limit.memory for s in samples),
    )


def cluster_capacity_row(snapshot: NodeResourceSnapshot) -> List[str]:
    return [
        snapshot.name,
        format_millicores(snapshot.cpu_capacity),
        format_millicores(snapshot.cpu_allocatable),
        bytes_human(snapshot.memory_capacity),
        bytes_human(snapshot.memory_allocatable),
    ]


def total_detail_row(total: AggregateRow) -> List[str]:
    """The trailing row of the pod detail table; container and spot cells stay empty."""
    return [
        total.name,
        "",
        format_millicores(total.cpu_usage),
        format_millicores(total.cpu_request),
        format_millicores(total.cpu_limit),
        bytes_human(total.memory_usage),
        bytes_human(total.memory_request),
        bytes_human(total.memory_limit),
        "",
    ]


def total_condensed_row(total: AggregateRow) -> List[str]:
    return [
        total.name,
        format_millicores(total.cpu_usage),
        format_millicores(total.cpu_request),
        bytes_human(total.memory_usage),
        bytes_human(total.memory_request),
    ]


def pod_detail_table(node_name: str, samples: Sequence[ContainerSample]) -> TableModel:
    """Per-container rows of one node followed by a 'Total' row."""
    rows = pod_rows(samples)
    rows.append(total_detail_row(node_total(samples)))
    return TableModel(header=[f"Pods on {node_name}", *POD_DETAIL_COLUMNS], rows=rows)


def node_totals_table(node_name: str, samples: Sequence[ContainerSample]) -> TableModel:
    """The condensed totals used when every node is reported."""
    return TableModel(header=NODE_TOTALS_HEADER, rows=[total_condensed_row(node_total(samples, name=node_name))])


def node_summary_table(snapshot: NodeResourceSnapshot) -> TableModel:
    return TableModel(header=NODE_SUMMARY_HEADER, rows=[cluster_capacity_row(snapshot)])
