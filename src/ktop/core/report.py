# src/ktop/core/report.py
"""
Drives one report: list nodes, then sample, aggregate and render them one at a time.
"""

import logging
from typing import List, Optional

from ..collectors.node_collector import NodeCollector
from ..collectors.resource_sampler import ResourceSampler
from ..models.node import NodeResourceSnapshot
from ..reporters.table_renderer import TableRenderer
from .aggregator import node_summary_table, node_totals_table, pod_detail_table
from .errors import ReportErrors
from .exceptions import NodeNotFoundError

logger = logging.getLogger(__name__)


class ReportDriver:
    """
    Runs the Sampler -> Aggregator -> Renderer sequence for each node in scope.

    With a node name, only that node is reported and its pods are listed one
    container per row. Without one, every node gets a condensed totals table.
    Both modes end each node with its capacity/allocatable table.
    """

    def __init__(
        self,
        node_collector: NodeCollector,
        sampler: ResourceSampler,
        renderer: TableRenderer,
        errors: Optional[ReportErrors] = None,
    ):
        self.node_collector = node_collector
        self.sampler = sampler
        self.renderer = renderer
        self.errors = errors if errors is not None else ReportErrors()

    async def run(self, node_name: Optional[str] = None) -> ReportErrors:
        """
        Produces the report on the renderer's console.

        An unknown ``node_name`` is recorded in the error list and every node
        is reported instead.

        Raises:
            ClusterAccessError, NodeListError: before anything is printed.
        """
        all_nodes = await self.node_collector.collect()
        nodes = self._select(all_nodes, node_name)
        if nodes is None:
            logger.warning("Node '%s' not found; reporting all nodes.", node_name)
            self.errors.add(NodeNotFoundError(node_name))
            node_name, nodes = None, all_nodes
        logger.info("Reporting on %d node(s).", len(nodes))

        for node in nodes:
            if node_name is None:
                self.renderer.print_lines([""])
            await self._report_node(node, detailed=node_name is not None)

        self._print_errors()
        return self.errors

    @staticmethod
    def _select(
        nodes: List[NodeResourceSnapshot], node_name: Optional[str]
    ) -> Optional[List[NodeResourceSnapshot]]:
        if node_name is None:
            return nodes
        for node in nodes:
            if node.name == node_name:
                return [node]
        return None

    async def _report_node(self, node: NodeResourceSnapshot, detailed: bool) -> None:
        # Every sample of the node is in hand before anything is aggregated.
        result = await self.sampler.collect(node.name, self.errors)
        logger.info(
            "Node '%s': %d pods sampled, %d unmatched usage entries.",
            node.name,
            result.pod_count,
            result.unmatched,
        )

        if detailed:
            usage_table = pod_detail_table(node.name, result.samples)
        else:
            usage_table = node_totals_table(node.name, result.samples)

        self.renderer.print(usage_table)
        self.renderer.print(node_summary_table(node))

    def _print_errors(self) -> None:
        if not self.errors:
            return
        self.renderer.print_lines(["", "Error(s) :", *self.errors.numbered()])

    async def close(self) -> None:
        await self.sampler.close()
        await self.node_collector.close()
