# tests/core/test_report.py
"""
Tests for the per-node report sequence, using a real renderer on an in-memory console.
"""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from ktop.core.errors import ReportErrors
from ktop.core.exceptions import NodeListError
from ktop.core.report import ReportDriver
from ktop.models.metrics import ContainerSample, ResourceAmounts, SampleResult
from ktop.models.node import NodeResourceSnapshot
from ktop.reporters.table_renderer import TableRenderer

GiB = 1024**3
MiB = 1024**2

NODES = [
    NodeResourceSnapshot(
        name="A", cpu_capacity=8000, cpu_allocatable=7820, memory_capacity=32 * GiB, memory_allocatable=29 * GiB
    ),
    NodeResourceSnapshot(
        name="B", cpu_capacity=4000, cpu_allocatable=3860, memory_capacity=16 * GiB, memory_allocatable=13 * GiB
    ),
]


def _sample(pod, container, cpu, memory):
    return ContainerSample(
        pod_name=pod,
        namespace="default",
        container_name=container,
        usage=ResourceAmounts(cpu=cpu, memory=memory),
        request=ResourceAmounts(cpu=100, memory=64 * MiB),
        limit=ResourceAmounts(cpu=1000, memory=GiB),
    )


SAMPLES = {
    "A": [_sample("web-1", "app", 6, 37_480_000), _sample("web-2", "app", 32, 10 * MiB)],
    "B": [],
}


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=300, color_system=None, highlight=False)


@pytest.fixture
def sampler():
    async def collect(node_name, errors):
        if node_name == "B":
            errors.add("Could not get metrics for pod default/db-0: 404 Not Found")
        return SampleResult(node_name=node_name, samples=SAMPLES[node_name], pod_count=len(SAMPLES[node_name]))

    mock = MagicMock()
    mock.collect = AsyncMock(side_effect=collect)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def node_collector():
    mock = MagicMock()
    mock.collect = AsyncMock(return_value=NODES)
    mock.close = AsyncMock()
    return mock


def _driver(node_collector, sampler, console):
    return ReportDriver(node_collector=node_collector, sampler=sampler, renderer=TableRenderer(console=console))


@pytest.mark.asyncio
async def test_all_nodes_prints_totals_and_summary_per_node(node_collector, sampler, console):
    errors = await _driver(node_collector, sampler, console).run()

    output = console.file.getvalue()
    assert [c.args[0] for c in sampler.collect.await_args_list] == ["A", "B"]
    assert output.count("Pod total capacity on Node") == 2
    assert output.count("CPU Allocatable") == 2
    assert "Pods on" not in output
    assert "│ A                          │ 38 m      │ 200 m       │ 45.74MiB  │ 128.00MiB   │" in output
    assert "│ A    │ 8000 m       │ 7820 m          │ 32.00GiB     │ 29.00GiB        │" in output
    # the totals table of A comes before its summary, and both before B
    assert output.index("38 m") < output.index("8000 m") < output.index("4000 m")
    assert len(errors) == 1


@pytest.mark.asyncio
async def test_named_node_prints_pod_detail(node_collector, sampler, console):
    await _driver(node_collector, sampler, console).run(node_name="A")

    output = console.file.getvalue()
    sampler.collect.assert_awaited_once()
    assert sampler.collect.await_args.args[0] == "A"
    assert "Pods on A" in output
    assert "Pod total capacity on Node" not in output
    assert "4000 m" not in output
    total_line = next(line for line in output.splitlines() if line.startswith("│ Total"))
    assert "│ 38 m " in total_line


@pytest.mark.asyncio
async def test_errors_are_numbered_after_all_tables(node_collector, sampler, console):
    await _driver(node_collector, sampler, console).run()

    lines = console.file.getvalue().splitlines()
    assert lines[-2:] == ["Error(s) :", "1. Could not get metrics for pod default/db-0: 404 Not Found"]
    assert lines.index("Error(s) :") > max(i for i, line in enumerate(lines) if line.startswith("└"))


@pytest.mark.asyncio
async def test_no_error_section_without_errors(node_collector, sampler, console):
    await _driver(node_collector, sampler, console).run(node_name="A")
    assert "Error(s)" not in console.file.getvalue()


@pytest.mark.asyncio
async def test_unknown_node_falls_back_to_all_nodes(node_collector, sampler, console):
    errors = await _driver(node_collector, sampler, console).run(node_name="C")

    output = console.file.getvalue()
    assert [c.args[0] for c in sampler.collect.await_args_list] == ["A", "B"]
    assert output.count("Pod total capacity on Node") == 2
    assert "Pods on" not in output
    assert errors.numbered()[0] == "1. Node 'C' not found in the cluster."
    assert output.splitlines()[-3:] == [
        "Error(s) :",
        "1. Node 'C' not found in the cluster.",
        "2. Could not get metrics for pod default/db-0: 404 Not Found",
    ]


@pytest.mark.asyncio
async def test_pod_count_is_logged_per_node(node_collector, sampler, console, caplog):
    with caplog.at_level("INFO", logger="ktop.core.report"):
        await _driver(node_collector, sampler, console).run()

    assert "Node 'A': 2 pods sampled, 0 unmatched usage entries." in caplog.text
    assert "Node 'B': 0 pods sampled" in caplog.text


@pytest.mark.asyncio
async def test_node_list_failure_is_fatal_before_output(node_collector, sampler, console):
    node_collector.collect.side_effect = NodeListError("boom")

    with pytest.raises(NodeListError):
        await _driver(node_collector, sampler, console).run()

    assert console.file.getvalue() == ""


@pytest.mark.asyncio
async def test_shared_error_list_is_returned(node_collector, sampler, console):
    errors = ReportErrors()
    errors.add("earlier problem")
    driver = ReportDriver(node_collector, sampler, TableRenderer(console=console), errors=errors)

    assert await driver.run() is errors
    assert errors.numbered()[0] == "1. earlier problem"
    assert len(errors) == 2


@pytest.mark.asyncio
async def test_close_closes_collectors(node_collector, sampler, console):
    driver = _driver(node_collector, sampler, console)
    await driver.close()
    sampler.close.assert_awaited_once()
    node_collector.close.assert_awaited_once()
