# tests/models/test_table_model.py

import pytest
from pydantic import ValidationError

from ktop.models.metrics import ContainerSample, ResourceAmounts
from ktop.models.node import NodeResourceSnapshot
from ktop.models.table import TableModel


def test_table_model_accepts_rows_of_header_width():
    model = TableModel(header=["a", "b"], rows=[["1", "2"], ["3", "4"]])
    assert model.column_count == 2
    assert len(model.rows) == 2


def test_table_model_rejects_ragged_rows():
    with pytest.raises(ValidationError, match="Row 1 has 1 cells, expected 2"):
        TableModel(header=["a", "b"], rows=[["1", "2"], ["3"]])


def test_table_model_requires_a_header():
    with pytest.raises(ValidationError):
        TableModel(header=[], rows=[])


def test_models_are_frozen():
    snapshot = NodeResourceSnapshot(name="A", cpu_capacity=8000)
    with pytest.raises(ValidationError):
        snapshot.cpu_capacity = 1

    sample = ContainerSample(pod_name="p", namespace="ns", container_name="c")
    with pytest.raises(ValidationError):
        sample.usage = ResourceAmounts(cpu=1)


def test_container_sample_defaults_to_zero_amounts():
    sample = ContainerSample(pod_name="p", namespace="ns", container_name="c")
    assert sample.request == ResourceAmounts(cpu=0, memory=0)
    assert sample.limit.memory == 0
    assert sample.spot_tolerant is False
