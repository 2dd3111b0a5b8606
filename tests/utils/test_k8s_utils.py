# tests/utils/test_k8s_utils.py

from decimal import Decimal

import pytest

from ktop.utils.k8s_utils import cpu_milli, memory_bytes, parse_quantity


@pytest.mark.parametrize(
    "quantity, expected",
    [
        ("1Ki", Decimal(1024)),
        ("1.5Gi", Decimal("1.5") * 1024**3),
        ("250m", Decimal("0.250")),
        ("5815479n", Decimal("0.005815479")),
        ("2k", Decimal(2000)),
        ("1M", Decimal(1000**2)),
        ("1e3", Decimal(1000)),
        ("128974848", Decimal(128974848)),
        (4, Decimal(4)),
        (None, Decimal(0)),
        ("", Decimal(0)),
        ("not-a-quantity", Decimal(0)),
        ("NaN", Decimal(0)),
    ],
)
def test_parse_quantity(quantity, expected):
    assert parse_quantity(quantity) == expected


def test_cpu_milli_units():
    """CPU quantities come back as whole millicores."""
    assert cpu_milli("1") == 1000
    assert cpu_milli("8") == 8000
    assert cpu_milli("500m") == 500
    assert cpu_milli("7820m") == 7820
    assert cpu_milli("0.25") == 250
    assert cpu_milli("250000u") == 250


def test_cpu_milli_rounds_up_sub_millicore_usage():
    # metrics-server reports nanocores
    assert cpu_milli("5815479n") == 6
    assert cpu_milli("32000000n") == 32
    assert cpu_milli("10n") == 1


def test_cpu_milli_absent_is_zero():
    assert cpu_milli(None) == 0
    assert cpu_milli("") == 0
    assert cpu_milli("0") == 0


def test_memory_bytes_units():
    assert memory_bytes("1Ki") == 1024
    assert memory_bytes("1Mi") == 1024 * 1024
    assert memory_bytes("32Gi") == 32 * 1024**3
    assert memory_bytes("36604Ki") == 37482496
    assert memory_bytes("1G") == 1000 * 1000 * 1000
    assert memory_bytes("100") == 100
    assert memory_bytes("0.5Ki") == 512
    assert memory_bytes(None) == 0
