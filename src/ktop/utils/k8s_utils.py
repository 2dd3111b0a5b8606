from decimal import ROUND_CEILING, Decimal, InvalidOperation

# Binary suffixes are checked before decimal ones so "Mi" is not read as "M".
_BINARY_SUFFIXES = {
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("0.000000001"),
    "u": Decimal("0.000001"),
    "m": Decimal("0.001"),
    "k": Decimal(1000),
    "M": Decimal(1000) ** 2,
    "G": Decimal(1000) ** 3,
    "T": Decimal(1000) ** 4,
    "P": Decimal(1000) ** 5,
    "E": Decimal(1000) ** 6,
}


def parse_quantity(quantity) -> Decimal:
    """
    Parse a kubernetes quantity ("250m", "1.5Gi", "5815479n", "1e3") to Decimal.
    Returns 0 for None or for strings that are not quantities.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, (int, float, Decimal)):
        return Decimal(quantity)

    quantity = str(quantity).strip()
    number, multiplier = quantity, Decimal(1)

    for suffix, factor in _BINARY_SUFFIXES.items():
        if quantity.endswith(suffix):
            number, multiplier = quantity[: -len(suffix)], factor
            break
    else:
        suffix = quantity[-1:]
        if suffix in _DECIMAL_SUFFIXES:
            number, multiplier = quantity[:-1], _DECIMAL_SUFFIXES[suffix]

    try:
        value = Decimal(number)
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)

    return value * multiplier


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def cpu_milli(quantity) -> int:
    """
    Converts a K8s CPU quantity to millicores.

    Rounds up to the next whole millicore, the way kubectl top does,
    so a usage of "5815479n" reports as 6.
    """
    if not quantity:
        return 0
    return _ceil(parse_quantity(quantity) * 1000)


def memory_bytes(quantity) -> int:
    """Converts a K8s memory quantity to bytes, rounding fractional bytes up."""
    if not quantity:
        return 0
    return _ceil(parse_quantity(quantity))
