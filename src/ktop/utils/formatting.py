"""
Text formatting of resource amounts for the report tables.
"""

_BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def bytes_human(value: int) -> str:
    """
    Formats a byte count with the largest binary unit whose mantissa is in [1, 1024).

    >>> bytes_human(33650237440)
    '31.34GiB'
    >>> bytes_human(512)
    '512B'
    """
    value = max(int(value or 0), 0)
    if value < 1024:
        return f"{value}B"

    unit = 0
    mantissa = float(value)
    while mantissa >= 1024 and unit < len(_BINARY_UNITS) - 1:
        mantissa /= 1024
        unit += 1

    # 1023.999KiB would print as "1024.00KiB"
    if round(mantissa, 2) >= 1024 and unit < len(_BINARY_UNITS) - 1:
        mantissa /= 1024
        unit += 1

    return f"{mantissa:.2f}{_BINARY_UNITS[unit]}"


def format_millicores(value: int) -> str:
    return f"{int(value or 0)} m"


def spot_cell(spot_tolerant: bool) -> str:
    return "true" if spot_tolerant else ""
