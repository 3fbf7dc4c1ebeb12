"""Value formatting shared by the text and HTML tables."""

from __future__ import annotations

TIME_PRECISION = 4
MILLISECOND_PRECISION = 1
BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_time(seconds: float, in_milliseconds: bool = False) -> str:
    if in_milliseconds:
        return f"{seconds * 1000:.{MILLISECOND_PRECISION}f} ms"
    return f"{seconds:.{TIME_PRECISION}f} s"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_bytes(num_bytes: int, with_sign: bool = False) -> str:
    """Format a byte count with binary units, e.g. ``1536 -> "1.50 KB"``.

    Below 1024 the raw integer is printed; otherwise the value is scaled by
    ``1024 ** floor(log_1024(|bytes|))`` and printed with two decimals.
    ``with_sign`` prefixes ``+``/``-`` for non-zero values.
    """
    sign = ""
    if with_sign and num_bytes != 0:
        sign = "+" if num_bytes > 0 else "-"
    absolute = abs(int(num_bytes))
    if absolute < 1024:
        return f"{sign}{absolute} {BYTE_UNITS[0]}"

    # integer comparison keeps exact powers of 1024 on the right unit
    index = 0
    while index < len(BYTE_UNITS) - 1 and absolute >= 1024 ** (index + 1):
        index += 1
    return f"{sign}{absolute / 1024 ** index:.2f} {BYTE_UNITS[index]}"


def truncate(value: str, width: int, suffix: str = "...") -> str:
    if len(value) <= width:
        return value
    return value[: max(0, width - len(suffix))] + suffix
