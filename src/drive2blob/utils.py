from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_size(size_bytes: Optional[int]) -> str:
    """
    Formats a byte count with the largest unit (powers of 1024) that keeps the
    scaled value >= 1, rounded half-up to two decimals without trailing zeros.

    >>> format_size(0)
    '0 B'
    >>> format_size(1536)
    '1.5 KB'
    """
    if not size_bytes:
        return "0 B"
    index = 0
    while index < len(SIZE_UNITS) - 1 and size_bytes >= 1024 ** (index + 1):
        index += 1
    scaled = (Decimal(size_bytes) / Decimal(1024**index)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    value = f"{scaled:f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[index]}"


def is_timeout(error: BaseException) -> bool:
    """Returns True if a TimeoutError appears anywhere in the exception chain."""
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        if isinstance(current, TimeoutError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False
