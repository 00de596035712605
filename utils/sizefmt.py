import math
import os
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext

from domain.constants import SIZE_SUFFIXES
from domain.errors import InvalidArgumentError


def _quantum(decimal_places: int) -> Decimal:
    return Decimal(1).scaleb(-decimal_places)


def format_size(value: float, decimal_places: int = 2) -> str:
    """Scale a byte count to bytes/KB/MB/... and render it, e.g. "1.50 KB".

    Notes:
    - Values beyond YB stay in YB and are multiplied by 1024 * (mag - 8)
      rather than scaled further.
    - The >= 1000 carry to the next unit happens at most once.
    """

    if decimal_places < 0:
        raise InvalidArgumentError(f"decimal_places must be >= 0, got {decimal_places}")
    if not math.isfinite(value):
        raise InvalidArgumentError(f"cannot format non-finite size {value!r}")
    if value < 0:
        return "-" + format_size(-value, decimal_places)

    q = _quantum(decimal_places)
    with localcontext() as ctx:
        # quantize needs room for every digit of the rendered value
        ctx.prec = max(28, decimal_places + 40)

        if abs(value) < 1e-16:
            return f"{Decimal(0).quantize(q):,f} {SIZE_SUFFIXES[0]}"

        # mag is 0 for bytes, 1 for KB, 2 for MB, ...
        mag = max(0, math.floor(math.log(value, 1024)))
        adjusted = Decimal(value) / (Decimal(1024) ** mag)

        if adjusted.quantize(q, rounding=ROUND_HALF_EVEN) >= 1000:
            mag += 1
            adjusted /= 1024

        if mag > 8:
            adjusted *= 1024 * (mag - 8)
            mag = 8

        return f"{adjusted.quantize(q, rounding=ROUND_HALF_UP):,f} {SIZE_SUFFIXES[mag]}"


def format_rate(byte_count: int, elapsed_ms: float, decimal_places: int = 2) -> str:
    """Throughput label for byte_count moved in elapsed_ms, e.g. "12.00 MB/s"."""

    if elapsed_ms <= 0:
        # Below timer resolution; no meaningful rate.
        return "n/a"
    return f"{format_size(byte_count / (elapsed_ms / 1000), decimal_places)}/s"


def describe_source(path: str) -> tuple[str, str]:
    """Returns (file name, formatted size) for a picked source file."""

    return os.path.basename(path), format_size(os.path.getsize(path))
