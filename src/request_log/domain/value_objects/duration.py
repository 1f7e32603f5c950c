"""Elapsed request time and its tiered display form.

Output can look like ``"4.56789ms"``, ``"3sec 4.56789ms"``,
``"2min3sec4.56789ms"`` or ``"1hr2min3sec4.56789ms"``. Only the seconds tier
separates its units with a space.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

NANOSECONDS_PER_SECOND = 1_000_000_000
NANOSECONDS_PER_MILLISECOND = 1_000_000
ONE_MINUTE = 60
ONE_HOUR = 60 * 60

_SIGNIFICANT_DIGITS = 6


def _significant(value: float, digits: int = _SIGNIFICANT_DIGITS) -> str:
    """Fixed-point rendering with ``digits`` significant digits, zeros kept.

    Ties round away from zero on the exact binary value.
    """
    exact = Decimal(value)
    exponent = exact.adjusted() if exact else 0
    rounded = exact.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=ROUND_HALF_UP)
    if rounded and rounded.adjusted() > exponent:
        exponent = rounded.adjusted()
        rounded = rounded.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=ROUND_HALF_UP)
    return f"{rounded:.{max(digits - 1 - exponent, 0)}f}"


def format_duration(whole_seconds: int, nanoseconds: int) -> str:
    if whole_seconds < 0:
        raise ValueError(f"whole_seconds must be non-negative, got {whole_seconds}")
    if not 0 <= nanoseconds < NANOSECONDS_PER_SECOND:
        raise ValueError(f"nanoseconds out of range: {nanoseconds}")

    milliseconds = f"{_significant(nanoseconds / NANOSECONDS_PER_MILLISECOND)}ms"

    if whole_seconds < 1:
        return milliseconds

    if whole_seconds < ONE_MINUTE:
        return f"{whole_seconds}sec {milliseconds}"

    if whole_seconds < ONE_HOUR:
        minutes, seconds = divmod(whole_seconds, ONE_MINUTE)
        return f"{minutes}min{seconds}sec{milliseconds}"

    hours, remainder = divmod(whole_seconds, ONE_HOUR)
    minutes, seconds = divmod(remainder, ONE_MINUTE)
    return f"{hours}hr{minutes}min{seconds}sec{milliseconds}"


@dataclass(frozen=True, slots=True)
class Duration:
    seconds: int
    nanoseconds: int

    @classmethod
    def from_nanoseconds(cls, total: int) -> Duration:
        seconds, nanoseconds = divmod(total, NANOSECONDS_PER_SECOND)
        return cls(seconds=seconds, nanoseconds=nanoseconds)

    @classmethod
    def between(cls, start_ns: int, end_ns: int) -> Duration:
        """Elapsed time between two monotonic readings, clamped at zero."""
        return cls.from_nanoseconds(max(end_ns - start_ns, 0))

    def format(self) -> str:
        return format_duration(self.seconds, self.nanoseconds)

    def __str__(self) -> str:
        return self.format()
