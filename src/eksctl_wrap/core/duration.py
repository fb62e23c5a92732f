"""Go-style duration codec.

eksctl parses flags with Go's ``time.ParseDuration`` and the values we
hand it were historically produced by ``time.Duration.String()``.  This
module reads and writes that syntax for :class:`datetime.timedelta`.

``timedelta`` stores microseconds, so nanosecond inputs are rounded to
the nearest microsecond.
"""

from __future__ import annotations

import re
from datetime import timedelta

_UNIT_MICROSECONDS: dict[str, float] = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,  # U+00B5 micro sign
    "μs": 1,  # U+03BC greek mu
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def parse_duration(text: str) -> timedelta:
    """Parse a Go duration string such as ``"20m"`` or ``"1h30m"``.

    Raises
    ------
    ValueError
        For empty, negative or malformed input.
    """
    value = text.strip()
    if not value:
        raise ValueError("empty duration")
    if value.startswith("-"):
        raise ValueError(f"negative duration: {text!r}")
    value = value.removeprefix("+")
    if value == "0":
        return timedelta(0)

    total = 0.0
    pos = 0
    for match in _COMPONENT_RE.finditer(value):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_MICROSECONDS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(value):
        raise ValueError(f"invalid duration: {text!r}")
    try:
        micros = round(total)
        return timedelta(microseconds=micros)
    except OverflowError as exc:
        raise ValueError(f"invalid duration: {text!r} is out of range") from exc


def format_duration(value: timedelta) -> str:
    """Render *value* exactly like Go's ``time.Duration.String()``.

    Examples: ``20m0s``, ``1h0m0s``, ``1m30s``, ``1.5s``, ``500ms``, ``0s``.
    """
    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < _MICROS_PER_SECOND:
        if micros < 1_000:
            return f"{sign}{micros}µs"
        return f"{sign}{_with_fraction(micros, 1_000)}ms"

    hours, rest = divmod(micros, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)

    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_with_fraction(rest, _MICROS_PER_SECOND)}s")
    return "".join(parts)


def _with_fraction(value: int, unit: int) -> str:
    """Return ``value / unit`` as a decimal without trailing zeros."""
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    digits = str(frac).rjust(width, "0").rstrip("0")
    return f"{whole}.{digits}"
