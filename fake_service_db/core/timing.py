"""Call Timing — timestamp and elapsed-time text carried by envelopes.

Invariants:
    - Timestamps use TIME_FORMAT (microsecond precision, no zone suffix)
    - Durations render like the other chained fake services: 0s, 250µs, 1.234ms, 1.5s, 2m0s, 1h0m0s
    - Resolution is one microsecond; anything finer is truncated
"""

from datetime import datetime, timedelta

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"

_MICROSECOND = timedelta(microseconds=1)
_US_PER_MS = 1_000
_US_PER_S = 1_000_000
_US_PER_MIN = 60 * _US_PER_S
_US_PER_H = 60 * _US_PER_MIN


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIME_FORMAT)


def format_duration(elapsed: timedelta) -> str:
    """Render an interval as compact text, e.g. ``1.234ms`` or ``1m30.5s``."""
    micros = elapsed // _MICROSECOND
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < _US_PER_MS:
        return f"{sign}{micros}µs"
    if micros < _US_PER_S:
        return f"{sign}{_with_fraction(micros, _US_PER_MS)}ms"

    hours, rest = divmod(micros, _US_PER_H)
    minutes, rest = divmod(rest, _US_PER_MIN)
    text = f"{_with_fraction(rest, _US_PER_S)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


def _with_fraction(value: int, unit: int) -> str:
    """value/unit as a decimal with trailing zeros trimmed."""
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")
