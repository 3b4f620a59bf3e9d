"""Duration string parsing.

Accepts the Go duration grammar used by Terraform provisioners: an optional
sign followed by one or more decimal numbers, each with a unit suffix, such
as "300ms", "1.5h" or "2h45m". Valid units are "ns", "us" (or "µs"), "ms",
"s", "m" and "h". A bare "0" is also accepted.
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# "ms" must be tried before "m"
_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Go durations are int64 nanoseconds
_MAX_NANOS = 2**63 - 1
_MIN_NANOS = -(2**63)


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Args:
        text: Duration such as "0s", "2m" or "1h30m"

    Returns:
        The parsed duration, truncated to microsecond precision

    Raises:
        ValueError: If the string is not a valid duration
    """
    if not isinstance(text, str):
        raise ValueError(f"invalid duration {text!r}")

    remaining = text
    sign = 1
    if remaining[:1] in ("+", "-"):
        sign = -1 if remaining[0] == "-" else 1
        remaining = remaining[1:]

    if remaining == "0":
        return timedelta(0)
    if not remaining:
        raise ValueError(f'invalid duration "{text}"')

    total_nanos = Decimal(0)
    position = 0
    while position < len(remaining):
        match = _COMPONENT.match(remaining, position)
        if not match:
            raise ValueError(f'invalid duration "{text}"')
        try:
            total_nanos += Decimal(match.group(1)) * _NANOS_PER_UNIT[match.group(2)]
        except InvalidOperation as e:
            raise ValueError(f'invalid duration "{text}"') from e
        position = match.end()

    nanos = sign * int(total_nanos)
    if not _MIN_NANOS <= nanos <= _MAX_NANOS:
        raise ValueError(f'invalid duration "{text}"')
    return timedelta(microseconds=int(Decimal(nanos) / 1000))


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the same grammar, e.g. ``1h2m3.5s``."""
    total = value.total_seconds()
    if total == 0:
        return "0s"

    sign = "-" if total < 0 else ""
    micros = abs(int(round(total * 1_000_000)))
    hours, micros = divmod(micros, 3600 * 1_000_000)
    minutes, micros = divmod(micros, 60 * 1_000_000)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if micros or not parts:
        seconds = Decimal(micros) / Decimal(1_000_000)
        parts.append(f"{seconds.normalize():f}s")
    return sign + "".join(parts)
