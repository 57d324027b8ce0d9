"""Convert driver scalar values into portable values.

The Python driver already returns native ``int`` values, but values built by
other drivers can carry 64-bit integers boxed as an object with ``high`` and
``low`` attributes. Both forms are normalized here, and integers that a
JSON/JavaScript consumer cannot represent exactly are handled according to
``large_integer_mode``:

- ``"string"``: render the decimal string (lossless, the default).
- ``"native"``: keep the Python ``int``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

logger = logging.getLogger(__name__)

LargeIntegerMode = Literal["string", "native"]

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -(2**53 - 1)


def _boxed_parts(value: Any) -> tuple[int, int] | None:
    """Return ``(high, low)`` if ``value`` is a boxed 64-bit integer."""
    # Maps are user data, even when their keys happen to be "low" and "high".
    if isinstance(value, Mapping):
        return None
    if not (hasattr(value, "high") and hasattr(value, "low")):
        return None
    high, low = value.high, value.low
    if isinstance(high, bool) or isinstance(low, bool):
        return None
    if not isinstance(high, int) or not isinstance(low, int):
        return None
    return high, low


def unbox_integer(high: int, low: int) -> int:
    """Combine a signed high word and a low word into one signed 64-bit int."""
    combined = ((high & 0xFFFFFFFF) << 32) | (low & 0xFFFFFFFF)
    if combined >= 2**63:
        combined -= 2**64
    return combined


def is_safe_integer(value: int) -> bool:
    return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


class ValueCoercer:
    """Scalar coercion with a fixed policy for out-of-range integers."""

    def __init__(self, large_integer_mode: LargeIntegerMode = "string") -> None:
        if large_integer_mode not in ("string", "native"):
            raise ValueError(
                f'large_integer_mode must be "string" or "native", got "{large_integer_mode}"'
            )
        self.large_integer_mode = large_integer_mode

    def coerce(self, value: Any) -> Any:
        parts = _boxed_parts(value)
        if parts is not None:
            return self._coerce_int(unbox_integer(*parts))

        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return self._coerce_int(value)
        if isinstance(value, (list, tuple)):
            return [self.coerce(item) for item in value]
        # Maps and everything else pass through unchanged.
        return value

    def _coerce_int(self, value: int) -> Any:
        if is_safe_integer(value) or self.large_integer_mode == "native":
            return value
        logger.debug("Integer %d is outside the safe range; rendering it as a string", value)
        return str(value)
