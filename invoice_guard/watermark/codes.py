"""
Verification codes and per-invoice marker sets.

The code is a short base-36 token derived from the order id and the
generation time with a 32-bit polynomial string hash. It is a deterrent
against casual forgery, not a signature: anyone who knows this function
can mint valid-looking codes, which is why verification also cross-checks
the order store.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, Tuple

from .channels import CODE_PREFIX

SECRET = CODE_PREFIX
PATTERN_KEY = 0x5A5A

MIN_CODE_LENGTH = 6

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@dataclass(frozen=True)
class MarkerSet:
    code: str
    micro_text: str
    color_channel: Tuple[int, int, int]
    positional_offset: float


def _rolling_hash(data: str) -> int:
    """`h = h*31 + c` over the string, wrapped to a signed 32-bit int."""
    h = 0
    for ch in data:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 1 << 32
    return h


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_code(order_id: str, timestamp: int) -> str:
    """
    Derive the verification code for `order_id` generated at `timestamp`
    (milliseconds since the epoch).

    Deterministic for a given pair; a new timestamp gives a new code, so
    repeated invoices for the same order are never byte-identical.
    """
    data = f"{SECRET}-{order_id}-{timestamp}-{PATTERN_KEY}"
    code = _to_base36(abs(_rolling_hash(data)))
    return code.rjust(MIN_CODE_LENGTH, "0")


def build_markers(order_id: str, timestamp: int, code: Optional[str] = None) -> MarkerSet:
    """Turn one code into the artefacts the embedder writes."""
    if code is None:
        code = generate_code(order_id, timestamp)

    color_channel = (
        1 + timestamp % 3,
        1 + (timestamp >> 2) % 3,
        1 + (timestamp >> 4) % 3,
    )
    positional_offset = 0.001 * (timestamp % 100)

    return MarkerSet(
        code=code,
        micro_text=f"{CODE_PREFIX}{code}",
        color_channel=color_channel,
        positional_offset=positional_offset,
    )


def now_ms() -> int:
    return int(time.time() * 1000)


def new_marker_set(order_id: str, timestamp: Optional[int] = None) -> MarkerSet:
    """Fresh markers for one generation call, stamped with wall-clock time."""
    if timestamp is None:
        timestamp = now_ms()
    return build_markers(order_id, timestamp)
