"""
Marker literals and the channel signature table.

The embedder writes these literals into a document; the extractor looks
for them again. Each detectable signature carries a fixed weight, and the
weights add up to exactly 100 so the composite score reads as a
percentage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple

BRAND = "ASIREX"

CODE_PREFIX = "ASX"
ORDER_TAG = "Order-ID-"
VERIFY_TAG = f"{BRAND}-VERIFY-"
VERIFY_SENTINEL = f"%%{BRAND}%%"
METADATA_SENTINEL = f"/{BRAND}_VERIFIED"


@dataclass(frozen=True)
class Channel:
    name: str
    pattern: Pattern[str]
    weight: int


METADATA_SENTINEL_CHANNEL = "metadata_sentinel"
VERIFY_SENTINEL_CHANNEL = "verify_sentinel"
INVISIBLE_CODE_CHANNEL = "invisible_code"
ORDER_IDENTIFIER_CHANNEL = "order_identifier"
VERIFY_CODE_CHANNEL = "verify_code"

CHANNELS: Tuple[Channel, ...] = (
    Channel(METADATA_SENTINEL_CHANNEL, re.compile(re.escape(METADATA_SENTINEL)), 30),
    Channel(VERIFY_SENTINEL_CHANNEL, re.compile(re.escape(VERIFY_SENTINEL)), 25),
    Channel(INVISIBLE_CODE_CHANNEL, re.compile(CODE_PREFIX + r"([A-Z0-9]{6,12})"), 20),
    Channel(
        ORDER_IDENTIFIER_CHANNEL,
        # Ids run from 36 (uuid) to 64 characters and must end at a word edge.
        re.compile(
            re.escape(ORDER_TAG) + r"([a-f0-9-]{36,64})(?![A-Za-z0-9-])", re.IGNORECASE
        ),
        15,
    ),
    Channel(VERIFY_CODE_CHANNEL, re.compile(re.escape(VERIFY_TAG) + r"([A-Z0-9]+)"), 10),
)

CHANNEL_WEIGHTS = {channel.name: channel.weight for channel in CHANNELS}

# Embedded channels and the scored signatures each one carries. No signature
# is written by more than one channel, so losing a channel costs exactly
# the weight of its signatures. Micro-geometry carries no searchable text
# and weighs 0.
METADATA = "metadata"
INVISIBLE_TEXT = "invisible_text"
FOOTER_TOKEN = "footer_token"
MICRO_GEOMETRY = "micro_geometry"

EMBEDDED_SIGNATURES: Dict[str, Tuple[str, ...]] = {
    METADATA: (METADATA_SENTINEL_CHANNEL, VERIFY_SENTINEL_CHANNEL),
    INVISIBLE_TEXT: (INVISIBLE_CODE_CHANNEL,),
    FOOTER_TOKEN: (VERIFY_CODE_CHANNEL, ORDER_IDENTIFIER_CHANNEL),
    MICRO_GEOMETRY: (),
}

EMBEDDED_WEIGHTS = {
    name: sum(CHANNEL_WEIGHTS[sig] for sig in signatures)
    for name, signatures in EMBEDDED_SIGNATURES.items()
}
