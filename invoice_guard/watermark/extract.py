"""
Marker extraction from untrusted documents.

The document is never parsed as a PDF. Its raw bytes are decoded as
latin-1, which maps every byte to one character, and each channel
signature from the channel table is searched for in that text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, FrozenSet, Optional, Union

from ..errors import UnreadableDocument
from .channels import (
    CHANNELS,
    INVISIBLE_CODE_CHANNEL,
    ORDER_IDENTIFIER_CHANNEL,
    VERIFY_CODE_CHANNEL,
)

logger = logging.getLogger(__name__)

DocumentSource = Union[bytes, bytearray, memoryview, str, Path, BinaryIO]


@dataclass(frozen=True)
class Extraction:
    found_channels: FrozenSet[str]
    order_id: Optional[str] = None
    code: Optional[str] = None


def read_document(source: DocumentSource) -> bytes:
    """
    Load raw document bytes from memory, a path, or a binary file object.

    Raises `UnreadableDocument` on any I/O failure.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    try:
        if isinstance(source, (str, Path)):
            return Path(source).read_bytes()
        data = source.read()
    except (OSError, ValueError) as exc:
        raise UnreadableDocument(f"could not read document: {exc}") from exc

    if not isinstance(data, (bytes, bytearray)):
        raise UnreadableDocument(f"expected bytes, got {type(data).__name__}")
    return bytes(data)


def extract(raw: bytes) -> Extraction:
    """Search `raw` for every channel signature."""
    text = raw.decode("latin-1")

    found = set()
    first_match = {}
    for channel in CHANNELS:
        match = channel.pattern.search(text)
        if match is None:
            continue
        found.add(channel.name)
        if match.groups():
            first_match[channel.name] = match.group(1)
        logger.debug("channel %s matched at offset %d", channel.name, match.start())

    order_id = first_match.get(ORDER_IDENTIFIER_CHANNEL)
    if order_id is not None:
        order_id = order_id.lower()

    code = first_match.get(INVISIBLE_CODE_CHANNEL) or first_match.get(VERIFY_CODE_CHANNEL)

    return Extraction(found_channels=frozenset(found), order_id=order_id, code=code)
