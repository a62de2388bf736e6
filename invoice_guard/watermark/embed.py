"""
Marker embedding.

Writes one marker set into a document through four independent channels.
Each channel is placed on its own; if the writer refuses one, the others
are still written and the invoice just verifies with lower confidence
later.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from ..document.layout import DARK_BG, DIVIDER_Y, FOOTER_DOT
from ..document.writer import RGB, DocumentWriter
from ..schemas import OrderSnapshot
from .channels import (
    BRAND,
    FOOTER_TOKEN,
    INVISIBLE_TEXT,
    METADATA,
    METADATA_SENTINEL,
    MICRO_GEOMETRY,
    ORDER_TAG,
    VERIFY_SENTINEL,
    VERIFY_TAG,
)
from .codes import MarkerSet

logger = logging.getLogger(__name__)


def _metadata(writer: DocumentWriter, order: OrderSnapshot, markers: MarkerSet, background: RGB) -> None:
    writer.set_metadata("title", f"{BRAND} Invoice - {order.id[:8].upper()}")
    writer.set_metadata("subject", f"Order Invoice {order.id}")
    writer.set_metadata("author", f"{BRAND} Official")
    writer.set_metadata("keywords", f"{BRAND}, invoice, code {markers.code}")
    writer.set_metadata(
        "creator", f"{BRAND} Invoice Generator {VERIFY_SENTINEL} {METADATA_SENTINEL}"
    )


def _invisible_text(writer: DocumentWriter, order: OrderSnapshot, markers: MarkerSet, background: RGB) -> None:
    writer.set_font("Helvetica")
    writer.draw_text(
        20 + markers.positional_offset,
        30.1,
        markers.micro_text,
        color=markers.color_channel,
        size=1,
    )


def _footer_token(writer: DocumentWriter, order: OrderSnapshot, markers: MarkerSet, background: RGB) -> None:
    writer.set_font("Helvetica")
    writer.draw_text(
        105,
        296,
        f"{VERIFY_TAG}{markers.code} {ORDER_TAG}{order.id}",
        color=background,
        size=0.5,
        align="center",
    )


def _micro_geometry(writer: DocumentWriter, order: OrderSnapshot, markers: MarkerSet, background: RGB) -> None:
    y = DIVIDER_Y + 0.01
    for i in range(len(markers.code)):
        x = 20 + i * 2 + markers.positional_offset
        writer.draw_line(x, y, x + 0.1, y, color=background, width=0.01)

    # Sub-pixel dot, one step off the background.
    dot = tuple(min(255, c + 1) for c in background)
    writer.draw_circle(FOOTER_DOT[0], FOOTER_DOT[1], 0.3, fill=dot)


_CHANNEL_WRITERS: List[Tuple[str, Callable[..., None]]] = [
    (METADATA, _metadata),
    (INVISIBLE_TEXT, _invisible_text),
    (FOOTER_TOKEN, _footer_token),
    (MICRO_GEOMETRY, _micro_geometry),
]


def embed(
    writer: DocumentWriter,
    order: OrderSnapshot,
    markers: MarkerSet,
    background: RGB = DARK_BG,
) -> List[str]:
    """
    Write every marker channel into `writer`.

    Returns the names of the channels that were placed. Never raises: a
    channel the writer cannot place is logged and left out.
    """
    placed: List[str] = []
    for name, write_channel in _CHANNEL_WRITERS:
        try:
            write_channel(writer, order, markers, background)
        except Exception:
            logger.warning(
                "could not place %s channel for order %s", name, order.id, exc_info=True
            )
            continue
        placed.append(name)

    logger.debug("embedded channels %s for order %s", placed, order.id)
    return placed
