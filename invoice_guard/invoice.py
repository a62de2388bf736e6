"""
Invoice generation entrypoint.

Draws the visible invoice, then embeds a fresh marker set on top of it and
returns the PDF bytes. Nothing is stored: the verification code exists
only inside the returned document.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .document.layout import draw_invoice
from .document.writer import DocumentWriter, ReportLabWriter
from .schemas import OrderSnapshot
from .watermark.codes import new_marker_set
from .watermark.embed import embed

logger = logging.getLogger(__name__)

Renderer = Callable[..., None]


def invoice_filename(order: OrderSnapshot) -> str:
    return f"ASIREX-Invoice-{order.id[:8].upper()}.pdf"


def generate_invoice(
    order: OrderSnapshot,
    render: Renderer = draw_invoice,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
    timestamp: Optional[int] = None,
    writer: Optional[DocumentWriter] = None,
) -> bytes:
    """
    Produce a marked invoice PDF for `order`.

    `render` draws the visible content and is called as
    `render(writer, order, customer_name=..., customer_email=...)`.
    `timestamp` (ms since the epoch) defaults to the current time; passing
    one makes the embedded code reproducible.
    """
    writer = writer or ReportLabWriter()
    markers = new_marker_set(order.id, timestamp)

    render(writer, order, customer_name=customer_name, customer_email=customer_email)
    placed = embed(writer, order, markers)

    logger.info(
        "generated invoice for order %s with code %s (%d channels)",
        order.id,
        markers.code,
        len(placed),
    )
    return writer.finish()
