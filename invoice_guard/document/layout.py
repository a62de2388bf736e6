"""
Visible invoice layout.

Draws the human-readable part of the invoice (header, addresses, item
table, totals, footer) through a `DocumentWriter`. Nothing in here carries
verification markers; the marker embedder only needs `DARK_BG`,
`DIVIDER_Y` and `FOOTER_DOT` to hide its channels in the right places.
"""

from __future__ import annotations

from typing import Optional

from ..schemas import OrderSnapshot
from .writer import PAGE_HEIGHT_MM, PAGE_WIDTH_MM, RGB, DocumentWriter

PRIMARY: RGB = (0, 212, 255)
ACCENT: RGB = (0, 255, 178)
DARK_BG: RGB = (10, 12, 16)
TEXT: RGB = (230, 235, 240)
MUTED: RGB = (120, 130, 150)
WARNING: RGB = (255, 180, 0)
PANEL: RGB = (15, 20, 30)

DIVIDER_Y = 70.0
FOOTER_Y = 260.0
FOOTER_DOT = (105.0, 290.0)

MAX_ITEM_NAME = 35

_PAYMENT_METHODS = {
    "cod": "Cash on Delivery",
    "upi": "UPI Payment",
    "razorpay": "Online Payment",
}

_STATUS_COLORS = {
    "delivered": ACCENT,
    "shipped": (0, 150, 255),
    "processing": WARNING,
}


def money(amount: float) -> str:
    return f"Rs. {amount:,.2f}"


def payment_method_label(method: str) -> str:
    return _PAYMENT_METHODS.get(method, method.upper())


def _header(writer: DocumentWriter, order: OrderSnapshot) -> None:
    writer.draw_rect(0, 0, PAGE_WIDTH_MM, PAGE_HEIGHT_MM, fill=DARK_BG)

    # Header gradient, simulated with stacked bands.
    for i in range(15):
        writer.draw_rect(0, i * 2, PAGE_WIDTH_MM, 2, fill=(0, max(0, 212 - i * 14), 255))

    writer.set_font("Helvetica", bold=True)
    writer.draw_text(20, 30, "ASIREX", PRIMARY, 32)
    writer.set_font("Helvetica")
    writer.draw_text(20, 38, "Premium Tech Solutions", MUTED, 10)

    writer.set_font("Helvetica", bold=True)
    writer.draw_text(150, 30, "INVOICE", TEXT, 24)

    writer.draw_rect(130, 35, 60, 25, stroke=PRIMARY, radius=3, width=0.5)
    writer.set_font("Helvetica")
    writer.draw_text(135, 43, "Invoice No:", MUTED, 9)
    writer.draw_text(135, 50, "Date:", MUTED, 9)
    writer.draw_text(135, 57, "Status:", MUTED, 9)

    writer.set_font("Helvetica", bold=True)
    writer.draw_text(160, 43, f"#{order.id[:8].upper()}", TEXT, 9)
    writer.draw_text(160, 50, order.created_at.strftime("%d %b %Y"), TEXT, 9)
    if order.payment_status == "paid":
        writer.draw_text(160, 57, "PAID", ACCENT, 9)
    else:
        writer.draw_text(160, 57, "PENDING", WARNING, 9)

    writer.draw_line(20, DIVIDER_Y, 190, DIVIDER_Y, PRIMARY, width=1)


def _addresses(
    writer: DocumentWriter,
    order: OrderSnapshot,
    customer_name: Optional[str],
    customer_email: Optional[str],
) -> None:
    writer.set_font("Helvetica", bold=True)
    writer.draw_text(20, 82, "BILL TO", PRIMARY, 11)
    writer.draw_text(110, 82, "SHIP TO", PRIMARY, 11)

    writer.set_font("Helvetica")
    writer.draw_text(20, 90, customer_name or order.customer_name or "Valued Customer", TEXT, 10)

    y = 96
    email = customer_email or order.customer_email
    if email:
        writer.draw_text(20, y, email, MUTED, 10)
        y += 6
    if order.customer_phone:
        writer.draw_text(20, y, f"Phone: {order.customer_phone}", MUTED, 10)

    lines = [line.strip() for line in order.shipping_address.split(",") if line.strip()]
    for i, line in enumerate(lines[:4]):
        writer.draw_text(110, 90 + i * 6, line, TEXT, 10)


def _items(writer: DocumentWriter, order: OrderSnapshot) -> float:
    table_top = 125
    writer.draw_rect(20, table_top, 170, 12, fill=(20, 25, 35), radius=2)

    writer.set_font("Helvetica", bold=True)
    for x, label in ((25, "ITEM"), (120, "QTY"), (140, "PRICE"), (165, "TOTAL")):
        writer.draw_text(x, table_top + 8, label, PRIMARY, 10)

    writer.set_font("Helvetica")
    y = table_top + 20
    for index, item in enumerate(order.items):
        if index % 2 == 0:
            writer.draw_rect(20, y - 5, 170, 12, fill=PANEL)

        name = item.name
        if len(name) > MAX_ITEM_NAME:
            name = name[:MAX_ITEM_NAME] + "..."
        writer.draw_text(25, y + 2, name, TEXT, 10)
        writer.draw_text(120, y + 2, str(item.quantity), MUTED, 10)
        writer.draw_text(140, y + 2, money(item.price), MUTED, 10)
        writer.draw_text(165, y + 2, money(item.price * item.quantity), TEXT, 10)
        y += 12

    return y


def _totals(writer: DocumentWriter, order: OrderSnapshot, items_end: float) -> None:
    y = items_end + 15
    writer.draw_line(100, y - 5, 190, y - 5, (30, 35, 45))

    writer.set_font("Helvetica")
    writer.draw_text(120, y + 5, "Subtotal:", MUTED, 10)
    writer.draw_text(165, y + 5, money(order.total_amount), TEXT, 10)
    writer.draw_text(120, y + 13, "Shipping:", MUTED, 10)
    writer.draw_text(165, y + 13, "FREE", ACCENT, 10)
    writer.draw_text(120, y + 21, "Tax (Incl.):", MUTED, 10)
    writer.draw_text(165, y + 21, "Included", TEXT, 10)

    writer.draw_line(115, y + 26, 190, y + 26, PRIMARY)
    writer.set_font("Helvetica", bold=True)
    writer.draw_text(120, y + 36, "TOTAL:", PRIMARY, 14)
    writer.draw_text(160, y + 36, money(order.total_amount), PRIMARY, 14)

    # Payment and status panels.
    panel_y = y + 50
    writer.draw_rect(20, panel_y, 80, 25, fill=PANEL, radius=3)
    writer.draw_rect(110, panel_y, 80, 25, fill=PANEL, radius=3)

    writer.set_font("Helvetica")
    writer.draw_text(25, panel_y + 10, "Payment Method", MUTED, 9)
    writer.draw_text(115, panel_y + 10, "Order Status", MUTED, 9)

    writer.set_font("Helvetica", bold=True)
    writer.draw_text(25, panel_y + 19, payment_method_label(order.payment_method), TEXT, 11)
    status_color = _STATUS_COLORS.get(order.order_status, MUTED)
    writer.draw_text(115, panel_y + 19, order.order_status.upper(), status_color, 11)


def _footer(writer: DocumentWriter) -> None:
    writer.draw_line(20, FOOTER_Y, 190, FOOTER_Y, (30, 35, 45))

    writer.set_font("Helvetica", bold=True)
    writer.draw_text(105, FOOTER_Y + 12, "Thank you for shopping with ASIREX!", PRIMARY, 12, align="center")
    writer.set_font("Helvetica")
    writer.draw_text(105, FOOTER_Y + 20, "For support, contact us at support@asirex.com", MUTED, 9, align="center")
    writer.draw_text(105, FOOTER_Y + 26, "www.asirex.com", MUTED, 9, align="center")


def draw_invoice(
    writer: DocumentWriter,
    order: OrderSnapshot,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
) -> None:
    """Draw the visible invoice for `order`."""
    _header(writer, order)
    _addresses(writer, order, customer_name, customer_email)
    items_end = _items(writer, order)
    _totals(writer, order, items_end)
    _footer(writer)
