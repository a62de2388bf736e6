import json
from datetime import datetime
from pathlib import Path

import pytest

from invoice_guard.registry.filesystem_store import FilesystemOrderStore
from invoice_guard.schemas import OrderItem, OrderSnapshot

ORDER_ID = "a1b2c3d4-5e6f-4a7b-8c9d-0e1f2a3b4c5d"
TIMESTAMP = 1700000000000


def make_order(order_id: str = ORDER_ID) -> OrderSnapshot:
    return OrderSnapshot(
        id=order_id,
        created_at=datetime(2024, 3, 14, 10, 30),
        order_status="shipped",
        payment_status="paid",
        payment_method="upi",
        total_amount=2497.0,
        items=[
            OrderItem(id="item-1", name="Wireless Earbuds Pro", price=1999.0, quantity=1),
            OrderItem(id="item-2", name="USB-C Cable", price=249.0, quantity=2),
        ],
        shipping_address="12 MG Road, Indiranagar, Bengaluru, Karnataka 560038",
        customer_phone="+91 98765 43210",
        customer_name="Test Customer",
    )


def write_order_record(root: Path, order: OrderSnapshot) -> Path:
    path = root / f"{order.id}.json"
    path.write_text(
        json.dumps(
            {
                "id": order.id,
                "created_at": order.created_at.isoformat(),
                "total_amount": order.total_amount,
                "customer_name": order.customer_name,
                "order_status": order.order_status,
            }
        ),
        encoding="utf-8",
    )
    return path


class RecordingWriter:
    """In-memory DocumentWriter that records every call."""

    def __init__(self, fail_on=()):
        self.metadata = {}
        self.texts = []
        self.lines = []
        self.rects = []
        self.circles = []
        self._fail_on = set(fail_on)

    def _check(self, op):
        if op in self._fail_on:
            raise RuntimeError(f"{op} not supported")

    def set_metadata(self, key, value):
        self._check("set_metadata")
        self.metadata[key] = value

    def set_font(self, name="Helvetica", bold=False):
        pass

    def draw_text(self, x, y, text, color, size, align="left"):
        self._check("draw_text")
        self.texts.append((x, y, text, color, size))

    def draw_line(self, x1, y1, x2, y2, color, width=0.2):
        self._check("draw_line")
        self.lines.append((x1, y1, x2, y2, color, width))

    def draw_rect(self, x, y, w, h, fill=None, stroke=None, radius=0.0, width=0.2):
        self.rects.append((x, y, w, h))

    def draw_circle(self, x, y, r, fill):
        self._check("draw_circle")
        self.circles.append((x, y, r, fill))

    def finish(self):
        return b""


@pytest.fixture
def order() -> OrderSnapshot:
    return make_order()


@pytest.fixture
def order_store(tmp_path: Path, order: OrderSnapshot) -> FilesystemOrderStore:
    root = tmp_path / "orders"
    root.mkdir()
    write_order_record(root, order)
    return FilesystemOrderStore(root=root)
