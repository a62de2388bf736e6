from conftest import ORDER_ID, TIMESTAMP, RecordingWriter, make_order

from invoice_guard.document.layout import money, payment_method_label
from invoice_guard.invoice import generate_invoice, invoice_filename
from invoice_guard.watermark.codes import generate_code


def test_generate_invoice_is_uncompressed_pdf(order):
    pdf = generate_invoice(order, timestamp=TIMESTAMP)

    assert pdf.startswith(b"%PDF-")
    assert b"FlateDecode" not in pdf
    code = generate_code(ORDER_ID, TIMESTAMP).encode("ascii")
    assert b"ASX" + code in pdf
    assert b"ASIREX-VERIFY-" + code in pdf
    assert f"Order-ID-{ORDER_ID}".encode("ascii") in pdf


def test_generate_invoice_with_custom_renderer(order):
    calls = []

    def render(writer, order, customer_name=None, customer_email=None):
        calls.append((order.id, customer_name, customer_email))

    writer = RecordingWriter()
    generate_invoice(
        order,
        render=render,
        customer_name="Someone",
        customer_email="someone@example.com",
        timestamp=TIMESTAMP,
        writer=writer,
    )

    assert calls == [(ORDER_ID, "Someone", "someone@example.com")]
    assert writer.metadata["subject"].endswith(ORDER_ID)


def test_layout_draws_items_and_totals(order):
    writer = RecordingWriter()
    generate_invoice(order, timestamp=TIMESTAMP, writer=writer)

    texts = [t[2] for t in writer.texts]
    assert "Wireless Earbuds Pro" in texts
    assert money(order.total_amount) in texts
    assert "UPI Payment" in texts
    assert "SHIPPED" in texts
    assert "#A1B2C3D4" in texts


def test_long_item_names_are_truncated():
    order = make_order()
    order.items[0].name = "X" * 80
    writer = RecordingWriter()
    generate_invoice(order, timestamp=TIMESTAMP, writer=writer)

    assert "X" * 35 + "..." in [t[2] for t in writer.texts]


def test_helpers():
    assert invoice_filename(make_order()) == "ASIREX-Invoice-A1B2C3D4.pdf"
    assert money(1999) == "Rs. 1,999.00"
    assert payment_method_label("cod") == "Cash on Delivery"
    assert payment_method_label("netbanking") == "NETBANKING"
