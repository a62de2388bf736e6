import pytest

from conftest import ORDER_ID, TIMESTAMP, RecordingWriter

from invoice_guard.document.layout import DARK_BG, DIVIDER_Y
from invoice_guard.watermark.channels import EMBEDDED_SIGNATURES, EMBEDDED_WEIGHTS
from invoice_guard.watermark.codes import build_markers
from invoice_guard.watermark.embed import (
    _CHANNEL_WRITERS,
    FOOTER_TOKEN,
    INVISIBLE_TEXT,
    METADATA,
    MICRO_GEOMETRY,
    embed,
)
from invoice_guard.watermark.extract import extract


def _written_text(writer: RecordingWriter) -> bytes:
    parts = list(writer.metadata.values()) + [t[2] for t in writer.texts]
    return "\n".join(parts).encode("latin-1")


def test_embed_writes_all_four_channels(order):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP)

    placed = embed(writer, order, markers)

    assert placed == [METADATA, INVISIBLE_TEXT, FOOTER_TOKEN, MICRO_GEOMETRY]

    assert writer.metadata["subject"] == f"Order Invoice {ORDER_ID}"
    assert writer.metadata["title"] == "ASIREX Invoice - A1B2C3D4"
    assert markers.code in writer.metadata["keywords"]
    assert "%%ASIREX%%" in writer.metadata["creator"]
    assert "/ASIREX_VERIFIED" in writer.metadata["creator"]


def test_metadata_carries_only_the_sentinels(order):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP)

    embed(writer, order, markers)

    fields = " ".join(writer.metadata.values())
    assert markers.micro_text not in fields
    assert "ASIREX-VERIFY-" not in fields
    assert "Order-ID-" not in fields


@pytest.mark.parametrize("name,write_channel", _CHANNEL_WRITERS)
def test_each_signature_comes_from_one_channel(order, name, write_channel):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP)

    write_channel(writer, order, markers, DARK_BG)

    found = extract(_written_text(writer)).found_channels
    assert found == frozenset(EMBEDDED_SIGNATURES[name])


def test_embedded_weights_cover_the_score():
    assert sum(EMBEDDED_WEIGHTS.values()) == 100
    assert EMBEDDED_WEIGHTS[MICRO_GEOMETRY] == 0
    assert {name for name, _ in _CHANNEL_WRITERS} == set(EMBEDDED_SIGNATURES)


def test_invisible_text_uses_marker_colour_and_offset(order):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP + 37)

    embed(writer, order, markers)

    x, y, text, color, size = writer.texts[0]
    assert text == markers.micro_text
    assert color == markers.color_channel
    assert color != DARK_BG
    assert abs(x - (20 + markers.positional_offset)) < 1e-9
    assert size <= 1


def test_footer_token_is_background_coloured(order):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP)

    embed(writer, order, markers)

    footer = [t for t in writer.texts if t[2].startswith("ASIREX-VERIFY-")]
    assert len(footer) == 1
    _, _, text, color, size = footer[0]
    assert text == f"ASIREX-VERIFY-{markers.code} Order-ID-{ORDER_ID}"
    assert color == DARK_BG
    assert size < 1


def test_micro_geometry_draws_one_hairline_per_code_char(order):
    writer = RecordingWriter()
    markers = build_markers(order.id, TIMESTAMP)

    embed(writer, order, markers)

    assert len(writer.lines) == len(markers.code)
    for x1, y1, x2, y2, color, width in writer.lines:
        assert abs(y1 - DIVIDER_Y) < 0.1
        assert x2 - x1 < 0.2
        assert width <= 0.01
    assert len(writer.circles) == 1


def test_failed_channel_is_skipped_not_raised(order):
    writer = RecordingWriter(fail_on={"draw_line"})
    markers = build_markers(order.id, TIMESTAMP)

    placed = embed(writer, order, markers)

    assert MICRO_GEOMETRY not in placed
    assert placed == [METADATA, INVISIBLE_TEXT, FOOTER_TOKEN]
    assert writer.metadata


def test_writer_without_text_keeps_metadata_and_geometry(order):
    writer = RecordingWriter(fail_on={"draw_text"})
    markers = build_markers(order.id, TIMESTAMP)

    placed = embed(writer, order, markers)

    assert placed == [METADATA, MICRO_GEOMETRY]
