"""
Document-writer capability.

Marker embedding and invoice layout both draw through `DocumentWriter`
rather than through reportlab directly. Coordinates are millimetres from
the top-left corner of an A4 page; colours are 0-255 RGB triples.
"""

from __future__ import annotations

import io
from typing import Optional, Protocol, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

RGB = Tuple[int, int, int]

PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0


class DocumentWriter(Protocol):
    def set_metadata(self, key: str, value: str) -> None: ...

    def set_font(self, name: str = "Helvetica", bold: bool = False) -> None: ...

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGB,
        size: float,
        align: str = "left",
    ) -> None: ...

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: RGB,
        width: float = 0.2,
    ) -> None: ...

    def draw_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        radius: float = 0.0,
        width: float = 0.2,
    ) -> None: ...

    def draw_circle(self, x: float, y: float, r: float, fill: RGB) -> None: ...

    def finish(self) -> bytes: ...


def _unit(color: RGB) -> Tuple[float, float, float]:
    r, g, b = color
    return r / 255.0, g / 255.0, b / 255.0


class ReportLabWriter:
    """
    `DocumentWriter` on top of a single-page reportlab canvas.

    Page compression is switched off: content streams and the info
    dictionary stay plain text, which is what the extractor scans.
    """

    _METADATA_SETTERS = {
        "title": "setTitle",
        "subject": "setSubject",
        "author": "setAuthor",
        "keywords": "setKeywords",
        "creator": "setCreator",
        "producer": "setProducer",
    }

    def __init__(self) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4, pageCompression=0)
        self._font = "Helvetica"
        self._finished = False

    def _x(self, x: float) -> float:
        return x * mm

    def _y(self, y: float) -> float:
        # reportlab measures from the bottom edge.
        return (PAGE_HEIGHT_MM - y) * mm

    def set_metadata(self, key: str, value: str) -> None:
        setter = self._METADATA_SETTERS.get(key.lower())
        if setter is None:
            raise ValueError(f"unsupported metadata field: {key!r}")
        getattr(self._canvas, setter)(value)

    def set_font(self, name: str = "Helvetica", bold: bool = False) -> None:
        self._font = f"{name}-Bold" if bold else name

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGB,
        size: float,
        align: str = "left",
    ) -> None:
        c = self._canvas
        c.setFont(self._font, size)
        c.setFillColorRGB(*_unit(color))
        if align == "center":
            c.drawCentredString(self._x(x), self._y(y), text)
        elif align == "right":
            c.drawRightString(self._x(x), self._y(y), text)
        else:
            c.drawString(self._x(x), self._y(y), text)

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: RGB,
        width: float = 0.2,
    ) -> None:
        c = self._canvas
        c.setStrokeColorRGB(*_unit(color))
        c.setLineWidth(width * mm)
        c.line(self._x(x1), self._y(y1), self._x(x2), self._y(y2))

    def draw_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        radius: float = 0.0,
        width: float = 0.2,
    ) -> None:
        c = self._canvas
        if fill is not None:
            c.setFillColorRGB(*_unit(fill))
        if stroke is not None:
            c.setStrokeColorRGB(*_unit(stroke))
            c.setLineWidth(width * mm)
        # Top-left y becomes the bottom edge of the box.
        args = (self._x(x), self._y(y + h), w * mm, h * mm)
        flags = dict(stroke=int(stroke is not None), fill=int(fill is not None))
        if radius:
            c.roundRect(*args, radius * mm, **flags)
        else:
            c.rect(*args, **flags)

    def draw_circle(self, x: float, y: float, r: float, fill: RGB) -> None:
        c = self._canvas
        c.setFillColorRGB(*_unit(fill))
        c.circle(self._x(x), self._y(y), r * mm, stroke=0, fill=1)

    def finish(self) -> bytes:
        """Close the page and return the PDF bytes. Idempotent."""
        if not self._finished:
            self._canvas.showPage()
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()
