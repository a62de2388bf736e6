"""
FastAPI app for the invoice authenticity service.

Endpoints:
- GET /health
- POST /invoices
- POST /verify
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .config import HOST, ORDER_ROOT, PORT
from .invoice import generate_invoice, invoice_filename
from .log import configure_logging
from .registry.filesystem_store import FilesystemOrderStore
from .schemas import HealthResponse, OrderSnapshot, Verdict, VerificationResult
from .watermark.verify import unreadable_result, verify_document

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Invoice Authenticity Service",
    version="0.1.0",
    description="Generates watermarked order invoices and checks uploaded invoices for forgery.",
)

# Permissive CORS for the admin tool in dev; tighten this later if needed.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Attach the order store to app state for reuse.
app.state.orders = FilesystemOrderStore(ORDER_ROOT)


def _looks_like_pdf(content_type: Optional[str], data: bytes) -> bool:
    return "pdf" in (content_type or "").lower() or data.startswith(b"%PDF-")


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Simple health-check endpoint."""
    return HealthResponse(status="ok")


@app.post("/invoices", response_class=Response)
async def create_invoice(order: OrderSnapshot) -> Response:
    """Render a watermarked invoice PDF for `order`."""
    # reportlab rendering is blocking.
    pdf = await run_in_threadpool(generate_invoice, order)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{invoice_filename(order)}"'},
    )


@app.post("/verify", response_model=VerificationResult)
async def verify(file: UploadFile = File(...)) -> VerificationResult:
    """
    Check an uploaded invoice for the hidden verification markers.

    Always answers 200: unreadable uploads, non-PDF files and forgeries
    are all reported in the `VerificationResult` body rather than as
    HTTP errors.
    """
    store: FilesystemOrderStore = app.state.orders

    try:
        data = await file.read()
    except OSError:
        logger.warning("could not read upload %s", file.filename, exc_info=True)
        return unreadable_result()

    if not _looks_like_pdf(file.content_type, data):
        return VerificationResult(
            is_valid=False,
            confidence=0,
            verdict=Verdict.FAKE,
            message="Invalid file type. Please upload a PDF invoice.",
        )

    # Extraction and the order lookup are blocking.
    return await run_in_threadpool(verify_document, data, store.find_order)


def run() -> None:
    """
    Convenience entrypoint if you want to run via:

        python -m invoice_guard.main

    or via the `invoice-guard` console_script defined in pyproject.toml.
    """
    import uvicorn

    configure_logging()
    uvicorn.run(
        "invoice_guard.main:app",
        host=HOST,
        port=PORT,
        reload=False,
    )


if __name__ == "__main__":
    run()
