"""
Invoice verification logic.

Pipeline for one uploaded document:

- read the raw bytes (an unreadable upload is a zero-confidence result);
- extract every channel signature (see `extract.py`);
- score the channels that were found with the fixed channel weights;
- decide: below the validity threshold the invoice is fake; above it, a
  recovered order id is cross-checked against the order store, and an id
  that does not exist there marks the invoice as suspicious.

Nothing in here raises to the caller. Every failure ends up as a
`VerificationResult`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from ..errors import OrderStoreUnavailable, UnreadableDocument
from ..registry.filesystem_store import FilesystemOrderStore
from ..schemas import VALIDITY_THRESHOLD, OrderSummary, Verdict, VerificationResult
from .channels import BRAND, CHANNEL_WEIGHTS
from .extract import DocumentSource, Extraction, extract, read_document

logger = logging.getLogger(__name__)

ORPHAN_CONFIDENCE_CAP = 30
MAX_CONFIDENCE = 100

OrderLookup = Callable[[str], Optional[OrderSummary]]


def score(found_channels: Iterable[str]) -> int:
    """Weighted sum of the channels found, capped at 100."""
    total = sum(CHANNEL_WEIGHTS.get(name, 0) for name in set(found_channels))
    return min(total, MAX_CONFIDENCE)


def _fake(extraction: Extraction, confidence: int) -> VerificationResult:
    return VerificationResult(
        is_valid=False,
        order_id=extraction.order_id,
        verification_code=extraction.code,
        confidence=confidence,
        verdict=Verdict.FAKE,
        message=(
            f"Invoice detected as FAKE - Missing official {BRAND} verification "
            f"markers ({confidence}% match)"
        ),
    )


def _inconclusive(extraction: Extraction, confidence: int) -> VerificationResult:
    return VerificationResult(
        is_valid=False,
        order_id=extraction.order_id,
        verification_code=extraction.code,
        confidence=confidence,
        verdict=Verdict.INCONCLUSIVE,
        message=(
            f"Verification markers found ({confidence}% match) but the order "
            "could not be checked against our database - INCONCLUSIVE"
        ),
    )


def decide(
    confidence: int,
    extraction: Extraction,
    lookup: OrderLookup,
) -> VerificationResult:
    """
    Turn a score and the extracted markers into a verdict.

    `lookup` is only called when the score clears the validity threshold
    and an order id was recovered. An order id that is not in the store
    caps the confidence at 30; a store that cannot be queried leaves the
    confidence alone but withholds the confirmation.
    """
    if confidence < VALIDITY_THRESHOLD:
        return _fake(extraction, confidence)

    if extraction.order_id is None:
        return VerificationResult(
            is_valid=True,
            verification_code=extraction.code,
            confidence=confidence,
            verdict=Verdict.AUTHENTIC,
            message=(
                f"Invoice verified as AUTHENTIC with {confidence}% confidence "
                "(no order reference to cross-check)"
            ),
        )

    try:
        order = lookup(extraction.order_id)
    except OrderStoreUnavailable as exc:
        logger.warning("order store unavailable while checking %s: %s", extraction.order_id, exc)
        return _inconclusive(extraction, confidence)
    except Exception:
        logger.exception("order lookup failed for %s", extraction.order_id)
        return _inconclusive(extraction, confidence)

    if order is None:
        logger.warning(
            "orphan marker: order %s (code %s) does not exist",
            extraction.order_id,
            extraction.code,
        )
        return VerificationResult(
            is_valid=False,
            order_id=extraction.order_id,
            verification_code=extraction.code,
            confidence=min(confidence, ORPHAN_CONFIDENCE_CAP),
            verdict=Verdict.SUSPICIOUS,
            message="Order ID found in invoice but does not exist in our database - SUSPICIOUS",
        )

    return VerificationResult(
        is_valid=True,
        order_id=extraction.order_id,
        verification_code=extraction.code,
        confidence=confidence,
        verdict=Verdict.AUTHENTIC,
        order_details=order,
        message=f"Invoice verified as AUTHENTIC with {confidence}% confidence",
    )


def unreadable_result() -> VerificationResult:
    return VerificationResult(
        is_valid=False,
        confidence=0,
        verdict=Verdict.UNREADABLE,
        message="Error reading file - Unable to verify",
    )


def _default_lookup() -> OrderLookup:
    return FilesystemOrderStore().find_order


def verify_document(
    source: DocumentSource,
    lookup: Optional[OrderLookup] = None,
) -> VerificationResult:
    """
    Verify one submitted document end to end.

    `lookup` resolves an order id to its summary (or None). It defaults to
    the filesystem order store rooted at `ORDER_ROOT`.
    """
    start = time.perf_counter()

    try:
        raw = read_document(source)
        extraction = extract(raw)
        confidence = score(extraction.found_channels)
        result = decide(confidence, extraction, lookup or _default_lookup())
    except UnreadableDocument as exc:
        logger.warning("unreadable document: %s", exc)
        result = unreadable_result()
    except Exception:
        logger.exception("verification failed unexpectedly")
        result = VerificationResult(
            is_valid=False,
            confidence=0,
            verdict=Verdict.INCONCLUSIVE,
            message="Error verifying invoice. Please try again.",
        )

    latency_ms = int((time.perf_counter() - start) * 1000)
    result.latency_ms = latency_ms

    logger.info(
        "verdict %s (confidence %d, order %s) in %d ms",
        result.verdict.value,
        result.confidence,
        result.order_id,
        latency_ms,
    )
    return result
