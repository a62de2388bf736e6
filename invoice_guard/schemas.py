"""
Pydantic schemas used by the FastAPI app and the verification pipeline.

`OrderSnapshot` is what the shop hands us when an invoice is produced;
`OrderSummary` is what the order store returns during a cross-check;
`VerificationResult` is the verdict returned for an uploaded document.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

VALIDITY_THRESHOLD = 50


class OrderItem(BaseModel):
    """One line of the invoice's item table."""

    id: str
    name: str
    price: float
    quantity: int = 1
    image_url: Optional[str] = None


class OrderSnapshot(BaseModel):
    """
    Order as seen at invoice-creation time.

    Only `id` feeds the verification markers; everything else is visible
    invoice content.
    """

    id: str
    created_at: datetime
    order_status: str = "processing"
    payment_status: str = "pending"
    payment_method: str = "cod"
    total_amount: float
    items: List[OrderItem] = Field(default_factory=list)
    shipping_address: str = ""
    tracking_number: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None


class OrderSummary(BaseModel):
    """Order record returned by the order store for display next to a verdict."""

    id: str
    created_at: datetime
    total_amount: float
    customer_name: Optional[str] = None
    order_status: str


class Verdict(str, Enum):
    AUTHENTIC = "authentic"
    FAKE = "fake"
    SUSPICIOUS = "suspicious"
    INCONCLUSIVE = "inconclusive"
    UNREADABLE = "unreadable"


class VerificationResult(BaseModel):
    """
    Response payload for POST /verify.

    - is_valid: overall authenticity verdict
    - order_id: identifier recovered from the document, if any
    - verification_code: code recovered from the document, if any
    - confidence: weighted marker score, 0-100
    - message: human-readable explanation
    - verdict: authentic / fake / suspicious / inconclusive / unreadable
    - order_details: order store record, only set once the id is confirmed
    - latency_ms: end-to-end verification latency in milliseconds
    """

    is_valid: bool
    order_id: Optional[str] = None
    verification_code: Optional[str] = None
    confidence: int = Field(ge=0, le=100)
    message: str
    verdict: Verdict
    order_details: Optional[OrderSummary] = None
    latency_ms: Optional[int] = None

    @model_validator(mode="after")
    def _valid_needs_confidence(self) -> "VerificationResult":
        if self.is_valid and self.confidence < VALIDITY_THRESHOLD:
            raise ValueError(
                f"a valid result needs confidence >= {VALIDITY_THRESHOLD}, got {self.confidence}"
            )
        return self


class HealthResponse(BaseModel):
    """Simple health check response."""

    status: str
