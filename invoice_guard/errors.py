"""
Exceptions raised inside the package.

None of these escape `verify_document` or the HTTP layer; they are turned
into `VerificationResult` values there.
"""

from __future__ import annotations


class InvoiceGuardError(Exception):
    """Base class for invoice-guard errors."""


class UnreadableDocument(InvoiceGuardError):
    """The submitted document could not be read into memory."""


class OrderStoreUnavailable(InvoiceGuardError):
    """The order store could not be queried (missing root, corrupt record)."""
