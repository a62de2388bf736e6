"""
Configuration helpers for the invoice verification service.

Everything here is read once from environment variables at import time:
where the order store lives on disk, the log level, and the host/port the
`invoice-guard` console script binds to.
"""

from __future__ import annotations

import os
from pathlib import Path

# Root directory of the read-only order store.
# Each order is expected to live at `<ORDER_ROOT>/<order_id>.json`.
ORDER_ROOT: Path = Path(os.environ.get("INVOICE_GUARD_ORDER_ROOT", "orders")).resolve()

LOG_LEVEL: str = os.environ.get("INVOICE_GUARD_LOG_LEVEL", "INFO").upper()

HOST: str = os.environ.get("INVOICE_GUARD_HOST", "0.0.0.0")
PORT: int = int(os.environ.get("INVOICE_GUARD_PORT", "8080"))
