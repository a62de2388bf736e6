"""
Simple filesystem-backed order store.

Each order record is expected to live at:

    <ORDER_ROOT>/<order_id>.json

where `order_id` is the lower-case identifier recovered from an invoice.
The store is read-only from this service's point of view; records are
written by the shop itself.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import ORDER_ROOT
from ..errors import OrderStoreUnavailable
from ..schemas import OrderSummary

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9-]{1,64}$")


class FilesystemOrderStore:
    """Looks up order summaries by identifier in a directory of JSON files."""

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or ORDER_ROOT

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, order_id: str) -> Path:
        """
        Resolve an order identifier into a record path.

        Identifiers are normalised to lower-case; anything that is not a
        plain alphanumeric/hyphen token is rejected so a recovered id can
        never escape the store root.
        """
        if not _SAFE_ID.match(order_id):
            raise ValueError(f"not an order identifier: {order_id!r}")
        return self._root / f"{order_id.lower()}.json"

    def find_order(self, order_id: str) -> Optional[OrderSummary]:
        """
        Return the order summary for `order_id`, or None if no such order.

        Raises `OrderStoreUnavailable` when the store itself cannot be read,
        which is different from the order not existing.
        """
        try:
            root_ok = self._root.is_dir()
        except OSError as exc:
            raise OrderStoreUnavailable(f"order store root {self._root} cannot be read: {exc}") from exc
        if not root_ok:
            raise OrderStoreUnavailable(f"order store root {self._root} is not a directory")

        try:
            path = self.resolve(order_id)
        except ValueError:
            return None

        try:
            exists = path.is_file()
        except OSError as exc:
            raise OrderStoreUnavailable(f"order record {path.name} cannot be read: {exc}") from exc
        if not exists:
            logger.debug("no order record at %s", path)
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return OrderSummary(**data)
        except (OSError, ValueError, TypeError, ValidationError) as exc:
            raise OrderStoreUnavailable(f"order record {path.name} is unreadable: {exc}") from exc
