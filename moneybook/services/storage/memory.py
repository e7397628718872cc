"""
In-Memory Storage Implementation

Keeps serialized records in a dict. Records are copied on the way in and
out, so loaded objects never alias saved ones - the same boundary the JSON
files give.
"""

import copy
from typing import Any, Optional

from moneybook.models.audit import EventListener
from moneybook.services.storage.interface import RecordStorage


class InMemoryStorage(RecordStorage):
    """Storage backend for tests and embedding."""

    def __init__(self, listener: Optional[EventListener] = None):
        super().__init__(listener)
        self._records: dict[str, list[Any]] = {}

    def raw(self, resource: str) -> Optional[list[Any]]:
        """The stored records for resource, as saved (for inspection)."""
        return copy.deepcopy(self._records.get(resource))

    def put_raw(self, resource: str, records: Any) -> None:
        """Replace the stored payload verbatim (used to simulate bad data)."""
        self._records[resource] = copy.deepcopy(records)

    def _location(self, resource: str) -> str:
        return f"memory://{resource}"

    def _write_records(self, resource: str, records: list[dict[str, Any]]) -> None:
        self._records[resource] = copy.deepcopy(records)

    def _read_records(self, resource: str) -> Optional[list[Any]]:
        records = self._records.get(resource)
        if records is None:
            return None
        return copy.deepcopy(records)
