"""
JSON File Storage Implementation

DESIGN DECISION: Two human-readable, pretty-printed JSON files under one
data directory ("categories.json" and "expenses.json" by default).

Writes go to a temporary file that is then renamed over the target, so a
concurrent loader never sees a half-written store.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from moneybook.config import get_settings
from moneybook.models.audit import EventListener
from moneybook.services.storage.interface import (
    CATEGORIES,
    EXPENSES,
    CorruptDataError,
    RecordStorage,
    StorageError,
)


class JsonFileStorage(RecordStorage):
    """Persists categories and expenses as JSON files in a base directory."""

    def __init__(
        self,
        base_path: Optional[Union[str, Path]] = None,
        listener: Optional[EventListener] = None,
    ):
        """
        Initialize file storage.

        Args:
            base_path: Data directory. Defaults to StorageSettings.data_dir.
                       Created if absent.
            listener: Receives an AuditEvent for every save/load pass.
        """
        super().__init__(listener)
        self._settings = get_settings().storage
        self._file_names = {
            CATEGORIES: self._settings.categories_file,
            EXPENSES: self._settings.expenses_file,
        }
        self._base_path = Path(base_path) if base_path is not None else self._settings.data_dir
        self._ensure_directory()

    @property
    def base_path(self) -> Path:
        return self._base_path

    def set_base_path(self, path: Union[str, Path]) -> None:
        """Point the storage at another directory, creating it if absent."""
        self._base_path = Path(path)
        self._ensure_directory()

    def path_for(self, resource: str) -> Path:
        return self._base_path / self._file_names[resource]

    def _ensure_directory(self) -> None:
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Unable to create data directory {self._base_path}: {e}") from e

    def _location(self, resource: str) -> str:
        return str(self.path_for(resource))

    def _write_records(self, resource: str, records: list[dict[str, Any]]) -> None:
        path = self.path_for(resource)
        temp_path: Optional[Path] = None
        try:
            # One temp file per write, so concurrent saves never share it.
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._base_path,
                prefix=f"{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                json.dump(
                    records,
                    handle,
                    indent=self._settings.indent,
                    ensure_ascii=False,
                    allow_nan=False,
                )
                handle.flush()
                os.fsync(handle.fileno())
            temp_path.replace(path)
        except (OSError, ValueError) as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise StorageError(f"Unable to write {path}: {e}") from e

    def _read_records(self, resource: str) -> Optional[list[Any]]:
        path = self.path_for(resource)
        if not path.exists():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Unable to read {path}: {e}") from e

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"Corrupted JSON data in {path}") from e
