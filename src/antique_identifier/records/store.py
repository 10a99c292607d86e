"""
JSON-file persistence for saved antiques.

Inserts are staged in memory until save() writes the whole collection, the
same insert-then-save contract the capture flow expects of its store.
"""

import json
from pathlib import Path
from typing import Dict, List, Protocol

from ..errors import RecordStoreError
from ..logging import get_logger
from .model import SavedAntiqueRecord

logger = get_logger(__name__)

STORE_VERSION = "1.0"


class RecordStore(Protocol):
    def insert(self, record: SavedAntiqueRecord) -> None:
        ...

    def save(self) -> None:
        ...

    def delete(self, record_id: str) -> None:
        ...


class JsonRecordStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._records: Dict[str, SavedAntiqueRecord] = self._load()
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    def records(self) -> List[SavedAntiqueRecord]:
        return list(self._records.values())

    def insert(self, record: SavedAntiqueRecord) -> None:
        """Stage a record; it is written on the next save()."""
        if record.id in self._records:
            raise RecordStoreError(f"Record {record.id} already exists")
        self._records[record.id] = record
        self._dirty = True
        logger.debug(f"Staged record {record.id} ({record.name})")

    def delete(self, record_id: str) -> None:
        """Remove a record and persist immediately."""
        if record_id not in self._records:
            raise RecordStoreError(f"Record {record_id} not found")
        del self._records[record_id]
        self._dirty = True
        self.save()

    def save(self) -> None:
        if not self._dirty and self._path.exists():
            return

        payload = {
            "version": STORE_VERSION,
            "records": [record.to_dict() for record in self._records.values()],
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise RecordStoreError(f"Failed to write records to {self._path}: {exc}") from exc

        self._dirty = False
        logger.info(f"Saved {len(self._records)} records to {self._path}")

    def _load(self) -> Dict[str, SavedAntiqueRecord]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            records = [SavedAntiqueRecord.from_dict(item) for item in data.get("records", [])]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise RecordStoreError(f"Failed to read records from {self._path}: {exc}") from exc
        return {record.id: record for record in records}
