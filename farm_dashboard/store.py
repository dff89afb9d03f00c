"""In-memory record stores for farms, crops, expenses and budgets.

Each :class:`RecordStore` holds one entity type for the lifetime of the
process (or of a test).  Stores hand out copies, so callers can never mutate
the stored records in place.  :class:`FarmDataStore` bundles the four stores
and can be seeded from a JSON data file of the form::

    {"farms": [...], "crops": [...], "expenses": [...], "budgets": [...]}
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from .config import DATA_FILE
from .errors import RecordNotFoundError
from .models import Budget, Crop, Expense, Farm

logger = logging.getLogger(__name__)

R = TypeVar('R', Farm, Crop, Expense, Budget)


class RecordStore(Generic[R]):
    """CRUD operations over an in-memory collection of records."""

    def __init__(self, record_type: Type[R], records: Optional[Iterable[Mapping[str, Any]]] = None):
        """Initialize the store.

        Args:
            record_type: Record dataclass built from each mapping
            records: Optional initial records as mappings (must carry ids)
        """
        self.record_type = record_type
        self.entity = record_type.__name__
        self._records: Dict[int, R] = {}
        for data in records or []:
            record = record_type.from_dict(data)
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    def list(self) -> List[R]:
        """Return copies of all records in insertion order."""
        return [copy.copy(record) for record in self._records.values()]

    def get(self, record_id: int) -> R:
        """Return a copy of the record with ``record_id``.

        Raises:
            RecordNotFoundError: If no such record exists
        """
        try:
            return copy.copy(self._records[int(record_id)])
        except KeyError:
            raise RecordNotFoundError(self.entity, record_id) from None

    def create(self, fields: Mapping[str, Any]) -> R:
        """Create a record with a new id (max existing id + 1, or 1)."""
        data = {key: value for key, value in fields.items() if key not in ('id', 'Id')}
        data['id'] = self._next_id()
        record = self.record_type.from_dict(data)
        self._records[record.id] = record
        logger.debug("Created %s %s", self.entity, record.id)
        return copy.copy(record)

    def update(self, record_id: int, fields: Mapping[str, Any]) -> R:
        """Merge ``fields`` into an existing record and revalidate it.

        Raises:
            RecordNotFoundError: If no such record exists
        """
        current = self.get(record_id)
        data = current.to_dict()
        data.update({key: value for key, value in fields.items() if key not in ('id', 'Id')})
        record = self.record_type.from_dict(data)
        self._records[record.id] = record
        logger.debug("Updated %s %s", self.entity, record.id)
        return copy.copy(record)

    def delete(self, record_id: int) -> bool:
        """Delete a record.

        Raises:
            RecordNotFoundError: If no such record exists
        """
        key = int(record_id)
        if key not in self._records:
            raise RecordNotFoundError(self.entity, record_id)
        del self._records[key]
        logger.debug("Deleted %s %s", self.entity, key)
        return True

    def filter(self, **criteria: Any) -> List[R]:
        """Return records whose attributes equal every given criterion."""
        return [
            record for record in self.list()
            if all(getattr(record, name) == value for name, value in criteria.items())
        ]


class FarmDataStore:
    """The four record stores used by the dashboard."""

    def __init__(self, data: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None):
        data = data or {}
        self.farms: RecordStore[Farm] = RecordStore(Farm, data.get('farms'))
        self.crops: RecordStore[Crop] = RecordStore(Crop, data.get('crops'))
        self.expenses: RecordStore[Expense] = RecordStore(Expense, data.get('expenses'))
        self.budgets: RecordStore[Budget] = RecordStore(Budget, data.get('budgets'))

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> 'FarmDataStore':
        """Seed the stores from a JSON data file.

        Args:
            path: Data file. Defaults to ``DATA_FILE`` from config.

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            ValueError: If a record fails validation
        """
        target = Path(path or DATA_FILE)
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"Data file must contain a JSON object: {target}")
        store = cls(data)
        logger.info(
            "Loaded %d farms, %d crops, %d expenses, %d budgets from %s",
            len(store.farms), len(store.crops), len(store.expenses), len(store.budgets), target,
        )
        return store

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            'farms': [record.to_dict() for record in self.farms.list()],
            'crops': [record.to_dict() for record in self.crops.list()],
            'expenses': [record.to_dict() for record in self.expenses.list()],
            'budgets': [record.to_dict() for record in self.budgets.list()],
        }
