"""
Scenario registry for the clinical case pages.

A registry is an ordered, read-only collection of scenario records built once
at import time from the authored content in content.py. Pages filter it by
category and hand the result to a SelectionController.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

ALL_CATEGORIES = "All"


def _freeze(value: Any) -> Any:
    """Recursively convert lists to tuples and dicts to read-only mappings."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class ScenarioRecord:
    """One authored case, question or step. Immutable once built."""

    id: str
    fields: Mapping[str, Any]
    category: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", _freeze(dict(self.fields)))

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict copy for JSON responses."""
        data = {"id": self.id, "category": self.category}
        data.update(_thaw(self.fields))
        return data


def make_record(data: Dict[str, Any], category_field: Optional[str] = "category") -> ScenarioRecord:
    """
    Build a ScenarioRecord from an authored dict.

    Args:
        data: Authored fields, must contain 'id'
        category_field: Name of the field holding the filter category, or None

    Returns:
        ScenarioRecord with every other key stored in its fields
    """
    fields = {k: v for k, v in data.items() if k != "id"}
    category = data.get(category_field) if category_field else None
    return ScenarioRecord(id=data["id"], fields=fields, category=category)


class ScenarioRegistry:
    """Ordered, read-only sequence of ScenarioRecords for one page."""

    def __init__(self, records):
        self._records: Tuple[ScenarioRecord, ...] = tuple(records)
        ids = [r.id for r in self._records]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate scenario ids in registry: {ids}")
        self._by_id = {r.id: r for r in self._records}

    @classmethod
    def from_dicts(cls, items, category_field: Optional[str] = "category") -> "ScenarioRegistry":
        return cls(make_record(item, category_field) for item in items)

    def list(self, category: Optional[str] = None) -> Tuple[ScenarioRecord, ...]:
        """
        Records matching a category, in registry order.

        None or "All" returns every record. An unknown category returns an
        empty tuple.
        """
        if category is None or category == ALL_CATEGORIES:
            return self._records
        return tuple(r for r in self._records if r.category == category)

    def categories(self) -> List[str]:
        """'All' followed by each distinct category in first-seen order."""
        seen = []
        for record in self._records:
            if record.category is not None and record.category not in seen:
                seen.append(record.category)
        return [ALL_CATEGORIES] + seen

    def get(self, record_id: str) -> ScenarioRecord:
        return self._by_id[record_id]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ScenarioRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> ScenarioRecord:
        return self._records[index]
