"""Selection state for case selectors, stepper pathways and filtered quizzes."""

import logging
from typing import Any, Dict, Optional, Tuple

from scenarios import ALL_CATEGORIES, ScenarioRecord, ScenarioRegistry

logger = logging.getLogger(__name__)


class OutOfRange(IndexError):
    """An index outside the currently displayed list was requested."""

    def __init__(self, index, size):
        super().__init__(f"Index {index} is out of range for {size} item(s)")
        self.index = index
        self.size = size


class SelectionController:
    """
    Tracks which record of a (possibly filtered) registry is active.

    The active index is always valid for the current list, or 0 when the
    list is empty. Changing the filter always resets it to 0.
    """

    def __init__(self, registry: ScenarioRegistry, category: Optional[str] = None):
        self.registry = registry
        self.category = category or ALL_CATEGORIES
        self.items: Tuple[ScenarioRecord, ...] = registry.list(self.category)
        self.active_index = 0

    def select(self, index: int) -> ScenarioRecord:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.items):
            raise OutOfRange(index, len(self.items))
        self.active_index = index
        return self.items[index]

    def change_filter(self, category: Optional[str]):
        self.category = category or ALL_CATEGORIES
        self.items = self.registry.list(self.category)
        self.active_index = 0
        if not self.items:
            logger.debug(f"Filter '{self.category}' matched no records")

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    @property
    def current(self) -> Optional[ScenarioRecord]:
        """Active record, or None when the filtered list is empty."""
        if self.is_empty:
            return None
        return self.items[self.active_index]

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def is_first(self) -> bool:
        return self.active_index == 0

    @property
    def is_last(self) -> bool:
        return self.is_empty or self.active_index == len(self.items) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "active_index": self.active_index}

    @classmethod
    def from_dict(cls, registry: ScenarioRegistry, data: Optional[Dict[str, Any]]) -> "SelectionController":
        """Restore from session data. A stale index falls back to 0."""
        data = data or {}
        controller = cls(registry, data.get("category"))
        index = data.get("active_index", 0)
        try:
            controller.select(index)
        except OutOfRange:
            controller.active_index = 0
        return controller
