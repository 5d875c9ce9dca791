"""Ordering logic for Waaranders todo lists.

Produces a deterministic total order over todo-like records:
1. By primary date (earliest first, records without a date last)
2. By a selectable secondary key (priority or assignee name)
3. By status (planned, in progress, done)
4. By text, compared accent- and case-insensitively first

Each rule is a standalone comparator; the rules are composed left to right
and the first non-zero result decides.
"""

import unicodedata
from datetime import date
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Optional
from pydantic import BaseModel, Field

from waaranders.models.todo import TodoPriority, TodoStatus


Comparator = Callable[[Any, Any], int]

PRIORITY_RANK = {
    TodoPriority.HIGH.value: 0,
    TodoPriority.NORMAL.value: 1,
    TodoPriority.LOW.value: 2,
}

STATUS_RANK = {
    TodoStatus.PLANNED.value: 0,
    TodoStatus.IN_PROGRESS.value: 1,
    TodoStatus.DONE.value: 2,
}


class SecondaryMode(str, Enum):
    """Tie-break family applied within a single date."""
    BY_PRIORITY = "by_priority"
    BY_ASSIGNEE = "by_assignee"


class OrderableItem(BaseModel):
    """Record shape consumed by the ordering engine.

    Any object exposing these attributes can be ordered; this model is what
    the API builds from stored todos.
    """

    id: str = Field(..., description="Opaque identifier, never used for ordering")
    text: str = Field(..., description="Free-form description, final tie-breaker")
    primary_date: Optional[date] = Field(None, description="Due/occurs-on date, null means no deadline")
    priority: TodoPriority = Field(TodoPriority.NORMAL, description="Priority used by by_priority mode")
    status: TodoStatus = Field(TodoStatus.PLANNED, description="Status used as tertiary key")
    assignee_label: Optional[str] = Field(None, description="Resolved display name of the assignee")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _value(enum_obj) -> str:
    return getattr(enum_obj, "value", enum_obj)


def collation_key(text: str) -> tuple:
    """Sort key approximating locale collation.

    Primary strength ignores accents and case; the raw string breaks the
    remaining ties so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text or "")


def compare_primary_date(a, b) -> int:
    """Earliest date first; missing dates sort after every present date."""
    a_date = a.primary_date
    b_date = b.primary_date
    if a_date is None and b_date is None:
        return 0
    if a_date is None:
        return 1
    if b_date is None:
        return -1
    return _sign(a_date, b_date)


def compare_priority(a, b) -> int:
    """High before normal before low."""
    return _sign(PRIORITY_RANK[_value(a.priority)], PRIORITY_RANK[_value(b.priority)])


def compare_assignee(a, b) -> int:
    """Assignee label ascending, case-insensitive; unresolved labels compare as ''."""
    a_label = (a.assignee_label or "").casefold()
    b_label = (b.assignee_label or "").casefold()
    return _sign(a_label, b_label)


def compare_status(a, b) -> int:
    """Planned before in progress before done."""
    return _sign(STATUS_RANK[_value(a.status)], STATUS_RANK[_value(b.status)])


def compare_text(a, b) -> int:
    return _sign(collation_key(a.text), collation_key(b.text))


SECONDARY_COMPARATORS = {
    SecondaryMode.BY_PRIORITY: compare_priority,
    SecondaryMode.BY_ASSIGNEE: compare_assignee,
}


def compose_comparators(*comparators: Comparator) -> Comparator:
    """Combine comparators; the first one returning non-zero wins."""
    def compare(a, b) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0
    return compare


def build_comparator(secondary_mode: SecondaryMode) -> Comparator:
    mode = SecondaryMode(secondary_mode)
    return compose_comparators(
        compare_primary_date,
        SECONDARY_COMPARATORS[mode],
        compare_status,
        compare_text,
    )


def order_items(
    items: Iterable[Any],
    secondary_mode: SecondaryMode = SecondaryMode.BY_PRIORITY,
) -> List[Any]:
    """Order items by date, secondary key, status and text.

    The sort is stable and returns a new list; the input items are neither
    mutated nor dropped.

    Args:
        items: Records exposing primary_date, priority, status, assignee_label and text
        secondary_mode: Tie-break family applied within the same date

    Returns:
        New list with every input item exactly once, in order
    """
    comparator = build_comparator(secondary_mode)
    return sorted(items, key=cmp_to_key(comparator))
