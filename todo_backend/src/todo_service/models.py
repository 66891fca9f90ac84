from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Dict, Optional

from .errors import InvalidSortKeyError, InvalidStatusError


# PUBLIC_INTERFACE
class TodoStatus(str, Enum):
    """Lifecycle state of a Todo. Changed only by an explicit status update."""

    PENDING = "PENDING"
    LATE = "LATE"
    DONE = "DONE"

    @classmethod
    def parse(cls, value: Any) -> "TodoStatus":
        """
        Return the status named by value (exact, case-sensitive match).

        Raises:
            InvalidStatusError: if value is not one of the three status names.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls.__members__:
            return cls[value]
        raise InvalidStatusError(value)


# PUBLIC_INTERFACE
class SortKey(str, Enum):
    """Field a Todo listing is ordered by (always ascending)."""

    ID = "ID"
    TITLE = "TITLE"
    DUE_DATE = "DUE_DATE"

    @classmethod
    def parse(cls, value: Optional[Any]) -> "SortKey":
        """
        Return the sort key named by value; None selects ID.

        Raises:
            InvalidSortKeyError: if value names no sort key.
        """
        if value is None:
            return cls.ID
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls.__members__:
            return cls[value]
        raise InvalidSortKeyError(value)

    @property
    def key_func(self) -> Callable[["Todo"], Any]:
        return _SORT_KEY_FUNCS[self]


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Todo:
    """
    A single task record.

    Fields:
    - id: store-assigned positive integer
    - title: non-empty, unique among stored Todos
    - content: free text
    - due_date: epoch milliseconds
    - status: current TodoStatus

    Instances are immutable; the store replaces a record to change its status.
    """

    id: int
    title: str
    content: str
    due_date: int
    status: TodoStatus = TodoStatus.PENDING

    def to_json(self) -> Dict[str, Any]:
        """Return the canonical external representation."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "status": self.status.value,
            "dueDate": self.due_date,
        }


_SORT_KEY_FUNCS: Dict[SortKey, Callable[[Todo], Any]] = {
    SortKey.ID: attrgetter("id"),
    SortKey.TITLE: attrgetter("title"),
    SortKey.DUE_DATE: attrgetter("due_date"),
}
