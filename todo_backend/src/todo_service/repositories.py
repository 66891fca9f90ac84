from __future__ import annotations

import logging
import time
from dataclasses import replace
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Union

from fastapi import Request

from .errors import DuplicateTitleError, NotFoundError, PastDueDateError
from .models import SortKey, Todo, TodoStatus
from .schemas import TodoDraft

logger = logging.getLogger("todo-logger")

ALL_STATUSES = "ALL"

Clock = Callable[[], int]


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _parse_filter(status_filter: Any) -> Optional[TodoStatus]:
    """
    Return the status to filter on, or None when status_filter is the ALL sentinel.
    """
    if isinstance(status_filter, str) and status_filter.upper() == ALL_STATUSES:
        return None
    return TodoStatus.parse(status_filter)


# PUBLIC_INTERFACE
class InMemoryTodoStore:
    """
    Thread-safe in-memory store owning every Todo of one service instance.

    A single RLock guards the collection and the id counter, so every
    operation is atomic with respect to every other one.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._lock = RLock()
        self._items: Dict[int, Todo] = {}
        self._next_id = 1
        self._clock: Clock = clock or _epoch_millis

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, draft: Union[TodoDraft, Dict[str, Any]]) -> int:
        """
        Validate and store a new Todo, returning its id.

        Raises:
            MalformedInputError: draft fields missing or mistyped.
            DuplicateTitleError: a stored Todo already has this title.
            PastDueDateError: due date is not strictly after now.
        """
        data = TodoDraft.parse(draft)
        with self._lock:
            if any(t.title == data.title for t in self._items.values()):
                raise DuplicateTitleError(data.title)
            if data.due_date <= self._clock():
                raise PastDueDateError(data.due_date)

            # Checks pass before allocation, so failures never consume an id.
            todo = Todo(
                id=self._allocate_id(),
                title=data.title,
                content=data.content,
                due_date=data.due_date,
                status=TodoStatus.PENDING,
            )
            self._items[todo.id] = todo
            logger.info("Creating new TODO with Title [%s]", todo.title)
            logger.debug(
                "Currently there are %d TODOs in the system. Next TODO will be assigned with id %d",
                len(self._items),
                self._next_id,
            )
            return todo.id

    def get(self, todo_id: int) -> Todo:
        with self._lock:
            todo = self._items.get(todo_id)
            if todo is None:
                raise NotFoundError(todo_id)
            return todo

    def count(self, status_filter: str) -> int:
        """
        Return the number of stored Todos matching status_filter ("ALL" or a status name).
        """
        status = _parse_filter(status_filter)
        with self._lock:
            if status is None:
                total = len(self._items)
            else:
                total = sum(1 for t in self._items.values() if t.status is status)
        logger.info("Total TODOs count for state %s is %d", status.value if status else ALL_STATUSES, total)
        return total

    def list(self, status_filter: str, sort_key: Optional[str] = None) -> List[Todo]:
        """
        Return a snapshot of the Todos matching status_filter, ascending by sort_key.

        sort_key defaults to ID. The sort is stable.
        """
        key = SortKey.parse(sort_key)
        status = _parse_filter(status_filter)
        with self._lock:
            items = [t for t in self._items.values() if status is None or t.status is status]
            total = len(self._items)
        items.sort(key=key.key_func)
        logger.info(
            "Extracting todos content. Filter: %s | Sorting by: %s",
            status.value if status else ALL_STATUSES,
            key.value,
        )
        logger.debug(
            "There are a total of %d todos in the system. The result holds %d todos", total, len(items)
        )
        return items

    def update_status(self, todo_id: int, new_status: str) -> TodoStatus:
        """
        Set the status of a Todo and return the status it held before.

        Raises:
            NotFoundError: no Todo with todo_id.
            InvalidStatusError: new_status names no status.
        """
        logger.info("Update TODO id [%s] state to %s", todo_id, new_status)
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                raise NotFoundError(todo_id)
            status = TodoStatus.parse(new_status)
            self._items[todo_id] = replace(existing, status=status)
        logger.debug("Todo id [%s] state change: %s --> %s", todo_id, existing.status.value, status.value)
        return existing.status

    def delete(self, todo_id: int) -> int:
        """
        Remove a Todo and return the number of Todos left.

        Raises:
            NotFoundError: no Todo with todo_id.
        """
        with self._lock:
            if self._items.pop(todo_id, None) is None:
                raise NotFoundError(todo_id)
            remaining = len(self._items)
        logger.info("Removing todo id %s", todo_id)
        logger.debug("After removing todo id [%s] there are %d TODOs in the system", todo_id, remaining)
        return remaining


# PUBLIC_INTERFACE
def get_store(request: Request) -> InMemoryTodoStore:
    """
    FastAPI dependency returning the store owned by the running application.
    """
    return request.app.state.store
