"""
In-memory Todo tracking service.

The domain engine (models, errors and the InMemoryTodoStore) is exported here;
the FastAPI application lives in todo_service.main.
"""

from .errors import (  # noqa: F401
    DuplicateTitleError,
    InvalidSortKeyError,
    InvalidStatusError,
    MalformedInputError,
    NotFoundError,
    PastDueDateError,
    TodoError,
)
from .models import SortKey, Todo, TodoStatus  # noqa: F401
from .repositories import InMemoryTodoStore  # noqa: F401
