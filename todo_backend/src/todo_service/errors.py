from __future__ import annotations


# PUBLIC_INTERFACE
class TodoError(Exception):
    """
    Base class for recoverable Todo domain failures.

    Each subclass carries the HTTP status code the transport layer answers with.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedInputError(TodoError):
    """Draft fields are missing or have the wrong type."""


class DuplicateTitleError(TodoError):
    """A stored Todo already uses the requested title."""

    status_code = 409

    def __init__(self, title: str) -> None:
        super().__init__(f"Error: TODO with the title [{title}] already exists in the system")
        self.title = title


class PastDueDateError(TodoError):
    """The due date is not strictly in the future."""

    status_code = 409

    def __init__(self, due_date: int) -> None:
        super().__init__("Error: Can't create new TODO that its due date is in the past")
        self.due_date = due_date


class InvalidStatusError(TodoError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Error: invalid status [{value}] (expected PENDING, LATE or DONE)")
        self.value = value


class InvalidSortKeyError(TodoError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Error: invalid sort key [{value}] (expected ID, TITLE or DUE_DATE)")
        self.value = value


class NotFoundError(TodoError):
    status_code = 404

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Error: no such TODO with id {todo_id}")
        self.todo_id = todo_id
