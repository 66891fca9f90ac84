from __future__ import annotations

from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator

from .errors import MalformedInputError
from .models import Todo, TodoStatus

T = TypeVar("T")


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


# PUBLIC_INTERFACE
class TodoDraft(BaseModel):
    """
    Unvalidated input for creating a Todo.

    Only the shape of the fields is checked here. Title uniqueness and the
    future due date are enforced by the store.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "content": "Milk, eggs, bread",
                "dueDate": 4102444800000,
            }
        },
    )

    title: StrictStr = Field(..., description="Unique, non-empty title", min_length=1)
    content: StrictStr = Field(..., description="Free text content")
    due_date: StrictInt = Field(..., alias="dueDate", description="Due date in epoch milliseconds")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Reject whitespace-only titles, a deliberate tightening of the plain
        non-empty rule. The title is kept verbatim otherwise.
        """
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    # PUBLIC_INTERFACE
    @classmethod
    def parse(cls, data: Any) -> "TodoDraft":
        """
        Build a draft from an external representation.

        Raises:
            MalformedInputError: if a required field is missing or mistyped.
        """
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedInputError(f"Error: malformed TODO ({_describe_errors(exc)})") from exc


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    External representation of a Todo returned by the API.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "content": "Milk, eggs, bread",
                "status": "PENDING",
                "dueDate": 4102444800000,
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Title of the todo item")
    content: str = Field(..., description="Content of the todo item")
    status: TodoStatus = Field(..., description="PENDING, LATE or DONE")
    due_date: int = Field(..., alias="dueDate", description="Due date in epoch milliseconds")

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoOut":
        return cls.model_validate(todo.to_json())


# PUBLIC_INTERFACE
class ResultEnvelope(BaseModel, Generic[T]):
    """
    Envelope wrapping every successful JSON response.
    """

    result: T = Field(..., description="Operation result")


class ErrorEnvelope(BaseModel):
    errorMessage: str = Field(..., description="Human readable failure description")


TodoListEnvelope = ResultEnvelope[List[TodoOut]]
