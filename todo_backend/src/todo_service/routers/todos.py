from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import PlainTextResponse

from ..models import TodoStatus
from ..repositories import InMemoryTodoStore, get_store
from ..schemas import ErrorEnvelope, ResultEnvelope, TodoListEnvelope, TodoOut

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
)

_INVALID = {"model": ErrorEnvelope, "description": "Invalid status, sort key or malformed input"}
_NOT_FOUND = {"model": ErrorEnvelope, "description": "Todo not found"}
_CONFLICT = {"model": ErrorEnvelope, "description": "Duplicate title or due date in the past"}


# PUBLIC_INTERFACE
@router.get("/health", response_class=PlainTextResponse, summary="Health Check", tags=["health"])
def health() -> str:
    """
    Health check endpoint. Always answers 'OK'.
    """
    return "OK"


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ResultEnvelope[int],
    summary="Create Todo",
    description="Create a new Todo and return its id. The due date is in epoch milliseconds.",
    responses={400: _INVALID, 409: _CONFLICT},
)
def create_todo(
    payload: Dict[str, Any] = Body(
        ...,
        examples=[{"title": "Buy groceries", "content": "Milk, eggs, bread", "dueDate": 4102444800000}],
    ),
    store: InMemoryTodoStore = Depends(get_store),
) -> ResultEnvelope[int]:
    return ResultEnvelope[int](result=store.create(payload))


# PUBLIC_INTERFACE
@router.get(
    "/size",
    response_model=ResultEnvelope[int],
    summary="Count Todos",
    description="Count Todos with the given status, or all of them with status=ALL.",
    responses={400: _INVALID},
)
def get_todos_count(
    status: str = Query(..., description="ALL, PENDING, LATE or DONE"),
    store: InMemoryTodoStore = Depends(get_store),
) -> ResultEnvelope[int]:
    return ResultEnvelope[int](result=store.count(status))


# PUBLIC_INTERFACE
@router.get(
    "/content",
    response_model=TodoListEnvelope,
    summary="List Todos",
    description=(
        "List Todos filtered by status and sorted ascending.\n\n"
        "Query parameters:\n"
        "- status: ALL, PENDING, LATE or DONE\n"
        "- sortBy: ID (default), TITLE or DUE_DATE"
    ),
    responses={400: _INVALID},
)
def get_todos_content(
    status: str = Query(..., description="ALL, PENDING, LATE or DONE"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="ID, TITLE or DUE_DATE"),
    store: InMemoryTodoStore = Depends(get_store),
) -> TodoListEnvelope:
    items: List[TodoOut] = [TodoOut.from_todo(t) for t in store.list(status, sort_by)]
    return TodoListEnvelope(result=items)


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=ResultEnvelope[TodoStatus],
    summary="Update Todo status",
    description="Set the status of a Todo and return the status it had before.",
    responses={400: _INVALID, 404: _NOT_FOUND},
)
def update_todo_status(
    todo_id: int = Query(..., alias="id", description="Id of the Todo"),
    status: str = Query(..., description="PENDING, LATE or DONE"),
    store: InMemoryTodoStore = Depends(get_store),
) -> ResultEnvelope[TodoStatus]:
    return ResultEnvelope[TodoStatus](result=store.update_status(todo_id, status))


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=ResultEnvelope[int],
    summary="Delete Todo",
    description="Delete a Todo and return the number of Todos left.",
    responses={404: _NOT_FOUND},
)
def delete_todo(
    todo_id: int = Query(..., alias="id", description="Id of the Todo"),
    store: InMemoryTodoStore = Depends(get_store),
) -> ResultEnvelope[int]:
    return ResultEnvelope[int](result=store.delete(todo_id))
