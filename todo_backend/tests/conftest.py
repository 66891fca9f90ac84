import pytest
from fastapi.testclient import TestClient

from todo_service.main import create_app
from todo_service.repositories import InMemoryTodoStore

NOW = 1_700_000_000_000
DAY = 24 * 60 * 60 * 1000


class FakeClock:
    """Clock returning a settable epoch-millisecond value."""

    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def draft(title="Task", content="Do something", due_date=NOW + DAY):
    return {"title": title, "content": content, "dueDate": due_date}


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock) -> InMemoryTodoStore:
    return InMemoryTodoStore(clock=clock)


@pytest.fixture()
def client(store) -> TestClient:
    return TestClient(create_app(store=store))
