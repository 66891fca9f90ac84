import pytest

from conftest import NOW
from todo_service.errors import InvalidSortKeyError, InvalidStatusError, MalformedInputError
from todo_service.models import SortKey, Todo, TodoStatus
from todo_service.schemas import TodoDraft, TodoOut


class TestTodoStatus:
    @pytest.mark.parametrize("name", ["PENDING", "LATE", "DONE"])
    def test_parse_known_names(self, name):
        assert TodoStatus.parse(name).value == name

    def test_parse_member_passthrough(self):
        assert TodoStatus.parse(TodoStatus.LATE) is TodoStatus.LATE

    @pytest.mark.parametrize("bad", ["done", "Pending", "ALL", "", 1, None])
    def test_parse_rejects_unknown(self, bad):
        with pytest.raises(InvalidStatusError):
            TodoStatus.parse(bad)


class TestSortKey:
    def test_none_defaults_to_id(self):
        assert SortKey.parse(None) is SortKey.ID

    @pytest.mark.parametrize("name", ["ID", "TITLE", "DUE_DATE"])
    def test_parse_known_names(self, name):
        assert SortKey.parse(name).value == name

    @pytest.mark.parametrize("bad", ["title", "STATUS", ""])
    def test_parse_rejects_unknown(self, bad):
        with pytest.raises(InvalidSortKeyError):
            SortKey.parse(bad)

    def test_key_funcs(self):
        todo = Todo(id=3, title="t", content="c", due_date=NOW)
        assert SortKey.ID.key_func(todo) == 3
        assert SortKey.TITLE.key_func(todo) == "t"
        assert SortKey.DUE_DATE.key_func(todo) == NOW


class TestTodo:
    def test_to_json(self):
        todo = Todo(id=1, title="A", content="x", due_date=NOW, status=TodoStatus.DONE)
        assert todo.to_json() == {"id": 1, "title": "A", "content": "x", "status": "DONE", "dueDate": NOW}

    def test_is_immutable(self):
        todo = Todo(id=1, title="A", content="x", due_date=NOW)
        with pytest.raises(AttributeError):
            todo.status = TodoStatus.DONE  # type: ignore[misc]

    def test_todo_out_uses_external_field_names(self):
        todo = Todo(id=1, title="A", content="x", due_date=NOW)
        out = TodoOut.from_todo(todo)
        assert out.model_dump(mode="json", by_alias=True) == todo.to_json()


class TestTodoDraft:
    def test_parse_valid(self):
        d = TodoDraft.parse({"title": "A", "content": "", "dueDate": NOW, "status": "DONE", "id": 9})
        assert (d.title, d.content, d.due_date) == ("A", "", NOW)

    def test_title_is_kept_verbatim(self):
        assert TodoDraft.parse({"title": " A ", "content": "x", "dueDate": NOW}).title == " A "

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"title": "   ", "content": "x", "dueDate": NOW},
            {"title": "A", "content": None, "dueDate": NOW},
            {"title": "A", "content": "x", "dueDate": True},
            {"title": "A", "content": "x", "dueDate": 1.5},
            ["A", "x", NOW],
            {"title": "A", "content": "x", "due_date": NOW},
        ],
    )
    def test_parse_rejects_malformed(self, payload):
        with pytest.raises(MalformedInputError) as exc_info:
            TodoDraft.parse(payload)
        assert exc_info.value.message.startswith("Error: malformed TODO")
