import logging

import pytest
from fastapi.testclient import TestClient

from todo_service.logging_setup import REQUEST_LOGGER, TODO_LOGGER, parse_level
from todo_service.main import create_app


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def restore_levels():
    saved = {name: logging.getLogger(name).level for name in (REQUEST_LOGGER, TODO_LOGGER)}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestLoggerLevel:
    def test_get_level_under_log_path(self, client):
        client.put("/logs/level", params={"logger-name": "todo-logger", "logger-level": "ERROR"})
        res = client.get("/log/level", params={"logger-name": "todo-logger"})
        assert res.status_code == 200
        assert res.text == "ERROR"

    def test_log_path_rejects_unknown_logger(self, client):
        res = client.get("/log/level", params={"logger-name": "root"})
        assert res.status_code == 400

    def test_notset_is_rejected_and_level_kept(self, client):
        res = client.put("/logs/level", params={"logger-name": "todo-logger", "logger-level": "NOTSET"})
        assert res.status_code == 400
        assert res.text == "Invalid logger level"
        assert client.get("/logs/level", params={"logger-name": "todo-logger"}).text == "INFO"

    def test_get_level(self, client):
        res = client.get("/logs/level", params={"logger-name": "todo-logger"})
        assert res.status_code == 200
        assert res.text == "INFO"

    def test_set_then_get_level(self, client):
        res = client.put("/logs/level", params={"logger-name": "request-logger", "logger-level": "debug"})
        assert res.status_code == 200
        assert res.text == "DEBUG"
        assert client.get("/logs/level", params={"logger-name": "request-logger"}).text == "DEBUG"
        assert logging.getLogger(REQUEST_LOGGER).level == logging.DEBUG

    def test_set_level_alias(self, client):
        res = client.put("/logs/level", params={"logger-name": "todo-logger", "logger-level": "WARN"})
        assert res.text == "WARNING"

    def test_unknown_logger(self, client):
        res = client.get("/logs/level", params={"logger-name": "root"})
        assert res.status_code == 400
        assert res.text == "Invalid logger name (request-logger/todo-logger)"

    def test_unknown_level(self, client):
        res = client.put("/logs/level", params={"logger-name": "todo-logger", "logger-level": "LOUD"})
        assert res.status_code == 400
        assert res.text == "Invalid logger level"
        assert logging.getLogger(TODO_LOGGER).level == logging.INFO


@pytest.mark.parametrize(
    "name, expected",
    [("info", logging.INFO), ("ERROR", logging.ERROR), ("fatal", logging.CRITICAL), ("NOTSET", None), ("nope", None)],
)
def test_parse_level(name, expected):
    assert parse_level(name) == expected


def test_duration_logged_when_request_fails():
    app = create_app()

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    logger = logging.getLogger(REQUEST_LOGGER)
    logger.setLevel(logging.DEBUG)
    handler = RecordingHandler()
    logger.addHandler(handler)
    try:
        with pytest.raises(RuntimeError):
            TestClient(app).get("/boom")
    finally:
        logger.removeHandler(handler)
    assert any(m.startswith("Incoming request") and "/boom" in m for m in handler.messages)
    assert any(m.startswith("request #") and "duration" in m for m in handler.messages)
