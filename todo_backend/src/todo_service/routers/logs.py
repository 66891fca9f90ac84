from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from ..logging_setup import LOGGER_NAMES, parse_level

router = APIRouter(
    prefix="/logs",
    tags=["logs"],
)

# The level query is also served under /log, the path older clients use.
log_router = APIRouter(
    prefix="/log",
    tags=["logs"],
)

_INVALID_LOGGER = "Invalid logger name (request-logger/todo-logger)"


# PUBLIC_INTERFACE
@router.get("/level", response_class=PlainTextResponse, summary="Get logger level")
@log_router.get("/level", response_class=PlainTextResponse, summary="Get logger level")
def get_logger_level(
    logger_name: str = Query(..., alias="logger-name", description="request-logger or todo-logger"),
) -> PlainTextResponse:
    """
    Return the current level name of one of the service loggers.
    """
    if logger_name not in LOGGER_NAMES:
        return PlainTextResponse(_INVALID_LOGGER, status_code=400)
    level = logging.getLogger(logger_name).getEffectiveLevel()
    return PlainTextResponse(logging.getLevelName(level))


# PUBLIC_INTERFACE
@router.put("/level", response_class=PlainTextResponse, summary="Set logger level")
def set_logger_level(
    logger_name: str = Query(..., alias="logger-name", description="request-logger or todo-logger"),
    logger_level: str = Query(..., alias="logger-level", description="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
) -> PlainTextResponse:
    """
    Change the level of one of the service loggers and return the new level name.
    """
    if logger_name not in LOGGER_NAMES:
        return PlainTextResponse(_INVALID_LOGGER, status_code=400)
    level = parse_level(logger_level)
    if level is None:
        return PlainTextResponse("Invalid logger level", status_code=400)
    logging.getLogger(logger_name).setLevel(level)
    logging.getLogger("request-logger").debug("Logger %s level set to %s", logger_name, logging.getLevelName(level))
    return PlainTextResponse(logging.getLevelName(level))
