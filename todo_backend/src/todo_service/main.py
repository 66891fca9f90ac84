import logging
import time
from itertools import count
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import TodoError
from .logging_setup import REQUEST_LOGGER, TODO_LOGGER, request_id_var, setup_logging
from .repositories import InMemoryTodoStore
from .routers import logs as logs_router
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .utils import result_envelope

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, count, list, update the status of and delete Todo items.",
    },
    {"name": "logs", "description": "Read and change logger levels at runtime."},
]

request_logger = logging.getLogger(REQUEST_LOGGER)
todo_logger = logging.getLogger(TODO_LOGGER)


# PUBLIC_INTERFACE
def create_app(store: Optional[InMemoryTodoStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application around a Todo store.

    Args:
        store: Store the handlers operate on. A fresh empty store is created when omitted.
        settings: Application settings. Loaded from the environment when omitted.

    Returns:
        The configured FastAPI application. The store is available as app.state.store.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Todo Service",
        description="In-memory task tracking service with status filtering and sorting.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.store = store if store is not None else InMemoryTodoStore()
    app.state.settings = settings
    app.state.request_counter = count(1)

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_number = next(request.app.state.request_counter)
        token = request_id_var.set(str(request_number))
        request_logger.info(
            "Incoming request | #%d | resource: %s | HTTP Verb %s",
            request_number,
            request.url.path,
            request.method,
        )
        start = time.perf_counter()
        try:
            return await call_next(request)
        finally:
            request_logger.debug(
                "request #%d duration: %dms", request_number, int((time.perf_counter() - start) * 1000)
            )
            request_id_var.reset(token)

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
        """
        Translate a domain error into its HTTP status and an errorMessage envelope.
        """
        todo_logger.error(exc.message)
        return JSONResponse(status_code=exc.status_code, content=result_envelope(error_message=exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "errorMessage": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        content = result_envelope(error_message="Request validation failed")
        content["detail"] = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=400, content=content)

    app.include_router(todos_router.router)
    app.include_router(logs_router.router)
    app.include_router(logs_router.log_router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
