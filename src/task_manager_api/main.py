"""FastAPI application wiring for the task manager service.

Beginner terms used in this file:
- FastAPI app: the main web application object.
- Route/path operation: a function exposed over HTTP (for example, GET /health).
- Envelope: every task response is {"success": bool, "data"|"error": ...}.
- app.state: a place to store shared runtime objects (store, service, settings).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .app.errors import FieldViolation, TaskError
from .app.logging_setup import configure_logging
from .app.models import Task
from .app.service import TaskResult, TaskService
from .app.settings import Settings, get_settings
from .app.storage import InMemoryTaskStore, TaskStore
from .app.ui import render_homepage

logger = logging.getLogger(__name__)

API_PREFIX = "/api/internal"


def create_app(
    *,
    store: TaskStore | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    Each call builds a fresh store unless one is passed in, so tests get
    isolated state.
    """
    settings = settings_override or get_settings()
    configure_logging(settings.log_level)

    task_store = store if store is not None else InMemoryTaskStore(settings.max_records)

    app = FastAPI(title=settings.app_name, version="0.1.0")
    # Shared objects live in app.state so route handlers can reuse them.
    app.state.settings = settings
    app.state.store = task_store
    app.state.service = TaskService(task_store)

    @app.get("/health")
    @app.get("/healthz")
    @app.get("/live")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def home() -> str:
        return render_homepage(app_name=settings.app_name, user_header=settings.user_header)

    @app.post(f"{API_PREFIX}/task")
    async def create_task(request: Request) -> JSONResponse:
        caller_id = _caller_id(request, settings.user_header)
        if caller_id is None:
            return _error_response(TaskError.unauthorized(settings.user_header))
        body = await _read_json(request)
        if isinstance(body, TaskError):
            return _error_response(body)
        result = request.app.state.service.create_task(caller_id, body)
        return _respond(result, success_status=201)

    @app.get(f"{API_PREFIX}/task/{{task_id}}")
    def get_task(task_id: str, request: Request) -> JSONResponse:
        caller_id = _caller_id(request, settings.user_header)
        if caller_id is None:
            return _error_response(TaskError.unauthorized(settings.user_header))
        result = request.app.state.service.get_task(caller_id, {"id": task_id})
        return _respond(result)

    @app.put(f"{API_PREFIX}/task/{{task_id}}")
    async def update_task(task_id: str, request: Request) -> JSONResponse:
        caller_id = _caller_id(request, settings.user_header)
        if caller_id is None:
            return _error_response(TaskError.unauthorized(settings.user_header))
        body = await _read_json(request)
        if isinstance(body, TaskError):
            return _error_response(body)
        result = request.app.state.service.update_task(caller_id, {"id": task_id}, body)
        return _respond(result)

    return app


def _caller_id(request: Request, header_name: str) -> str | None:
    """Opaque caller identifier taken from the auth header; None when absent."""
    value = request.headers.get(header_name, "").strip()
    if not value:
        logger.warning("auth event=missing_header header=%s path=%s", header_name, request.url.path)
        return None
    return value


async def _read_json(request: Request) -> Any:
    """Decode the raw body without validating its shape; the service does that."""
    raw = await request.body()
    try:
        return json.loads(raw) if raw else None
    except (UnicodeDecodeError, json.JSONDecodeError):
        return TaskError.validation_failed(
            "Validation failed",
            [FieldViolation(field="body", message="Request body must be valid JSON.")],
        )


def _respond(result: TaskResult, *, success_status: int = 200) -> JSONResponse:
    if isinstance(result, TaskError):
        return _error_response(result)
    return JSONResponse(status_code=success_status, content=_success_payload(result))


def _success_payload(task: Task) -> dict[str, Any]:
    return {"success": True, "data": task.model_dump(mode="json")}


def _error_response(error: TaskError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


# Module-level app for `uvicorn task_manager_api.main:app`.
app = create_app()
