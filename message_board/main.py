from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import ddtrace.auto  # noqa: F401
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from message_board.api.messages import router as messages_router
from message_board.api.rpc import router as rpc_router
from message_board.core.config import Settings, get_settings
from message_board.core.logging import request_id_ctx, setup_logging
from message_board.core.middleware import RequestContextMiddleware
from message_board.db.session import build_engine
from message_board.observability.metrics import metrics_response, stats
from message_board.observability.tracing import setup_tracing
from message_board.services.errors import (
    DataExistError,
    InvalidPayloadError,
    NotFoundError,
)
from message_board.services.messages import MessageBoard
from message_board.store.base import OrderedMap
from message_board.store.memory import InMemoryOrderedMap
from message_board.store.sql import SqlMessageMap

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> OrderedMap:
    if settings.store_backend == "memory":
        return InMemoryOrderedMap()
    return SqlMessageMap(build_engine(settings.database_url))


def create_app(settings: Settings | None = None, board: MessageBoard | None = None) -> FastAPI:
    settings = settings or get_settings()
    board = board or MessageBoard(build_store(settings))

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if isinstance(board.store, SqlMessageMap):
            board.store.create_schema()
        yield

    application = FastAPI(title="Message Board API", version=settings.dd_version, lifespan=lifespan)
    application.state.board = board

    application.add_middleware(RequestContextMiddleware)

    application.include_router(messages_router)
    application.include_router(rpc_router)

    register_operational_routes(application)
    register_exception_handlers(application)
    return application


def register_operational_routes(application: FastAPI) -> None:
    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @application.get("/ready")
    def readiness(request: Request) -> JSONResponse:
        board: MessageBoard = request.app.state.board
        try:
            board.store.ping()
            return JSONResponse(content={"status": "ready"})
        except SQLAlchemyError as exc:
            logger.error("readiness failed", extra={"error": str(exc)})
            return JSONResponse(status_code=503, content={"status": "not_ready"})

    @application.get("/metrics")
    def metrics() -> PlainTextResponse:
        payload, content_type = metrics_response()
        return PlainTextResponse(content=payload.decode("utf-8"), media_type=content_type)

    @application.get("/stats")
    def stats_endpoint(request: Request) -> dict[str, Any]:
        counters = stats.snapshot()

        operations: dict[str, dict[str, int]] = {}
        requests_by_method: dict[str, int] = {}
        requests_by_path: dict[str, int] = {}
        responses_by_status: dict[str, int] = {}
        for k, v in counters.items():
            if k.startswith("messages."):
                operation, _, outcome = k.removeprefix("messages.").partition(".")
                operations.setdefault(operation, {})[outcome] = v
            elif k.startswith("requests.by_method."):
                requests_by_method[k.removeprefix("requests.by_method.")] = v
            elif k.startswith("requests.by_path."):
                requests_by_path[k.removeprefix("requests.by_path.")] = v
            elif k.startswith("responses.by_status."):
                responses_by_status[k.removeprefix("responses.by_status.")] = v

        board: MessageBoard = request.app.state.board
        store_stats: dict[str, Any]
        try:
            store_stats = {"messages_stored": board.count()}
        except SQLAlchemyError as exc:
            logger.warning("stats store query failed", extra={"error": str(exc)})
            store_stats = {"error": "store_unavailable"}

        return {
            "operations": operations,
            "requests": {
                "total": counters.get("requests.total", 0),
                "by_method": requests_by_method,
                "by_path": requests_by_path,
                "responses_by_status": responses_by_status,
            },
            "store": store_stats,
            "counters": counters,
        }


def register_exception_handlers(application: FastAPI) -> None:
    @application.exception_handler(InvalidPayloadError)
    async def invalid_payload_handler(request: Request, exc: InvalidPayloadError) -> JSONResponse:
        return error_payload(400, "invalid_request", exc.detail, exc.details)

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [err.get("msg", "Invalid request") for err in exc.errors()]
        return error_payload(400, "invalid_request", "Request validation failed", details)

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return error_payload(404, "not_found", exc.detail)

    @application.exception_handler(DataExistError)
    async def data_exist_handler(request: Request, exc: DataExistError) -> JSONResponse:
        return error_payload(409, "duplicate", exc.detail)

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error")
        return error_payload(500, "internal_error", "Unexpected error")


def error_payload(
    status_code: int,
    error_code: str,
    message: str,
    details: list[str] | None = None,
) -> JSONResponse:
    payload = {
        "error_code": error_code,
        "message": message,
        "details": details,
        "request_id": request_id_ctx.get(),
    }
    return JSONResponse(status_code=status_code, content=payload)


settings = get_settings()
setup_logging(settings.log_level)
setup_tracing()

app = create_app(settings)
