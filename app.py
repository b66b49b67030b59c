# app.py
# FastAPI backend answering queries over an in-memory users/chats dataset.
# - The dataset is fetched once from the upstream source before serving
# - Every request passes the authorization check before routing
# - Errors come back as {"error": {"message": ...}} with HTTP 200
#
# Run with `python app.py` (fetch, then serve) or `uvicorn app:app` (fetch in
# the lifespan startup phase; a failed fetch aborts startup).

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from auth import AuthorizationMiddleware, CredentialCheck, static_token_check
from config import Settings, settings
from errors import LoadError, ServiceError, error_body
from loader import fetch_dataset
from stores import ChatStore

# --- Configure structlog + stdlib logging
_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(format="%(message)s", level=_level,)
structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(_level), processors=[structlog.processors.add_log_level, structlog.processors.TimeStamper(fmt="iso"), structlog.processors.JSONRenderer(), ],)
logger = structlog.get_logger("app")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request on entry and on completion, and any unhandled failure."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        logger.info("request.start", method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request.failure",
                method=request.method,
                path=request.url.path,
                error=str(exc),
            )
            raise
        logger.info(
            "request.success",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info("request.error", path=request.url.path, error=exc.message)
    return JSONResponse(exc.to_body())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unreadable request bodies get the same 200 error shape as every other failure.
    logger.info("request.invalid", path=request.url.path, errors=exc.errors())
    return JSONResponse(error_body("invalid request body"))


def load_store(cfg: Settings) -> ChatStore:
    """Startup phase one: fetch the dataset or raise LoadError."""
    dataset = fetch_dataset(cfg.source_url, timeout_s=cfg.source_timeout_s)
    return ChatStore(dataset)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "store", None) is None:
        # LoadError propagates and the server refuses to start.
        app.state.store = load_store(app.state.settings)
    yield


# ----------------------------
# FastAPI app
# ----------------------------
from routes.chats import router as chats_router
from routes.health import router as health_router


def create_app(
    store: Optional[ChatStore] = None,
    cfg: Optional[Settings] = None,
    check: Optional[CredentialCheck] = None,
) -> FastAPI:
    """Build the app. Without a ``store`` the dataset is fetched at startup."""
    cfg = cfg or settings
    app = FastAPI(title="Chat Dataset Backend", lifespan=lifespan)
    app.state.settings = cfg
    app.state.store = store

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Added last runs first: logging wraps authorization.
    app.add_middleware(AuthorizationMiddleware, check=check or static_token_check(cfg.auth_token))
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(chats_router)
    app.include_router(health_router)
    return app


app = create_app()


def main() -> None:
    try:
        store = load_store(settings)
    except LoadError as e:
        logger.error("startup.aborted", reason=e.message, detail=e.detail)
        sys.exit(1)
    logger.info("startup.serving", host=settings.host, port=settings.port)
    uvicorn.run(create_app(store=store), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
