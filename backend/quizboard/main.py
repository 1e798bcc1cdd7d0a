import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizboard.core.config import is_prod, settings
from quizboard.core.errors import QuizboardError
from quizboard.db.session import Database
from quizboard.routers import health, jobs, quizzes


def _parse_csv(value: str) -> list[str]:
    return [x.strip() for x in str(value or "").split(",") if x.strip()]


def _request_id(request: Request) -> str | None:
    rid = getattr(getattr(request, "state", None), "request_id", None)
    rid = str(rid or "").strip()
    return rid or None


def _error_payload(request: Request, *, error_code: str, error_message: str, **extra) -> dict:
    payload = {
        "ok": False,
        "error_code": error_code,
        "error_message": error_message,
        "request_id": _request_id(request),
    }
    payload.update(extra)
    return payload


def create_app(database: Database | None = None) -> FastAPI:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logger = logging.getLogger("quizboard")

    if database is None:
        database = Database(settings.database_url, echo=bool(settings.database_echo))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if bool(settings.auto_create_schema):
            database.create_schema()
        try:
            yield
        finally:
            database.close()
            logger.info("database handle closed")

    app = FastAPI(title="Quizboard API", version="1.0.0", lifespan=lifespan)
    app.state.database = database

    logging.getLogger("httpx").setLevel(logging.WARNING)

    allow_origins = _parse_csv(settings.cors_allow_origins)

    allow_methods_raw = str(settings.cors_allow_methods or "*").strip()
    allow_headers_raw = str(settings.cors_allow_headers or "*").strip()
    if is_prod():
        allow_methods = ["GET", "POST", "OPTIONS"] if allow_methods_raw == "*" else _parse_csv(allow_methods_raw)
        allow_headers = ["content-type", "x-request-id"] if allow_headers_raw == "*" else _parse_csv(allow_headers_raw)
    else:
        allow_methods = ["*"] if allow_methods_raw == "*" else _parse_csv(allow_methods_raw)
        allow_headers = ["*"] if allow_headers_raw == "*" else _parse_csv(allow_headers_raw)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        t0 = time.perf_counter()
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = rid
        status_code: int | None = None
        try:
            origin = (request.headers.get("origin") or "").strip()
            if request.method in {"POST", "PUT", "PATCH", "DELETE"} and origin and origin not in allow_origins:
                response = JSONResponse(
                    status_code=403,
                    content=_error_payload(request, error_code="forbidden", error_message="invalid origin"),
                )
            else:
                response = await call_next(request)
            status_code = int(getattr(response, "status_code", 0) or 0)
        except Exception:
            status_code = 500
            raise
        finally:
            path = request.url.path
            if not path.startswith("/health"):
                logger.info(
                    json.dumps(
                        {
                            "ts": datetime.now(timezone.utc).isoformat(),
                            "rid": rid,
                            "method": request.method,
                            "path": path,
                            "status": status_code,
                            "duration_ms": int((time.perf_counter() - t0) * 1000),
                        },
                        ensure_ascii=False,
                    )
                )
        response.headers["X-Request-ID"] = rid

        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if is_prod():
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response

    @app.exception_handler(QuizboardError)
    async def quizboard_error_handler(request: Request, exc: QuizboardError):
        extra = {}
        if getattr(exc, "expected", None) is not None:
            extra = {"expected": exc.expected, "actual": exc.actual}
        return JSONResponse(
            status_code=int(exc.http_status),
            content=_error_payload(request, error_code=exc.code, error_message=exc.message, **extra),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e.get("loc") or []), "msg": str(e.get("msg") or ""), "type": str(e.get("type") or "")}
            for e in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                request,
                error_code="validation_failed",
                error_message=errors[0]["msg"] if errors else "invalid request",
                errors=errors,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        status = int(exc.status_code)
        if status == 403:
            error_code = "forbidden"
        elif status == 404:
            error_code = "not_found"
        elif status == 405:
            error_code = "method_not_allowed"
        elif status == 429:
            error_code = "rate_limited"
        elif status == 503:
            error_code = "unavailable"
        else:
            error_code = "http_error"
        return JSONResponse(
            status_code=status,
            content=_error_payload(request, error_code=error_code, error_message=str(exc.detail or "request failed")),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled exception", extra={"rid": _request_id(request)})
        return JSONResponse(
            status_code=500,
            content=_error_payload(request, error_code="internal_error", error_message="internal server error"),
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=allow_methods,
        allow_headers=allow_headers,
    )

    app.include_router(health.router)
    app.include_router(quizzes.router)
    app.include_router(jobs.router)

    return app


app = create_app()
