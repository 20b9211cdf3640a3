from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .analyzer import analyze
from .errors import AnalysisError, to_error_response
from .models import AnalyzeRequest, AnalyzeResponse, ErrorBody
from .urls import URL_ERROR_MESSAGES

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorBody},
    500: {"model": ErrorBody},
    502: {"model": ErrorBody},
    504: {"model": ErrorBody},
}


def _invalid_url_response(message: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"code": "INVALID_URL", "message": message or URL_ERROR_MESSAGES["invalid-format"]},
    )


def _error_response(err: BaseException) -> JSONResponse:
    status, body = to_error_response(err)
    return JSONResponse(status_code=status, content=body)


async def _run_analysis(url: str) -> AnalyzeResponse:
    return await analyze(
        url,
        timeout_ms=config.fetch_timeout_ms(),
        self_hostnames=config.self_hostnames(),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="WCAG Inspector", version="0.1.0")

    # Unset CORS_ALLOWED_ORIGIN allows any origin; a list echoes only its members.
    origins = config.cors_allow_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            logger.info(
                "%s %s %s in %dms",
                request.method,
                request.url.path,
                response.status_code,
                int((time.perf_counter() - start) * 1000),
            )
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Bad JSON, a missing url, or a non-string url are all caller input problems.
        return _invalid_url_response()

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(request: Request, exc: AnalysisError):
        if exc.status >= 500:
            logger.warning("Analysis failed with %s: %s", exc.code, exc.message)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled server error", exc_info=exc)
        return _error_response(exc)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.post(
        "/api/analyze",
        response_model=AnalyzeResponse,
        response_model_exclude_none=True,
        responses=_ERROR_RESPONSES,
    )
    async def analyze_post(req: AnalyzeRequest):
        return await _run_analysis(req.url)

    @app.get(
        "/api/analyze",
        response_model=AnalyzeResponse,
        response_model_exclude_none=True,
        responses=_ERROR_RESPONSES,
    )
    async def analyze_get(url: str = ""):
        if not url.strip():
            return _invalid_url_response()
        return await _run_analysis(url)

    return app


app = create_app()
