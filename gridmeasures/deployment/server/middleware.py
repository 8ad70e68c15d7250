"""gridmeasures/deployment/server/middleware.py"""
from __future__ import annotations
import time
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gridmeasures.core.exceptions import GridMeasuresError

logger = logging.getLogger(__name__)

_PLAIN = (bool, int, float, str, list, type(None))

def _plain(context: dict) -> dict:
    return {k: v if isinstance(v, _PLAIN) else repr(v) for k, v in context.items()}

def setup_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - t0) * 1000
        logger.info(f"{request.method} {request.url.path} → {response.status_code} ({ms:.1f}ms)")
        return response

    @app.exception_handler(GridMeasuresError)
    async def grid_error(request: Request, exc: GridMeasuresError):
        logger.info(f"{request.url.path}: {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=422,
            content={
                "error":   type(exc).__name__,
                "detail":  str(exc),
                "context": _plain(exc.context),
            },
        )
