"""
gridmeasures/deployment/server/app.py
=====================================
FastAPI server for gridmeasures.
Exposes every index as a REST endpoint under /api/v1.
Requires: pip install fastapi uvicorn
"""
from __future__ import annotations
import logging
import uvicorn
from fastapi import FastAPI
from gridmeasures.deployment.server.routes import router
from gridmeasures.deployment.server.middleware import setup_middleware
from gridmeasures.version import FRAMEWORK_DESCRIPTION, FRAMEWORK_NAME, __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="gridmeasures Index Server",
    description=FRAMEWORK_DESCRIPTION,
    version=__version__,
)

setup_middleware(app)
app.include_router(router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "ok", "framework": FRAMEWORK_NAME, "version": __version__}


def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    uvicorn.run("gridmeasures.deployment.server.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    serve()
