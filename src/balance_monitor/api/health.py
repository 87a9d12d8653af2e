"""
Liveness endpoint.

Answers every GET with a fixed payload. It has no handle on the pipeline and
keeps reporting ok while rounds fail.
"""

from typing import Any

from fastapi import APIRouter, FastAPI

from balance_monitor import __version__

HEALTH_PAYLOAD = {"status": "ok"}

router = APIRouter()


@router.get("/{full_path:path}")
async def health_check(full_path: str) -> dict[str, Any]:
    """Liveness probe on any path."""
    return dict(HEALTH_PAYLOAD)


def create_health_app() -> FastAPI:
    app = FastAPI(
        title="Balance Monitor",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(router, prefix="")
    return app
