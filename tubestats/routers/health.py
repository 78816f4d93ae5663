"""Health check endpoints: liveness and readiness probes."""

import os
import time
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from tubestats.config import Settings
from tubestats.dependencies import get_settings

router = APIRouter(tags=["health"])

_start_time: float = time.time()


@router.get("/health/live")
async def live():
    return {"status": "ok"}


@router.get("/health/ready")
def ready(cfg: Annotated[Settings, Depends(get_settings)]):
    checks = {
        "videos": _check_file(cfg.videos_path),
        "trending": _check_file(cfg.trending_path),
    }
    overall_status = "healthy"
    if any(c["status"] != "up" for c in checks.values()):
        overall_status = "degraded"

    resp = {
        "status": overall_status,
        "checks": checks,
        "uptime_seconds": int(time.time() - _start_time),
        "version": "0.1.0",
    }

    status_code = 200 if overall_status == "healthy" else 503
    return JSONResponse(content=resp, status_code=status_code)


def _check_file(path: Path) -> dict:
    if not path.is_file():
        return {"status": "down", "error": "file not found"}
    if not os.access(path, os.R_OK):
        return {"status": "down", "error": "file not readable"}
    return {"status": "up", "size_bytes": path.stat().st_size}
