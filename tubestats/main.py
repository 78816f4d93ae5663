import re
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tubestats.config import settings
from tubestats.middleware.logging import StructuredLoggingMiddleware, configure_logging
from tubestats.routers import analytics, health, metrics, trending, videos

# Initialize structured logging (must be before any logger usage)
configure_logging(log_level=settings.log_level, service="tubestats")
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    for name, path in (("videos", settings.videos_path), ("trending", settings.trending_path)):
        if path.is_file():
            logger.info("data source found", source=name, path=str(path))
        else:
            logger.warning("data source missing", source=name, path=str(path))

    yield

    logger.info("shutting down")


app = FastAPI(title="tubestats API", version="0.1.0", lifespan=lifespan)

# Middleware stack (order matters: last added is outermost)
# Parse CORS origins: exact origins go to allow_origins, wildcard patterns
# (e.g. "http://localhost:*") become a regex.
_cors_exact: list[str] = []
_cors_patterns: list[str] = []
for _o in settings.cors_origins.split(","):
    _o = _o.strip()
    if not _o or _o == "*":
        continue
    if _o.endswith("*"):
        _cors_patterns.append(re.escape(_o.removesuffix("*")) + ".*")
    else:
        _cors_exact.append(_o)

_cors_regex = "|".join(_cors_patterns) if _cors_patterns else None
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_exact if _cors_exact else (["*"] if settings.cors_origins == "*" else []),
    allow_origin_regex=_cors_regex,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept"],
    max_age=86400,
)
app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(metrics.PrometheusMiddleware)

if settings.environment == "production" and settings.cors_origins == "*":
    logger.warning("CORS_ORIGINS is set to '*' in production, any website can call the API")

app.include_router(health.router)
app.include_router(videos.router)
app.include_router(trending.router)
app.include_router(analytics.router)
app.include_router(metrics.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tubestats.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=(settings.environment == "development"),
    )
