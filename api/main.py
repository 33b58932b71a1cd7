"""
FastAPI application serving cached weather data from Open-Meteo.
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.metrics import (
    get_content_type,
    get_metrics,
    health_check_counter,
    request_counter,
    request_duration,
    set_app_info,
)
from weather_proxy.cache import ResponseCache, WeatherCache
from weather_proxy.handler import WeatherQuery, handle_weather_query
from weather_proxy.upstream import UpstreamClient

from .config import settings
from .logging_config import log_request, setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

KNOWN_ENDPOINTS = {"/weather", "/health", "/metrics"}

# Process-wide collaborators, handed to routes through dependencies
response_cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds)
upstream_client = UpstreamClient(
    base_url=settings.weather_api_url,
    timeout=settings.upstream_timeout_seconds,
)


def get_cache() -> WeatherCache:
    return response_cache


def get_upstream_client() -> UpstreamClient:
    return upstream_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan event handler."""
    logger.info("Weather proxy starting up")
    logger.info(
        f"Configuration: PORT={settings.port}, "
        f"CACHE_TTL_SECONDS={settings.cache_ttl_seconds}, "
        f"WEATHER_API_URL={settings.weather_api_url}, "
        f"UPSTREAM_TIMEOUT_SECONDS={settings.upstream_timeout_seconds}"
    )

    set_app_info(version=settings.version, environment=settings.environment)
    logger.info("Prometheus metrics initialized")

    yield

    logger.info(f"Weather proxy shutting down with {len(response_cache)} cached entries")


app = FastAPI(
    title="Weather Proxy",
    description="Caching proxy for Open-Meteo hourly forecasts",
    version=settings.version,
    lifespan=lifespan,
)


# Metrics collection middleware
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """
    Collect Prometheus metrics for HTTP requests.
    """
    if request.url.path == "/metrics":
        return await call_next(request)

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    # Unknown paths collapse into a single label
    path = request.url.path
    endpoint = path if path in KNOWN_ENDPOINTS else "other"

    request_counter.labels(
        method=request.method, endpoint=endpoint, status_code=response.status_code
    ).inc()
    request_duration.labels(method=request.method, endpoint=endpoint).observe(duration)

    return response


# Pydantic models
class HealthResponse(BaseModel):
    message: str


class WeatherResponse(BaseModel):
    latitude: str
    longitude: str
    start: str
    end: str
    data: Any


class ErrorResponse(BaseModel):
    error: str


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    health_check_counter.labels(status="ok").inc()
    return HealthResponse(message="Application is working fine!")


@app.get("/metrics")
async def metrics_endpoint():
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics(), media_type=get_content_type())


@app.get(
    "/weather",
    response_model=WeatherResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def weather(
    latitude: Optional[str] = Query(None),
    longitude: Optional[str] = Query(None),
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    cache: WeatherCache = Depends(get_cache),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """
    Hourly temperature and precipitation for a location and date range.

    Served from the cache when a fresh entry exists for the exact same
    parameters, otherwise fetched from Open-Meteo and cached.
    """
    request_id = str(uuid.uuid4())
    start_time = time.time()

    query = WeatherQuery(latitude=latitude, longitude=longitude, start=start, end=end)
    outcome = handle_weather_query(query, cache, client)

    duration_ms = int((time.time() - start_time) * 1000)
    if outcome.status_code == 200:
        source = "cache" if outcome.cache_hit else "upstream"
        log_request(
            logger,
            request_id,
            duration_ms,
            "success",
            f"Weather query served from {source}",
            cache_key=outcome.cache_key,
        )
    else:
        log_request(
            logger,
            request_id,
            duration_ms,
            "error",
            f"Weather query failed: {outcome.error}",
            cache_key=outcome.cache_key,
        )

    return JSONResponse(status_code=outcome.status_code, content=outcome.body)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors with the same body shape as the weather errors."""
    if isinstance(exc.detail, dict):
        content: Dict[str, Any] = exc.detail
    else:
        content = {"error": exc.detail}

    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=settings.port, log_level="info", reload=False)
