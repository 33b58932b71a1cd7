"""
Prometheus metrics for the weather proxy.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

# Application info metric
app_info = Info(
    "weather_proxy_app",
    "Application information for the weather proxy",
)

# Request metrics
request_counter = Counter(
    "weather_proxy_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

request_duration = Histogram(
    "weather_proxy_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Cache metrics
cache_lookup_counter = Counter(
    "weather_proxy_cache_lookups_total",
    "Total number of cache lookups",
    ["result"],
)

# Upstream metrics
upstream_request_counter = Counter(
    "weather_proxy_upstream_requests_total",
    "Total number of calls to the forecast provider",
    ["status"],
)

upstream_duration = Histogram(
    "weather_proxy_upstream_duration_seconds",
    "Forecast provider call duration in seconds",
    ["status"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

# Health metrics
health_check_counter = Counter(
    "weather_proxy_health_checks_total",
    "Total number of health check requests",
    ["status"],
)


def set_app_info(version: str, environment: str = "production"):
    """Set application information."""
    app_info.info(
        {"version": version, "environment": environment, "application": "weather-proxy"}
    )


def get_metrics() -> bytes:
    """Get all metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST
