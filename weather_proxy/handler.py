"""
Request flow for weather queries: validate, look up the cache, fetch on miss.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from utils.metrics import cache_lookup_counter

from .cache import WeatherCache, build_cache_key
from .errors import BadRequestError, WeatherProxyError
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherQuery:
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    def is_complete(self) -> bool:
        return all([self.latitude, self.longitude, self.start, self.end])

    def echo(self) -> Dict[str, str]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "start": self.start,
            "end": self.end,
        }


@dataclass
class WeatherOutcome:
    status_code: int
    body: Dict[str, Any]
    cache_key: Optional[str] = None
    cache_hit: bool = False
    error: Optional[WeatherProxyError] = field(default=None, repr=False)

    @classmethod
    def success(cls, query: WeatherQuery, data: Any, cache_key: str, cache_hit: bool):
        return cls(
            status_code=200,
            body={**query.echo(), "data": data},
            cache_key=cache_key,
            cache_hit=cache_hit,
        )

    @classmethod
    def failure(cls, error: WeatherProxyError, cache_key: Optional[str] = None):
        return cls(
            status_code=error.status_code,
            body={"error": error.public_message},
            cache_key=cache_key,
            error=error,
        )


def handle_weather_query(
    query: WeatherQuery, cache: WeatherCache, client: UpstreamClient
) -> WeatherOutcome:
    """Serve a weather query from the cache, falling back to the upstream."""
    if not query.is_complete():
        return WeatherOutcome.failure(BadRequestError())

    cache_key = build_cache_key(query.latitude, query.longitude, query.start, query.end)

    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.info(f"Cache hit for {cache_key}", extra={"cache_key": cache_key})
        cache_lookup_counter.labels(result="hit").inc()
        return WeatherOutcome.success(query, cached_data, cache_key, cache_hit=True)

    logger.info(f"Cache miss for {cache_key}", extra={"cache_key": cache_key})
    cache_lookup_counter.labels(result="miss").inc()

    result = client.fetch_hourly(query.latitude, query.longitude, query.start, query.end)
    if not result.ok:
        return WeatherOutcome.failure(result.error, cache_key)

    cache.set(cache_key, result.data)
    return WeatherOutcome.success(query, result.data, cache_key, cache_hit=False)
