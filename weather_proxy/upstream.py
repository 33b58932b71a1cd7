"""
Upstream client for the Open-Meteo forecast API.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests

from utils.metrics import upstream_duration, upstream_request_counter

from .errors import UpstreamFetchError

logger = logging.getLogger(__name__)

WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"
HOURLY_VARIABLES = "temperature_2m,precipitation"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single upstream call: either ``data`` or ``error`` is set."""

    data: Any = None
    error: Optional[UpstreamFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UpstreamClient:
    def __init__(
        self,
        base_url: str = WEATHER_API_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._http = session or requests

    def build_params(self, latitude: str, longitude: str, start: str, end: str):
        """Map query fields onto the provider's parameter names, verbatim."""
        return {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start,
            "end_date": end,
            "hourly": HOURLY_VARIABLES,
        }

    def fetch_hourly(
        self, latitude: str, longitude: str, start: str, end: str
    ) -> FetchResult:
        """
        Fetch the hourly temperature and precipitation series.

        Never raises for upstream problems. Connectivity errors, timeouts,
        non-2xx statuses and bodies without an ``hourly`` object all come
        back as a failed FetchResult.
        """
        params = self.build_params(latitude, longitude, start, end)
        start_time = time.time()

        try:
            response = self._http.get(
                self.base_url, params=params, timeout=self.timeout
            )
            response.raise_for_status()

            body = response.json()
            if not isinstance(body, dict) or body.get("hourly") is None:
                raise ValueError("response body has no 'hourly' object")

            result = FetchResult(data=body["hourly"])
            status = "success"

        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching weather data: {e}")
            result = FetchResult(error=UpstreamFetchError(str(e)))
            status = "error"

        upstream_request_counter.labels(status=status).inc()
        upstream_duration.labels(status=status).observe(time.time() - start_time)

        return result
