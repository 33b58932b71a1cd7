"""
Error types for the weather proxy.
"""


class WeatherProxyError(Exception):
    """Base error carrying the HTTP status and the message shown to callers."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)


class BadRequestError(WeatherProxyError):
    status_code = 400
    public_message = "Latitude, longitude, start, and end are required"


class UpstreamFetchError(WeatherProxyError):
    """The forecast provider could not be reached or returned an unusable body."""

    status_code = 500
    public_message = "Failed to fetch weather data"
