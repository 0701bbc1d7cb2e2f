class GeocoderError(Exception):
    """Base error for failed geocoding requests"""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
        rate_limit_interval: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset
        self.rate_limit_interval = rate_limit_interval


class GeocoderConfigError(GeocoderError):
    pass


class GeocoderHTTPError(GeocoderError):
    pass


class GeocoderResponseError(GeocoderError):
    pass


class GeocoderNetworkError(GeocoderError):
    pass
