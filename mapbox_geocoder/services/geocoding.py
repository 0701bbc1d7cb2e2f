import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from httpx import URL, AsyncClient, HTTPError, Response

from mapbox_geocoder.core.config import settings
from mapbox_geocoder.core.errors import (
    GeocoderConfigError,
    GeocoderError,
    GeocoderHTTPError,
    GeocoderNetworkError,
    GeocoderResponseError,
)
from mapbox_geocoder.schemas.geocoding import GeocodeResult
from mapbox_geocoder.schemas.options import (
    ForwardBatchGeocodeOptions,
    GeocodeOptions,
    ReverseBatchGeocodeOptions,
)
from mapbox_geocoder.schemas.placemark import Placemark
from mapbox_geocoder.services.query_builder import build_url
from mapbox_geocoder.services.response_mapper import map_batch_response, map_feature_collection

CompletionHandler = Callable[
    [list[Placemark] | None, str | None, GeocoderError | None], Awaitable[None] | None
]
BatchCompletionHandler = Callable[
    [list[list[Placemark]] | None, list[str | None] | None, GeocoderError | None],
    Awaitable[None] | None,
]

BATCH_OPTIONS = (ForwardBatchGeocodeOptions, ReverseBatchGeocodeOptions)


def _header_int(response: Response, name: str) -> int | None:
    value = response.headers.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


async def _complete(handler, *args) -> None:
    outcome = handler(*args)
    if inspect.isawaitable(outcome):
        await outcome


class Geocoder:
    _instance: "Geocoder" = None

    def __init__(
        self,
        access_token: str | None = None,
        api_base_url: str | None = None,
        client: AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.access_token = access_token or settings.MAPBOX_ACCESS_TOKEN
        if not self.access_token:
            raise GeocoderConfigError("A Mapbox access token is required")
        self.api_base_url = api_base_url or settings.MAPBOX_API_BASE_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.client = client
        self.logger = logging.getLogger(__name__)

    @classmethod
    def get_instance(cls) -> "Geocoder":
        if Geocoder._instance is None:
            Geocoder._instance = cls()
        return Geocoder._instance

    def url_for(self, options: GeocodeOptions) -> URL:
        if options.locale is None and settings.DEFAULT_LOCALE:
            options = options.model_copy(update={"locale": settings.DEFAULT_LOCALE})
        return build_url(options, self.access_token, self.api_base_url)

    async def _send(self, url: URL) -> Response:
        if self.client is not None:
            return await self.client.get(url)
        async with AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)

    async def _fetch(self, options: GeocodeOptions) -> Any:
        url = self.url_for(options)
        try:
            r = await self._send(url)
        except HTTPError as e:
            # url.path never carries the access token
            self.logger.error("Geocoding request to %s failed: %s", url.path, e)
            raise GeocoderNetworkError(f"Geocoding request failed: {str(e)}") from e

        if r.status_code != 200:
            try:
                message = r.json().get("message")
            except (ValueError, AttributeError):
                message = None
            message = message or f"Geocoding service returned error status {r.status_code}"
            self.logger.error(
                "Geocoding upstream HTTP error %s for %s: %s", r.status_code, url.path, message
            )
            raise GeocoderHTTPError(
                message,
                status_code=r.status_code,
                rate_limit_reset=_header_int(r, "X-Rate-Limit-Reset"),
                rate_limit_interval=_header_int(r, "X-Rate-Limit-Interval"),
            )

        try:
            return r.json()
        except ValueError as e:
            self.logger.warning("Geocoding response for %s is not JSON", url.path)
            raise GeocoderResponseError(
                f"Invalid response from geocoding service: {str(e)}",
                status_code=r.status_code,
            ) from e

    async def geocode(
        self,
        options: GeocodeOptions,
        completion_handler: CompletionHandler | None = None,
    ) -> GeocodeResult | None:
        """
        Geocode a single query or coordinate.

        With a completion handler, it is called once with (placemarks, attribution, error)
        and failures are reported through it instead of being raised.
        """
        if isinstance(options, BATCH_OPTIONS):
            raise TypeError("Batch options must be sent with batch_geocode()")

        try:
            payload = await self._fetch(options)
            placemarks, attribution = map_feature_collection(payload)
        except GeocoderError as e:
            if completion_handler is None:
                raise
            await _complete(completion_handler, None, None, e)
            return None

        if not placemarks:
            self.logger.info("Geocoding returned no results for %s", type(options).__name__)

        if completion_handler is not None:
            await _complete(completion_handler, placemarks, attribution, None)
        return GeocodeResult(placemarks=placemarks, attribution=attribution)

    async def batch_geocode(
        self,
        options: ForwardBatchGeocodeOptions | ReverseBatchGeocodeOptions,
        completion_handler: BatchCompletionHandler | None = None,
    ) -> list[GeocodeResult] | None:
        """
        Geocode several queries or coordinates in one request, one result per query.
        """
        if not isinstance(options, BATCH_OPTIONS):
            raise TypeError("batch_geocode() needs batch options")

        try:
            payload = await self._fetch(options)
            collections = map_batch_response(payload)
        except GeocoderError as e:
            if completion_handler is None:
                raise
            await _complete(completion_handler, None, None, e)
            return None

        results = [
            GeocodeResult(placemarks=placemarks, attribution=attribution)
            for placemarks, attribution in collections
        ]
        if completion_handler is not None:
            await _complete(
                completion_handler,
                [result.placemarks for result in results],
                [result.attribution for result in results],
                None,
            )
        return results


def __getattr__(name: str):
    # Built on first access so importing this module never needs a token
    if name == "geocoder_service":
        return Geocoder.get_instance()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
