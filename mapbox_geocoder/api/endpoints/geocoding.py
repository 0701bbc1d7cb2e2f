import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from mapbox_geocoder.core.errors import GeocoderConfigError, GeocoderError
from mapbox_geocoder.schemas.geocoding import GeocodeResponse
from mapbox_geocoder.schemas.location import Coordinate
from mapbox_geocoder.schemas.options import ForwardGeocodeOptions, ReverseGeocodeOptions
from mapbox_geocoder.schemas.placemark import PlacemarkScope
from mapbox_geocoder.services.geocoding import Geocoder

router = APIRouter()


def get_geocoder() -> Geocoder:
    try:
        return Geocoder.get_instance()
    except GeocoderConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        ) from e


def _retry_after(e: GeocoderError, now: float | None = None) -> int | None:
    """Seconds until the upstream rate-limit window resets."""
    if e.rate_limit_reset is not None:
        now = time.time() if now is None else now
        return max(0, int(e.rate_limit_reset - now))
    return e.rate_limit_interval


def _to_http_exception(e: GeocoderError) -> HTTPException:
    if e.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        retry_after = _retry_after(e)
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Geocoding service rate limit exceeded. Please try again later.",
            headers=headers,
        )
    if e.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Geocoding service access denied. Please contact support.",
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Geocoding failed: {e.message}",
    )


def _options_error(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[{"loc": err["loc"], "msg": err["msg"]} for err in e.errors()],
    )


@router.get("/geocode", response_model=GeocodeResponse)
async def geocode(
    query: Annotated[str, Query(description="Address, place name, or POI to geocode")],
    geocoder: Annotated[Geocoder, Depends(get_geocoder)],
    types: Annotated[list[PlacemarkScope] | None, Query()] = None,
    country: Annotated[list[str] | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=10)] = None,
    language: Annotated[str | None, Query()] = None,
    autocomplete: bool = True,
) -> GeocodeResponse:
    """
    Forward geocode a free-text query into placemarks.
    """
    try:
        options = ForwardGeocodeOptions(
            query=query,
            allowed_scopes=types,
            allowed_iso_country_codes=country,
            maximum_result_count=limit,
            locale=language,
            autocompletes_query=autocomplete,
        )
    except ValidationError as e:
        raise _options_error(e) from e

    try:
        result = await geocoder.geocode(options)
    except GeocoderError as e:
        raise _to_http_exception(e) from e
    return GeocodeResponse.from_result(result)


@router.get("/reverse", response_model=GeocodeResponse)
async def reverse_geocode(
    latitude: Annotated[float, Query(ge=-90, le=90)],
    longitude: Annotated[float, Query(ge=-180, le=180)],
    geocoder: Annotated[Geocoder, Depends(get_geocoder)],
    types: Annotated[list[PlacemarkScope] | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=10)] = None,
    language: Annotated[str | None, Query()] = None,
) -> GeocodeResponse:
    """
    Reverse geocode a coordinate into the placemarks that contain it.
    """
    try:
        options = ReverseGeocodeOptions(
            coordinate=Coordinate(latitude=latitude, longitude=longitude),
            allowed_scopes=types,
            maximum_result_count=limit,
            locale=language,
        )
    except ValidationError as e:
        raise _options_error(e) from e

    try:
        result = await geocoder.geocode(options)
    except GeocoderError as e:
        raise _to_http_exception(e) from e
    return GeocodeResponse.from_result(result)
