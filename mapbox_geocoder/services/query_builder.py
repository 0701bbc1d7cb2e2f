"""
Translate geocoding options into Mapbox Geocoding API (v5) URLs.
"""

from urllib.parse import quote

from httpx import URL

from mapbox_geocoder.schemas.options import (
    ForwardBatchGeocodeOptions,
    ForwardGeocodeOptions,
    GeocodeOptions,
    ReverseBatchGeocodeOptions,
    ReverseGeocodeOptions,
)

PLACES_DATASET = "mapbox.places"
PERMANENT_PLACES_DATASET = "mapbox.places-permanent"

# Mapbox reads five decimal places (about one metre) in reverse queries
COORDINATE_PRECISION = 5


def dataset_for(options: GeocodeOptions) -> str:
    if isinstance(options, ForwardBatchGeocodeOptions | ReverseBatchGeocodeOptions):
        return PERMANENT_PLACES_DATASET
    return PLACES_DATASET


def _encoded_query(options: GeocodeOptions) -> str:
    if isinstance(options, ForwardGeocodeOptions):
        return quote(options.query, safe="")
    if isinstance(options, ReverseGeocodeOptions):
        return options.coordinate.to_lon_lat(COORDINATE_PRECISION)
    if isinstance(options, ForwardBatchGeocodeOptions):
        return ";".join(quote(query, safe="") for query in options.queries)
    if isinstance(options, ReverseBatchGeocodeOptions):
        return ";".join(
            coordinate.to_lon_lat(COORDINATE_PRECISION) for coordinate in options.coordinates
        )
    raise TypeError(f"Unsupported geocode options: {type(options).__name__}")


def build_path(options: GeocodeOptions, dataset: str | None = None) -> str:
    dataset = dataset or dataset_for(options)
    return f"/geocoding/v5/{dataset}/{_encoded_query(options)}.json"


def build_params(options: GeocodeOptions, access_token: str) -> dict[str, str]:
    params = {"access_token": access_token}

    if options.allowed_iso_country_codes:
        params["country"] = ",".join(options.allowed_iso_country_codes)
    if options.focal_location is not None:
        params["proximity"] = options.focal_location.to_lon_lat()
    if options.allowed_scopes:
        params["types"] = ",".join(scope.value for scope in options.allowed_scopes)
    if options.allowed_region is not None:
        params["bbox"] = ",".join(str(value) for value in options.allowed_region.to_bbox())
    if options.maximum_result_count is not None:
        params["limit"] = str(options.maximum_result_count)
    if options.locale:
        params["language"] = options.locale

    if isinstance(options, ForwardGeocodeOptions | ForwardBatchGeocodeOptions):
        params["autocomplete"] = "true" if options.autocompletes_query else "false"

    return params


def build_url(options: GeocodeOptions, access_token: str, api_base_url: str) -> URL:
    """
    Build the full request URL, access token included.
    """
    path = build_path(options)
    return URL(api_base_url.rstrip("/") + path, params=build_params(options, access_token))
