"""
Decode Mapbox Geocoding API payloads into placemarks.
"""

import logging
from typing import Any

from pydantic import ValidationError

from mapbox_geocoder.core.errors import GeocoderResponseError
from mapbox_geocoder.schemas.location import Coordinate, RectangularRegion
from mapbox_geocoder.schemas.placemark import Placemark, PlacemarkScope

logger = logging.getLogger(__name__)


def _scope_of(feature: dict[str, Any]) -> PlacemarkScope | None:
    place_types = feature.get("place_type") or []
    if place_types:
        raw_scope = place_types[0]
    else:
        raw_scope = feature.get("id", "").split(".", 1)[0]

    try:
        scope = PlacemarkScope(raw_scope)
    except ValueError:
        logger.debug("Unknown place type '%s' for feature %s", raw_scope, feature.get("id"))
        return None

    properties = feature.get("properties") or {}
    if scope == PlacemarkScope.POINT_OF_INTEREST and properties.get("landmark"):
        return PlacemarkScope.LANDMARK
    return scope


def _code_of(entry: dict[str, Any]) -> str | None:
    short_code = entry.get("short_code") or (entry.get("properties") or {}).get("short_code")
    return short_code.upper() if short_code else None


def _location_of(feature: dict[str, Any]) -> Coordinate | None:
    center = feature.get("center")
    if not center:
        center = (feature.get("geometry") or {}).get("coordinates")
    if not center:
        return None
    longitude, latitude = center[0], center[1]
    return Coordinate(latitude=latitude, longitude=longitude)


def _map_context_entry(entry: dict[str, Any]) -> Placemark:
    return Placemark(
        identifier=entry["id"],
        text=entry["text"],
        scope=_scope_of(entry),
        code=_code_of(entry),
        wikidata_item_identifier=entry.get("wikidata"),
    )


def map_feature(feature: dict[str, Any]) -> Placemark:
    properties = feature.get("properties") or {}
    category = properties.get("category")
    genres = [genre.strip() for genre in category.split(",")] if category else None
    bbox = feature.get("bbox")

    return Placemark(
        identifier=feature["id"],
        text=feature["text"],
        qualified_name=feature.get("place_name"),
        scope=_scope_of(feature),
        code=_code_of(feature),
        wikidata_item_identifier=properties.get("wikidata"),
        location=_location_of(feature),
        region=RectangularRegion.from_bbox(bbox) if bbox else None,
        house_number=feature.get("address"),
        street_address=properties.get("address"),
        genres=genres,
        image_name=properties.get("maki"),
        phone_number=properties.get("tel"),
        relevance=feature.get("relevance"),
        superior_placemarks=[
            _map_context_entry(entry) for entry in feature.get("context") or []
        ],
    )


def map_feature_collection(payload: Any) -> tuple[list[Placemark], str | None]:
    """
    Decode one FeatureCollection into its placemarks, in upstream order, and
    the attribution notice that must accompany them.
    """
    if not isinstance(payload, dict):
        raise GeocoderResponseError("Expected a JSON object from the geocoding service")

    if "message" in payload and "features" not in payload:
        raise GeocoderResponseError(payload["message"])

    features = payload.get("features")
    if not isinstance(features, list):
        logger.warning("Geocoding response has no feature list: %s", list(payload))
        raise GeocoderResponseError("Geocoding response has no features")

    try:
        placemarks = [map_feature(feature) for feature in features]
    except (AttributeError, KeyError, IndexError, TypeError, ValueError, ValidationError) as e:
        logger.warning("Malformed feature in geocoding response: %s", e)
        raise GeocoderResponseError(
            f"Unexpected response format from geocoding service: {str(e)}"
        ) from e

    return placemarks, payload.get("attribution")


def map_batch_response(payload: Any) -> list[tuple[list[Placemark], str | None]]:
    # A batch of one query comes back as a bare FeatureCollection
    if isinstance(payload, dict):
        return [map_feature_collection(payload)]
    if not isinstance(payload, list):
        raise GeocoderResponseError("Expected a JSON array from the batch geocoding service")
    return [map_feature_collection(collection) for collection in payload]
