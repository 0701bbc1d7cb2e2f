from pydantic import BaseModel, Field, field_validator, model_validator

from mapbox_geocoder.schemas.location import Coordinate, RectangularRegion
from mapbox_geocoder.schemas.placemark import PlacemarkScope

MAX_BATCH_QUERIES = 50


class GeocodeOptions(BaseModel):
    """Filters shared by every kind of geocoding request"""

    allowed_iso_country_codes: list[str] | None = None
    focal_location: Coordinate | None = None
    allowed_scopes: list[PlacemarkScope] | None = None
    allowed_region: RectangularRegion | None = None
    maximum_result_count: int | None = Field(default=None, ge=1, le=10)
    locale: str | None = None

    @field_validator("allowed_iso_country_codes")
    @classmethod
    def normalize_country_codes(cls, value):
        if value is None:
            return value
        codes = [code.strip().lower() for code in value if code and code.strip()]
        if any(len(code) != 2 for code in codes):
            raise ValueError("ISO country codes must be two letters")
        return codes or None

    @field_validator("locale")
    @classmethod
    def normalize_locale(cls, value):
        if value is None:
            return value
        # Mapbox expects IETF tags with dashes, e.g. fr-CA
        value = value.strip().replace("_", "-")
        return value or None


class ForwardGeocodeOptions(GeocodeOptions):
    query: str
    autocompletes_query: bool = True

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must not be blank")
        return value


class ReverseGeocodeOptions(GeocodeOptions):
    coordinate: Coordinate

    @model_validator(mode="after")
    def limit_requires_single_scope(self):
        if self.maximum_result_count is not None and (
            not self.allowed_scopes or len(self.allowed_scopes) != 1
        ):
            raise ValueError(
                "maximum_result_count on a reverse request needs exactly one allowed scope"
            )
        return self


class ForwardBatchGeocodeOptions(GeocodeOptions):
    queries: list[str] = Field(min_length=1, max_length=MAX_BATCH_QUERIES)
    autocompletes_query: bool = True

    @field_validator("queries")
    @classmethod
    def queries_not_blank(cls, value: list[str]) -> list[str]:
        queries = [query.strip() for query in value]
        if any(not query for query in queries):
            raise ValueError("batch queries must not be blank")
        return queries


class ReverseBatchGeocodeOptions(GeocodeOptions):
    coordinates: list[Coordinate] = Field(min_length=1, max_length=MAX_BATCH_QUERIES)
