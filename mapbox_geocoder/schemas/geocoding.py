from pydantic import BaseModel

from mapbox_geocoder.schemas.address import PostalAddress
from mapbox_geocoder.schemas.location import Coordinate, RectangularRegion
from mapbox_geocoder.schemas.placemark import Placemark, PlacemarkScope


class GeocodeResult(BaseModel):
    """Internal result from the geocoder: placemarks plus the provider attribution"""

    placemarks: list[Placemark]
    attribution: str | None = None


class PlacemarkSummary(BaseModel):
    name: str
    qualified_name: str | None = None
    scope: PlacemarkScope | None = None
    location: Coordinate | None = None
    region: RectangularRegion | None = None
    address: PostalAddress

    @classmethod
    def from_placemark(cls, placemark: Placemark) -> "PlacemarkSummary":
        return cls(
            name=placemark.name,
            qualified_name=placemark.qualified_name,
            scope=placemark.scope,
            location=placemark.location,
            region=placemark.region,
            address=placemark.address_dictionary,
        )


class GeocodeResponse(BaseModel):
    """Response from the geocoding endpoints"""

    placemarks: list[PlacemarkSummary]
    attribution: str | None = None

    @classmethod
    def from_result(cls, result: GeocodeResult) -> "GeocodeResponse":
        return cls(
            placemarks=[PlacemarkSummary.from_placemark(p) for p in result.placemarks],
            attribution=result.attribution,
        )
