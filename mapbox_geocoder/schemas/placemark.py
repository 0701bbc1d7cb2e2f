from enum import Enum

from pydantic import BaseModel, ConfigDict

from mapbox_geocoder.schemas.address import PostalAddress
from mapbox_geocoder.schemas.location import Coordinate, RectangularRegion


class PlacemarkScope(str, Enum):
    COUNTRY = "country"
    REGION = "region"
    POSTAL_CODE = "postcode"
    DISTRICT = "district"
    PLACE = "place"
    LOCALITY = "locality"
    NEIGHBORHOOD = "neighborhood"
    ADDRESS = "address"
    POINT_OF_INTEREST = "poi"
    LANDMARK = "poi.landmark"


class Placemark(BaseModel):
    """
    A single geocoding result.

    Containing placemarks (country, region, place, ...) are kept innermost first in
    `superior_placemarks`; the accessors below pick them out by scope.
    """

    identifier: str
    text: str
    qualified_name: str | None = None
    scope: PlacemarkScope | None = None
    code: str | None = None
    wikidata_item_identifier: str | None = None
    location: Coordinate | None = None
    region: RectangularRegion | None = None
    house_number: str | None = None
    street_address: str | None = None
    genres: list[str] | None = None
    image_name: str | None = None
    phone_number: str | None = None
    relevance: float | None = None
    superior_placemarks: list["Placemark"] = []

    model_config = ConfigDict(extra="ignore")

    @property
    def name(self) -> str:
        if self.scope == PlacemarkScope.ADDRESS and self.house_number:
            return f"{self.house_number} {self.text}"
        return self.text

    @property
    def description(self) -> str:
        return self.name

    @property
    def thoroughfare(self) -> str | None:
        if self.scope != PlacemarkScope.ADDRESS:
            return None
        return self.text

    @property
    def sub_thoroughfare(self) -> str | None:
        if self.scope != PlacemarkScope.ADDRESS:
            return None
        return self.house_number

    def _superior(self, scope: PlacemarkScope) -> "Placemark | None":
        for placemark in self.superior_placemarks:
            if placemark.scope == scope:
                return placemark
        return None

    @property
    def country(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.COUNTRY)

    @property
    def administrative_region(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.REGION)

    @property
    def district(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.DISTRICT)

    @property
    def place(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.PLACE)

    @property
    def locality(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.LOCALITY)

    @property
    def neighborhood(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.NEIGHBORHOOD)

    @property
    def postal_code(self) -> "Placemark | None":
        return self._superior(PlacemarkScope.POSTAL_CODE)

    @property
    def address_dictionary(self) -> PostalAddress:
        """Postal address of this placemark, built from its own fields and its superiors."""
        street = None
        if self.scope == PlacemarkScope.ADDRESS:
            street = self.name
        elif self.street_address:
            street = self.street_address

        country = self.country
        if country is None and self.scope == PlacemarkScope.COUNTRY:
            country = self
        iso_country_code = country.code if country else None

        return PostalAddress(
            street=street,
            city=self.place.name if self.place else None,
            state=self.administrative_region.name if self.administrative_region else None,
            postal_code=self.postal_code.name if self.postal_code else None,
            country=country.name if country else None,
            iso_country_code=iso_country_code,
        )
