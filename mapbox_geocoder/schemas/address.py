from pydantic import BaseModel


class PostalAddress(BaseModel):
    """Postal address assembled from a placemark and its containing placemarks"""

    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    iso_country_code: str | None = None

    def to_string(self) -> str:
        """Convert the postal address to a single formatted line"""
        parts = []
        if self.street:
            parts.append(self.street)
        if self.city:
            parts.append(self.city)
        if self.state and self.postal_code:
            parts.append(f"{self.state} {self.postal_code}")
        elif self.state:
            parts.append(self.state)
        elif self.postal_code:
            parts.append(self.postal_code)
        if self.country:
            parts.append(self.country)

        return ", ".join(parts)
