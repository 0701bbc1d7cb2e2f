from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def to_lon_lat(self, precision: int | None = None) -> str:
        """Render as "longitude,latitude", the order Mapbox expects in URLs."""
        if precision is None:
            return f"{self.longitude},{self.latitude}"
        return f"{self.longitude:.{precision}f},{self.latitude:.{precision}f}"


class RectangularRegion(BaseModel):
    """Bounding box expressed by its south-west and north-east corners"""

    south_west: Coordinate
    north_east: Coordinate

    @classmethod
    def from_bbox(cls, bbox: list[float]) -> "RectangularRegion":
        min_lon, min_lat, max_lon, max_lat = bbox
        return cls(
            south_west=Coordinate(latitude=min_lat, longitude=min_lon),
            north_east=Coordinate(latitude=max_lat, longitude=max_lon),
        )

    def to_bbox(self) -> list[float]:
        return [
            self.south_west.longitude,
            self.south_west.latitude,
            self.north_east.longitude,
            self.north_east.latitude,
        ]

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.south_west.latitude <= coordinate.latitude <= self.north_east.latitude
            and self.south_west.longitude <= coordinate.longitude <= self.north_east.longitude
        )
