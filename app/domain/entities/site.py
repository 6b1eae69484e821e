"""Site entity — a physical network site with a fixed location."""

from dataclasses import dataclass

from app.domain.entities.map_point import MapPoint
from app.domain.value_objects.enums import PointKind
from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class Site:
    id: int | None
    code: str
    name: str
    region: str | None
    address: str | None = None
    location: GeoPoint | None = None
    detail: str | None = None

    @staticmethod
    def normalize_code(raw: str) -> str:
        return raw.strip().upper()

    def to_map_point(self) -> MapPoint:
        return MapPoint(
            id=self.id,
            code=self.code,
            name=self.name,
            region=self.region,
            kind=PointKind.SITE,
            location=self.location,
        )
