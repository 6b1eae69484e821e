"""Builders shared by the test modules."""

from app.domain.entities.crew import Crew
from app.domain.value_objects.enums import CrewCategory
from app.domain.value_objects.geo_point import GeoPoint

# Plaza de Armas, Lima
LIMA_CENTER = GeoPoint(latitude=-12.0464, longitude=-77.0428)


def offset_north(origin: GeoPoint, km: float) -> GeoPoint:
    """A point *km* kilometres due north of *origin* (1° lat ≈ 111.195 km)."""
    return GeoPoint(latitude=origin.latitude + km / 111.19492664455873, longitude=origin.longitude)


def make_crew(crew_id, km_north=None, category=None, **kwargs) -> Crew:
    location = offset_north(LIMA_CENTER, km_north) if km_north is not None else None
    return Crew(
        id=crew_id,
        code=f"CUA-{crew_id:03d}",
        name=f"Cuadrilla {crew_id}",
        location=location,
        category=CrewCategory(category) if category else None,
        **kwargs,
    )
