"""Port interface for crew persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.crew import Crew
from app.domain.value_objects.enums import CrewState
from app.domain.value_objects.geo_point import GeoPoint


class CrewRepository(ABC):
    @abstractmethod
    async def get_by_id(self, crew_id: int) -> Crew | None:
        ...

    @abstractmethod
    async def get_located(self) -> list[Crew]:
        """Return all crews that have both coordinates."""
        ...

    @abstractmethod
    async def search(self, text: str, limit: int = 20) -> list[Crew]:
        """Case-insensitive substring search on code and name."""
        ...

    @abstractmethod
    async def get_positions(self) -> dict[int, GeoPoint]:
        """Return the latest coordinates of every located crew, keyed by id."""
        ...

    @abstractmethod
    async def update_state(self, crew_id: int, state: CrewState) -> None:
        ...
