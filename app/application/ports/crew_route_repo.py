"""Port interface for crew route tracking samples."""

from abc import ABC, abstractmethod

from app.domain.entities.crew_route_log import CrewRouteLog


class CrewRouteRepository(ABC):
    @abstractmethod
    async def save(self, log: CrewRouteLog) -> CrewRouteLog:
        ...
