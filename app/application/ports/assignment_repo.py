"""Port interface for the crew/ticket state history."""

from abc import ABC, abstractmethod

from app.domain.entities.crew_assignment import CrewAssignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, assignment: CrewAssignment) -> CrewAssignment:
        ...

    @abstractmethod
    async def get_by_ticket(self, ticket_id: int) -> list[CrewAssignment]:
        """Full history for a ticket, oldest first."""
        ...
