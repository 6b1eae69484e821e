"""Port interface for ticket persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.ticket import Ticket


class TicketRepository(ABC):
    @abstractmethod
    async def save(self, ticket: Ticket) -> Ticket:
        ...

    @abstractmethod
    async def get_by_id(self, ticket_id: int) -> Ticket | None:
        """Return the ticket with region/location resolved from its site."""
        ...

    @abstractmethod
    async def get_page(
        self,
        page: int,
        page_size: int,
        state: str | None = None,
        text: str | None = None,
    ) -> tuple[list[Ticket], int]:
        """Newest first. Returns one page and the total match count."""
        ...

    @abstractmethod
    async def get_located(self, state: str | None = None) -> list[Ticket]:
        """Return tickets whose site has coordinates."""
        ...

    @abstractmethod
    async def update_state(self, ticket_id: int, state: str) -> None:
        ...
