"""Port interface for read-only catalogs."""

from abc import ABC, abstractmethod


class CatalogRepository(ABC):
    @abstractmethod
    async def get_ticket_states(self) -> list[dict]:
        """Return ticket states as dicts with code, name, description."""
        ...
