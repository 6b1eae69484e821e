"""Port interface for site persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.site import Site


class SiteRepository(ABC):
    @abstractmethod
    async def save(self, site: Site) -> Site:
        ...

    @abstractmethod
    async def get_by_code(self, code: str) -> Site | None:
        ...

    @abstractmethod
    async def search(
        self,
        region: str | None = None,
        text: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Site], int]:
        """Return one page of sites and the total match count."""
        ...

    @abstractmethod
    async def get_located(self) -> list[Site]:
        """Return all sites that have both coordinates."""
        ...
