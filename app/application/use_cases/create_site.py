"""CreateSiteUseCase — validate and register a new site."""

from __future__ import annotations

import logging

from app.application.ports.site_repo import SiteRepository
from app.domain.entities.site import Site
from app.domain.exceptions import ConflictError, ValidationError
from app.domain.value_objects.enums import SITE_REGIONS
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


def validate_site(code: str, name: str, region: str | None, latitude, longitude) -> list[str]:
    errors = []
    if not code or not code.strip():
        errors.append("code is required")
    if not name or not name.strip():
        errors.append("name is required")
    if not region:
        errors.append("region is required")
    elif region not in SITE_REGIONS:
        errors.append(f"unknown region: {region}")
    if latitude is None:
        errors.append("latitude is required")
    elif not -90 <= latitude <= 90:
        errors.append("latitude must be between -90 and 90")
    if longitude is None:
        errors.append("longitude is required")
    elif not -180 <= longitude <= 180:
        errors.append("longitude must be between -180 and 180")
    return errors


class CreateSiteUseCase:
    def __init__(self, site_repo: SiteRepository):
        self._sites = site_repo

    async def execute(
        self,
        code: str,
        name: str,
        region: str | None,
        latitude: float | None,
        longitude: float | None,
        address: str | None = None,
        detail: str | None = None,
    ) -> Site:
        errors = validate_site(code, name, region, latitude, longitude)
        if errors:
            raise ValidationError(errors)

        normalized = Site.normalize_code(code)
        if await self._sites.get_by_code(normalized) is not None:
            raise ConflictError(f"A site with code {normalized} already exists")

        site = Site(
            id=None,
            code=normalized,
            name=name.strip(),
            region=region,
            address=(address or "").strip() or None,
            location=GeoPoint(latitude=latitude, longitude=longitude),
            detail=(detail or "").strip() or None,
        )
        await self._sites.save(site)
        logger.info("Site %s created (%s)", site.code, site.region)
        return site
