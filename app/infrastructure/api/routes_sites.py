"""Site endpoints — list + create."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.application.ports.site_repo import SiteRepository
from app.application.use_cases.create_site import CreateSiteUseCase
from app.infrastructure.api.dependencies import get_create_site_uc, get_site_repo
from app.infrastructure.api.serializers import serialize_site

router = APIRouter(prefix="/sites", tags=["sites"])


class SiteCreate(BaseModel):
    code: str
    name: str
    region: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    detail: str | None = None


@router.get("")
async def list_sites(
    region: str | None = None,
    q: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=100, ge=1, le=1000),
    site_repo: SiteRepository = Depends(get_site_repo),
):
    """List sites, optionally filtered by region and code/name substring."""
    sites, total = await site_repo.search(
        region=region, text=q, limit=page_size, offset=(page - 1) * page_size
    )
    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "sites": [serialize_site(s) for s in sites],
    }


@router.post("", status_code=201)
async def create_site(
    body: SiteCreate,
    create_uc: CreateSiteUseCase = Depends(get_create_site_uc),
    session: AsyncSession = Depends(get_session),
):
    site = await create_uc.execute(
        code=body.code,
        name=body.name,
        region=body.region,
        latitude=body.latitude,
        longitude=body.longitude,
        address=body.address,
        detail=body.detail,
    )
    await session.commit()
    return serialize_site(site)
