"""Catalog endpoints — read-only lookup tables."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.application.ports.catalog_repo import CatalogRepository
from app.domain.value_objects.enums import DEFAULT_TICKET_STATES
from app.infrastructure.api.dependencies import get_catalog_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/states")
async def ticket_states(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    """Ticket states; falls back to the built-in list when the catalog is unavailable."""
    try:
        states = await catalog_repo.get_ticket_states()
    except Exception:
        logger.exception("Could not load ticket-state catalog, using defaults")
        states = []

    if not states:
        return {"source": "default", "states": list(DEFAULT_TICKET_STATES)}
    return {"source": "catalog", "states": states}
