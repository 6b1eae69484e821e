"""Tests for site validation and CreateSiteUseCase."""

from __future__ import annotations

import pytest

from app.application.use_cases.create_site import CreateSiteUseCase, validate_site
from app.domain.exceptions import ConflictError, ValidationError
from tests.fakes import FakeSiteRepo


def test_validate_site_ok():
    assert validate_site("lim001", "Lima Centro", "LIMA", -12.0, -77.0) == []


def test_validate_site_collects_every_error():
    errors = validate_site(" ", "", "ATLANTIS", 91, -181)
    assert len(errors) == 5


def test_validate_site_missing_coordinates():
    errors = validate_site("X1", "X", "CUSCO", None, None)
    assert errors == ["latitude is required", "longitude is required"]


@pytest.mark.asyncio
async def test_create_site_uppercases_code():
    repo = FakeSiteRepo()
    site = await CreateSiteUseCase(repo).execute(" lim001 ", "Lima Centro", "LIMA", -12.04, -77.04)
    assert site.code == "LIM001"
    assert site.id == 1
    assert site.location.latitude == -12.04


@pytest.mark.asyncio
async def test_duplicate_code_conflicts():
    repo = FakeSiteRepo()
    uc = CreateSiteUseCase(repo)
    await uc.execute("LIM001", "Lima Centro", "LIMA", -12.04, -77.04)
    with pytest.raises(ConflictError):
        await uc.execute("lim001", "Otro", "LIMA", -12.0, -77.0)


@pytest.mark.asyncio
async def test_invalid_site_not_saved():
    repo = FakeSiteRepo()
    with pytest.raises(ValidationError):
        await CreateSiteUseCase(repo).execute("LIM002", "Lima", "LIMA", 120.0, -77.0)
    assert repo.sites == {}
