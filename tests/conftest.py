"""Pytest configuration and shared fixtures."""

import pytest

from app.domain.entities.ticket import Ticket
from app.domain.value_objects.enums import CrewCategory
from tests.factories import LIMA_CENTER


@pytest.fixture
def origin():
    return LIMA_CENTER


@pytest.fixture
def ticket():
    return Ticket(
        id=1,
        source="NOC",
        site_code="LIM001",
        site_name="Lima Centro",
        task_category="CORRECTIVO",
        task_subcategory="ENERGIA",
        crew_category=CrewCategory.A,
        region="LIMA",
        location=LIMA_CENTER,
    )
