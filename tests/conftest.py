"""Shared pytest fixtures for the billing services."""

import pytest

from montez.config.roster import DEFAULT_ROSTER_PATH, ApartmentRoster
from montez.config.settings import BillingSettings
from montez.services.balance_service import BalanceService
from montez.services.occupancy_service import OccupancyService
from montez.services.projection_service import ProjectionService
from montez.services.rent_service import RentService
from montez.services.water_service import WaterBillingService


@pytest.fixture
def settings(monkeypatch):
    """Default settings, isolated from any MONTEZ_* variables or .env file."""
    for key in list(BillingSettings.model_fields):
        monkeypatch.delenv(f"MONTEZ_{key.upper()}", raising=False)
    return BillingSettings(_env_file=None)


@pytest.fixture
def roster(settings):
    """The packaged 22-unit Montez A roster."""
    return ApartmentRoster.load(DEFAULT_ROSTER_PATH, settings=settings)


@pytest.fixture
def water_service(settings):
    return WaterBillingService(settings)


@pytest.fixture
def balance_service(settings):
    return BalanceService(settings)


@pytest.fixture
def occupancy_service(roster, settings):
    return OccupancyService(roster, settings)


@pytest.fixture
def rent_service(roster, settings):
    return RentService(roster, settings)


@pytest.fixture
def projection_service(roster, settings):
    return ProjectionService(roster, settings)
