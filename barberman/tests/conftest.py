"""Pytest fixtures for Barberman tests."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from barberman.models import Barber, Customer, Reward, RewardType, Service, Visit
from barberman.services.loyalty import LoyaltyService
from barberman.utils import start_of_day


@pytest.fixture
def service_cut(db):
    """Create haircut service."""
    return Service.objects.create(code="cut", name="Haircut", price=Decimal("40.00"))


@pytest.fixture
def service_beard(db):
    """Create beard trim service."""
    return Service.objects.create(code="beard", name="Beard trim", price=Decimal("25.00"))


@pytest.fixture
def reward_free(db, service_cut):
    """Free haircut after 5 visits."""
    reward = Reward.objects.create(
        name="Free haircut",
        visits_required=5,
        reward_type=RewardType.FREE,
    )
    reward.applicable_services.set([service_cut])
    return reward


@pytest.fixture
def reward_discount(db):
    """50% off after 3 visits."""
    return Reward.objects.create(
        name="Half price",
        visits_required=3,
        reward_type=RewardType.DISCOUNT,
        discount_percentage=50,
    )


@pytest.fixture
def customer(db):
    """Create a test customer."""
    return Customer.objects.create(
        code="CLI-001",
        first_name="John",
        last_name="Doe",
        phone="11999999999",
    )


@pytest.fixture
def other_customer(db):
    return Customer.objects.create(code="CLI-002", first_name="Jane", last_name="Roe")


@pytest.fixture
def barber(db):
    """Create a barber who joined on 2024-01-15."""
    return Barber.objects.create(code="BRB-001", name="Marco", join_date=date(2024, 1, 15))


@pytest.fixture
def other_barber(db):
    return Barber.objects.create(code="BRB-002", name="Lucas", join_date=date(2024, 1, 15))


@pytest.fixture
def record_visits(db):
    """Create visits and count them toward a customer's loyalty progress."""

    def _record(customer, count, barber=None):
        progress = None
        for _ in range(count):
            visit = Visit.objects.create(customer=customer, barber=barber)
            progress = LoyaltyService.record_visit_for_loyalty(customer.code, visit.pk)
        return progress

    return _record


@pytest.fixture
def visit_on(db):
    """Create a visit at noon (local time) on a given date."""

    def _visit(customer, barber, day, hour=12):
        return Visit.objects.create(
            customer=customer,
            barber=barber,
            visit_date=start_of_day(day) + timedelta(hours=hour),
        )

    return _visit


@pytest.fixture
def today():
    return timezone.localdate()
