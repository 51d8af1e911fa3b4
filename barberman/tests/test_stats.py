"""Tests for staff statistics and the ORM facts backend."""

from datetime import timedelta
from decimal import Decimal

import pytest

from barberman import StatsService
from barberman.adapters.orm import DjangoStaffFactsBackend
from barberman.exceptions import NotFound
from barberman.models import StaffStats, Visit
from barberman.services.stats import get_staff_facts_backend
from barberman.utils import day_bounds


pytestmark = pytest.mark.django_db


class TestRecalculate:
    """Tests for StatsService.recalculate."""

    def test_aggregates_visits(self, barber, customer, other_customer, service_cut, service_beard):
        first = Visit.objects.create(customer=customer, barber=barber)
        first.services.set([service_cut, service_beard])
        Visit.objects.create(customer=customer, barber=barber)
        Visit.objects.create(customer=other_customer, barber=barber)

        stats = StatsService.recalculate("BRB-001")

        assert stats.total_visits == 3
        assert stats.unique_clients == 2
        assert stats.returning_clients == 1
        assert stats.retention_rate == Decimal("50.00")
        assert stats.service_variety == 2
        assert stats.last_visit_at is not None

    def test_no_visits(self, barber):
        stats = StatsService.recalculate("BRB-001")

        assert stats.total_visits == 0
        assert stats.retention_rate == Decimal("0")

    def test_updates_existing_row(self, barber, customer):
        StatsService.recalculate("BRB-001")
        Visit.objects.create(customer=customer, barber=barber)
        StatsService.recalculate("BRB-001")

        assert StaffStats.objects.filter(barber=barber).count() == 1
        assert StatsService.get_stats("BRB-001").total_visits == 1

    def test_unknown_barber(self, db):
        with pytest.raises(NotFound):
            StatsService.recalculate("NOPE")

    def test_recalculate_all(self, barber, other_barber):
        other_barber.is_active = False
        other_barber.save()

        assert StatsService.recalculate_all() == 1
        assert StatsService.get_stats("BRB-002") is None


class TestRefresh:
    """Tests for StatsService.refresh."""

    def test_runs_contrib_steps(self, barber, customer):
        from barberman.contrib.staff_rewards.models import BarberReward

        BarberReward.objects.create(
            name="First client",
            reward_type="recognition",
            reward_value="Shout-out",
            requirement_type="visits",
            requirement_value=1,
        )
        Visit.objects.create(customer=customer, barber=barber)

        summary = StatsService.refresh("BRB-001")

        assert summary.stats.total_visits == 1
        assert [r.reward.name for r in summary.rewards_earned] == ["First client"]


class TestDjangoStaffFactsBackend:
    """Tests for the ORM facts adapter."""

    def test_configured_backend(self):
        assert isinstance(get_staff_facts_backend(), DjangoStaffFactsBackend)

    def test_facts_without_stats(self, barber):
        facts = DjangoStaffFactsBackend().get_facts(barber.pk)

        assert facts.join_date == barber.join_date
        assert facts.total_visits == 0
        assert facts.retention_rate == Decimal("0")

    def test_unknown_barber(self, db):
        assert DjangoStaffFactsBackend().get_facts(999) is None

    def test_windowed_counts(self, barber, customer, other_customer, visit_on, today):
        visit_on(customer, barber, today)
        visit_on(customer, barber, today)
        visit_on(other_customer, barber, today)
        visit_on(other_customer, barber, today - timedelta(days=1))
        backend = DjangoStaffFactsBackend()

        assert backend.count_visits(barber.pk, *day_bounds(today)) == 3
        assert backend.count_clients(barber.pk, *day_bounds(today)) == 2
