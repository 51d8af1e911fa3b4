"""Tests for management commands."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError, IntegrityError, transaction

from barberman.models import Customer, StaffStats, Visit
from barberman.services.stats import StatsService


pytestmark = pytest.mark.django_db


class TestBarbermanRefresh:
    """Tests for barberman_refresh."""

    def test_refreshes_active_barbers(self, barber, other_barber, customer):
        Visit.objects.create(customer=customer, barber=barber)
        out = StringIO()

        call_command("barberman_refresh", stdout=out)

        assert StaffStats.objects.count() == 2
        assert "BRB-001: 1 visits" in out.getvalue()
        assert "Refreshed 2 barber(s)." in out.getvalue()

    def test_single_barber(self, barber, other_barber):
        out = StringIO()

        call_command("barberman_refresh", "--barber", "BRB-002", stdout=out)

        assert list(StaffStats.objects.values_list("barber__code", flat=True)) == ["BRB-002"]

    def test_unknown_barber(self, db):
        with pytest.raises(CommandError):
            call_command("barberman_refresh", "--barber", "NOPE", stdout=StringIO())

    def test_database_error_skips_only_that_barber(self, monkeypatch, barber, other_barber):
        original = StatsService.refresh

        def refresh(code, *args, **kwargs):
            if code == "BRB-001":
                raise DatabaseError("deadlock detected")
            return original(code, *args, **kwargs)

        monkeypatch.setattr(StatsService, "refresh", refresh)
        out, err = StringIO(), StringIO()

        call_command("barberman_refresh", stdout=out, stderr=err)

        assert list(StaffStats.objects.values_list("barber__code", flat=True)) == ["BRB-002"]
        assert "Refreshed 1 barber(s)." in out.getvalue()
        assert "Failed BRB-001" in err.getvalue()

    def test_database_error_for_single_barber_propagates(self, monkeypatch, barber):
        def refresh(code, *args, **kwargs):
            raise DatabaseError("deadlock detected")

        monkeypatch.setattr(StatsService, "refresh", refresh)

        with pytest.raises(DatabaseError):
            call_command("barberman_refresh", "--barber", "BRB-001", stdout=StringIO(), stderr=StringIO())


class TestMigrations:
    """Tests for shipped migrations."""

    def test_models_match_migrations(self, db):
        out = StringIO()

        call_command("makemigrations", "--check", "--dry-run", stdout=out)

        assert "No changes detected" in out.getvalue()

    def test_progress_cannot_exceed_lifetime_visits(self, customer):
        with pytest.raises(IntegrityError), transaction.atomic():
            Customer.objects.filter(pk=customer.pk).update(current_progress_visits=1)
