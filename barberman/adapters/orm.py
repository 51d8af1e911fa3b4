"""Django ORM StaffFactsBackend adapter."""

from datetime import datetime
from decimal import Decimal

from django.db import DatabaseError

from barberman.exceptions import StorageFailure
from barberman.models import Barber, StaffStats, Visit
from barberman.protocols.staff import StaffFacts


class DjangoStaffFactsBackend:
    """
    Adapter that implements StaffFactsBackend over barberman models.

    Aggregates come from StaffStats (see StatsService.recalculate);
    windowed counts are answered by indexed Visit queries.

    Configuration in settings.py:
        BARBERMAN = {
            "STAFF_FACTS_BACKEND": "barberman.adapters.orm.DjangoStaffFactsBackend",
        }
    """

    def get_facts(self, barber_id: int) -> StaffFacts | None:
        try:
            barber = Barber.objects.filter(pk=barber_id).only("pk", "join_date").first()
            if barber is None:
                return None
            stats = StaffStats.objects.filter(barber_id=barber_id).first()
        except DatabaseError as exc:
            raise StorageFailure(barber_id=barber_id, detail=str(exc)) from exc

        if stats is None:
            return StaffFacts(barber_id=barber.pk, join_date=barber.join_date)

        return StaffFacts(
            barber_id=barber.pk,
            join_date=barber.join_date,
            total_visits=stats.total_visits,
            unique_clients=stats.unique_clients,
            retention_rate=stats.retention_rate or Decimal("0"),
            service_variety=stats.service_variety,
        )

    def count_visits(self, barber_id: int, start: datetime, end: datetime) -> int:
        try:
            return Visit.objects.filter(
                barber_id=barber_id,
                visit_date__gte=start,
                visit_date__lt=end,
            ).count()
        except DatabaseError as exc:
            raise StorageFailure(barber_id=barber_id, detail=str(exc)) from exc

    def count_clients(self, barber_id: int, start: datetime, end: datetime) -> int:
        try:
            return (
                Visit.objects.filter(
                    barber_id=barber_id,
                    visit_date__gte=start,
                    visit_date__lt=end,
                )
                .values("customer_id")
                .distinct()
                .count()
            )
        except DatabaseError as exc:
            raise StorageFailure(barber_id=barber_id, detail=str(exc)) from exc
