"""Staff facts protocol consumed by progress calculators."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class StaffFacts:
    """Stored aggregate facts about a barber."""

    barber_id: int
    join_date: date | None
    total_visits: int = 0
    unique_clients: int = 0
    retention_rate: Decimal = Decimal("0")
    service_variety: int = 0


@runtime_checkable
class StaffFactsBackend(Protocol):
    """Protocol for the record store queries the staff engine needs."""

    def get_facts(self, barber_id: int) -> StaffFacts | None:
        """Return stored aggregates for a barber, or None if unknown."""
        ...

    def count_visits(self, barber_id: int, start: datetime, end: datetime) -> int:
        """Count the barber's visits in [start, end)."""
        ...

    def count_clients(self, barber_id: int, start: datetime, end: datetime) -> int:
        """Count distinct customers the barber served in [start, end)."""
        ...
