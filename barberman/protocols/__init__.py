"""Barberman protocols."""

from barberman.protocols.staff import (
    StaffFacts,
    StaffFactsBackend,
)

__all__ = [
    "StaffFacts",
    "StaffFactsBackend",
]
