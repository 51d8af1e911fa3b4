"""Management command to recalculate staff stats, achievements and rewards."""

import logging

from django.core.management.base import BaseCommand, CommandError

from barberman.exceptions import BarbermanError
from barberman.models import Barber
from barberman.services.stats import StatsService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Recalculate staff stats, achievement progress and staff rewards"

    def add_arguments(self, parser):
        parser.add_argument(
            "--barber",
            default=None,
            help="Only refresh the barber with this code",
        )

    def handle(self, *args, **options):
        if options["barber"]:
            codes = [options["barber"]]
        else:
            codes = list(Barber.objects.filter(is_active=True).values_list("code", flat=True))

        refreshed = 0
        for code in codes:
            try:
                summary = StatsService.refresh(code)
            except BarbermanError as exc:
                if options["barber"]:
                    raise CommandError(str(exc)) from exc
                self.stderr.write(f"Skipped {code}: {exc}")
                continue
            except Exception:
                # one barber failing must not stop the rest of the run
                logger.exception("Failed to refresh barber %s", code)
                if options["barber"]:
                    raise
                self.stderr.write(f"Failed {code}, see log for details")
                continue

            refreshed += 1
            self.stdout.write(
                f"{code}: {summary.stats.total_visits} visits, "
                f"{summary.achievements_updated} achievements, "
                f"{len(summary.rewards_earned)} rewards earned"
            )

        self.stdout.write(self.style.SUCCESS(f"Refreshed {refreshed} barber(s)."))
