import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand

from mainapps.p2p.services import process_due_transfers

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Cancel P2P transfers past their payment deadline and auto-release due ones"

    def add_arguments(self, parser):
        parser.add_argument(
            "--loop",
            action="store_true",
            help="Keep running instead of scanning once (for hosts without cron)",
        )
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between scans when looping (default: P2P_TIMER_SCAN_INTERVAL_SECONDS)",
        )

    def handle(self, *args, **options):
        interval = options["interval"] or settings.P2P_TIMER_SCAN_INTERVAL_SECONDS

        while True:
            summary = process_due_transfers()
            self.stdout.write(self.style.SUCCESS(
                "Cancelled {cancelled}, released {released}, skipped {skipped}".format(**summary)
            ))
            if not options["loop"]:
                break
            logger.debug("Next P2P timer scan in %s seconds", interval)
            time.sleep(interval)
