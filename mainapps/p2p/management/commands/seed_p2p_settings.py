from django.conf import settings
from django.core.management.base import BaseCommand

from mainapps.marketplace.models import Setting
from mainapps.p2p.config import AUTO_RELEASE_KEY, PAYMENT_DEADLINE_KEY


class Command(BaseCommand):
    help = "Create the P2P timer settings with their default values if they are missing"

    def handle(self, *args, **options):
        defaults = {
            PAYMENT_DEADLINE_KEY: (
                settings.P2P_PAYMENT_DEADLINE_MINUTES_DEFAULT,
                'Minutes a buyer has to pay before a pending P2P transfer is cancelled',
            ),
            AUTO_RELEASE_KEY: (
                settings.P2P_AUTO_RELEASE_MINUTES_DEFAULT,
                'Minutes after payment confirmation before funds are released automatically',
            ),
        }
        for key, (minutes, description) in defaults.items():
            setting, created = Setting.objects.get_or_create(
                key=key,
                defaults={'value': str(minutes), 'description': description},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created {key}={setting.value}"))
            else:
                self.stdout.write(f"Kept existing {key}={setting.value}")
