from django.core.management.base import BaseCommand

from clinic.services.registry import reset_registry


class Command(BaseCommand):
    help = "Reset the BMDC registry to the reference doctor list."

    def handle(self, *args, **opts):
        n = reset_registry()
        self.stdout.write(self.style.SUCCESS(f"BMDC registry seeded with {n} entries."))
