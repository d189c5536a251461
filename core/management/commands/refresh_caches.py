from django.core.management.base import BaseCommand
from django.utils import timezone

from core.services.reference import warm_reference_cache


class Command(BaseCommand):
    help = "Rebuild the cached reference-table listings."

    def handle(self, *args, **options):
        keys = warm_reference_cache()
        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(keys)} keys at {timezone.now()}"))
