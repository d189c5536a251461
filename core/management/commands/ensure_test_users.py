# core/management/commands/ensure_test_users.py
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from core.models import TenagaKesehatan, User

# username, role, display name, linked to a clinician record
TEST_SET = [
    ("admin1", "admin", "Administrator", False),
    ("dokter1", "dokter", "Dokter Uji", True),
    ("perawat1", "perawat", "Perawat Uji", True),
    ("petugas1", "petugas", "Petugas Pendaftaran", False),
]


class Command(BaseCommand):
    help = "Ensure one test user per role exists with the given password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="123456")

    def handle(self, *args, **opts):
        password = make_password(opts["password"])
        nakes = TenagaKesehatan.objects.filter(aktif=True).order_by("id").first()
        if nakes is None:
            self.stdout.write(self.style.WARNING("no active nakes; clinical users stay unlinked"))
        for username, role, nama, clinical in TEST_SET:
            u, created = User.objects.get_or_create(username=username, defaults={"role": role, "nama_lengkap": nama})
            u.password = password
            u.role = role
            u.is_active = True
            if clinical and nakes is not None and u.tenaga_kesehatan_id is None:
                u.tenaga_kesehatan = nakes
            u.save()
            state = "created" if created else "reset"
            self.stdout.write(self.style.SUCCESS(f"{state}: {username} ({role}) nakes={u.tenaga_kesehatan_id}"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
