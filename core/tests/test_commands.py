from io import StringIO

import pytest
from django.core.cache import cache
from django.core.management import call_command

from core.models import JawabanTerstruktur, JenisKelamin, Pertanyaan, Snomed, Tindakan, User
from core.services.reference import anamnesis_sync

pytestmark = pytest.mark.django_db


def run(name, *args):
    out = StringIO()
    call_command(name, *args, stdout=out)
    return out.getvalue()


def test_seed_reference_data_is_idempotent():
    run('seed_reference_data')
    counts = (JenisKelamin.objects.count(), Snomed.objects.count(), Pertanyaan.objects.count(),
              JawabanTerstruktur.objects.count())
    run('seed_reference_data')
    assert (JenisKelamin.objects.count(), Snomed.objects.count(), Pertanyaan.objects.count(),
            JawabanTerstruktur.objects.count()) == counts
    assert Tindakan.objects.get().icd9cm.kode == '13.41'


def test_seeded_questions_feed_the_anamnesis_form():
    run('seed_reference_data')
    data = anamnesis_sync()
    assert {q['kategori'] for q in data['questions']} >= {'KELUHAN', 'FAKTOR_RESIKO'}
    labels = [a['label'] for a in data['structuredAnswers']]
    assert 'Penglihatan kabur' in labels


def test_ensure_test_users_resets_password_and_links_nakes(nakes):
    User.objects.create_user(username='dokter1', password='lama', role='petugas', is_active=False)
    run('ensure_test_users', '--password', 'rahasia123')
    dokter = User.objects.get(username='dokter1')
    assert dokter.role == 'dokter'
    assert dokter.is_active
    assert dokter.check_password('rahasia123')
    assert dokter.tenaga_kesehatan_id == nakes.pk
    assert User.objects.get(username='admin1').tenaga_kesehatan_id is None


def test_refresh_caches_warms_code_tables():
    JenisKelamin.objects.create(kode='L', deskripsi='Laki-laki')
    output = run('refresh_caches')
    assert 'Refreshed' in output
    assert cache.get('ref:jenis_kelamin') == [{'kode': 'L', 'deskripsi': 'Laki-laki'}]
