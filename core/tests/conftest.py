import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from core.authentication import issue_tokens
from core.models import JenisKelamin, Pasien, Snomed, TenagaKesehatan, User


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttling and reference listings both live in the cache
    cache.clear()
    yield
    cache.clear()


def bearer(client: APIClient, user) -> APIClient:
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_tokens(user).access_token}')
    return client


@pytest.fixture
def nakes(db):
    return TenagaKesehatan.objects.create(id=2, nama_lengkap='Rina Wijaya', gelar_depan='dr.', gelar_belakang='Sp.M')


@pytest.fixture
def pasien(db):
    JenisKelamin.objects.get_or_create(kode='P', defaults={'deskripsi': 'Perempuan'})
    return Pasien.objects.create(id=5, no_rm='RM-0005', nama_lengkap='Siti Aminah', jenis_kelamin_id='P')


@pytest.fixture
def snomed(db):
    return Snomed.objects.create(id=1001, fsn_term='Myopia (disorder)', term_indonesia='Miopia',
                                 kategori_konsep='DIAGNOSIS')


@pytest.fixture
def dokter(db, nakes):
    return User.objects.create_user(username='dokter1', password='rahasia123', role='dokter', tenaga_kesehatan=nakes)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='rahasia123', role='admin')


@pytest.fixture
def api(dokter):
    return bearer(APIClient(), dokter)


@pytest.fixture
def admin_api(admin_user):
    return bearer(APIClient(), admin_user)
