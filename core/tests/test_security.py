import pytest
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from core.models import TenagaKesehatan, User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')


def test_health_is_public():
    r = APIClient().get('/api/health')
    assert r.status_code == 200
    assert r.json()['success'] is True


@pytest.mark.parametrize('url', ['/api/pasien', '/api/snomed', '/api/soap/history/1', '/api/auth/profile'])
def test_protected_routes_need_a_bearer_token(url):
    r = APIClient().get(url)
    assert r.status_code == 401
    assert r.data['success'] is False


def test_garbage_token_is_rejected():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    r = client.get('/api/pasien')
    assert r.status_code == 401


def test_login_token_carries_role_and_nakes_claims(dokter, nakes):
    r = login(APIClient(), 'dokter1', 'rahasia123')
    assert r.status_code == 200
    assert r.data['success'] is True
    token = AccessToken(r.data['token'])
    assert token['user_id'] == dokter.pk
    assert token['username'] == 'dokter1'
    assert token['role'] == 'dokter'
    assert token['FN_tenaga_kesehatan_id'] == nakes.pk
    assert r.data['user']['role'] == 'dokter'


def test_login_token_opens_protected_routes(dokter):
    client = APIClient()
    token = login(client, 'dokter1', 'rahasia123').data['token']
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    r = client.get('/api/auth/profile')
    assert r.status_code == 200
    assert r.data['data']['username'] == 'dokter1'


@pytest.mark.parametrize('username,password', [('dokter1', 'salah'), ('tidak-ada', 'rahasia123')])
def test_bad_credentials_answer_401(dokter, username, password):
    r = login(APIClient(), username, password)
    assert r.status_code == 401
    assert r.data['success'] is False


def test_inactive_user_cannot_login(dokter):
    dokter.is_active = False
    dokter.save()
    assert login(APIClient(), 'dokter1', 'rahasia123').status_code == 401


def test_role_in_login_payload_is_ignored():
    User.objects.create_user(username='u1', password='rahasia123', role='petugas')
    r = APIClient().post(reverse('login_view'),
                         {'username': 'u1', 'password': 'rahasia123', 'role': 'admin'}, format='json')
    assert r.status_code == 200
    assert AccessToken(r.data['token'])['role'] == 'petugas'


def test_refresh_returns_new_access_token(dokter):
    refresh = login(APIClient(), 'dokter1', 'rahasia123').data['refresh']
    r = APIClient().post(reverse('refresh_view'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert AccessToken(r.data['token'])['user_id'] == dokter.pk


def test_logout_blacklists_refresh_token(dokter):
    client = APIClient()
    tokens = login(client, 'dokter1', 'rahasia123').data
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {tokens["token"]}')
    assert client.post(reverse('logout_view'), {'refresh': tokens['refresh']}, format='json').status_code == 200
    r = APIClient().post(reverse('refresh_view'), {'refresh': tokens['refresh']}, format='json')
    assert r.status_code == 401


def test_user_management_is_admin_only(api, admin_api):
    assert api.get('/api/auth').status_code == 403
    r = admin_api.post('/api/auth', {'username': 'perawat1', 'password': 'rahasia123', 'role': 'perawat',
                                     'tenaga_kesehatan_id': 0}, format='json')
    assert r.status_code == 201
    created = User.objects.get(username='perawat1')
    assert created.tenaga_kesehatan_id is None
    assert created.check_password('rahasia123')


def test_user_update_with_empty_payload_is_rejected(admin_api, dokter):
    r = admin_api.put(f'/api/auth/{dokter.pk}', {}, format='json')
    assert r.status_code == 400
    assert r.data['success'] is False


def test_user_cannot_promote_themselves(api, dokter):
    r = api.put(f'/api/auth/{dokter.pk}', {'role': 'admin'}, format='json')
    assert r.status_code == 403
    dokter.refresh_from_db()
    assert dokter.role == 'dokter'


def test_user_cannot_relink_themselves_to_another_nakes(api, dokter, nakes, admin_api):
    other = TenagaKesehatan.objects.create(nama_lengkap='Budi Hartono', gelar_depan='dr.')
    r = api.put(f'/api/auth/{dokter.pk}', {'FN_tenaga_kesehatan_id': other.pk}, format='json')
    assert r.status_code == 403
    dokter.refresh_from_db()
    assert dokter.tenaga_kesehatan_id == nakes.pk

    r = api.put(f'/api/auth/{dokter.pk}', {'nama_lengkap': 'Dokter Satu'}, format='json')
    assert r.status_code == 200

    r = admin_api.put(f'/api/auth/{dokter.pk}', {'tenaga_kesehatan_id': other.pk}, format='json')
    assert r.status_code == 200
    dokter.refresh_from_db()
    assert dokter.tenaga_kesehatan_id == other.pk


def test_password_change_requires_old_password_for_self(api, dokter):
    r = api.put(f'/api/auth/{dokter.pk}/password', {'password_lama': 'keliru', 'password_baru': 'barubaru'},
                format='json')
    assert r.status_code == 400
    r = api.put(f'/api/auth/{dokter.pk}/password', {'password_lama': 'rahasia123', 'password_baru': 'barubaru'},
                format='json')
    assert r.status_code == 200
    dokter.refresh_from_db()
    assert dokter.check_password('barubaru')


def test_user_nakes_endpoint(api, dokter, nakes):
    r = api.get(f'/api/auth/{dokter.pk}/nakes')
    assert r.status_code == 200
    assert r.data['data']['nakes_id'] == nakes.pk
    assert r.data['data']['nama_gelar'] == 'dr. Rina Wijaya, Sp.M'
