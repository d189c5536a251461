"""
Eye examination endpoints under ``/api/pemeriksaan``.

``/lengkap`` writes the master with every detail table at once; the
per-table routes edit one detail row at a time.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.services.aggregates import normalize_fk
from core.services.encounters import PEMERIKSAAN_MATA, shape_generic
from core.services.terminology import list_terms
from core.views.aggregate import create_aggregate, delete_aggregate, get_aggregate, repository
from core.views.common import created, ok, ok_list, request_body

# URL segment -> detail key
DETAIL_ROUTES = {
    'visus': 'visus',
    'tio': 'tio',
    'segmen-ant': 'segmen_anterior',
    'lensa': 'lensa',
    'funduskopi': 'funduskopi',
}
MASTER_ID_KEYS = ('pemeriksaan_id', 'pemeriksaan_mata_id', 'master_id')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def lengkap_collection(request):
    if request.method == 'POST':
        return create_aggregate(PEMERIKSAAN_MATA, request, message='Pemeriksaan mata lengkap berhasil disimpan.')
    repo = repository(PEMERIKSAAN_MATA)
    rows = [repo.get(m['pemeriksaan_id']) for m in repo.list_masters(pasien_id=request.query_params.get('pasien_id'))]
    return ok_list(rows)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lengkap_detail(request, pk: int):
    return get_aggregate(PEMERIKSAAN_MATA, pk)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def master_detail(request, pk: int):
    if request.method == 'DELETE':
        return delete_aggregate(PEMERIKSAAN_MATA, pk, message=f'Master ID {pk} berhasil dihapus.')
    master, _ = shape_generic(PEMERIKSAAN_MATA, request_body(request))
    result = repository(PEMERIKSAAN_MATA).update_master(pk, master)
    return ok({'pemeriksaan_id': result.id}, f'Master ID {pk} berhasil diupdate.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_by_pasien(request):
    nama = (request.query_params.get('nama') or '').strip()
    if not nama:
        raise ValidationError({'nama': 'Parameter "nama" diperlukan untuk pencarian.'})
    return ok_list(repository(PEMERIKSAAN_MATA).list_masters(nama=nama))


# ---------------------------------------------------------------------
# Single detail rows
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def detail_create(request, kind: str):
    key = DETAIL_ROUTES[kind]
    body = request_body(request)
    master_id = next((body[k] for k in MASTER_ID_KEYS if body.get(k) not in (None, '')), None)
    if normalize_fk(master_id, field_name='pemeriksaan_id') is None:
        raise ValidationError({'pemeriksaan_id': 'ID pemeriksaan mata wajib diisi.'})
    row = repository(PEMERIKSAAN_MATA).create_detail(master_id, key, body)
    return created(row, f'Detail {PEMERIKSAAN_MATA.detail(key).kategori} berhasil ditambahkan.', id=row['id'])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def detail_item(request, kind: str, detail_id: int):
    key = DETAIL_ROUTES[kind]
    repo = repository(PEMERIKSAAN_MATA)
    label = PEMERIKSAAN_MATA.detail(key).kategori
    if request.method == 'GET':
        return ok(repo.get_detail(key, detail_id))
    if request.method == 'DELETE':
        repo.delete_detail(key, detail_id)
        return ok(None, f'Detail {label} ID {detail_id} berhasil dihapus.')
    row = repo.update_detail(key, detail_id, request_body(request))
    return ok(row, f'Detail {label} ID {detail_id} berhasil diupdate.')


# ---------------------------------------------------------------------
# Dropdown sources
# ---------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def master_loinc(request):
    return ok_list(list_terms('loinc', category=request.query_params.get('category'), field='kategori_aplikasi'))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def master_snomed(request):
    return ok_list(list_terms('snomed', category=request.query_params.get('organ'), field='organ_target'))
