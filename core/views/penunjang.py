"""
Supporting examinations (biometry, B-scan, pre-surgery lab) under
``/api/pemeriksaan-penunjang``.  One request carries a single examination
``type`` with its detail row.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.encounters import PEMERIKSAAN_PENUNJANG, PENUNJANG_TYPES, shape_penunjang
from core.services.terminology import list_terms, search_pasien
from core.views.aggregate import create_aggregate, delete_aggregate, repository, update_aggregate
from core.views.common import ok, ok_list

PASIEN_MIN_KEYWORD = 3


def tipe_pemeriksaan(record: dict) -> str:
    for kind, key in PENUNJANG_TYPES.items():
        if record.get(key):
            return kind
    return 'UNKNOWN'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien_search(request):
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok_list(search_pasien(q.validated_data['keyword'], limit=10, min_length=PASIEN_MIN_KEYWORD))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def master_loinc(request):
    category = request.query_params.get('category') or request.query_params.get('type')
    return ok_list(list_terms('loinc', category=category, field='kategori_aplikasi'))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def store(request):
    return create_aggregate(PEMERIKSAAN_PENUNJANG, request, shaper=shape_penunjang,
                            message='Pemeriksaan penunjang berhasil disimpan.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien_history(request, pasien_id: int):
    repo = repository(PEMERIKSAAN_PENUNJANG)
    history = []
    for master in repo.list_masters(pasien_id=pasien_id):
        record = repo.get(master['pemeriksaan_penunjang_id'])
        record['tipe_pemeriksaan'] = tipe_pemeriksaan(record)
        history.append(record)
    return ok_list(history)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def penunjang_detail(request, pk: int):
    if request.method == 'GET':
        record = repository(PEMERIKSAAN_PENUNJANG).get(pk)
        record['tipe_pemeriksaan'] = tipe_pemeriksaan(record)
        return ok(record)
    if request.method == 'DELETE':
        return delete_aggregate(PEMERIKSAAN_PENUNJANG, pk, message='Pemeriksaan penunjang berhasil dihapus.')
    return update_aggregate(PEMERIKSAAN_PENUNJANG, request, pk, shaper=shape_penunjang,
                            message='Pemeriksaan penunjang berhasil diupdate.')
