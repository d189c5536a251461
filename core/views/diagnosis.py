"""
Diagnoses and procedures under ``/api/diagnosis-prosedur``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.encounters import DIAGNOSIS_PROSEDUR
from core.services.terminology import search_pasien, search_terms
from core.views.aggregate import create_aggregate, delete_aggregate, get_aggregate, repository, update_aggregate
from core.views.common import ok_list

REF_SOURCES = ('icd10', 'snomed', 'icd9', 'cpt')
REF_LIMIT = 20


def _keyword(request) -> dict:
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def refs(request, source: str):
    if source not in REF_SOURCES:
        raise NotFound(f'Referensi "{source}" tidak dikenal.')
    v = _keyword(request)
    return ok_list(search_terms(source, v['keyword'], category=v.get('category'), limit=REF_LIMIT))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_ref(request):
    source = (request.query_params.get('type') or '').lower()
    if source not in REF_SOURCES:
        raise ValidationError({'type': f'Tipe referensi harus salah satu dari {", ".join(REF_SOURCES)}.'})
    v = _keyword(request)
    return ok_list(search_terms(source, v['keyword'], category=v.get('category'), limit=REF_LIMIT))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def create(request):
    return create_aggregate(DIAGNOSIS_PROSEDUR, request, message='Diagnosis dan prosedur berhasil disimpan.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def record(request, pk: int):
    return get_aggregate(DIAGNOSIS_PROSEDUR, pk)


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def update(request, pk: int):
    return update_aggregate(DIAGNOSIS_PROSEDUR, request, pk, message='Diagnosis dan prosedur berhasil diupdate.')


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def delete(request, pk: int):
    return delete_aggregate(DIAGNOSIS_PROSEDUR, pk, message='Diagnosis dan prosedur berhasil dihapus.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien_search(request):
    v = _keyword(request)
    return ok_list(search_pasien(v['keyword'], limit=10, min_length=3))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def history(request, pasien_id: int):
    repo = repository(DIAGNOSIS_PROSEDUR)
    rows = repo.list_masters(pasien_id=pasien_id)
    for row in rows:
        row['total_dx_akhir'] = repo.count_details(row['transaksi_id'], 'diagnosa_akhir')
        row['total_tindakan'] = repo.count_details(row['transaksi_id'], 'prosedur')
    return ok_list(rows)
