"""
Anamnesis endpoints under ``/api/anamnesis``.

The dashboard posts ``{master_data: {...}, detail_data: {DETAIL_KELUHAN:
[...], ...}}``; reads return ``{master, allDetails}`` where every detail row
carries its ``kategori``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.aggregates import AggregateValidationError
from core.services.encounters import ANAMNESIS, shape_anamnesis
from core.services.reference import anamnesis_sync, list_pertanyaan
from core.services.terminology import search_pasien
from core.views.aggregate import delete_aggregate, flatten_details, repository, update_aggregate
from core.views.common import created, ok, ok_list, request_body


def _full_record(repo, pk) -> dict:
    record = repo.get(pk)
    details = flatten_details(ANAMNESIS, record)
    master = {k: v for k, v in record.items() if k not in ANAMNESIS.detail_keys}
    return {'master': master, 'allDetails': details}


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def master_sync(request):
    return ok(anamnesis_sync())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def master_pertanyaan(request):
    return ok_list(list_pertanyaan(request.query_params.get('kategori')))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def save_full(request):
    master, details = shape_anamnesis(request_body(request))
    repo = repository(ANAMNESIS)
    repo.validate_master(master)
    if not any(details.values()):
        raise AggregateValidationError({'detail_data': 'Detail anamnesis wajib diisi.'})
    result = repo.create(master, details)
    return created({'anamnesis_id': result.id, 'detail_counts': result.detail_counts},
                   'Anamnesis lengkap berhasil disimpan.', anamnesis_id=result.id)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def add_detail(request, pk: int):
    _, details = shape_anamnesis(request_body(request))
    result = repository(ANAMNESIS).add_details(pk, details)
    return created({'anamnesis_id': result.id, 'detail_counts': result.detail_counts},
                   'Detail anamnesis berhasil ditambahkan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def anamnesis_detail(request, pk: int):
    if request.method == 'GET':
        return ok(_full_record(repository(ANAMNESIS), pk))
    if request.method == 'DELETE':
        return delete_aggregate(ANAMNESIS, pk, message='Anamnesis berhasil dihapus.')
    return update_aggregate(ANAMNESIS, request, pk, shaper=shape_anamnesis, message='Anamnesis berhasil diupdate.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien_search(request):
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok_list(search_pasien(q.validated_data['keyword'], limit=q.validated_data.get('limit')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien_history(request, pasien_id: int):
    repo = repository(ANAMNESIS)
    history = [_full_record(repo, row['anamnesis_id']) for row in repo.list_masters(pasien_id=pasien_id)]
    return ok_list(history)
