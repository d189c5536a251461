"""
BPJS clinical pathways and cost forecasts under ``/api/bpjs``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.encounters import PATHWAY_BPJS, shape_pathway
from core.services.terminology import search_pasien, search_terms
from core.views.aggregate import (
    create_aggregate, delete_aggregate, get_aggregate, repository, update_aggregate,
)
from core.views.common import ok_list

SEARCH_LIMIT = 20


def _keyword(request) -> str:
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data['keyword']


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien(request):
    return ok_list(search_pasien(_keyword(request), limit=SEARCH_LIMIT))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tindakan(request):
    return ok_list(search_terms('tindakan', _keyword(request), limit=SEARCH_LIMIT))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def history(request, pasien_id: int):
    repo = repository(PATHWAY_BPJS)
    rows = repo.list_masters(pasien_id=pasien_id)
    for row in rows:
        row['jumlah_tindakan'] = repo.count_details(row['pathway_id'], 'forecasting')
    return ok_list(rows)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def create(request):
    return create_aggregate(PATHWAY_BPJS, request, shaper=shape_pathway, message='Pathway BPJS berhasil disimpan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def pathway_detail(request, pk: int):
    if request.method == 'GET':
        return get_aggregate(PATHWAY_BPJS, pk)
    if request.method == 'DELETE':
        return delete_aggregate(PATHWAY_BPJS, pk, message='Pathway BPJS berhasil dihapus.')
    return update_aggregate(PATHWAY_BPJS, request, pk, shaper=shape_pathway, message='Pathway BPJS berhasil diupdate.')
