"""
Treatment plans under ``/api/tatalaksana``: surgical and non-surgical
plans plus the education given with them.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.encounters import TATALAKSANA
from core.services.terminology import search_terms
from core.views.aggregate import (
    create_aggregate, delete_aggregate, get_aggregate, list_aggregates, update_aggregate,
)
from core.views.common import ok_list


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def tatalaksana_collection(request):
    if request.method == 'POST':
        return create_aggregate(TATALAKSANA, request, message='Tatalaksana berhasil disimpan.')
    return list_aggregates(TATALAKSANA, request, pasien_id=request.query_params.get('pasien_id'))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def tatalaksana_detail(request, pk: int):
    if request.method == 'GET':
        return get_aggregate(TATALAKSANA, pk)
    if request.method == 'DELETE':
        return delete_aggregate(TATALAKSANA, pk, message='Tatalaksana berhasil dihapus.')
    return update_aggregate(TATALAKSANA, request, pk, message='Tatalaksana berhasil diupdate.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def refs_snomed(request):
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    return ok_list(search_terms('snomed', v['keyword'], category=v.get('category'), limit=v.get('limit')))
