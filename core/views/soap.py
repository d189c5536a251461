"""
SOAP notes under ``/api/soap``.

The form posts one free-text note per section (``subjective``,
``objective``, ``assessment``, ``plan``) with optional ``snomed_<section>``
and ``icd_<section>`` codes; each note becomes one detail row.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.serializers.common import KeywordQuerySerializer
from core.services.encounters import SOAP, shape_soap
from core.services.terminology import search_pasien, search_terms, snomed_categories
from core.views.aggregate import (
    create_aggregate, delete_aggregate, get_aggregate, repository, update_aggregate,
)
from core.views.common import ok_list


def _keyword(request) -> dict:
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pasien(request):
    return ok_list(search_pasien(_keyword(request)['keyword'], limit=50))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def categories(request):
    return ok_list(snomed_categories())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def snomed(request):
    v = _keyword(request)
    return ok_list(search_terms('snomed', v['keyword'], category=v.get('category'), limit=v.get('limit')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def icd10(request):
    v = _keyword(request)
    return ok_list(search_terms('icd10', v['keyword'], category=v.get('category'), limit=v.get('limit')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def history(request, pasien_id: int):
    repo = repository(SOAP)
    return ok_list([repo.get(row['soap_id']) for row in repo.list_masters(pasien_id=pasien_id)])


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def create(request):
    return create_aggregate(SOAP, request, shaper=shape_soap, message='SOAP berhasil disimpan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def soap_detail(request, pk: int):
    if request.method == 'GET':
        return get_aggregate(SOAP, pk)
    if request.method == 'DELETE':
        return delete_aggregate(SOAP, pk, message='SOAP berhasil dihapus.')
    return update_aggregate(SOAP, request, pk, shaper=shape_soap, message='SOAP berhasil diupdate.')
