from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsClinicalOrReadOnly
from core.services.encounters import EDUKASI
from core.views.aggregate import (
    create_aggregate, delete_aggregate, get_aggregate, list_aggregates, update_aggregate,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def edukasi_collection(request):
    if request.method == 'POST':
        return create_aggregate(EDUKASI, request, message='Edukasi berhasil disimpan.')
    return list_aggregates(EDUKASI, request, pasien_id=request.query_params.get('pasien_id'))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsClinicalOrReadOnly])
def edukasi_detail(request, pk: int):
    if request.method == 'GET':
        return get_aggregate(EDUKASI, pk)
    if request.method == 'DELETE':
        return delete_aggregate(EDUKASI, pk, message='Edukasi berhasil dihapus.')
    return update_aggregate(EDUKASI, request, pk, message='Edukasi berhasil diupdate.')
