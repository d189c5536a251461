from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.serializers.nakes import NakesSerializer
from core.services import nakes as svc
from core.views.common import created, ok, ok_list, request_body


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def nakes_collection(request):
    if request.method == 'GET':
        aktif = request.query_params.get('aktif') in ('1', 'true')
        return ok_list(svc.list_nakes(aktif_only=aktif, nama=request.query_params.get('nama')))
    s = NakesSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    nakes = svc.create_nakes(s.validated_data)
    return created(svc.serialize_nakes(svc.get_nakes(nakes.pk)), 'Tenaga kesehatan berhasil ditambahkan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def nakes_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_nakes(svc.get_nakes(pk)))
    if request.method == 'DELETE':
        svc.delete_nakes(pk)
        return ok(None, 'Tenaga kesehatan berhasil dihapus.')
    svc.get_nakes(pk)
    s = NakesSerializer(data=request_body(request), partial=True)
    s.is_valid(raise_exception=True)
    nakes = svc.update_nakes(pk, s.validated_data)
    return ok(svc.serialize_nakes(svc.get_nakes(nakes.pk)), 'Tenaga kesehatan berhasil diupdate.')
