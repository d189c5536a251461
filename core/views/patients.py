"""
Patient registry endpoints under ``/api/pasien``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from core.serializers.patient import PasienSearchQuerySerializer, PasienSerializer
from core.services import patients as svc
from core.services.terminology import search_pasien
from core.views.common import created, ok, ok_list, request_body


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_patients(request):
    q = PasienSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    keyword = q.validated_data.get('keyword')
    if keyword is None:
        raise ValidationError({'keyword': 'Parameter keyword wajib diisi.'})
    return ok_list(search_pasien(keyword))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients_collection(request):
    if request.method == 'GET':
        return ok_list(svc.list_active_pasien())
    s = PasienSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    pasien = svc.create_pasien(s.validated_data)
    return created(svc.serialize_pasien(svc.get_pasien(pasien.pk)), 'Pasien berhasil ditambahkan.',
                   pasien_id=pasien.pk)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_pasien(svc.get_pasien(pk)))
    if request.method == 'DELETE':
        svc.delete_pasien(pk)
        return ok(None, 'Pasien berhasil dihapus.')
    svc.get_pasien(pk)
    s = PasienSerializer(data=request_body(request), partial=True, context={'pk': pk})
    s.is_valid(raise_exception=True)
    pasien = svc.update_pasien(pk, s.validated_data)
    return ok(svc.serialize_pasien(svc.get_pasien(pasien.pk)), 'Pasien berhasil diupdate.')
