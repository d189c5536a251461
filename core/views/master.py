"""
Reference data endpoints: lookup code tables, addresses, arrival modes and
SNOMED concepts.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.serializers.common import KeywordQuerySerializer
from core.serializers.master import CaraDatangSerializer, SnomedSerializer
from core.serializers.patient import AlamatSerializer
from core.services import reference as svc
from core.services.terminology import search_terms
from core.views.common import created, ok, ok_list, request_body


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def code_table(request, table: str):
    return ok_list(svc.code_rows(table))


# ---------------------------------------------------------------------
# Alamat
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def alamat_collection(request):
    if request.method == 'GET':
        return ok_list(svc.list_alamat())
    s = AlamatSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    alamat = svc.create_alamat(s.validated_data)
    return created(svc.serialize_alamat(alamat), 'Alamat berhasil ditambahkan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def alamat_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_alamat(svc.get_alamat(pk)))
    if request.method == 'DELETE':
        svc.delete_alamat(pk)
        return ok(None, 'Alamat berhasil dihapus.')
    svc.get_alamat(pk)
    s = AlamatSerializer(data=request_body(request), partial=True)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_alamat(svc.update_alamat(pk, s.validated_data)), 'Alamat berhasil diupdate.')


# ---------------------------------------------------------------------
# Cara datang
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def cara_datang_collection(request):
    if request.method == 'GET':
        aktif = request.query_params.get('aktif') in ('1', 'true')
        return ok_list(svc.list_cara_datang(aktif_only=aktif))
    s = CaraDatangSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    obj = svc.create_cara_datang(s.validated_data)
    return created(svc.serialize_cara_datang(obj), 'Cara datang berhasil ditambahkan.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def cara_datang_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_cara_datang(svc.get_cara_datang(pk)))
    if request.method == 'DELETE':
        svc.delete_cara_datang(pk)
        return ok(None, 'Cara datang berhasil dihapus.')
    svc.get_cara_datang(pk)
    s = CaraDatangSerializer(data=request_body(request), partial=True)
    s.is_valid(raise_exception=True)
    obj = svc.update_cara_datang(pk, s.validated_data)
    return ok(svc.serialize_cara_datang(obj), 'Cara datang berhasil diupdate.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cara_datang_pasien(request):
    return ok_list(svc.cara_datang_with_pasien())


# ---------------------------------------------------------------------
# SNOMED
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def snomed_collection(request):
    if request.method == 'GET':
        return ok_list(svc.top_snomed())
    s = SnomedSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    obj = svc.create_snomed(s.validated_data)
    return created(svc.serialize_snomed(obj), 'SNOMED berhasil ditambahkan.')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def snomed_search(request):
    q = KeywordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    return ok_list(search_terms('snomed', v['keyword'], category=v.get('category'), limit=v.get('limit')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def snomed_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_snomed(svc.get_snomed(pk)))
    if request.method == 'DELETE':
        svc.delete_snomed(pk)
        return ok(None, 'SNOMED berhasil dihapus.')
    svc.get_snomed(pk)
    s = SnomedSerializer(data=request_body(request), partial=True)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_snomed(svc.update_snomed(pk, s.validated_data)), 'SNOMED berhasil diupdate.')
