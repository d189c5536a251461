"""
Clinicians (tenaga kesehatan).  Like patients, a clinician may own one
address row that follows its lifecycle.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog
from django.db import transaction
from rest_framework.exceptions import NotFound

from core.models import Alamat, Pasien, TenagaKesehatan
from core.serializers.patient import ALAMAT_FIELDS
from core.services.patients import apply_fields

logger = structlog.get_logger(__name__)

NAKES_FIELDS = (
    'nama_lengkap', 'gelar_depan', 'gelar_belakang', 'nomor_str', 'tanggal_terbit_str',
    'tanggal_kadaluwarsa_str', 'no_telepon', 'email', 'aktif',
)
NAKES_REFS = {
    'spesialisasi_kode': 'spesialisasi_id',
    'profesi_kode': 'profesi_id',
}
DATE_FIELDS = ('tanggal_terbit_str', 'tanggal_kadaluwarsa_str')


def get_nakes(pk) -> TenagaKesehatan:
    obj = TenagaKesehatan.objects.select_related('spesialisasi', 'profesi', 'alamat').filter(pk=pk).first()
    if not obj:
        raise NotFound('Tenaga kesehatan tidak ditemukan.')
    return obj


def serialize_nakes(n: TenagaKesehatan) -> dict[str, Any]:
    data: dict[str, Any] = {
        'nakes_id': n.pk,
        'nama_gelar': n.nama_gelar,
        'spesialisasi_kode': n.spesialisasi_id,
        'spesialisasi': n.spesialisasi.deskripsi if n.spesialisasi else None,
        'profesi_kode': n.profesi_id,
        'profesi': n.profesi.deskripsi if n.profesi else None,
        'alamat_id': n.alamat_id,
        'alamat': n.alamat.one_line() if n.alamat else '',
    }
    for name in NAKES_FIELDS:
        value = getattr(n, name)
        data[name] = value.isoformat() if name in DATE_FIELDS and value else value
    return data


def list_nakes(*, aktif_only: bool = False, nama: str | None = None) -> list[dict]:
    qs = TenagaKesehatan.objects.select_related('spesialisasi', 'profesi', 'alamat')
    if aktif_only:
        qs = qs.filter(aktif=True)
    if nama:
        qs = qs.filter(nama_lengkap__icontains=nama.strip())
    return [serialize_nakes(n) for n in qs.order_by('nama_lengkap', 'id')]


def _fix_dates(obj: TenagaKesehatan) -> None:
    for name in DATE_FIELDS:
        if getattr(obj, name) == '':
            setattr(obj, name, None)


@transaction.atomic
def create_nakes(data: Mapping[str, Any]) -> TenagaKesehatan:
    alamat = None
    if any(data.get(name) for name in ALAMAT_FIELDS):
        alamat = Alamat()
        apply_fields(alamat, data, ALAMAT_FIELDS)
        alamat.save()
    nakes = TenagaKesehatan(alamat=alamat, aktif=data.get('aktif', True))
    apply_fields(nakes, {k: v for k, v in data.items() if k != 'aktif'}, NAKES_FIELDS, NAKES_REFS)
    _fix_dates(nakes)
    nakes.save()
    logger.info('nakes_created', nakes_id=nakes.pk)
    return nakes


@transaction.atomic
def update_nakes(pk, data: Mapping[str, Any]) -> TenagaKesehatan:
    nakes = get_nakes(pk)
    apply_fields(nakes, data, NAKES_FIELDS, NAKES_REFS)
    _fix_dates(nakes)
    if any(name in data for name in ALAMAT_FIELDS):
        alamat = nakes.alamat or Alamat()
        apply_fields(alamat, data, ALAMAT_FIELDS)
        alamat.save()
        nakes.alamat = alamat
    nakes.save()
    logger.info('nakes_updated', nakes_id=nakes.pk)
    return nakes


@transaction.atomic
def delete_nakes(pk) -> None:
    nakes = get_nakes(pk)
    alamat_id = nakes.alamat_id
    nakes.delete()
    if alamat_id and not (TenagaKesehatan.objects.filter(alamat_id=alamat_id).exists()
                          or Pasien.objects.filter(alamat_id=alamat_id).exists()):
        Alamat.objects.filter(pk=alamat_id).delete()
    logger.info('nakes_deleted', nakes_id=pk)
