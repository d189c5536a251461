"""
Patient records.  A patient owns exactly one ``Alamat`` row: it is created
with the patient, updated through the same payload and deleted with it.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog
from django.db import transaction
from rest_framework.exceptions import NotFound

from core.models import Alamat, Pasien
from core.serializers.patient import ALAMAT_FIELDS

logger = structlog.get_logger(__name__)

PASIEN_FIELDS = (
    'no_rm', 'nik', 'nama_lengkap', 'nama_panggilan', 'gelar_depan', 'gelar_belakang',
    'tanggal_lahir', 'tempat_lahir', 'golongan_darah', 'telepon', 'email',
    'kontak_darurat_nama', 'kontak_darurat_telp', 'aktif',
)
# payload key -> model attribute
PASIEN_REFS = {
    'jenis_kelamin_kode': 'jenis_kelamin_id',
    'status_perkawinan_kode': 'status_perkawinan_id',
    'agama_kode': 'agama_id',
    'pekerjaan_kode': 'pekerjaan_id',
    'cara_datang_id': 'cara_datang_id',
}


def _queryset():
    return Pasien.objects.select_related(
        'alamat', 'cara_datang', 'jenis_kelamin', 'status_perkawinan', 'agama', 'pekerjaan'
    )


def get_pasien(pk) -> Pasien:
    obj = _queryset().filter(pk=pk).first()
    if not obj:
        raise NotFound('Pasien tidak ditemukan.')
    return obj


def serialize_pasien(p: Pasien, *, with_alamat: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        'pasien_id': p.pk,
        'alamat_id': p.alamat_id,
        'cara_datang_id': p.cara_datang_id,
        'cara_datang': p.cara_datang.nama if p.cara_datang else None,
        'jenis_kelamin_kode': p.jenis_kelamin_id,
        'jenis_kelamin': p.jenis_kelamin.deskripsi if p.jenis_kelamin else None,
        'status_perkawinan_kode': p.status_perkawinan_id,
        'status_perkawinan': p.status_perkawinan.deskripsi if p.status_perkawinan else None,
        'agama_kode': p.agama_id,
        'agama': p.agama.deskripsi if p.agama else None,
        'pekerjaan_kode': p.pekerjaan_id,
        'pekerjaan': p.pekerjaan.deskripsi if p.pekerjaan else None,
    }
    for name in PASIEN_FIELDS:
        data[name] = getattr(p, name)
    if p.tanggal_lahir:
        data['tanggal_lahir'] = p.tanggal_lahir.isoformat()
    if with_alamat:
        alamat = p.alamat
        for name in ALAMAT_FIELDS:
            data[name] = getattr(alamat, name) if alamat else ''
        data['alamat'] = alamat.one_line() if alamat else ''
    return data


def list_active_pasien() -> list[dict]:
    return [serialize_pasien(p) for p in _queryset().filter(aktif=True).order_by('id')]


def apply_fields(obj, data: Mapping[str, Any], fields, refs=None) -> list[str]:
    changed = []
    for name in fields:
        if name in data:
            setattr(obj, name, data[name] if data[name] is not None else '')
            changed.append(name)
    for key, attr in (refs or {}).items():
        if key in data:
            setattr(obj, attr, data[key] or None)
            changed.append(attr)
    return changed


@transaction.atomic
def create_pasien(data: Mapping[str, Any]) -> Pasien:
    """Insert the address row first, then the patient pointing at it."""
    alamat = Alamat()
    apply_fields(alamat, data, ALAMAT_FIELDS)
    alamat.save()
    pasien = Pasien(alamat=alamat, aktif=data.get('aktif', True))
    apply_fields(pasien, {k: v for k, v in data.items() if k != 'aktif'}, PASIEN_FIELDS, PASIEN_REFS)
    if pasien.tanggal_lahir == '':
        pasien.tanggal_lahir = None
    pasien.save()
    logger.info('pasien_created', pasien_id=pasien.pk, alamat_id=alamat.pk)
    return pasien


@transaction.atomic
def update_pasien(pk, data: Mapping[str, Any]) -> Pasien:
    """Partial update across the patient and its address."""
    pasien = get_pasien(pk)
    changed = apply_fields(pasien, data, PASIEN_FIELDS, PASIEN_REFS)
    if pasien.tanggal_lahir == '':
        pasien.tanggal_lahir = None
    if any(name in data for name in ALAMAT_FIELDS):
        alamat = pasien.alamat or Alamat()
        apply_fields(alamat, data, ALAMAT_FIELDS)
        alamat.save()
        if pasien.alamat_id != alamat.pk:
            pasien.alamat = alamat
            changed.append('alamat')
    if changed:
        pasien.save()
    logger.info('pasien_updated', pasien_id=pasien.pk, fields=sorted(set(changed)))
    return pasien


@transaction.atomic
def delete_pasien(pk) -> None:
    """Delete the patient, then the address it owned."""
    pasien = get_pasien(pk)
    alamat_id = pasien.alamat_id
    pasien.delete()
    if alamat_id and not Pasien.objects.filter(alamat_id=alamat_id).exists():
        Alamat.objects.filter(pk=alamat_id).delete()
    logger.info('pasien_deleted', pasien_id=pk, alamat_id=alamat_id)
