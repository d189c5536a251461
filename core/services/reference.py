"""
Reference data: lookup code tables, addresses, arrival modes, SNOMED rows
and the anamnesis question bank.

Code tables change rarely, so their listings are cached for
``REFERENCE_CACHE_SECONDS``; every write in this module drops the
matching cache key.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog
from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from rest_framework.exceptions import NotFound

from core.models import (
    Agama, Alamat, CaraDatang, JawabanTerstruktur, JenisKelamin, Pasien, Pekerjaan, Pertanyaan,
    Profesi, Snomed, Spesialisasi, StatusPerkawinan,
)
from core.serializers.patient import ALAMAT_FIELDS
from core.services.patients import apply_fields

logger = structlog.get_logger(__name__)

CODE_TABLES = {
    'jenis_kelamin': JenisKelamin,
    'status_perkawinan': StatusPerkawinan,
    'agama': Agama,
    'pekerjaan': Pekerjaan,
    'profesi': Profesi,
    'spesialisasi': Spesialisasi,
}
SNOMED_FIELDS = ('fsn_term', 'term_indonesia', 'deskripsi', 'kategori_konsep', 'tipe_konsep', 'organ_target', 'aktif')
CARA_DATANG_FIELDS = ('nama', 'keterangan', 'kode_snomed_ct', 'aktif')


def _cache_key(name: str) -> str:
    return f'ref:{name}'


def invalidate(*names: str) -> None:
    cache.delete_many([_cache_key(n) for n in names])


# ---------------------------------------------------------------------
# Code tables
# ---------------------------------------------------------------------
def code_rows(table: str) -> list[dict]:
    """Rows of one lookup table as ``{kode, deskripsi[, kode_snomed]}``."""
    model = CODE_TABLES.get(table)
    if model is None:
        raise NotFound(f'Tabel referensi "{table}" tidak dikenal.')
    key = _cache_key(table)
    rows = cache.get(key)
    if rows is None:
        columns = [f.name for f in model._meta.fields]
        rows = list(model.objects.order_by('kode').values(*columns))
        cache.set(key, rows, settings.REFERENCE_CACHE_SECONDS)
    return rows


def warm_reference_cache() -> list[str]:
    keys = []
    for table in CODE_TABLES:
        invalidate(table)
        code_rows(table)
        keys.append(_cache_key(table))
    invalidate('cara_datang')
    list_cara_datang(aktif_only=True)
    keys.append(_cache_key('cara_datang'))
    return keys


# ---------------------------------------------------------------------
# Alamat
# ---------------------------------------------------------------------
def serialize_alamat(a: Alamat) -> dict[str, Any]:
    data: dict[str, Any] = {'alamat_id': a.pk}
    for name in ALAMAT_FIELDS:
        data[name] = getattr(a, name)
    data['alamat'] = a.one_line()
    return data


def get_alamat(pk) -> Alamat:
    obj = Alamat.objects.filter(pk=pk).first()
    if not obj:
        raise NotFound('Alamat tidak ditemukan.')
    return obj


def list_alamat() -> list[dict]:
    return [serialize_alamat(a) for a in Alamat.objects.order_by('-id')]


def create_alamat(data: Mapping[str, Any]) -> Alamat:
    alamat = Alamat()
    apply_fields(alamat, data, ALAMAT_FIELDS)
    alamat.save()
    logger.info('alamat_created', alamat_id=alamat.pk)
    return alamat


def update_alamat(pk, data: Mapping[str, Any]) -> Alamat:
    alamat = get_alamat(pk)
    apply_fields(alamat, data, ALAMAT_FIELDS)
    alamat.save()
    logger.info('alamat_updated', alamat_id=alamat.pk)
    return alamat


def delete_alamat(pk) -> None:
    alamat = get_alamat(pk)
    alamat.delete()
    logger.info('alamat_deleted', alamat_id=pk)


# ---------------------------------------------------------------------
# Cara datang
# ---------------------------------------------------------------------
def serialize_cara_datang(c: CaraDatang) -> dict[str, Any]:
    return {
        'cara_datang_id': c.pk,
        'nama': c.nama,
        'keterangan': c.keterangan,
        'kode_snomed_ct': c.kode_snomed_ct,
        'aktif': c.aktif,
    }


def get_cara_datang(pk) -> CaraDatang:
    obj = CaraDatang.objects.filter(pk=pk).first()
    if not obj:
        raise NotFound('Cara datang tidak ditemukan.')
    return obj


def list_cara_datang(*, aktif_only: bool = False) -> list[dict]:
    if not aktif_only:
        return [serialize_cara_datang(c) for c in CaraDatang.objects.order_by('id')]
    key = _cache_key('cara_datang')
    rows = cache.get(key)
    if rows is None:
        rows = [serialize_cara_datang(c) for c in CaraDatang.objects.filter(aktif=True).order_by('id')]
        cache.set(key, rows, settings.REFERENCE_CACHE_SECONDS)
    return rows


def create_cara_datang(data: Mapping[str, Any]) -> CaraDatang:
    obj = CaraDatang(aktif=data.get('aktif', True))
    apply_fields(obj, {k: v for k, v in data.items() if k != 'aktif'}, CARA_DATANG_FIELDS)
    obj.save()
    invalidate('cara_datang')
    logger.info('cara_datang_created', cara_datang_id=obj.pk)
    return obj


def update_cara_datang(pk, data: Mapping[str, Any]) -> CaraDatang:
    obj = get_cara_datang(pk)
    apply_fields(obj, data, CARA_DATANG_FIELDS)
    obj.save()
    invalidate('cara_datang')
    logger.info('cara_datang_updated', cara_datang_id=obj.pk)
    return obj


def delete_cara_datang(pk) -> None:
    obj = get_cara_datang(pk)
    obj.delete()
    invalidate('cara_datang')
    logger.info('cara_datang_deleted', cara_datang_id=pk)


def cara_datang_with_pasien() -> list[dict]:
    """Every arrival mode with the patients registered through it."""
    groups: dict[int, dict] = {}
    for c in CaraDatang.objects.order_by('id'):
        groups[c.pk] = {**serialize_cara_datang(c), 'pasien': [], 'jumlah_pasien': 0}
    qs = (Pasien.objects.filter(cara_datang__isnull=False)
          .order_by('cara_datang_id', 'nama_lengkap')
          .values('id', 'no_rm', 'nama_lengkap', 'cara_datang_id'))
    for row in qs:
        group = groups.get(row['cara_datang_id'])
        if group is None:
            continue
        group['pasien'].append({'pasien_id': row['id'], 'no_rm': row['no_rm'], 'nama_lengkap': row['nama_lengkap']})
        group['jumlah_pasien'] += 1
    return list(groups.values())


# ---------------------------------------------------------------------
# SNOMED
# ---------------------------------------------------------------------
def serialize_snomed(s: Snomed) -> dict[str, Any]:
    data: dict[str, Any] = {'id': s.pk}
    for name in SNOMED_FIELDS:
        data[name] = getattr(s, name)
    return data


def get_snomed(pk) -> Snomed:
    obj = Snomed.objects.filter(pk=pk).first()
    if not obj:
        raise NotFound('SNOMED tidak ditemukan.')
    return obj


def top_snomed(limit: int = 50) -> list[dict]:
    return [serialize_snomed(s) for s in Snomed.objects.filter(aktif=True).order_by('term_indonesia', 'id')[:limit]]


def create_snomed(data: Mapping[str, Any]) -> Snomed:
    obj = Snomed(aktif=data.get('aktif', True))
    apply_fields(obj, {k: v for k, v in data.items() if k != 'aktif'}, SNOMED_FIELDS)
    obj.save()
    logger.info('snomed_created', snomed_id=obj.pk)
    return obj


def update_snomed(pk, data: Mapping[str, Any]) -> Snomed:
    obj = get_snomed(pk)
    apply_fields(obj, data, SNOMED_FIELDS)
    obj.save()
    logger.info('snomed_updated', snomed_id=obj.pk)
    return obj


def delete_snomed(pk) -> None:
    obj = get_snomed(pk)
    obj.delete()
    logger.info('snomed_deleted', snomed_id=pk)


# ---------------------------------------------------------------------
# Anamnesis question bank
# ---------------------------------------------------------------------
def _pertanyaan_row(p: Pertanyaan) -> dict[str, Any]:
    return {
        'id': p.pk,
        'kategori': p.kategori,
        'pertanyaan': p.pertanyaan,
        'kode_snomed': p.kode_snomed,
        'kode_loinc': p.kode_loinc,
    }


def list_pertanyaan(kategori: str | None = None) -> list[dict]:
    qs = Pertanyaan.objects.filter(aktif=True)
    if kategori:
        qs = qs.filter(kategori__iexact=kategori.strip())
    return [_pertanyaan_row(p) for p in qs.order_by('kategori', 'id')]


def anamnesis_sync() -> dict[str, list]:
    """Question bank and structured answers in one payload for the form."""
    answers = [
        {
            'id': j.pk,
            'pertanyaan_id': j.pertanyaan_id,
            'label': j.label,
            'kode_snomed': j.kode_snomed,
            'kode_loinc': j.kode_loinc,
            'definisi': j.definisi,
            'level': j.level,
        }
        for j in JawabanTerstruktur.objects.filter(aktif=True, pertanyaan__aktif=True).order_by(
            'pertanyaan_id', 'level', 'id')
    ]
    return {'questions': list_pertanyaan(), 'structuredAnswers': answers}


@transaction.atomic
def save_pertanyaan(data: Mapping[str, Any]) -> Pertanyaan:
    """Insert one question with its structured answers (used by seeding)."""
    obj, _ = Pertanyaan.objects.update_or_create(
        kategori=data['kategori'], pertanyaan=data['pertanyaan'],
        defaults={'kode_snomed': data.get('kode_snomed', ''), 'kode_loinc': data.get('kode_loinc', '')},
    )
    for level, answer in enumerate(data.get('jawaban') or [], start=1):
        label = answer if isinstance(answer, str) else answer['label']
        JawabanTerstruktur.objects.update_or_create(pertanyaan=obj, label=label, defaults={'level': level})
    return obj
