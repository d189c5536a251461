"""
Keyword search over coded terminologies and patients.

Searches are built from ``Q`` objects with optional typed filters.  A
keyword that is empty or shorter than the configured minimum returns an
empty list without running a query, so dropdowns can call these on every
keystroke.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from operator import or_
from typing import Any

import structlog
from django.conf import settings
from django.db import models
from django.db.models import Q

from core.models import Cpt, Icd9cm, Icd10, Loinc, Pasien, Snomed, Tindakan

logger = structlog.get_logger(__name__)

MIN_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class TermSource:
    model: type[models.Model]
    search_fields: tuple[str, ...]
    order_by: tuple[str, ...]
    category_field: str | None = None
    columns: tuple[str, ...] = ()

    def row(self, obj: models.Model) -> dict[str, Any]:
        data = {'id': obj.pk}
        for name in self.columns:
            data[name] = getattr(obj, name)
        data['label'] = str(obj)
        return data


SOURCES: dict[str, TermSource] = {
    'snomed': TermSource(
        Snomed, ('fsn_term', 'term_indonesia'), ('term_indonesia', 'fsn_term'), 'kategori_konsep',
        ('fsn_term', 'term_indonesia', 'deskripsi', 'kategori_konsep', 'tipe_konsep', 'organ_target'),
    ),
    'icd10': TermSource(
        Icd10, ('kode', 'deskripsi'), ('kode',), 'kategori_aplikasi',
        ('kode', 'deskripsi', 'kategori_aplikasi', 'kategori'),
    ),
    'icd9': TermSource(
        Icd9cm, ('kode', 'deskripsi'), ('kode',), 'kategori_aplikasi',
        ('kode', 'deskripsi', 'kategori_aplikasi'),
    ),
    'cpt': TermSource(
        Cpt, ('kode', 'deskripsi'), ('kode',), 'kategori_aplikasi',
        ('kode', 'deskripsi', 'kategori_aplikasi'),
    ),
    'loinc': TermSource(
        Loinc, ('kode', 'deskripsi', 'component'), ('component', 'kode'), 'kategori_aplikasi',
        ('kode', 'deskripsi', 'component', 'kategori_aplikasi'),
    ),
    'tindakan': TermSource(
        Tindakan, ('nama_tindakan', 'kategori_tindakan'), ('nama_tindakan',), 'kategori_tindakan',
        ('nama_tindakan', 'kategori_tindakan', 'icd9cm_id', 'snomed_id'),
    ),
}


def clamp_limit(limit: Any = None) -> int:
    try:
        n = int(limit) if limit not in (None, '') else settings.SEARCH_PAGE_SIZE
    except (TypeError, ValueError):
        n = settings.SEARCH_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, n))


def keyword_too_short(keyword: str | None, min_length: int | None = None) -> bool:
    minimum = settings.SEARCH_MIN_KEYWORD if min_length is None else min_length
    text = (keyword or '').strip()
    return not text or len(text) < minimum


def _active(qs: models.QuerySet) -> models.QuerySet:
    if any(f.name == 'aktif' for f in qs.model._meta.fields):
        qs = qs.filter(aktif=True)
    return qs


def _category(category: Any) -> str | None:
    text = str(category).strip() if category is not None else ''
    return None if text in ('', '0') else text


def search_terms(source: str | TermSource, keyword: str | None, *, category: Any = None,
                 limit: Any = None, min_length: int | None = None) -> list[dict]:
    """Return up to ``limit`` active rows matching ``keyword`` (and ``category``)."""
    src = SOURCES[source] if isinstance(source, str) else source
    if keyword_too_short(keyword, min_length):
        return []
    text = keyword.strip()  # type: ignore[union-attr]
    cond = reduce(or_, (Q(**{f'{f}__icontains': text}) for f in src.search_fields))
    qs = _active(src.model._default_manager.all()).filter(cond)
    cat = _category(category)
    if cat and src.category_field:
        qs = qs.filter(**{src.category_field: cat})
    rows = [src.row(o) for o in qs.order_by(*src.order_by)[:clamp_limit(limit)]]
    logger.debug('terminology_search', source=src.model.__name__, keyword=text, category=cat, hits=len(rows))
    return rows


def list_terms(source: str | TermSource, *, category: Any = None, field: str | None = None,
               limit: Any = None) -> list[dict]:
    """Browse active rows of a terminology, optionally narrowed by one column."""
    src = SOURCES[source] if isinstance(source, str) else source
    qs = _active(src.model._default_manager.all())
    cat = _category(category)
    column = field or src.category_field
    if cat and column:
        qs = qs.filter(**{f'{column}__iexact': cat})
    return [src.row(o) for o in qs.order_by(*src.order_by)[:clamp_limit(limit)]]


def snomed_categories() -> list[str]:
    qs = (Snomed.objects.filter(aktif=True).exclude(kategori_konsep='')
          .order_by('kategori_konsep').values_list('kategori_konsep', flat=True).distinct())
    return list(qs)


def pasien_row(p: Pasien) -> dict[str, Any]:
    return {
        'pasien_id': p.pk,
        'no_rm': p.no_rm,
        'nama_lengkap': p.nama_lengkap,
        'tanggal_lahir': p.tanggal_lahir.isoformat() if p.tanggal_lahir else None,
        'jenis_kelamin_kode': p.jenis_kelamin_id,
    }


def search_pasien(keyword: str | None, *, limit: Any = None, min_length: int | None = None,
                  active_only: bool = True) -> list[dict]:
    """Patients whose name or medical-record number contains ``keyword``."""
    if keyword_too_short(keyword, min_length):
        return []
    text = keyword.strip()  # type: ignore[union-attr]
    qs = Pasien.objects.filter(Q(nama_lengkap__icontains=text) | Q(no_rm__icontains=text))
    if active_only:
        qs = qs.filter(aktif=True)
    return [pasien_row(p) for p in qs.order_by('nama_lengkap', 'id')[:clamp_limit(limit)]]
