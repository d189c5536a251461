"""
Generic repository for encounter aggregates.

An encounter is one master row plus rows in several detail tables.  Each
encounter type is described by an :class:`AggregateSpec` (master model,
required master fields and a tuple of :class:`DetailSpec`), and
:class:`AggregateRepository` implements create / update / delete / read
for any spec.

Write contract:

* required master fields are checked before anything touches the
  database;
* ``update`` removes the existing rows of *every* detail table of the
  encounter type and inserts the payload rows, so the stored set always equals the
  payload (a detail key missing from the payload leaves that table
  empty);
* ``delete`` removes all detail rows before the master row;
* foreign keys sent as ``0``, ``"0"``, ``""`` or ``None`` are stored as
  NULL;
* every write runs in one ``transaction.atomic`` block on the database
  alias the repository was built with.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import structlog
from django.db import models, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import NotFound, ValidationError

logger = structlog.get_logger(__name__)

MASTER_FK_FIELDS = ('pasien', 'nakes')
TRUE_VALUES = {True, 1, '1', 'true', 'True', 'yes', 'on'}


class AggregateValidationError(ValidationError):
    """Payload rejected before any write happened."""
    default_detail = 'Data tidak valid.'
    default_code = 'invalid_aggregate'


# ---------------------------------------------------------------------
# Value normalisation
# ---------------------------------------------------------------------
def normalize_fk(value: Any, *, field_name: str = 'id') -> int | None:
    """Return a positive integer id or ``None`` for "no reference".

    ``0``, ``"0"``, ``""``, ``None`` and ``False`` all mean "absent".
    """
    if value is None or value is False or value == '' or value == 0 or value == '0':
        return None
    if isinstance(value, Mapping):
        return normalize_fk(value.get('id'), field_name=field_name)
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise AggregateValidationError({field_name: f'"{value}" bukan id yang valid.'})
    if n < 0:
        raise AggregateValidationError({field_name: 'id tidak boleh negatif.'})
    return n or None


def parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        value = value.strip()
    return value in TRUE_VALUES


def parse_timestamp(value: Any, *, field_name: str = 'tanggal') -> dt.datetime | None:
    """Accept a datetime, a date or an ISO string; ``None``/blank stays ``None``."""
    if value in (None, ''):
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime.combine(value, dt.time.min)
    else:
        text = str(value).strip()
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                raise AggregateValidationError({field_name: f'Format tanggal tidak dikenali: "{text}".'})
            parsed = dt.datetime.combine(day, dt.time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


# ---------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class DetailSpec:
    """Column mapping for one detail table.

    ``fields`` are plain columns copied from the payload row under the same
    name.  ``fk_fields`` are foreign keys on the model; the payload may send
    them as ``<name>_id`` or ``<name>``, or under any alias in ``aliases``
    (alias -> model field name).
    """
    key: str
    model: type[models.Model]
    fields: tuple[str, ...] = ()
    fk_fields: tuple[str, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    defaults: Mapping[str, Any] = field(default_factory=dict)
    label: str = ''

    @property
    def kategori(self) -> str:
        return self.label or self.key.replace('_', ' ').title()

    def pick(self, row: Mapping[str, Any], name: str) -> tuple[bool, Any]:
        for k in (name, f'{name}_id'):
            if k in row:
                return True, row[k]
        for alias, target in self.aliases.items():
            if target == name and alias in row:
                return True, row[alias]
        return False, None

    def build_values(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Map one payload row to model keyword arguments."""
        if not isinstance(row, Mapping):
            raise AggregateValidationError({self.key: 'Setiap baris detail harus berupa objek.'})
        values: dict[str, Any] = {}
        for name in self.fields:
            found, value = self.pick(row, name)
            if not found or value is None or value == '':
                value = self.defaults.get(name, '')
            values[name] = value
        for name in self.fk_fields:
            _, value = self.pick(row, name)
            values[f'{name}_id'] = normalize_fk(value, field_name=f'{self.key}.{name}_id')
        return values

    def to_dict(self, obj: models.Model) -> dict[str, Any]:
        data: dict[str, Any] = {'id': obj.pk, 'kategori': self.kategori}
        for name in self.fields:
            data[name] = getattr(obj, name)
        for name in self.fk_fields:
            data[f'{name}_id'] = getattr(obj, f'{name}_id')
            related = getattr(obj, name)
            data[f'{name}_label'] = str(related) if related is not None else None
        return data


@dataclass(frozen=True)
class AggregateSpec:
    name: str
    master_model: type[models.Model]
    details: tuple[DetailSpec, ...]
    required: tuple[str, ...] = ('pasien_id', 'nakes_id')
    id_key: str = 'id'

    def detail(self, key: str) -> DetailSpec:
        for d in self.details:
            if d.key == key:
                return d
        raise KeyError(key)

    @property
    def detail_keys(self) -> tuple[str, ...]:
        return tuple(d.key for d in self.details)

    def split_payload(self, data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, list]]:
        """Separate master fields from detail rows.

        A detail value may be a list of rows or a single row object.
        """
        master: dict[str, Any] = {}
        details: dict[str, list] = {}
        for key, value in data.items():
            if key in self.detail_keys:
                details[key] = as_rows(key, value)
            else:
                master[key] = value
        return master, details


def as_rows(key: str, value: Any) -> list:
    """Detail rows for ``key``: a single object is one row, ``None`` is none."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise AggregateValidationError({key: 'Harus berupa daftar baris detail.'})


@dataclass
class AggregateResult:
    id: int
    success: bool = True
    created: bool = False
    detail_counts: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------
class AggregateRepository:
    """Reads and writes one encounter type on a given database alias."""

    def __init__(self, spec: AggregateSpec, using: str = 'default'):
        self.spec = spec
        self.using = using

    # -- helpers -------------------------------------------------------
    @property
    def masters(self) -> models.QuerySet:
        return self.spec.master_model._default_manager.using(self.using)

    def _details_qs(self, detail: DetailSpec, pk: int) -> models.QuerySet:
        return detail.model._default_manager.using(self.using).filter(master_id=pk)

    def validate_master(self, master: Mapping[str, Any], *, partial: bool = False) -> None:
        errors: dict[str, str] = {}
        for key in self.spec.required:
            if partial and key not in master:
                continue
            if normalize_fk(master.get(key), field_name=key) is None:
                errors[key] = 'Wajib diisi.'
        if errors:
            raise AggregateValidationError(errors)

    def _master_values(self, master: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in MASTER_FK_FIELDS:
            key = f'{name}_id'
            if key in master or not partial:
                values[key] = normalize_fk(master.get(key), field_name=key)
        if master.get('tanggal') not in (None, ''):
            values['tanggal'] = parse_timestamp(master['tanggal'])
        if 'is_final' in master or not partial:
            values['is_final'] = parse_bool(master.get('is_final', False))
        if 'catatan_umum' in master or not partial:
            values['catatan_umum'] = master.get('catatan_umum') or ''
        return values

    def get_master(self, pk: Any) -> models.Model:
        pk = normalize_fk(pk, field_name=self.spec.id_key)
        obj = self.masters.select_related('pasien', 'nakes').filter(pk=pk).first() if pk else None
        if obj is None:
            raise NotFound(f'Data {self.spec.name} dengan id {pk} tidak ditemukan.')
        return obj

    def _insert_details(self, pk: int, details: Mapping[str, Iterable]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for detail in self.spec.details:
            rows = as_rows(detail.key, details.get(detail.key))
            if not rows:
                continue
            objs = [detail.model(master_id=pk, **detail.build_values(row)) for row in rows]
            detail.model._default_manager.using(self.using).bulk_create(objs)
            counts[detail.key] = len(objs)
        return counts

    def _delete_details(self, pk: int) -> int:
        removed = 0
        for detail in self.spec.details:
            n, _ = self._details_qs(detail, pk).delete()
            removed += n
        return removed

    def _prevalidate_details(self, details: Mapping[str, Iterable]) -> None:
        for detail in self.spec.details:
            for row in as_rows(detail.key, details.get(detail.key)):
                detail.build_values(row)

    # -- writes --------------------------------------------------------
    def create(self, master: Mapping[str, Any], details: Mapping[str, Iterable]) -> AggregateResult:
        self.validate_master(master)
        self._prevalidate_details(details)
        values = self._master_values(master, partial=False)
        with transaction.atomic(using=self.using):
            obj = self.masters.create(**values)
            counts = self._insert_details(obj.pk, details)
        logger.info('aggregate_created', aggregate=self.spec.name, id=obj.pk, details=counts)
        return AggregateResult(id=obj.pk, created=True, detail_counts=counts)

    def update(self, pk: Any, master: Mapping[str, Any], details: Mapping[str, Iterable]) -> AggregateResult:
        self.validate_master(master, partial=True)
        self._prevalidate_details(details)
        values = self._master_values(master, partial=True)
        with transaction.atomic(using=self.using):
            obj = self.get_master(pk)
            for name, value in values.items():
                setattr(obj, name, value)
            obj.save(using=self.using)
            removed = self._delete_details(obj.pk)
            counts = self._insert_details(obj.pk, details)
        logger.info('aggregate_updated', aggregate=self.spec.name, id=obj.pk, removed=removed, details=counts)
        return AggregateResult(id=obj.pk, detail_counts=counts)

    def update_master(self, pk: Any, master: Mapping[str, Any]) -> AggregateResult:
        """Update master columns only; detail rows are left as they are."""
        self.validate_master(master, partial=True)
        values = self._master_values(master, partial=True)
        with transaction.atomic(using=self.using):
            obj = self.get_master(pk)
            for name, value in values.items():
                setattr(obj, name, value)
            obj.save(using=self.using)
        logger.info('aggregate_master_updated', aggregate=self.spec.name, id=obj.pk, fields=sorted(values))
        return AggregateResult(id=obj.pk)

    def add_details(self, pk: Any, details: Mapping[str, Iterable]) -> AggregateResult:
        """Append rows to an existing master without touching current rows."""
        if not any(details.get(k) for k in self.spec.detail_keys):
            raise AggregateValidationError({'detail': 'Tidak ada data detail untuk disimpan.'})
        self._prevalidate_details(details)
        with transaction.atomic(using=self.using):
            obj = self.get_master(pk)
            counts = self._insert_details(obj.pk, details)
        logger.info('aggregate_details_added', aggregate=self.spec.name, id=obj.pk, details=counts)
        return AggregateResult(id=obj.pk, detail_counts=counts)

    def delete(self, pk: Any) -> AggregateResult:
        with transaction.atomic(using=self.using):
            obj = self.get_master(pk)
            master_id = obj.pk
            removed = self._delete_details(master_id)
            obj.delete(using=self.using)
        logger.info('aggregate_deleted', aggregate=self.spec.name, id=master_id, removed=removed)
        return AggregateResult(id=master_id)

    # -- reads ---------------------------------------------------------
    def master_to_dict(self, obj: models.Model) -> dict[str, Any]:
        pasien = obj.pasien
        nakes = obj.nakes
        return {
            self.spec.id_key: obj.pk,
            'pasien_id': obj.pasien_id,
            'nama_pasien': pasien.nama_lengkap if pasien else None,
            'no_rm': pasien.no_rm if pasien else None,
            'nakes_id': obj.nakes_id,
            'nama_nakes': nakes.nama_gelar if nakes else None,
            'tanggal': obj.tanggal.isoformat() if obj.tanggal else None,
            'is_final': obj.is_final,
            'catatan_umum': obj.catatan_umum,
        }

    def detail_rows(self, pk: int) -> dict[str, list[dict]]:
        rows: dict[str, list[dict]] = {}
        for detail in self.spec.details:
            qs = self._details_qs(detail, pk).order_by("id")
            if detail.fk_fields:
                qs = qs.select_related(*detail.fk_fields)
            rows[detail.key] = [detail.to_dict(o) for o in qs]
        return rows

    def get(self, pk: Any) -> dict[str, Any]:
        obj = self.get_master(pk)
        data = self.master_to_dict(obj)
        data.update(self.detail_rows(obj.pk))
        return data

    def list_masters(self, *, pasien_id: Any = None, nama: str | None = None, limit: int | None = None) -> list[dict]:
        """Masters newest first, optionally for one patient or a patient-name fragment."""
        qs = self.masters.select_related('pasien', 'nakes')
        pid = normalize_fk(pasien_id, field_name='pasien_id') if pasien_id is not None else None
        if pid:
            qs = qs.filter(pasien_id=pid)
        if nama:
            qs = qs.filter(pasien__nama_lengkap__icontains=nama.strip())
        qs = qs.order_by('-tanggal', '-id')
        if limit:
            qs = qs[:limit]
        return [self.master_to_dict(o) for o in qs]

    def count_details(self, pk: int, key: str) -> int:
        return self._details_qs(self.spec.detail(key), pk).count()

    # -- single detail rows --------------------------------------------
    def _detail_qs_all(self, detail: DetailSpec) -> models.QuerySet:
        return detail.model._default_manager.using(self.using)

    def get_detail(self, key: str, detail_id: Any) -> dict[str, Any]:
        detail = self.spec.detail(key)
        return detail.to_dict(self._get_detail_obj(detail, detail_id))

    def _get_detail_obj(self, detail: DetailSpec, detail_id: Any) -> models.Model:
        pk = normalize_fk(detail_id, field_name='id')
        obj = self._detail_qs_all(detail).filter(pk=pk).first() if pk else None
        if obj is None:
            raise NotFound(f'Detail {detail.kategori} dengan id {pk} tidak ditemukan.')
        return obj

    def create_detail(self, pk: Any, key: str, row: Mapping[str, Any]) -> dict[str, Any]:
        detail = self.spec.detail(key)
        values = detail.build_values(row)
        with transaction.atomic(using=self.using):
            master = self.get_master(pk)
            obj = self._detail_qs_all(detail).create(master_id=master.pk, **values)
        logger.info('aggregate_detail_created', aggregate=self.spec.name, id=master.pk, detail=key, detail_id=obj.pk)
        return detail.to_dict(obj)

    def update_detail(self, key: str, detail_id: Any, row: Mapping[str, Any]) -> dict[str, Any]:
        """Overwrite the columns present in ``row``; other columns keep their values."""
        detail = self.spec.detail(key)
        values = detail.build_values(row)
        present = {name for name in detail.fields if detail.pick(row, name)[0]}
        present |= {f'{name}_id' for name in detail.fk_fields if detail.pick(row, name)[0]}
        with transaction.atomic(using=self.using):
            obj = self._get_detail_obj(detail, detail_id)
            for name in present:
                setattr(obj, name, values[name])
            obj.save(using=self.using)
        logger.info('aggregate_detail_updated', aggregate=self.spec.name, detail=key, detail_id=obj.pk)
        return detail.to_dict(self._get_detail_obj(detail, obj.pk))

    def delete_detail(self, key: str, detail_id: Any) -> None:
        detail = self.spec.detail(key)
        with transaction.atomic(using=self.using):
            obj = self._get_detail_obj(detail, detail_id)
            obj.delete(using=self.using)
        logger.info('aggregate_detail_deleted', aggregate=self.spec.name, detail=key, detail_id=detail_id)
