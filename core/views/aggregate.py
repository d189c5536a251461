"""
Shared plumbing for the encounter endpoints.

Each encounter module shapes its request body into ``(master, details)``
and hands it to an ``AggregateRepository`` bound to the database alias the
router picks for the master model.
"""
from __future__ import annotations

from typing import Any, Callable

from django.db import router

from core.services.aggregates import AggregateRepository, AggregateSpec
from core.services.encounters import shape_generic
from core.views.common import created, ok, ok_list, request_body

Shaper = Callable[[dict], tuple]


def repository(spec: AggregateSpec) -> AggregateRepository:
    return AggregateRepository(spec, using=router.db_for_write(spec.master_model))


def _shape(spec: AggregateSpec, request, shaper: Shaper | None):
    body = request_body(request)
    return shaper(body) if shaper else shape_generic(spec, body)


def create_aggregate(spec: AggregateSpec, request, *, shaper: Shaper | None = None, message: str = ''):
    master, details = _shape(spec, request, shaper)
    result = repository(spec).create(master, details)
    payload = {spec.id_key: result.id, 'detail_counts': result.detail_counts}
    return created(payload, message or 'Data berhasil disimpan.', **{spec.id_key: result.id})


def update_aggregate(spec: AggregateSpec, request, pk: Any, *, shaper: Shaper | None = None, message: str = ''):
    master, details = _shape(spec, request, shaper)
    result = repository(spec).update(pk, master, details)
    payload = {spec.id_key: result.id, 'detail_counts': result.detail_counts}
    return ok(payload, message or 'Data berhasil diupdate.')


def delete_aggregate(spec: AggregateSpec, pk: Any, *, message: str = ''):
    result = repository(spec).delete(pk)
    return ok({spec.id_key: result.id}, message or 'Data berhasil dihapus.')


def get_aggregate(spec: AggregateSpec, pk: Any):
    return ok(repository(spec).get(pk))


def list_aggregates(spec: AggregateSpec, request, *, pasien_id: Any = None, limit: int | None = None):
    nama = request.query_params.get('nama') or request.query_params.get('keyword')
    return ok_list(repository(spec).list_masters(pasien_id=pasien_id, nama=nama, limit=limit))


def flatten_details(spec: AggregateSpec, record: dict[str, Any]) -> list[dict]:
    """All detail rows of a record in one list, each tagged with ``kategori``."""
    rows: list[dict] = []
    for key in spec.detail_keys:
        rows.extend(record.get(key) or [])
    return rows
