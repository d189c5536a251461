"""
User accounts: CRUD, password changes and the clinician a user acts as.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog
from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from core.models import TenagaKesehatan, User

logger = structlog.get_logger(__name__)

UPDATABLE = ('nama_lengkap', 'role', 'aktif', 'tenaga_kesehatan_id')


def serialize_user(u: User) -> dict[str, Any]:
    nakes = u.tenaga_kesehatan
    return {
        'id': u.pk,
        'username': u.username,
        'nama_lengkap': u.nama_lengkap,
        'role': u.role,
        'aktif': u.is_active,
        'FN_tenaga_kesehatan_id': u.tenaga_kesehatan_id,
        'nama_nakes': nakes.nama_gelar if nakes else None,
        'last_login': u.last_login.isoformat() if u.last_login else None,
        'created_at': u.created_at.isoformat() if u.created_at else None,
    }


def get_user(pk) -> User:
    user = User.objects.select_related('tenaga_kesehatan').filter(pk=pk).first()
    if not user:
        raise NotFound('User tidak ditemukan.')
    return user


def list_users() -> list[dict]:
    return [serialize_user(u) for u in User.objects.select_related('tenaga_kesehatan').order_by('id')]


def _check_nakes(nakes_id) -> None:
    if nakes_id and not TenagaKesehatan.objects.filter(pk=nakes_id).exists():
        raise ValidationError({'tenaga_kesehatan_id': 'Tenaga kesehatan tidak ditemukan.'})


@transaction.atomic
def create_user(data: Mapping[str, Any]) -> User:
    _check_nakes(data.get('tenaga_kesehatan_id'))
    user = User(
        username=data['username'],
        nama_lengkap=data.get('nama_lengkap', ''),
        role=data.get('role') or 'petugas',
        is_active=data.get('aktif', True),
        tenaga_kesehatan_id=data.get('tenaga_kesehatan_id'),
    )
    user.set_password(data['password'])
    user.save()
    logger.info('user_created', user_id=user.pk, username=user.username, role=user.role)
    return user


@transaction.atomic
def update_user(pk, data: Mapping[str, Any]) -> User:
    """Partial update. Only keys present in ``data`` are touched."""
    fields = [name for name in UPDATABLE if name in data]
    if not fields:
        raise ValidationError('Tidak ada field yang diupdate.')
    user = get_user(pk)
    if 'tenaga_kesehatan_id' in data:
        _check_nakes(data['tenaga_kesehatan_id'])
    changed = []
    for name in fields:
        attr = 'is_active' if name == 'aktif' else name
        setattr(user, attr, data[name])
        changed.append(attr)
    user.save(update_fields=changed + ['updated_at'])
    logger.info('user_updated', user_id=user.pk, fields=changed)
    return user


def change_password(pk, new_password: str, *, old_password: str | None = None, actor=None) -> None:
    """Set a new password.

    A user changing their own password must supply the current one;
    admins resetting someone else's password need not.
    """
    user = get_user(pk)
    is_self = actor is not None and actor.pk == user.pk
    if is_self and not user.check_password(old_password or ''):
        raise ValidationError({'password_lama': 'Password lama salah.'})
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info('user_password_changed', user_id=user.pk, by=getattr(actor, 'pk', None))


def delete_user(pk, *, actor=None) -> None:
    user = get_user(pk)
    if actor is not None and actor.pk == user.pk:
        raise ValidationError('Tidak bisa menghapus akun sendiri.')
    user.delete()
    logger.info('user_deleted', user_id=pk, by=getattr(actor, 'pk', None))


def user_nakes(pk) -> TenagaKesehatan:
    user = get_user(pk)
    if not user.tenaga_kesehatan:
        raise NotFound('User ini tidak terhubung ke tenaga kesehatan.')
    return user.tenaga_kesehatan
