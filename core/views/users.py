"""
User management under ``/api/auth``.

Creating, listing and deleting accounts is reserved for admins; a user
may read and update their own account and change their own password.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from core.permissions import ADMIN_ROLES, IsAdminRole, IsSelfOrAdmin
from core.serializers.auth import PasswordChangeSerializer, UserUpdateSerializer, UserWriteSerializer
from core.services import users as svc
from core.services.nakes import serialize_nakes
from core.views.common import created, ok, ok_list, request_body


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users_collection(request):
    if request.method == 'GET':
        return ok_list(svc.list_users())
    s = UserWriteSerializer(data=request_body(request))
    s.is_valid(raise_exception=True)
    user = svc.create_user(s.validated_data)
    return created(svc.serialize_user(user), 'User berhasil dibuat.')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsSelfOrAdmin])
def user_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_user(svc.get_user(pk)))
    if request.method == 'DELETE':
        if request.user.role not in ADMIN_ROLES:
            raise PermissionDenied('Hanya admin yang boleh menghapus user.')
        svc.delete_user(pk, actor=request.user)
        return ok(None, 'User berhasil dihapus.')

    s = UserUpdateSerializer(data=request_body(request), partial=True)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    if request.user.role not in ADMIN_ROLES and ({'role', 'aktif', 'tenaga_kesehatan_id'} & set(data)):
        raise PermissionDenied('Hanya admin yang boleh mengubah role, status atau tenaga kesehatan user.')
    user = svc.update_user(pk, data)
    return ok(svc.serialize_user(user), 'User berhasil diupdate.')


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsSelfOrAdmin])
def user_password(request, pk: int):
    s = PasswordChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.change_password(
        pk, s.validated_data['password_baru'],
        old_password=s.validated_data.get('password_lama'), actor=request.user,
    )
    return ok(None, 'Password berhasil diubah.')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSelfOrAdmin])
def user_nakes(request, pk: int):
    return ok(serialize_nakes(svc.user_nakes(pk)))
