"""
Role checks on top of ``IsAuthenticated``.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

ADMIN_ROLES = {"admin"}
CLINICAL_ROLES = {"admin", "dokter", "perawat"}


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    message = "Hanya admin yang boleh mengakses."

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in ADMIN_ROLES)


class IsClinicalOrReadOnly(BasePermission):
    """Clinical staff may write encounters; other roles only read them."""
    message = "Peran Anda tidak boleh mengubah data klinis."

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method in SAFE_METHODS:
            return True
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in CLINICAL_ROLES)


class IsSelfOrAdmin(BasePermission):
    """Users may act on their own account; admins on any account."""

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if getattr(user, "role", None) in ADMIN_ROLES:
            return True
        target = (getattr(request, "parser_context", None) or {}).get("kwargs", {}).get("pk")
        return target is not None and str(target) == str(user.pk)
