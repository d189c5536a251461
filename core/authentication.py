"""
Bearer JWT authentication and the project's access-token claims.

``BearerJWTAuthentication`` wraps simplejwt's ``JWTAuthentication`` so the
settings have a stable import path, and ``issue_tokens`` mints the
refresh/access pair whose access token carries ``user_id``, ``username``,
``role`` and ``FN_tenaga_kesehatan_id``.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import RefreshToken


class BearerJWTAuthentication(JWTAuthentication):
    """``Authorization: Bearer <access token>``.

    Missing header means anonymous (the permission layer answers 401);
    a malformed, tampered or expired token raises ``InvalidToken`` (401).
    """

    def authenticate_header(self, request):
        return 'Bearer realm="api"'


def issue_tokens(user) -> RefreshToken:
    refresh = RefreshToken.for_user(user)
    claims = {
        'user_id': user.pk,
        'username': user.username,
        'role': user.role,
        'FN_tenaga_kesehatan_id': user.tenaga_kesehatan_id,
    }
    for key, value in claims.items():
        refresh[key] = value
    return refresh
