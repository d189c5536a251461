"""
Authentication views: login, token refresh, logout and the caller's
profile.

Tokens are simplejwt refresh/access pairs; the access token carries the
claims added by ``core.authentication.issue_tokens``.
"""
from __future__ import annotations

import structlog
from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from core.authentication import issue_tokens
from core.serializers.auth import LoginSerializer
from core.services.users import serialize_user

logger = structlog.get_logger(__name__)


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


# ---------------------------------------------------------------------
# Username/password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """
    Accepts ``username`` and ``password``.  Unknown users, wrong passwords
    and deactivated accounts all answer 401 with the same message.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']

    user = authenticate(request, username=username, password=s.validated_data['password'])
    if not user:
        logger.warning('login_failed', username=username, ip=request.META.get('REMOTE_ADDR'))
        return Response({'success': False, 'message': 'Username atau password salah.'},
                        status=status.HTTP_401_UNAUTHORIZED)

    refresh = issue_tokens(user)
    update_last_login(None, user)
    logger.info('login_succeeded', user_id=user.pk, role=user.role)
    return Response({
        'success': True,
        'message': 'Login berhasil.',
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'user': serialize_user(user),
    })


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Return a new access token from a refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])
    data = dict(s.validated_data)
    return Response({'success': True, 'token': data.pop('access'), **data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist the given refresh token, or every outstanding one of the caller."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return Response({'success': False, 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    logger.info('logout', user_id=request.user.pk, blacklisted=count)
    return Response({'success': True, 'message': 'Logout berhasil.', 'data': {'blacklisted': count}})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    return Response({'success': True, 'data': serialize_user(request.user)})
