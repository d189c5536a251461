import bleach
from rest_framework import serializers

from core.models import User
from core.serializers.common import NullableIdField

ROLES = [r for r, _ in User.ROLE_CHOICES]


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username wajib diisi.')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password wajib diisi.')
        return v


class UserWriteSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    nama_lengkap = serializers.CharField(max_length=150, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=ROLES, required=False)
    aktif = serializers.BooleanField(required=False)
    tenaga_kesehatan_id = NullableIdField()

    def validate_username(self, v):
        v = (v or '').strip()
        if User.objects.filter(username=v).exists():
            raise serializers.ValidationError('Username sudah dipakai.')
        return v

    def validate_nama_lengkap(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class UserUpdateSerializer(serializers.Serializer):
    nama_lengkap = serializers.CharField(max_length=150, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=ROLES, required=False)
    aktif = serializers.BooleanField(required=False)
    tenaga_kesehatan_id = NullableIdField()

    def validate_nama_lengkap(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class PasswordChangeSerializer(serializers.Serializer):
    password_lama = serializers.CharField(required=False, allow_blank=True)
    password_baru = serializers.CharField(min_length=6)
