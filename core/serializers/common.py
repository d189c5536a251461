import bleach
from rest_framework import serializers

from core.services.aggregates import normalize_fk


class NullableIdField(serializers.IntegerField):
    """Foreign-key id where ``0`` and ``""`` mean "no reference"."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('min_value', 1)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data in ('', 0, '0'):
            return (True, None)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        return normalize_fk(super().to_internal_value(data), field_name=self.field_name or 'id')


class KeywordQuerySerializer(serializers.Serializer):
    keyword = serializers.CharField(max_length=100, required=False, allow_blank=True)
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    limit = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        attrs['keyword'] = (attrs.get('keyword') or attrs.get('q') or '').strip()
        return attrs


LEGACY_PREFIXES = ('FS_', 'FN_', 'FD_', 'FB_')


def strip_prefixes(data) -> dict:
    """Accept dashboard keys like ``FS_nama_lengkap`` as ``nama_lengkap``.

    An unprefixed key wins over its prefixed twin.
    """
    out: dict = {}
    for key, value in dict(data).items():
        if key[:3] in LEGACY_PREFIXES:
            out.setdefault(key[3:], value)
        else:
            out[key] = value
    return out


def clean_text(v):
    return bleach.clean((v or '').strip(), strip=True)
