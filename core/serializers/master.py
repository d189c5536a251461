from rest_framework import serializers

from core.serializers.common import clean_text


class CaraDatangSerializer(serializers.Serializer):
    nama = serializers.CharField(max_length=100)
    keterangan = serializers.CharField(required=False, allow_blank=True)
    kode_snomed_ct = serializers.CharField(max_length=50, required=False, allow_blank=True)
    aktif = serializers.BooleanField(required=False)

    def validate_nama(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Nama cara datang wajib diisi.')
        return v

    def validate_keterangan(self, v):
        return clean_text(v)


class SnomedSerializer(serializers.Serializer):
    fsn_term = serializers.CharField(max_length=255)
    term_indonesia = serializers.CharField(max_length=255, required=False, allow_blank=True)
    deskripsi = serializers.CharField(required=False, allow_blank=True)
    kategori_konsep = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tipe_konsep = serializers.CharField(max_length=100, required=False, allow_blank=True)
    organ_target = serializers.CharField(max_length=100, required=False, allow_blank=True)
    aktif = serializers.BooleanField(required=False)

    def validate_fsn_term(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('FSN term wajib diisi.')
        return v

    def validate_term_indonesia(self, v):
        return clean_text(v)

    def validate_deskripsi(self, v):
        return clean_text(v)
