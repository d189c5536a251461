from rest_framework import serializers

from core.models import Profesi, Spesialisasi
from core.serializers.common import clean_text
from core.serializers.patient import AlamatSerializer


class NakesSerializer(AlamatSerializer):
    nama_lengkap = serializers.CharField(max_length=150)
    gelar_depan = serializers.CharField(max_length=30, required=False, allow_blank=True)
    gelar_belakang = serializers.CharField(max_length=50, required=False, allow_blank=True)
    nomor_str = serializers.CharField(max_length=50, required=False, allow_blank=True)
    tanggal_terbit_str = serializers.DateField(required=False, allow_null=True)
    tanggal_kadaluwarsa_str = serializers.DateField(required=False, allow_null=True)
    spesialisasi_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    profesi_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    no_telepon = serializers.CharField(max_length=30, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    aktif = serializers.BooleanField(required=False)

    def validate_nama_lengkap(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Nama lengkap wajib diisi.')
        return v

    def validate(self, attrs):
        errors = {}
        for key, model in (('spesialisasi_kode', Spesialisasi), ('profesi_kode', Profesi)):
            kode = attrs.get(key)
            if kode:
                if not model.objects.filter(pk=kode).exists():
                    errors[key] = f'Kode "{kode}" tidak dikenal.'
            elif key in attrs:
                attrs[key] = None
        terbit, kadaluwarsa = attrs.get('tanggal_terbit_str'), attrs.get('tanggal_kadaluwarsa_str')
        if terbit and kadaluwarsa and kadaluwarsa < terbit:
            errors['tanggal_kadaluwarsa_str'] = 'Tanggal kadaluwarsa STR sebelum tanggal terbit.'
        if errors:
            raise serializers.ValidationError(errors)
        return attrs
