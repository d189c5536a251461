from rest_framework import serializers

from core.models import Agama, CaraDatang, JenisKelamin, Pasien, Pekerjaan, StatusPerkawinan
from core.serializers.common import NullableIdField, clean_text

GOLONGAN_DARAH = ['', 'A', 'B', 'AB', 'O', 'A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']

ALAMAT_FIELDS = (
    'alamat_lengkap', 'desa_kelurahan', 'kecamatan', 'kabupaten_kota',
    'provinsi', 'kode_pos', 'kode_wilayah_bps', 'tipe_alamat',
)

CODE_MODELS = {
    'jenis_kelamin_kode': JenisKelamin,
    'status_perkawinan_kode': StatusPerkawinan,
    'agama_kode': Agama,
    'pekerjaan_kode': Pekerjaan,
}


class AlamatSerializer(serializers.Serializer):
    alamat_lengkap = serializers.CharField(required=False, allow_blank=True)
    desa_kelurahan = serializers.CharField(max_length=100, required=False, allow_blank=True)
    kecamatan = serializers.CharField(max_length=100, required=False, allow_blank=True)
    kabupaten_kota = serializers.CharField(max_length=100, required=False, allow_blank=True)
    provinsi = serializers.CharField(max_length=100, required=False, allow_blank=True)
    kode_pos = serializers.CharField(max_length=10, required=False, allow_blank=True)
    kode_wilayah_bps = serializers.CharField(max_length=20, required=False, allow_blank=True)
    tipe_alamat = serializers.CharField(max_length=30, required=False, allow_blank=True)

    def validate_alamat_lengkap(self, v):
        return clean_text(v)


class PasienSerializer(AlamatSerializer):
    """Patient plus the flat address fields stored in ``Alamat``."""
    no_rm = serializers.CharField(max_length=30)
    nik = serializers.CharField(max_length=20, required=False, allow_blank=True)
    nama_lengkap = serializers.CharField(max_length=150)
    nama_panggilan = serializers.CharField(max_length=50, required=False, allow_blank=True)
    gelar_depan = serializers.CharField(max_length=30, required=False, allow_blank=True)
    gelar_belakang = serializers.CharField(max_length=50, required=False, allow_blank=True)
    jenis_kelamin_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    tanggal_lahir = serializers.DateField(required=False, allow_null=True)
    tempat_lahir = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status_perkawinan_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    agama_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    pekerjaan_kode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    golongan_darah = serializers.ChoiceField(choices=GOLONGAN_DARAH, required=False, allow_blank=True)
    telepon = serializers.CharField(max_length=30, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    kontak_darurat_nama = serializers.CharField(max_length=150, required=False, allow_blank=True)
    kontak_darurat_telp = serializers.CharField(max_length=30, required=False, allow_blank=True)
    cara_datang_id = NullableIdField()
    aktif = serializers.BooleanField(required=False)

    def validate_nama_lengkap(self, v):
        v = clean_text(v)
        if len(v) < 2:
            raise serializers.ValidationError('Nama minimal 2 karakter.')
        return v

    def validate_no_rm(self, v):
        v = clean_text(v)
        qs = Pasien.objects.filter(no_rm=v)
        if self.context.get('pk'):
            qs = qs.exclude(pk=self.context['pk'])
        if qs.exists():
            raise serializers.ValidationError('No. RM sudah terdaftar.')
        return v

    def validate(self, attrs):
        errors = {}
        for key, model in CODE_MODELS.items():
            kode = attrs.get(key)
            if kode:
                if not model.objects.filter(pk=kode).exists():
                    errors[key] = f"Kode \"{kode}\" tidak dikenal."
            elif key in attrs:
                attrs[key] = None
        cara = attrs.get('cara_datang_id')
        if cara and not CaraDatang.objects.filter(pk=cara).exists():
            errors['cara_datang_id'] = 'Cara datang tidak ditemukan.'
        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class PasienSearchQuerySerializer(serializers.Serializer):
    keyword = serializers.CharField(max_length=100, required=False, allow_blank=True)
