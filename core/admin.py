"""
Django admin registrations for the core models.

Reference tables and the registries are editable here; encounter masters
are listed read-mostly so their detail rows stay managed by the API.
"""

from django.contrib import admin

from . import models as m


@admin.register(m.User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'nama_lengkap', 'role', 'tenaga_kesehatan', 'is_active', 'is_superuser')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'nama_lengkap')


@admin.register(m.Pasien)
class PasienAdmin(admin.ModelAdmin):
    list_display = ('no_rm', 'nama_lengkap', 'jenis_kelamin', 'tanggal_lahir', 'cara_datang', 'aktif')
    list_filter = ('aktif', 'jenis_kelamin', 'cara_datang')
    search_fields = ('no_rm', 'nik', 'nama_lengkap')


@admin.register(m.TenagaKesehatan)
class TenagaKesehatanAdmin(admin.ModelAdmin):
    list_display = ('nama_lengkap', 'profesi', 'spesialisasi', 'nomor_str', 'aktif')
    list_filter = ('aktif', 'profesi', 'spesialisasi')
    search_fields = ('nama_lengkap', 'nomor_str')


@admin.register(m.CaraDatang)
class CaraDatangAdmin(admin.ModelAdmin):
    list_display = ('id', 'nama', 'kode_snomed_ct', 'aktif')


@admin.register(m.Snomed)
class SnomedAdmin(admin.ModelAdmin):
    list_display = ('id', 'term_indonesia', 'fsn_term', 'kategori_konsep', 'organ_target', 'aktif')
    list_filter = ('aktif', 'kategori_konsep', 'organ_target')
    search_fields = ('term_indonesia', 'fsn_term')


@admin.register(m.Icd10, m.Icd9cm, m.Cpt)
class KodeTerminologiAdmin(admin.ModelAdmin):
    list_display = ('kode', 'deskripsi', 'kategori_aplikasi')
    search_fields = ('kode', 'deskripsi')


@admin.register(m.Loinc)
class LoincAdmin(admin.ModelAdmin):
    list_display = ('kode', 'component', 'deskripsi', 'kategori_aplikasi')
    list_filter = ('kategori_aplikasi',)
    search_fields = ('kode', 'component', 'deskripsi')


class JawabanInline(admin.TabularInline):
    model = m.JawabanTerstruktur
    extra = 0


@admin.register(m.Pertanyaan)
class PertanyaanAdmin(admin.ModelAdmin):
    list_display = ('id', 'kategori', 'pertanyaan', 'aktif')
    list_filter = ('kategori', 'aktif')
    inlines = [JawabanInline]


@admin.register(m.Anamnesis, m.PemeriksaanMata, m.PemeriksaanPenunjang, m.DiagnosisProsedur,
                m.Tatalaksana, m.Edukasi, m.Soap, m.PathwayBpjs)
class EncounterAdmin(admin.ModelAdmin):
    list_display = ('id', 'pasien', 'nakes', 'tanggal', 'is_final')
    list_filter = ('is_final',)
    search_fields = ('pasien__nama_lengkap', 'pasien__no_rm')
    raw_id_fields = ('pasien', 'nakes')


admin.site.register([m.JenisKelamin, m.StatusPerkawinan, m.Agama, m.Pekerjaan, m.Profesi, m.Spesialisasi,
                     m.Alamat, m.Tindakan])
