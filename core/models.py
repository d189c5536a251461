"""
Database models for the SIMRS backend.

The schema has three layers:

* identity and reference data: users, patients (``Pasien``), clinicians
  (``TenagaKesehatan``), addresses, arrival methods and small code tables;
* coded terminologies (SNOMED CT, ICD-10, ICD-9-CM, CPT, LOINC) and the
  anamnesis question bank, which encounters reference by id;
* clinical encounters, each one master row with several detail tables.

Every detail table points at its master through a field named ``master``
with ``on_delete=PROTECT``.  Details are removed explicitly by
:mod:`core.services.aggregates` before the master goes, never by a
database cascade.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


# ---------------------------------------------------------------------
# Code tables
# ---------------------------------------------------------------------
class KodeReferensi(models.Model):
    """Small lookup table keyed by a short code."""
    kode = models.CharField(max_length=20, primary_key=True)
    deskripsi = models.CharField(max_length=255)

    class Meta:
        abstract = True
        ordering = ['kode']

    def __str__(self) -> str:
        return f"{self.kode} - {self.deskripsi}"


class JenisKelamin(KodeReferensi):
    pass


class StatusPerkawinan(KodeReferensi):
    pass


class Agama(KodeReferensi):
    pass


class Pekerjaan(KodeReferensi):
    pass


class Profesi(KodeReferensi):
    kode_snomed = models.CharField(max_length=50, blank=True, default='')


class Spesialisasi(KodeReferensi):
    kode_snomed = models.CharField(max_length=50, blank=True, default='')


# ---------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------
class Alamat(models.Model):
    alamat_lengkap = models.TextField(blank=True, default='')
    desa_kelurahan = models.CharField(max_length=100, blank=True, default='')
    kecamatan = models.CharField(max_length=100, blank=True, default='')
    kabupaten_kota = models.CharField(max_length=100, blank=True, default='')
    provinsi = models.CharField(max_length=100, blank=True, default='')
    kode_pos = models.CharField(max_length=10, blank=True, default='')
    kode_wilayah_bps = models.CharField(max_length=20, blank=True, default='')
    tipe_alamat = models.CharField(max_length=30, blank=True, default='')

    def one_line(self) -> str:
        parts = [self.alamat_lengkap, self.desa_kelurahan, self.kecamatan, self.kabupaten_kota]
        text = ', '.join(p for p in parts if p)
        tail = ' '.join(p for p in [self.provinsi, self.kode_pos] if p)
        return f"{text}, {tail}" if text and tail else (text or tail)

    def __str__(self) -> str:
        return self.one_line() or f"Alamat #{self.pk}"


class CaraDatang(models.Model):
    """How a patient arrived (walk-in, referral, ambulance ...)."""
    nama = models.CharField(max_length=100)
    keterangan = models.TextField(blank=True, default='')
    kode_snomed_ct = models.CharField(max_length=50, blank=True, default='')
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return self.nama


class TenagaKesehatan(models.Model):
    """A clinician (nakes)."""
    nama_lengkap = models.CharField(max_length=150)
    gelar_depan = models.CharField(max_length=30, blank=True, default='')
    gelar_belakang = models.CharField(max_length=50, blank=True, default='')
    nomor_str = models.CharField(max_length=50, blank=True, default='')
    tanggal_terbit_str = models.DateField(null=True, blank=True)
    tanggal_kadaluwarsa_str = models.DateField(null=True, blank=True)
    spesialisasi = models.ForeignKey(
        Spesialisasi, null=True, blank=True, on_delete=models.SET_NULL, related_name='nakes'
    )
    profesi = models.ForeignKey(
        Profesi, null=True, blank=True, on_delete=models.SET_NULL, related_name='nakes'
    )
    no_telepon = models.CharField(max_length=30, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    alamat = models.ForeignKey(Alamat, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['nama_lengkap']

    @property
    def nama_gelar(self) -> str:
        nama = ' '.join(p for p in [self.gelar_depan, self.nama_lengkap] if p)
        return f"{nama}, {self.gelar_belakang}" if self.gelar_belakang else nama

    def __str__(self) -> str:
        return self.nama_gelar


class User(AbstractUser):
    """Login account.

    ``role`` drives the few role checks the API makes; a user may be tied
    to the clinician record they act as, which is also embedded in the
    JWT claims.
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('dokter', 'Dokter'),
        ('perawat', 'Perawat'),
        ('petugas', 'Petugas'),
    ]
    nama_lengkap = models.CharField(max_length=150, blank=True, default='')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='petugas', db_index=True)
    tenaga_kesehatan = models.ForeignKey(
        TenagaKesehatan, null=True, blank=True, on_delete=models.SET_NULL, related_name='users'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Pasien(models.Model):
    no_rm = models.CharField(max_length=30, unique=True)
    nik = models.CharField(max_length=20, blank=True, default='', db_index=True)
    nama_lengkap = models.CharField(max_length=150, db_index=True)
    nama_panggilan = models.CharField(max_length=50, blank=True, default='')
    gelar_depan = models.CharField(max_length=30, blank=True, default='')
    gelar_belakang = models.CharField(max_length=50, blank=True, default='')
    jenis_kelamin = models.ForeignKey(
        JenisKelamin, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    tanggal_lahir = models.DateField(null=True, blank=True)
    tempat_lahir = models.CharField(max_length=100, blank=True, default='')
    status_perkawinan = models.ForeignKey(
        StatusPerkawinan, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    agama = models.ForeignKey(Agama, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    pekerjaan = models.ForeignKey(Pekerjaan, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    golongan_darah = models.CharField(max_length=5, blank=True, default='')
    telepon = models.CharField(max_length=30, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    kontak_darurat_nama = models.CharField(max_length=150, blank=True, default='')
    kontak_darurat_telp = models.CharField(max_length=30, blank=True, default='')
    alamat = models.ForeignKey(Alamat, null=True, blank=True, on_delete=models.SET_NULL, related_name='pasien')
    cara_datang = models.ForeignKey(
        CaraDatang, null=True, blank=True, on_delete=models.SET_NULL, related_name='pasien'
    )
    aktif = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.no_rm} {self.nama_lengkap}"


# ---------------------------------------------------------------------
# Terminologies
# ---------------------------------------------------------------------
class Snomed(models.Model):
    fsn_term = models.CharField(max_length=255)
    term_indonesia = models.CharField(max_length=255, blank=True, default='', db_index=True)
    deskripsi = models.TextField(blank=True, default='')
    kategori_konsep = models.CharField(max_length=100, blank=True, default='', db_index=True)
    tipe_konsep = models.CharField(max_length=100, blank=True, default='')
    organ_target = models.CharField(max_length=100, blank=True, default='', db_index=True)
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['term_indonesia', 'id']

    def __str__(self) -> str:
        return self.term_indonesia or self.fsn_term


class Icd10(models.Model):
    kode = models.CharField(max_length=20, db_index=True)
    deskripsi = models.CharField(max_length=255)
    kategori_aplikasi = models.CharField(max_length=100, blank=True, default='', db_index=True)
    kategori = models.CharField(max_length=100, blank=True, default='')
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['kode']

    def __str__(self) -> str:
        return f"{self.kode} {self.deskripsi}"


class Icd9cm(models.Model):
    kode = models.CharField(max_length=20, db_index=True)
    deskripsi = models.CharField(max_length=255)
    kategori_aplikasi = models.CharField(max_length=100, blank=True, default='', db_index=True)
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['kode']

    def __str__(self) -> str:
        return f"{self.kode} {self.deskripsi}"


class Cpt(models.Model):
    kode = models.CharField(max_length=20, db_index=True)
    deskripsi = models.CharField(max_length=255)
    kategori_aplikasi = models.CharField(max_length=100, blank=True, default='', db_index=True)
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['kode']

    def __str__(self) -> str:
        return f"{self.kode} {self.deskripsi}"


class Loinc(models.Model):
    kode = models.CharField(max_length=20, db_index=True)
    deskripsi = models.CharField(max_length=255)
    component = models.CharField(max_length=255, blank=True, default='')
    kategori_aplikasi = models.CharField(max_length=100, blank=True, default='', db_index=True)
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['kode']

    def __str__(self) -> str:
        return f"{self.kode} {self.component or self.deskripsi}"


class Tindakan(models.Model):
    """Billable hospital procedure, linked to its ICD-9-CM / SNOMED codes."""
    nama_tindakan = models.CharField(max_length=255, db_index=True)
    kategori_tindakan = models.CharField(max_length=100, blank=True, default='')
    icd9cm = models.ForeignKey(Icd9cm, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')

    class Meta:
        ordering = ['nama_tindakan']

    def __str__(self) -> str:
        return self.nama_tindakan


class Pertanyaan(models.Model):
    """Anamnesis question, grouped by the detail category it feeds."""
    kategori = models.CharField(max_length=50, db_index=True)
    pertanyaan = models.TextField()
    kode_snomed = models.CharField(max_length=50, blank=True, default='')
    kode_loinc = models.CharField(max_length=50, blank=True, default='')
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['kategori', 'id']

    def __str__(self) -> str:
        return f"[{self.kategori}] {self.pertanyaan}"


class JawabanTerstruktur(models.Model):
    pertanyaan = models.ForeignKey(Pertanyaan, on_delete=models.CASCADE, related_name='jawaban')
    label = models.CharField(max_length=255)
    kode_snomed = models.CharField(max_length=50, blank=True, default='')
    kode_loinc = models.CharField(max_length=50, blank=True, default='')
    definisi = models.TextField(blank=True, default='')
    level = models.PositiveSmallIntegerField(default=1)
    aktif = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['pertanyaan_id', 'level', 'id']

    def __str__(self) -> str:
        return self.label


# ---------------------------------------------------------------------
# Encounter masters
# ---------------------------------------------------------------------
class EncounterMaster(models.Model):
    """Fields shared by every encounter master row."""
    pasien = models.ForeignKey(Pasien, on_delete=models.PROTECT, related_name='%(class)s_set')
    nakes = models.ForeignKey(
        TenagaKesehatan, null=True, blank=True, on_delete=models.SET_NULL, related_name='%(class)s_set'
    )
    tanggal = models.DateTimeField(default=timezone.now, db_index=True)
    is_final = models.BooleanField(default=False)
    catatan_umum = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-tanggal', '-id']

    def __str__(self) -> str:
        return f"{self.__class__.__name__} #{self.pk} pasien={self.pasien_id}"


class Anamnesis(EncounterMaster):
    pass


class PemeriksaanMata(EncounterMaster):
    pass


class PemeriksaanPenunjang(EncounterMaster):
    pass


class DiagnosisProsedur(EncounterMaster):
    pass


class Tatalaksana(EncounterMaster):
    pass


class Edukasi(EncounterMaster):
    pass


class Soap(EncounterMaster):
    pass


class PathwayBpjs(EncounterMaster):
    pass


# ---------------------------------------------------------------------
# Anamnesis details
# ---------------------------------------------------------------------
class JawabanAnamnesis(models.Model):
    pertanyaan = models.ForeignKey(Pertanyaan, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    jawaban = models.ForeignKey(
        JawabanTerstruktur, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    keterangan = models.TextField(blank=True, default='')

    class Meta:
        abstract = True
        ordering = ['id']


class AnamnesisKeluhan(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='keluhan')


class AnamnesisRiwayatPenyakit(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='riwayat_penyakit')


class AnamnesisPenyakitTerdahulu(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='penyakit_terdahulu')


class AnamnesisRiwayatPengobatan(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='riwayat_pengobatan')


class AnamnesisFaktorResiko(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='faktor_resiko')


class AnamnesisRiwayatBedahTerapi(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='riwayat_bedah_terapi')


class AnamnesisFungsiVisus(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='pemeriksaan_fungsi_visus')


class AnamnesisBiomikroskopi(JawabanAnamnesis):
    master = models.ForeignKey(Anamnesis, on_delete=models.PROTECT, related_name='pemeriksaan_biomikroskopi')


# ---------------------------------------------------------------------
# Eye examination details
# ---------------------------------------------------------------------
class DetailVisus(models.Model):
    master = models.ForeignKey(PemeriksaanMata, on_delete=models.PROTECT, related_name='visus')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    visus_od = models.CharField(max_length=30, blank=True, default='')
    visus_os = models.CharField(max_length=30, blank=True, default='')
    koreksi = models.CharField(max_length=100, blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailTekananIntraokular(models.Model):
    master = models.ForeignKey(PemeriksaanMata, on_delete=models.PROTECT, related_name='tio')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    tio_od = models.CharField(max_length=30, blank=True, default='')
    tio_os = models.CharField(max_length=30, blank=True, default='')
    metode_pengukuran = models.CharField(max_length=100, blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailSegmenAnterior(models.Model):
    master = models.ForeignKey(PemeriksaanMata, on_delete=models.PROTECT, related_name='segmen_anterior')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    kornea = models.CharField(max_length=255, blank=True, default='')
    acd = models.CharField(max_length=255, blank=True, default='')
    pupil = models.CharField(max_length=255, blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailLensa(models.Model):
    master = models.ForeignKey(PemeriksaanMata, on_delete=models.PROTECT, related_name='lensa')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    temuan_od = models.CharField(max_length=255, blank=True, default='')
    temuan_os = models.CharField(max_length=255, blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailFunduskopi(models.Model):
    master = models.ForeignKey(PemeriksaanMata, on_delete=models.PROTECT, related_name='funduskopi')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    refleks_fundus = models.CharField(max_length=255, blank=True, default='')
    detail_retina = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


# ---------------------------------------------------------------------
# Supporting examination details
# ---------------------------------------------------------------------
class DetailBiometri(models.Model):
    master = models.ForeignKey(PemeriksaanPenunjang, on_delete=models.PROTECT, related_name='biometri')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    panjang_aksial = models.CharField(max_length=30, blank=True, default='')
    kekuatan_iol = models.CharField(max_length=30, blank=True, default='')
    indikasi = models.TextField(blank=True, default='')
    hasil = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailBscan(models.Model):
    master = models.ForeignKey(PemeriksaanPenunjang, on_delete=models.PROTECT, related_name='bscan')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    indikasi = models.TextField(blank=True, default='')
    hasil = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailLabPraBedah(models.Model):
    master = models.ForeignKey(PemeriksaanPenunjang, on_delete=models.PROTECT, related_name='lab')
    loinc = models.ForeignKey(Loinc, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    glukosa = models.CharField(max_length=30, blank=True, default='')
    leukosit = models.CharField(max_length=30, blank=True, default='')
    waktu_koagulasi = models.CharField(max_length=30, blank=True, default='')


# ---------------------------------------------------------------------
# Diagnosis & procedure details
# ---------------------------------------------------------------------
class DiagnosaKerja(models.Model):
    master = models.ForeignKey(DiagnosisProsedur, on_delete=models.PROTECT, related_name='diagnosa_kerja')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    deskripsi = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DiagnosaBanding(models.Model):
    master = models.ForeignKey(DiagnosisProsedur, on_delete=models.PROTECT, related_name='diagnosa_banding')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    deskripsi = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DiagnosaAkhir(models.Model):
    master = models.ForeignKey(DiagnosisProsedur, on_delete=models.PROTECT, related_name='diagnosa_akhir')
    icd10 = models.ForeignKey(Icd10, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    deskripsi = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class DetailProsedur(models.Model):
    master = models.ForeignKey(DiagnosisProsedur, on_delete=models.PROTECT, related_name='prosedur')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    icd9cm = models.ForeignKey(Icd9cm, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    cpt = models.ForeignKey(Cpt, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    nama_prosedur = models.CharField(max_length=255, default='Prosedur Medis')
    keterangan = models.TextField(blank=True, default='')


# ---------------------------------------------------------------------
# Treatment plan details
# ---------------------------------------------------------------------
class RencanaBedah(models.Model):
    master = models.ForeignKey(Tatalaksana, on_delete=models.PROTECT, related_name='bedah')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    rencana = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class RencanaNonBedah(models.Model):
    master = models.ForeignKey(Tatalaksana, on_delete=models.PROTECT, related_name='non_bedah')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    rencana = models.TextField(blank=True, default='')
    keterangan = models.TextField(blank=True, default='')


class TatalaksanaEdukasi(models.Model):
    master = models.ForeignKey(Tatalaksana, on_delete=models.PROTECT, related_name='edukasi')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    topik = models.CharField(max_length=255, blank=True, default='')
    instruksi = models.TextField(blank=True, default='')


# ---------------------------------------------------------------------
# Patient education details
# ---------------------------------------------------------------------
class MateriEdukasi(models.Model):
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    topik = models.CharField(max_length=255, blank=True, default='')
    keterangan = models.TextField(blank=True, default='')

    class Meta:
        abstract = True
        ordering = ['id']


class EdukasiPenjelasanPenyakit(MateriEdukasi):
    master = models.ForeignKey(Edukasi, on_delete=models.PROTECT, related_name='penjelasan_penyakit')


class EdukasiPersiapanPraBedah(MateriEdukasi):
    master = models.ForeignKey(Edukasi, on_delete=models.PROTECT, related_name='persiapan_pra_bedah')


class EdukasiPerawatanPascaBedah(MateriEdukasi):
    master = models.ForeignKey(Edukasi, on_delete=models.PROTECT, related_name='perawatan_pasca_bedah')


# ---------------------------------------------------------------------
# SOAP note details
# ---------------------------------------------------------------------
class CatatanSoap(models.Model):
    catatan = models.TextField(blank=True, default='')
    snomed = models.ForeignKey(Snomed, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    icd10 = models.ForeignKey(Icd10, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')

    class Meta:
        abstract = True
        ordering = ['id']


class SoapSubjective(CatatanSoap):
    master = models.ForeignKey(Soap, on_delete=models.PROTECT, related_name='subjective')


class SoapObjective(CatatanSoap):
    master = models.ForeignKey(Soap, on_delete=models.PROTECT, related_name='objective')


class SoapAssessment(CatatanSoap):
    master = models.ForeignKey(Soap, on_delete=models.PROTECT, related_name='assessment')


class SoapPlan(CatatanSoap):
    master = models.ForeignKey(Soap, on_delete=models.PROTECT, related_name='plan')
    tatalaksana = models.ForeignKey(
        Tatalaksana, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )


# ---------------------------------------------------------------------
# BPJS pathway details
# ---------------------------------------------------------------------
class ClinicalPathway(models.Model):
    master = models.ForeignKey(PathwayBpjs, on_delete=models.PROTECT, related_name='clinical_pathway')
    nama_pathway = models.CharField(max_length=255, blank=True, default='')
    deskripsi = models.TextField(blank=True, default='')
    kebijakan_rs = models.TextField(blank=True, default='')


class ForecastingBpjs(models.Model):
    master = models.ForeignKey(PathwayBpjs, on_delete=models.PROTECT, related_name='forecasting')
    icd10 = models.ForeignKey(Icd10, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    tindakan = models.ForeignKey(Tindakan, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    komponen_biaya = models.CharField(max_length=255, blank=True, default='')
    perhitungan_tarif = models.CharField(max_length=100, blank=True, default='')
    catatan_forecast = models.TextField(blank=True, default='')
