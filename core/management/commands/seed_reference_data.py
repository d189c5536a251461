"""
Management command to load a starter set of reference data: lookup codes,
arrival modes, a handful of ophthalmology terminology rows and the
anamnesis question bank.  Safe to run repeatedly.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import (
    Agama, CaraDatang, Cpt, Icd9cm, Icd10, JenisKelamin, Loinc, Pekerjaan, Profesi, Snomed,
    Spesialisasi, StatusPerkawinan, Tindakan,
)
from core.services.reference import invalidate, save_pertanyaan, CODE_TABLES

CODES = {
    JenisKelamin: [('L', 'Laki-laki'), ('P', 'Perempuan')],
    StatusPerkawinan: [('1', 'Belum Kawin'), ('2', 'Kawin'), ('3', 'Cerai Hidup'), ('4', 'Cerai Mati')],
    Agama: [('1', 'Islam'), ('2', 'Kristen'), ('3', 'Katolik'), ('4', 'Hindu'), ('5', 'Buddha'),
            ('6', 'Konghucu')],
    Pekerjaan: [('1', 'Tidak Bekerja'), ('2', 'PNS'), ('3', 'Swasta'), ('4', 'Wiraswasta'), ('5', 'Pelajar')],
    Profesi: [('DOK', 'Dokter'), ('PRW', 'Perawat'), ('REF', 'Refraksionis Optisien')],
    Spesialisasi: [('SPM', 'Spesialis Mata'), ('UMUM', 'Dokter Umum')],
}

CARA_DATANG = [
    ('Datang Sendiri', 'Pasien datang tanpa rujukan'),
    ('Rujukan Puskesmas', 'Rujukan FKTP'),
    ('Rujukan Rumah Sakit', 'Rujukan antar rumah sakit'),
    ('Ambulans', 'Diantar ambulans'),
]

SNOMED = [
    ('Myopia (disorder)', 'Miopia', 'DIAGNOSIS', 'disorder', 'MATA'),
    ('Senile cataract (disorder)', 'Katarak senilis', 'DIAGNOSIS', 'disorder', 'LENSA'),
    ('Primary open angle glaucoma (disorder)', 'Glaukoma sudut terbuka primer', 'DIAGNOSIS', 'disorder', 'MATA'),
    ('Nuclear sclerosis of lens (finding)', 'Sklerosis nuklear lensa', 'TEMUAN', 'finding', 'LENSA'),
    ('Phacoemulsification of lens (procedure)', 'Fakoemulsifikasi', 'PROSEDUR', 'procedure', 'LENSA'),
    ('Patient education about eye care (procedure)', 'Edukasi perawatan mata', 'EDUKASI', 'procedure', 'MATA'),
]
ICD10 = [('H52.1', 'Myopia', 'DIAGNOSIS'), ('H25.9', 'Senile cataract, unspecified', 'DIAGNOSIS'),
         ('H40.1', 'Primary open-angle glaucoma', 'DIAGNOSIS')]
ICD9 = [('13.41', 'Phacoemulsification and aspiration of cataract', 'PROSEDUR'),
        ('95.02', 'Comprehensive eye examination', 'PEMERIKSAAN')]
CPT = [('66984', 'Extracapsular cataract removal with IOL insertion', 'PROSEDUR')]
LOINC = [
    ('79880-1', 'Visual acuity', 'Visual acuity', 'VISUS'),
    ('79892-6', 'Intraocular pressure', 'Intraocular pressure', 'TIO'),
    ('32451-7', 'Physical findings of Eye', 'Anterior segment', 'SEGMENT_ANTERIOR'),
    ('71483-0', 'Fundus examination', 'Fundus', 'FUNDUSKOPI'),
    ('79819-9', 'Axial length', 'Axial length', 'BIOMETRI'),
    ('28627-8', 'Ultrasound B-scan of eye', 'B-scan', 'BSCAN'),
    ('2345-7', 'Glucose [Mass/volume] in Serum or Plasma', 'Glucose', 'LAB'),
]
PERTANYAAN = [
    {'kategori': 'KELUHAN', 'pertanyaan': 'Apa keluhan utama pasien?',
     'jawaban': ['Penglihatan kabur', 'Mata merah', 'Nyeri mata', 'Silau']},
    {'kategori': 'KELUHAN', 'pertanyaan': 'Sejak kapan keluhan dirasakan?',
     'jawaban': ['Kurang dari 1 minggu', '1-4 minggu', 'Lebih dari 1 bulan']},
    {'kategori': 'RIWAYAT_PENYAKIT', 'pertanyaan': 'Apakah pasien memiliki penyakit sistemik?',
     'jawaban': ['Diabetes melitus', 'Hipertensi', 'Tidak ada']},
    {'kategori': 'RIWAYAT_PENGOBATAN', 'pertanyaan': 'Obat apa yang sedang digunakan?',
     'jawaban': ['Tetes mata', 'Obat oral', 'Tidak ada']},
    {'kategori': 'FAKTOR_RESIKO', 'pertanyaan': 'Apakah ada riwayat keluarga dengan glaukoma?',
     'jawaban': ['Ya', 'Tidak']},
    {'kategori': 'RIWAYAT_BEDAH_TERAPI', 'pertanyaan': 'Apakah pernah operasi mata sebelumnya?',
     'jawaban': ['Ya', 'Tidak']},
]


class Command(BaseCommand):
    help = 'Load reference data (codes, arrival modes, terminologies, anamnesis questions)'

    @transaction.atomic
    def handle(self, *args, **options):
        for model, rows in CODES.items():
            for kode, deskripsi in rows:
                model.objects.update_or_create(kode=kode, defaults={'deskripsi': deskripsi})
        self.stdout.write(f'kode referensi: {sum(len(r) for r in CODES.values())}')

        for nama, keterangan in CARA_DATANG:
            CaraDatang.objects.update_or_create(nama=nama, defaults={'keterangan': keterangan})

        for fsn, term, kategori, tipe, organ in SNOMED:
            Snomed.objects.update_or_create(fsn_term=fsn, defaults={
                'term_indonesia': term, 'kategori_konsep': kategori, 'tipe_konsep': tipe, 'organ_target': organ,
            })
        for kode, deskripsi, kategori in ICD10:
            Icd10.objects.update_or_create(kode=kode, defaults={'deskripsi': deskripsi, 'kategori_aplikasi': kategori})
        for kode, deskripsi, kategori in ICD9:
            Icd9cm.objects.update_or_create(kode=kode, defaults={'deskripsi': deskripsi, 'kategori_aplikasi': kategori})
        for kode, deskripsi, kategori in CPT:
            Cpt.objects.update_or_create(kode=kode, defaults={'deskripsi': deskripsi, 'kategori_aplikasi': kategori})
        for kode, deskripsi, component, kategori in LOINC:
            Loinc.objects.update_or_create(kode=kode, defaults={
                'deskripsi': deskripsi, 'component': component, 'kategori_aplikasi': kategori,
            })
        phaco = Icd9cm.objects.get(kode='13.41')
        Tindakan.objects.update_or_create(nama_tindakan='Operasi katarak fakoemulsifikasi', defaults={
            'kategori_tindakan': 'BEDAH', 'icd9cm': phaco,
            'snomed': Snomed.objects.filter(fsn_term__startswith='Phacoemulsification').first(),
        })
        self.stdout.write('terminologi dimuat')

        for item in PERTANYAAN:
            save_pertanyaan(item)
        self.stdout.write(f'pertanyaan anamnesis: {len(PERTANYAAN)}')

        invalidate(*CODE_TABLES, 'cara_datang')
        self.stdout.write(self.style.SUCCESS('Reference data loaded.'))
