"""
Aggregate specs for every encounter type, plus the payload shapers that
turn each endpoint's request body into ``(master, details)``.
"""
from __future__ import annotations

from typing import Any, Mapping

from core import models as m
from core.services.aggregates import AggregateSpec, AggregateValidationError, DetailSpec, as_rows

# FN_/FS_ prefixed keys are what the dashboard forms post
LEGACY_MASTER_KEYS = {
    'FN_pasien_id': 'pasien_id',
    'FN_tenaga_kesehatan_id': 'nakes_id',
    'tenaga_kesehatan_id': 'nakes_id',
    'FD_tanggal_pemeriksaan': 'tanggal',
    'FD_tanggal_pencatatan': 'tanggal',
    'FD_tanggal_penyusunan': 'tanggal',
    'FD_tanggal_edukasi': 'tanggal',
    'FD_tanggal_rencana': 'tanggal',
    'tanggal_pemeriksaan': 'tanggal',
    'tanggal_rencana': 'tanggal',
    'tanggal_pencatatan': 'tanggal',
    'tanggal_penyusunan': 'tanggal',
    'tanggal_edukasi': 'tanggal',
    'FB_is_final': 'is_final',
    'FS_catatan_umum': 'catatan_umum',
}

JAWABAN_FIELDS = dict(
    fields=('keterangan',),
    fk_fields=('pertanyaan', 'jawaban'),
    aliases={
        'FN_pertanyaan_id': 'pertanyaan',
        'FN_jawaban_id': 'jawaban',
        'jawaban_terstruktur_id': 'jawaban',
        'FS_keterangan': 'keterangan',
        'FS_keterangan_tambahan': 'keterangan',
    },
)

ANAMNESIS = AggregateSpec(
    name='anamnesis',
    master_model=m.Anamnesis,
    id_key='anamnesis_id',
    details=(
        DetailSpec('keluhan', m.AnamnesisKeluhan, label='Keluhan', **JAWABAN_FIELDS),
        DetailSpec('riwayat_penyakit', m.AnamnesisRiwayatPenyakit, label='Riwayat Penyakit', **JAWABAN_FIELDS),
        DetailSpec('penyakit_terdahulu', m.AnamnesisPenyakitTerdahulu, label='Penyakit Terdahulu', **JAWABAN_FIELDS),
        DetailSpec('riwayat_pengobatan', m.AnamnesisRiwayatPengobatan, label='Riwayat Pengobatan', **JAWABAN_FIELDS),
        DetailSpec('faktor_resiko', m.AnamnesisFaktorResiko, label='Faktor Resiko', **JAWABAN_FIELDS),
        DetailSpec('riwayat_bedah_terapi', m.AnamnesisRiwayatBedahTerapi, label='Riwayat Bedah/Terapi',
                   **JAWABAN_FIELDS),
        DetailSpec('pemeriksaan_fungsi_visus', m.AnamnesisFungsiVisus, label='Pemeriksaan Fungsi Visus',
                   **JAWABAN_FIELDS),
        DetailSpec('pemeriksaan_biomikroskopi', m.AnamnesisBiomikroskopi, label='Pemeriksaan Biomikroskopi',
                   **JAWABAN_FIELDS),
    ),
)

_KETERANGAN = {'FS_keterangan_tambahan': 'keterangan', 'keterangan_tambahan': 'keterangan'}

PEMERIKSAAN_MATA = AggregateSpec(
    name='pemeriksaan_mata',
    master_model=m.PemeriksaanMata,
    id_key='pemeriksaan_id',
    details=(
        DetailSpec('visus', m.DetailVisus, fields=('visus_od', 'visus_os', 'koreksi', 'keterangan'),
                   fk_fields=('loinc',), aliases={'FN_loinc_id': 'loinc', 'FS_visus_od': 'visus_od',
                                                  'FS_visus_os': 'visus_os', 'FS_koreksi': 'koreksi',
                                                  **_KETERANGAN}, label='Visus'),
        DetailSpec('tio', m.DetailTekananIntraokular,
                   fields=('tio_od', 'tio_os', 'metode_pengukuran', 'keterangan'),
                   fk_fields=('loinc',), aliases={'FN_loinc_id': 'loinc', 'FS_tio_od': 'tio_od',
                                                  'FS_tio_os': 'tio_os',
                                                  'FS_metode_pengukuran': 'metode_pengukuran', **_KETERANGAN},
                   label='Tekanan Intraokular'),
        DetailSpec('segmen_anterior', m.DetailSegmenAnterior, fields=('kornea', 'acd', 'pupil', 'keterangan'),
                   fk_fields=('loinc',), aliases={'FN_loinc_id': 'loinc', 'FS_kornea': 'kornea', 'FS_acd': 'acd',
                                                  'FS_pupil': 'pupil', **_KETERANGAN},
                   label='Segmen Anterior'),
        DetailSpec('lensa', m.DetailLensa, fields=('temuan_od', 'temuan_os', 'keterangan'),
                   fk_fields=('snomed',), aliases={'FN_snomed_id': 'snomed', 'FS_temuan_lensa_od': 'temuan_od',
                                                   'FS_temuan_lensa_os': 'temuan_os', **_KETERANGAN},
                   label='Lensa'),
        DetailSpec('funduskopi', m.DetailFunduskopi, fields=('refleks_fundus', 'detail_retina', 'keterangan'),
                   fk_fields=('loinc',), aliases={'FN_loinc_id': 'loinc', 'FS_refleks_fundus': 'refleks_fundus',
                                                  'FS_detail_retina': 'detail_retina', **_KETERANGAN},
                   label='Funduskopi'),
    ),
)

PEMERIKSAAN_PENUNJANG = AggregateSpec(
    name='pemeriksaan_penunjang',
    master_model=m.PemeriksaanPenunjang,
    id_key='pemeriksaan_penunjang_id',
    details=(
        DetailSpec('biometri', m.DetailBiometri,
                   fields=('panjang_aksial', 'kekuatan_iol', 'indikasi', 'hasil', 'keterangan'),
                   fk_fields=('loinc',),
                   aliases={'loincId': 'loinc', 'panjangAksial': 'panjang_aksial', 'kekuatanIol': 'kekuatan_iol'},
                   label='BIOMETRI'),
        DetailSpec('bscan', m.DetailBscan, fields=('indikasi', 'hasil', 'keterangan'),
                   fk_fields=('loinc',), aliases={'loincId': 'loinc'}, label='BSCAN'),
        DetailSpec('lab', m.DetailLabPraBedah, fields=('glukosa', 'leukosit', 'waktu_koagulasi'),
                   fk_fields=('loinc',), aliases={'loincId': 'loinc', 'koagulasi': 'waktu_koagulasi'},
                   label='LAB'),
    ),
)
PENUNJANG_TYPES = {'BIOMETRI': 'biometri', 'BSCAN': 'bscan', 'LAB': 'lab'}

_DIAGNOSA = dict(fields=('deskripsi', 'keterangan'), aliases={'snomed_term': 'deskripsi'})

DIAGNOSIS_PROSEDUR = AggregateSpec(
    name='diagnosis_prosedur',
    master_model=m.DiagnosisProsedur,
    id_key='transaksi_id',
    details=(
        DetailSpec('diagnosa_kerja', m.DiagnosaKerja, fk_fields=('snomed',), label='Diagnosa Kerja', **_DIAGNOSA),
        DetailSpec('diagnosa_banding', m.DiagnosaBanding, fk_fields=('snomed',), label='Diagnosa Banding',
                   **_DIAGNOSA),
        DetailSpec('diagnosa_akhir', m.DiagnosaAkhir, fields=('deskripsi', 'keterangan'), fk_fields=('icd10',),
                   label='Diagnosa Akhir'),
        DetailSpec('prosedur', m.DetailProsedur, fields=('nama_prosedur', 'keterangan'),
                   fk_fields=('snomed', 'icd9cm', 'cpt'), aliases={'icd9_id': 'icd9cm'},
                   defaults={'nama_prosedur': 'Prosedur Medis'}, label='Prosedur'),
    ),
)

TATALAKSANA = AggregateSpec(
    name='tatalaksana',
    master_model=m.Tatalaksana,
    id_key='tatalaksana_id',
    details=(
        DetailSpec('bedah', m.RencanaBedah, fields=('rencana', 'keterangan'), fk_fields=('snomed',),
                   label='Bedah'),
        DetailSpec('non_bedah', m.RencanaNonBedah, fields=('rencana', 'keterangan'), fk_fields=('snomed',),
                   label='Non Bedah'),
        DetailSpec('edukasi', m.TatalaksanaEdukasi, fields=('topik', 'instruksi'), fk_fields=('snomed',),
                   label='Edukasi'),
    ),
)

_MATERI = dict(
    fields=('topik', 'keterangan'),
    fk_fields=('snomed',),
    aliases={'FN_snomed_id': 'snomed', 'FS_topik': 'topik', 'FS_keterangan': 'keterangan'},
)

EDUKASI = AggregateSpec(
    name='edukasi',
    master_model=m.Edukasi,
    id_key='edukasi_id',
    required=('pasien_id',),
    details=(
        DetailSpec('penjelasan_penyakit', m.EdukasiPenjelasanPenyakit, label='Penjelasan Penyakit', **_MATERI),
        DetailSpec('persiapan_pra_bedah', m.EdukasiPersiapanPraBedah, label='Persiapan Pra Bedah', **_MATERI),
        DetailSpec('perawatan_pasca_bedah', m.EdukasiPerawatanPascaBedah, label='Perawatan Pasca Bedah',
                   **_MATERI),
    ),
)

SOAP = AggregateSpec(
    name='soap',
    master_model=m.Soap,
    id_key='soap_id',
    details=(
        DetailSpec('subjective', m.SoapSubjective, fields=('catatan',), fk_fields=('snomed', 'icd10'),
                   label='Subjective'),
        DetailSpec('objective', m.SoapObjective, fields=('catatan',), fk_fields=('snomed', 'icd10'),
                   label='Objective'),
        DetailSpec('assessment', m.SoapAssessment, fields=('catatan',), fk_fields=('snomed', 'icd10'),
                   label='Assessment'),
        DetailSpec('plan', m.SoapPlan, fields=('catatan',), fk_fields=('snomed', 'icd10', 'tatalaksana'),
                   label='Plan'),
    ),
)

PATHWAY_BPJS = AggregateSpec(
    name='pathway_bpjs',
    master_model=m.PathwayBpjs,
    id_key='pathway_id',
    details=(
        DetailSpec('clinical_pathway', m.ClinicalPathway, fields=('nama_pathway', 'deskripsi', 'kebijakan_rs'),
                   aliases={'deskripsi_pathway': 'deskripsi'}, label='Clinical Pathway'),
        DetailSpec('forecasting', m.ForecastingBpjs,
                   fields=('komponen_biaya', 'perhitungan_tarif', 'catatan_forecast'),
                   fk_fields=('icd10', 'tindakan'), aliases={'icd10cm_id': 'icd10'}, label='Forecasting'),
    ),
)

ALL_SPECS = (
    ANAMNESIS, PEMERIKSAAN_MATA, PEMERIKSAAN_PENUNJANG, DIAGNOSIS_PROSEDUR,
    TATALAKSANA, EDUKASI, SOAP, PATHWAY_BPJS,
)


# ---------------------------------------------------------------------
# Payload shapers
# ---------------------------------------------------------------------
def _rename_master(master: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in master.items():
        out[LEGACY_MASTER_KEYS.get(key, key)] = value
    return out


def shape_generic(spec: AggregateSpec, data: Mapping[str, Any]) -> tuple[dict, dict]:
    """Flat body: master fields at top level (or under ``master``), detail keys beside them.

    ``detail_<key>`` is accepted as an alias of ``<key>``.
    """
    body = dict(data)
    nested = body.pop('master', None)
    if isinstance(nested, Mapping):
        body = {**nested, **body}
    for key in spec.detail_keys:
        legacy = f'detail_{key}'
        if legacy in body and key not in body:
            body[key] = body.pop(legacy)
    master, details = spec.split_payload(body)
    return _rename_master(master), details


def shape_anamnesis(data: Mapping[str, Any]) -> tuple[dict, dict]:
    """``{master_data: {...}, detail_data: {DETAIL_KELUHAN: [...], ...}}`` or the flat form."""
    if 'master_data' not in data and 'detail_data' not in data:
        return shape_generic(ANAMNESIS, data)
    master = _rename_master(data.get('master_data') or {})
    raw = data.get('detail_data') or {}
    if not isinstance(raw, Mapping):
        raise AggregateValidationError({'detail_data': 'Harus berupa objek.'})
    body: dict[str, Any] = {}
    for key, rows in raw.items():
        name = key.lower()
        if name.startswith('detail_'):
            name = name[len('detail_'):]
        if name in ('fungsi_visus', 'biomikroskopi'):
            name = f'pemeriksaan_{name}'
        body[name] = rows
    _, details = ANAMNESIS.split_payload(body)
    return master, details


def shape_penunjang(data: Mapping[str, Any]) -> tuple[dict, dict]:
    """``{master: {...}, type: BIOMETRI|BSCAN|LAB, detail: {...}}`` or the flat form."""
    if 'type' not in data:
        return shape_generic(PEMERIKSAAN_PENUNJANG, data)
    kind = str(data.get('type') or '').upper()
    key = PENUNJANG_TYPES.get(kind)
    if key is None:
        raise AggregateValidationError({'type': f'Tipe pemeriksaan tidak valid: "{data.get("type")}".'})
    master = data.get('master') or {k: v for k, v in data.items() if k not in ('type', 'detail')}
    detail = data.get('detail') or {}
    return _rename_master(master), {key: [detail] if isinstance(detail, Mapping) else list(detail)}


def shape_soap(data: Mapping[str, Any]) -> tuple[dict, dict]:
    """Flat SOAP form: one free-text note per section with its coded references."""
    master = _rename_master({k: data[k] for k in ('pasien_id', 'nakes_id', 'tanggal', 'is_final',
                                                   'FN_pasien_id', 'FN_tenaga_kesehatan_id') if k in data})
    details: dict[str, list] = {}
    for section in ('subjective', 'objective', 'assessment', 'plan'):
        value = data.get(section)
        if isinstance(value, (Mapping, list, tuple)):
            details[section] = as_rows(section, value)
            continue
        if not value:
            continue
        row = {
            'catatan': value,
            'snomed_id': data.get(f'snomed_{section}'),
            'icd10_id': data.get(f'icd_{section}'),
        }
        if section == 'assessment':
            row['snomed_id'] = row['snomed_id'] or data.get('snomed_id')
            row['icd10_id'] = row['icd10_id'] or data.get('icd10_id')
        if section == 'plan':
            row['tatalaksana_id'] = data.get('tatalaksana_id')
        details[section] = [row]
    return master, details


def shape_pathway(data: Mapping[str, Any]) -> tuple[dict, dict]:
    """Pathway header fields are flat; ``forecasting_items`` carry the cost lines."""
    body = dict(data)
    pathway = {k: body.pop(k) for k in ('nama_pathway', 'deskripsi_pathway', 'kebijakan_rs') if k in body}
    if 'forecasting_items' in body:
        body['forecasting'] = body.pop('forecasting_items')
    if pathway and 'clinical_pathway' not in body:
        body['clinical_pathway'] = [pathway]
    return shape_generic(PATHWAY_BPJS, body)
