import pytest
from django.db import IntegrityError

from core import models as m
from core.services.aggregates import AggregateRepository, AggregateValidationError, normalize_fk
from core.services.encounters import (
    ALL_SPECS, DIAGNOSIS_PROSEDUR, EDUKASI, PEMERIKSAAN_MATA, SOAP, TATALAKSANA, shape_anamnesis,
    shape_penunjang, shape_soap,
)

pytestmark = pytest.mark.django_db


def detail_count(spec, pk):
    return sum(d.model.objects.filter(master_id=pk).count() for d in spec.details)


@pytest.mark.parametrize('value', [0, '0', '', None, False])
def test_normalize_fk_treats_zero_and_blank_as_absent(value):
    assert normalize_fk(value) is None


def test_normalize_fk_coerces_numeric_strings_and_rejects_garbage():
    assert normalize_fk('12') == 12
    assert normalize_fk({'id': 3}) == 3
    with pytest.raises(AggregateValidationError):
        normalize_fk('abc')
    with pytest.raises(AggregateValidationError):
        normalize_fk(-4)


def test_create_requires_pasien_and_nakes_before_writing(pasien):
    repo = AggregateRepository(TATALAKSANA)
    with pytest.raises(AggregateValidationError) as exc:
        repo.create({'pasien_id': pasien.pk}, {'bedah': [{'rencana': 'Fakoemulsifikasi'}]})
    assert 'nakes_id' in exc.value.detail
    assert m.Tatalaksana.objects.count() == 0
    assert m.RencanaBedah.objects.count() == 0


def test_edukasi_only_requires_pasien(pasien):
    result = AggregateRepository(EDUKASI).create(
        {'pasien_id': pasien.pk},
        {'penjelasan_penyakit': [{'topik': 'Katarak', 'keterangan': 'Penjelasan umum'}]},
    )
    edukasi = m.Edukasi.objects.get(pk=result.id)
    assert edukasi.nakes_id is None
    assert edukasi.penjelasan_penyakit.count() == 1


def test_update_replaces_the_whole_detail_set(pasien, nakes, snomed):
    repo = AggregateRepository(DIAGNOSIS_PROSEDUR)
    result = repo.create(
        {'pasien_id': pasien.pk, 'nakes_id': nakes.pk},
        {
            'diagnosa_kerja': [{'snomed_id': snomed.pk, 'deskripsi': 'Miopia'}],
            'diagnosa_banding': [{'deskripsi': 'Astigmatisma'}, {'deskripsi': 'Presbiopia'}],
            'prosedur': [{'keterangan': 'Refraksi'}],
        },
    )
    assert detail_count(DIAGNOSIS_PROSEDUR, result.id) == 4

    repo.update(result.id, {'is_final': True}, {'diagnosa_kerja': [{'deskripsi': 'Miopia tinggi'}]})

    record = repo.get(result.id)
    assert record['is_final'] is True
    assert [r['deskripsi'] for r in record['diagnosa_kerja']] == ['Miopia tinggi']
    assert record['diagnosa_banding'] == []
    assert record['prosedur'] == []
    assert detail_count(DIAGNOSIS_PROSEDUR, result.id) == 1


def test_prosedur_gets_default_name(pasien, nakes):
    repo = AggregateRepository(DIAGNOSIS_PROSEDUR)
    result = repo.create({'pasien_id': pasien.pk, 'nakes_id': nakes.pk}, {'prosedur': {'keterangan': 'x'}})
    assert m.DetailProsedur.objects.get(master_id=result.id).nama_prosedur == 'Prosedur Medis'


@pytest.mark.parametrize('spec', ALL_SPECS, ids=lambda s: s.name)
def test_delete_leaves_no_detail_rows(spec, pasien, nakes):
    repo = AggregateRepository(spec)
    details = {d.key: [{}] for d in spec.details}
    result = repo.create({'pasien_id': pasien.pk, 'nakes_id': nakes.pk}, details)
    assert detail_count(spec, result.id) == len(spec.details)

    repo.delete(result.id)

    assert detail_count(spec, result.id) == 0
    assert not spec.master_model.objects.filter(pk=result.id).exists()


def test_zero_foreign_keys_are_stored_as_null(pasien, nakes):
    repo = AggregateRepository(PEMERIKSAAN_MATA)
    result = repo.create(
        {'pasien_id': pasien.pk, 'nakes_id': nakes.pk},
        {'visus': [{'loinc_id': 0, 'visus_od': '6/6'}], 'lensa': [{'FN_snomed_id': '0', 'temuan_od': 'jernih'}]},
    )
    visus = m.DetailVisus.objects.get(master_id=result.id)
    lensa = m.DetailLensa.objects.get(master_id=result.id)
    assert visus.loinc_id is None
    assert visus.visus_od == '6/6'
    assert lensa.snomed_id is None
    assert lensa.temuan_od == 'jernih'


def test_failing_detail_insert_rolls_back_master(pasien, nakes, monkeypatch):
    real_insert = AggregateRepository._insert_details

    def insert_then_fail(self, pk, details):
        real_insert(self, pk, details)
        raise IntegrityError('detail insert failed')

    monkeypatch.setattr(AggregateRepository, '_insert_details', insert_then_fail)
    with pytest.raises(IntegrityError):
        AggregateRepository(TATALAKSANA).create(
            {'pasien_id': pasien.pk, 'nakes_id': nakes.pk}, {'bedah': [{'rencana': 'Trabekulektomi'}]},
        )
    assert m.Tatalaksana.objects.count() == 0
    assert m.RencanaBedah.objects.count() == 0


def test_add_details_appends_without_clearing(pasien, nakes):
    from core.services.encounters import ANAMNESIS
    repo = AggregateRepository(ANAMNESIS)
    result = repo.create({'pasien_id': pasien.pk, 'nakes_id': nakes.pk}, {'keluhan': [{'keterangan': 'kabur'}]})
    repo.add_details(result.id, {'keluhan': [{'keterangan': 'silau'}]})
    assert m.AnamnesisKeluhan.objects.filter(master_id=result.id).count() == 2
    with pytest.raises(AggregateValidationError):
        repo.add_details(result.id, {})


def test_single_row_object_is_accepted_on_every_write(pasien, nakes):
    repo = AggregateRepository(TATALAKSANA)
    owners = {'pasien_id': pasien.pk, 'nakes_id': nakes.pk}
    result = repo.create(owners, {'bedah': {'rencana': 'Fako'}, 'non_bedah': None})
    assert list(m.RencanaBedah.objects.filter(master_id=result.id).values_list('rencana', flat=True)) == ['Fako']

    repo.add_details(result.id, {'bedah': {'rencana': 'Trabekulektomi'}})
    assert m.RencanaBedah.objects.filter(master_id=result.id).count() == 2

    repo.update(result.id, {}, {'non_bedah': {'rencana': 'Kacamata'}})
    assert m.RencanaBedah.objects.filter(master_id=result.id).count() == 0
    assert m.RencanaNonBedah.objects.get(master_id=result.id).rencana == 'Kacamata'

    with pytest.raises(AggregateValidationError):
        repo.create(owners, {'bedah': 'Fako'})


def test_soap_section_sent_as_one_object(pasien, nakes, snomed):
    master, details = shape_soap({'pasien_id': 5, 'nakes_id': 2,
                                  'assessment': {'catatan': 'Myopia', 'snomed_id': 1001}})
    result = AggregateRepository(SOAP).create(master, details)
    row = m.SoapAssessment.objects.get(master_id=result.id)
    assert row.catatan == 'Myopia'
    assert row.snomed_id == 1001


def test_single_detail_rows_can_be_edited(pasien, nakes):
    repo = AggregateRepository(PEMERIKSAAN_MATA)
    result = repo.create({'pasien_id': pasien.pk, 'nakes_id': nakes.pk}, {})
    row = repo.create_detail(result.id, 'tio', {'tio_od': '14', 'tio_os': '15'})

    updated = repo.update_detail('tio', row['id'], {'FS_tio_od': '21'})

    assert updated['tio_od'] == '21'
    assert updated['tio_os'] == '15'
    repo.delete_detail('tio', row['id'])
    assert repo.count_details(result.id, 'tio') == 0


def test_shape_anamnesis_maps_detail_data_keys():
    master, details = shape_anamnesis({
        'master_data': {'FN_pasien_id': 5, 'FN_tenaga_kesehatan_id': 2},
        'detail_data': {'DETAIL_KELUHAN': [{'FN_pertanyaan_id': 0}], 'fungsi_visus': {'keterangan': 'baik'}},
    })
    assert master == {'pasien_id': 5, 'nakes_id': 2}
    assert set(details) == {'keluhan', 'pemeriksaan_fungsi_visus'}
    assert details['pemeriksaan_fungsi_visus'] == [{'keterangan': 'baik'}]


def test_shape_penunjang_rejects_unknown_type():
    with pytest.raises(AggregateValidationError):
        shape_penunjang({'type': 'MRI', 'master': {'pasien_id': 5}, 'detail': {}})
    master, details = shape_penunjang({'type': 'bscan', 'master': {'pasien_id': 5}, 'detail': {'hasil': 'normal'}})
    assert master == {'pasien_id': 5}
    assert details == {'bscan': [{'hasil': 'normal'}]}


def test_soap_example_creates_one_assessment(pasien, nakes, snomed):
    master, details = shape_soap({'pasien_id': 5, 'nakes_id': 2, 'assessment': 'Myopia', 'snomed_assessment': 1001})
    result = AggregateRepository(SOAP).create(master, details)

    assert result.id
    rows = list(m.SoapAssessment.objects.filter(master_id=result.id))
    assert len(rows) == 1
    assert rows[0].snomed_id == 1001
    assert rows[0].catatan == 'Myopia'
    assert m.SoapPlan.objects.filter(master_id=result.id).count() == 0
