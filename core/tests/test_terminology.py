import pytest

from core.models import Icd10, Loinc, Snomed
from core.services.terminology import (
    MAX_PAGE_SIZE, MIN_PAGE_SIZE, clamp_limit, keyword_too_short, list_terms, search_pasien, search_terms,
)

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize('limit,expected', [(None, 50), ('', 50), (3, MIN_PAGE_SIZE), (500, MAX_PAGE_SIZE),
                                            ('abc', 50), ('20', 20)])
def test_clamp_limit(limit, expected, settings):
    settings.SEARCH_PAGE_SIZE = 50
    assert clamp_limit(limit) == expected


def test_keyword_too_short(settings):
    settings.SEARCH_MIN_KEYWORD = 2
    assert keyword_too_short(None)
    assert keyword_too_short('  a ')
    assert not keyword_too_short('ab')
    assert keyword_too_short('ab', min_length=3)


def test_short_keyword_returns_nothing_without_querying(django_assert_num_queries):
    with django_assert_num_queries(0):
        assert search_terms('snomed', 'k') == []
        assert search_pasien('', limit=10) == []


def test_search_skips_inactive_rows_and_filters_category():
    Snomed.objects.create(fsn_term='Senile cataract (disorder)', term_indonesia='Katarak senilis',
                          kategori_konsep='DIAGNOSIS')
    Snomed.objects.create(fsn_term='Cataract extraction (procedure)', term_indonesia='Ekstraksi katarak',
                          kategori_konsep='PROSEDUR')
    Snomed.objects.create(fsn_term='Cataract, old code', term_indonesia='Katarak lama', aktif=False)

    assert {r['term_indonesia'] for r in search_terms('snomed', 'katarak')} == {'Katarak senilis',
                                                                              'Ekstraksi katarak'}
    rows = search_terms('snomed', 'katarak', category='PROSEDUR')
    assert [r['term_indonesia'] for r in rows] == ['Ekstraksi katarak']
    # "0" is what the dashboard sends for "all categories"
    assert len(search_terms('snomed', 'katarak', category='0')) == 2


def test_search_matches_code_or_description():
    Icd10.objects.create(kode='H52.1', deskripsi='Myopia', kategori_aplikasi='DIAGNOSIS')
    Icd10.objects.create(kode='H25.9', deskripsi='Senile cataract, unspecified', kategori_aplikasi='DIAGNOSIS')
    assert [r['kode'] for r in search_terms('icd10', 'h52')] == ['H52.1']
    assert [r['kode'] for r in search_terms('icd10', 'cataract')] == ['H25.9']


def test_list_terms_browses_by_column():
    Loinc.objects.create(kode='79880-1', deskripsi='Visual acuity', component='Visual acuity', kategori_aplikasi='VISUS')
    Loinc.objects.create(kode='79892-6', deskripsi='Intraocular pressure', component='IOP', kategori_aplikasi='TIO')
    assert [r['kode'] for r in list_terms('loinc', category='visus', field='kategori_aplikasi')] == ['79880-1']
    assert len(list_terms('loinc')) == 2
