"""
URL mappings for the SIMRS API.

Paths are kept without trailing slashes to match what the dashboard
calls.  Literal segments (``search``, ``master/...``) are listed before the
``<int:...>`` routes of the same prefix.
"""
from django.urls import path

from .auth_views import login_view, logout_view, profile_view, refresh_view
from .views import anamnesis, bpjs, diagnosis, edukasi, health, master, nakes, patients, pemeriksaan
from .views import penunjang, soap, tatalaksana, users
from .views.pemeriksaan import DETAIL_ROUTES
from .services.reference import CODE_TABLES

pemeriksaan_detail_routes = []
for _kind in DETAIL_ROUTES:
    pemeriksaan_detail_routes += [
        path(f'api/pemeriksaan/{_kind}', pemeriksaan.detail_create, {'kind': _kind}),
        path(f'api/pemeriksaan/{_kind}/<int:detail_id>', pemeriksaan.detail_item, {'kind': _kind}),
    ]

code_table_routes = [
    path(f'api/master/{_table}', master.code_table, {'table': _table}) for _table in CODE_TABLES
]

urlpatterns = [
    path('api/health', health.healthz),

    # auth & users
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', refresh_view, name='refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/profile', profile_view, name='profile_view'),
    path('api/auth', users.users_collection),
    path('api/auth/<int:pk>', users.user_detail),
    path('api/auth/<int:pk>/password', users.user_password),
    path('api/auth/<int:pk>/nakes', users.user_nakes),

    # pasien
    path('api/pasien/search', patients.search_patients),
    path('api/pasien', patients.patients_collection),
    path('api/pasien/<int:pk>', patients.patient_detail),

    # nakes
    path('api/nakes', nakes.nakes_collection),
    path('api/nakes/<int:pk>', nakes.nakes_detail),

    # master data
    *code_table_routes,
    path('api/master/alamat', master.alamat_collection),
    path('api/master/alamat/<int:pk>', master.alamat_detail),
    path('api/cara-datang', master.cara_datang_collection),
    path('api/cara-datang/<int:pk>', master.cara_datang_detail),
    path('api/cara-datang-pasien', master.cara_datang_pasien),
    path('api/snomed/search', master.snomed_search),
    path('api/snomed', master.snomed_collection),
    path('api/snomed/<int:pk>', master.snomed_detail),

    # anamnesis
    path('api/anamnesis/master/sync', anamnesis.master_sync),
    path('api/anamnesis/master/pertanyaan', anamnesis.master_pertanyaan),
    path('api/anamnesis/full', anamnesis.save_full),
    path('api/anamnesis/detail/<int:pk>', anamnesis.add_detail),
    path('api/anamnesis/pasien/search', anamnesis.pasien_search),
    path('api/anamnesis/pasien/<int:pasien_id>/history', anamnesis.pasien_history),
    path('api/anamnesis/<int:pk>', anamnesis.anamnesis_detail),

    # pemeriksaan mata
    path('api/pemeriksaan/lengkap', pemeriksaan.lengkap_collection),
    path('api/pemeriksaan/lengkap/<int:pk>', pemeriksaan.lengkap_detail),
    path('api/pemeriksaan/master/loinc', pemeriksaan.master_loinc),
    path('api/pemeriksaan/master/snomed', pemeriksaan.master_snomed),
    path('api/pemeriksaan/master/<int:pk>', pemeriksaan.master_detail),
    path('api/pemeriksaan/search', pemeriksaan.search_by_pasien),
    *pemeriksaan_detail_routes,

    # pemeriksaan penunjang
    path('api/pemeriksaan-penunjang/pasien/search', penunjang.pasien_search),
    path('api/pemeriksaan-penunjang/master/loinc', penunjang.master_loinc),
    path('api/pemeriksaan-penunjang', penunjang.store),
    path('api/pemeriksaan-penunjang/pasien/<int:pasien_id>', penunjang.pasien_history),
    path('api/pemeriksaan-penunjang/<int:pk>', penunjang.penunjang_detail),

    # diagnosis & prosedur
    path('api/diagnosis-prosedur/refs/<str:source>', diagnosis.refs),
    path('api/diagnosis-prosedur/search', diagnosis.search_ref),
    path('api/diagnosis-prosedur/create', diagnosis.create),
    path('api/diagnosis-prosedur/record/<int:pk>', diagnosis.record),
    path('api/diagnosis-prosedur/update/<int:pk>', diagnosis.update),
    path('api/diagnosis-prosedur/delete/<int:pk>', diagnosis.delete),
    path('api/diagnosis-prosedur/pasien/search', diagnosis.pasien_search),
    path('api/diagnosis-prosedur/history/<int:pasien_id>', diagnosis.history),

    # tatalaksana
    path('api/tatalaksana/refs/snomed', tatalaksana.refs_snomed),
    path('api/tatalaksana', tatalaksana.tatalaksana_collection),
    path('api/tatalaksana/<int:pk>', tatalaksana.tatalaksana_detail),

    # edukasi
    path('api/edukasi', edukasi.edukasi_collection),
    path('api/edukasi/<int:pk>', edukasi.edukasi_detail),

    # soap
    path('api/soap/pasien', soap.pasien),
    path('api/soap/snomed-categories', soap.categories),
    path('api/soap/snomed', soap.snomed),
    path('api/soap/icd10', soap.icd10),
    path('api/soap/history/<int:pasien_id>', soap.history),
    path('api/soap', soap.create),
    path('api/soap/<int:pk>', soap.soap_detail),

    # bpjs
    path('api/bpjs/pasien', bpjs.pasien),
    path('api/bpjs/tindakan', bpjs.tindakan),
    path('api/bpjs/history/<int:pasien_id>', bpjs.history),
    path('api/bpjs', bpjs.create),
    path('api/bpjs/<int:pk>', bpjs.pathway_detail),
]
