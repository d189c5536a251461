"""
Integration tests for the SIMRS API.

These tests exercise the patient registry, the encounter endpoints
(anamnesis, eye examination, supporting examinations, diagnosis, SOAP and
BPJS pathways) and the reference data routes through DRF's APIClient
within the APITestCase base class.

To run the tests:

```
pytest -q core/tests
```
"""

from rest_framework import status
from rest_framework.test import APITestCase

from core.authentication import issue_tokens
from core.models import (
    Alamat, CaraDatang, DetailTekananIntraokular, DetailVisus, JenisKelamin, Pasien, Snomed, TenagaKesehatan,
    User,
)


class SimrsAPITestCase(APITestCase):
    def setUp(self) -> None:
        JenisKelamin.objects.create(kode="L", deskripsi="Laki-laki")
        JenisKelamin.objects.create(kode="P", deskripsi="Perempuan")
        self.nakes = TenagaKesehatan.objects.create(nama_lengkap="Rina Wijaya", gelar_depan="dr.",
                                                    gelar_belakang="Sp.M")
        self.pasien = Pasien.objects.create(no_rm="RM-0005", nama_lengkap="Siti Aminah", jenis_kelamin_id="P")
        self.snomed = Snomed.objects.create(fsn_term="Myopia (disorder)", term_indonesia="Miopia",
                                            kategori_konsep="DIAGNOSIS")
        self.dokter = User.objects.create_user(username="dokter1", password="rahasia123", role="dokter",
                                               tenaga_kesehatan=self.nakes)
        self.authenticate(self.dokter)

    def authenticate(self, user) -> None:
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user).access_token}")

    def owners(self) -> dict:
        return {"pasien_id": self.pasien.pk, "nakes_id": self.nakes.pk}


class PasienAPITests(SimrsAPITestCase):
    def test_patient_lifecycle_keeps_address_in_step(self):
        r = self.client.post("/api/pasien", {
            "FS_no_rm": "RM-0100",
            "FS_nama_lengkap": "Budi Santoso",
            "jenis_kelamin_kode": "L",
            "alamat_lengkap": "Jl. Merdeka 1",
            "kabupaten_kota": "Bandung",
            "cara_datang_id": 0,
        }, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        pasien_id = r.data["pasien_id"]
        created = Pasien.objects.get(pk=pasien_id)
        self.assertIsNone(created.cara_datang_id)
        self.assertEqual(created.alamat.kabupaten_kota, "Bandung")

        r = self.client.put(f"/api/pasien/{pasien_id}", {"telepon": "08123", "kecamatan": "Coblong"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["data"]["telepon"], "08123")
        self.assertEqual(r.data["data"]["alamat"], "Jl. Merdeka 1, Coblong, Bandung")

        r = self.client.get(f"/api/pasien/{pasien_id}")
        self.assertEqual(r.data["data"]["jenis_kelamin"], "Laki-laki")

        alamat_id = created.alamat_id
        r = self.client.delete(f"/api/pasien/{pasien_id}")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertFalse(Pasien.objects.filter(pk=pasien_id).exists())
        self.assertFalse(Alamat.objects.filter(pk=alamat_id).exists())

    def test_duplicate_medical_record_number_is_rejected(self):
        r = self.client.post("/api/pasien", {"no_rm": "RM-0005", "nama_lengkap": "Orang Lain"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("no_rm", r.data["errors"])

    def test_unknown_gender_code_is_rejected(self):
        r = self.client.post("/api/pasien", {"no_rm": "RM-0101", "nama_lengkap": "Budi", "jenis_kelamin_kode": "X"},
                             format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("jenis_kelamin_kode", r.data["errors"])

    def test_search_requires_keyword_and_ignores_short_ones(self):
        self.assertEqual(self.client.get("/api/pasien/search").status_code, status.HTTP_400_BAD_REQUEST)

        r = self.client.get("/api/pasien/search", {"keyword": "S"})
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["data"], [])
        self.assertEqual(r.data["count"], 0)

        r = self.client.get("/api/pasien/search", {"keyword": "aminah"})
        self.assertEqual([p["no_rm"] for p in r.data["data"]], ["RM-0005"])

    def test_patient_with_encounters_cannot_be_deleted(self):
        self.client.post("/api/soap", {**self.owners(), "subjective": "Mata kabur"}, format="json")
        r = self.client.delete(f"/api/pasien/{self.pasien.pk}")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(r.data["success"])
        self.assertTrue(Pasien.objects.filter(pk=self.pasien.pk).exists())

    def test_missing_patient_is_404(self):
        r = self.client.get("/api/pasien/99999")
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(r.data["success"])


class AnamnesisAPITests(SimrsAPITestCase):
    def full_payload(self, **detail_data):
        return {
            "master_data": {"FN_pasien_id": self.pasien.pk, "FN_tenaga_kesehatan_id": self.nakes.pk},
            "detail_data": detail_data,
        }

    def test_full_save_and_read_back(self):
        r = self.client.post("/api/anamnesis/full", self.full_payload(
            DETAIL_KELUHAN=[{"FN_pertanyaan_id": 0, "FS_keterangan": "Penglihatan kabur"}],
            DETAIL_FAKTOR_RESIKO=[{"keterangan": "Diabetes"}],
        ), format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        anamnesis_id = r.data["anamnesis_id"]

        r = self.client.get(f"/api/anamnesis/{anamnesis_id}")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["data"]["master"]["pasien_id"], self.pasien.pk)
        details = r.data["data"]["allDetails"]
        self.assertEqual(sorted(d["kategori"] for d in details), ["Faktor Resiko", "Keluhan"])
        keluhan = next(d for d in details if d["kategori"] == "Keluhan")
        self.assertIsNone(keluhan["pertanyaan_id"])
        self.assertEqual(keluhan["keterangan"], "Penglihatan kabur")

        r = self.client.get(f"/api/anamnesis/pasien/{self.pasien.pk}/history")
        self.assertEqual(r.data["count"], 1)

    def test_full_save_needs_patient_and_nakes(self):
        r = self.client.post("/api/anamnesis/full", {
            "master_data": {"FN_pasien_id": 0},
            "detail_data": {"DETAIL_KELUHAN": [{"keterangan": "x"}]},
        }, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("pasien_id", r.data["errors"])
        self.assertIn("nakes_id", r.data["errors"])

    def test_full_save_needs_details(self):
        r = self.client.post("/api/anamnesis/full", self.full_payload(), format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("detail_data", r.data["errors"])

    def test_detail_rows_can_be_appended(self):
        anamnesis_id = self.client.post("/api/anamnesis/full", self.full_payload(
            DETAIL_KELUHAN=[{"keterangan": "Silau"}]), format="json").data["anamnesis_id"]
        r = self.client.post(f"/api/anamnesis/detail/{anamnesis_id}",
                             {"detail_data": {"DETAIL_KELUHAN": [{"keterangan": "Nyeri"}]}}, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        r = self.client.get(f"/api/anamnesis/{anamnesis_id}")
        self.assertEqual(len(r.data["data"]["allDetails"]), 2)


class PemeriksaanAPITests(SimrsAPITestCase):
    def create_exam(self):
        r = self.client.post("/api/pemeriksaan/lengkap",
                             {**self.owners(), "visus": [{"visus_od": "6/6", "visus_os": "6/9"}]}, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        return r.data["pemeriksaan_id"]

    def test_single_detail_routes(self):
        pemeriksaan_id = self.create_exam()

        r = self.client.post("/api/pemeriksaan/tio", {"pemeriksaan_id": pemeriksaan_id, "tio_od": "14"},
                             format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        detail_id = r.data["id"]

        r = self.client.put(f"/api/pemeriksaan/tio/{detail_id}", {"FS_tio_os": "16"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["data"]["tio_od"], "14")
        self.assertEqual(r.data["data"]["tio_os"], "16")

        self.assertEqual(self.client.delete(f"/api/pemeriksaan/tio/{detail_id}").status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f"/api/pemeriksaan/tio/{detail_id}").status_code,
                         status.HTTP_404_NOT_FOUND)
        self.assertFalse(DetailTekananIntraokular.objects.exists())

    def test_single_detail_needs_master_id(self):
        r = self.client.post("/api/pemeriksaan/segmen-ant", {"kornea": "jernih"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)

    def test_master_update_leaves_details(self):
        pemeriksaan_id = self.create_exam()
        r = self.client.put(f"/api/pemeriksaan/master/{pemeriksaan_id}",
                            {"FB_is_final": True, "catatan_umum": "Kontrol 1 bulan"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        record = self.client.get(f"/api/pemeriksaan/lengkap/{pemeriksaan_id}").data["data"]
        self.assertTrue(record["is_final"])
        self.assertEqual(record["catatan_umum"], "Kontrol 1 bulan")
        self.assertEqual(DetailVisus.objects.filter(master_id=pemeriksaan_id).count(), 1)

    def test_search_by_patient_name(self):
        self.create_exam()
        self.assertEqual(self.client.get("/api/pemeriksaan/search").status_code, status.HTTP_400_BAD_REQUEST)
        r = self.client.get("/api/pemeriksaan/search", {"nama": "siti"})
        self.assertEqual(r.data["count"], 1)
        self.assertEqual(r.data["data"][0]["nama_nakes"], "dr. Rina Wijaya, Sp.M")


class EncounterAPITests(SimrsAPITestCase):
    def test_penunjang_rejects_unknown_type(self):
        r = self.client.post("/api/pemeriksaan-penunjang",
                             {"type": "MRI", "master": self.owners(), "detail": {"hasil": "-"}}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("type", r.data["errors"])

    def test_penunjang_reports_its_type(self):
        r = self.client.post("/api/pemeriksaan-penunjang",
                             {"type": "bscan", "master": self.owners(), "detail": {"hasil": "Retina melekat"}},
                             format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        record = self.client.get(f"/api/pemeriksaan-penunjang/{r.data['pemeriksaan_penunjang_id']}").data["data"]
        self.assertEqual(record["tipe_pemeriksaan"], "BSCAN")
        self.assertEqual(record["bscan"][0]["hasil"], "Retina melekat")

    def test_soap_note_with_coded_assessment(self):
        r = self.client.post("/api/soap", {**self.owners(), "assessment": "Myopia",
                                           "snomed_assessment": self.snomed.pk}, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        record = self.client.get(f"/api/soap/{r.data['soap_id']}").data["data"]
        self.assertEqual(len(record["assessment"]), 1)
        self.assertEqual(record["assessment"][0]["snomed_id"], self.snomed.pk)
        self.assertEqual(record["plan"], [])

        r = self.client.get(f"/api/soap/history/{self.pasien.pk}")
        self.assertEqual(r.data["count"], 1)

    def test_diagnosis_history_counts(self):
        r = self.client.post("/api/diagnosis-prosedur/create", {
            **self.owners(),
            "diagnosa_akhir": [{"deskripsi": "Miopia"}, {"deskripsi": "Astigmatisma"}],
            "prosedur": [{"nama_prosedur": "Refraksi"}],
        }, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        r = self.client.get(f"/api/diagnosis-prosedur/history/{self.pasien.pk}")
        row = r.data["data"][0]
        self.assertEqual(row["total_dx_akhir"], 2)
        self.assertEqual(row["total_tindakan"], 1)

    def test_diagnosis_reference_search(self):
        self.assertEqual(self.client.get("/api/diagnosis-prosedur/search", {"type": "atc", "keyword": "mio"})
                         .status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.get("/api/diagnosis-prosedur/refs/atc", {"keyword": "mio"}).status_code,
                         status.HTTP_404_NOT_FOUND)
        r = self.client.get("/api/diagnosis-prosedur/refs/snomed", {"keyword": "miop"})
        self.assertEqual([row["id"] for row in r.data["data"]], [self.snomed.pk])

    def test_bpjs_pathway_history(self):
        r = self.client.post("/api/bpjs", {
            **self.owners(),
            "nama_pathway": "Katarak senilis",
            "forecasting_items": [
                {"komponen_biaya": "Operasi", "perhitungan_tarif": "7000000"},
                {"komponen_biaya": "Lensa", "perhitungan_tarif": "1500000", "tindakan_id": 0},
            ],
        }, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        record = self.client.get(f"/api/bpjs/{r.data['pathway_id']}").data["data"]
        self.assertEqual(record["clinical_pathway"][0]["nama_pathway"], "Katarak senilis")
        r = self.client.get(f"/api/bpjs/history/{self.pasien.pk}")
        self.assertEqual(r.data["data"][0]["jumlah_tindakan"], 2)

    def test_read_only_roles_cannot_write_encounters(self):
        self.authenticate(User.objects.create_user(username="petugas1", password="rahasia123", role="petugas"))
        r = self.client.post("/api/soap", {**self.owners(), "subjective": "x"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.get(f"/api/soap/history/{self.pasien.pk}").status_code, status.HTTP_200_OK)

    def test_missing_encounter_is_404(self):
        for url in ("/api/soap/99999", "/api/bpjs/99999", "/api/diagnosis-prosedur/record/99999"):
            r = self.client.get(url)
            self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND, url)
            self.assertFalse(r.data["success"])


class MasterDataAPITests(SimrsAPITestCase):
    def test_code_table_listing(self):
        r = self.client.get("/api/master/jenis_kelamin")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual([row["kode"] for row in r.data["data"]], ["L", "P"])

    def test_cara_datang_groups_patients(self):
        r = self.client.post("/api/cara-datang", {"nama": "Rujukan Puskesmas"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        cara = CaraDatang.objects.get(nama="Rujukan Puskesmas")
        self.pasien.cara_datang = cara
        self.pasien.save()

        r = self.client.get("/api/cara-datang-pasien")
        group = next(g for g in r.data["data"] if g["cara_datang_id"] == cara.pk)
        self.assertEqual(group["jumlah_pasien"], 1)
        self.assertEqual(group["pasien"][0]["no_rm"], "RM-0005")

    def test_snomed_crud_and_search(self):
        r = self.client.post("/api/snomed", {"fsn_term": "Senile cataract (disorder)", "term_indonesia": "Katarak",
                                             "kategori_konsep": "DIAGNOSIS"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        snomed_id = r.data["data"]["id"]

        r = self.client.get("/api/snomed/search", {"keyword": "katar"})
        self.assertEqual([row["id"] for row in r.data["data"]], [snomed_id])

        r = self.client.put(f"/api/snomed/{snomed_id}", {"organ_target": "LENSA"}, format="json")
        self.assertEqual(r.data["data"]["organ_target"], "LENSA")
        self.assertEqual(r.data["data"]["term_indonesia"], "Katarak")

        self.assertEqual(self.client.delete(f"/api/snomed/{snomed_id}").status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f"/api/snomed/{snomed_id}").status_code, status.HTTP_404_NOT_FOUND)
