# tests/test_api_evaluations.py

"""
Evaluation API Tests - form template, submission, listing filters and
teacher scoping.
"""

from fastapi import status

from tests.helpers import API, TEACHER_PASSWORD, full_sections, login


class TestFormTemplate:
    """Tests for GET /api/v1/evaluations/form-template."""

    def test_template_has_every_active_category(self, client, supervisor_headers):
        response = client.get(f"{API}/evaluations/form-template", headers=supervisor_headers)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert [s["section"] for s in data["sections"]] == ["classroom", "student", "professional"]
        assert sum(len(s["categories"]) for s in data["sections"]) == 10
        assert data["form"]["sections"]["classroom"]["preparation"] == {"score": 3, "notes": ""}
        assert (data["min_score"], data["max_score"]) == (1, 5)


class TestSubmitEvaluation:
    """Tests for POST /api/v1/evaluations."""

    def test_round_trip(self, client, supervisor_headers, supervisor_id, provision_teacher, submit_evaluation):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        created = submit_evaluation(teacher["id"], score=4, overrides={"preparation": 5})

        assert created["teacher_name"] == "Amal Haddad"
        assert created["evaluator_id"] == supervisor_id
        assert created["status"] == "submitted"
        # 9 x 4 + 5 = 41 over 10 scores -> 4.1 -> 82%
        assert created["average_percent"] == 82

        fetched = client.get(f"{API}/evaluations/{created['id']}", headers=supervisor_headers).json()
        assert fetched["sections"]["classroom"]["preparation"]["score"] == 5
        assert fetched["final_notes"] == "Solid lesson"

    def test_plain_text_notes_come_back_unchanged(self, client, supervisor_headers, provision_teacher):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        sections = full_sections()
        sections["classroom"]["preparation"]["notes"] = "Pace < target & needs work"
        created = client.post(
            f"{API}/evaluations",
            json={"teacher_id": teacher["id"], "sections": sections, "final_notes": "A&B"},
            headers=supervisor_headers,
        ).json()

        fetched = client.get(f"{API}/evaluations/{created['id']}", headers=supervisor_headers).json()
        assert fetched["sections"]["classroom"]["preparation"]["notes"] == "Pace < target & needs work"
        assert fetched["final_notes"] == "A&B"

    def test_missing_category_rejected(self, client, supervisor_headers, provision_teacher):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        sections = full_sections()
        del sections["professional"]["collaboration"]
        response = client.post(
            f"{API}/evaluations", json={"teacher_id": teacher["id"], "sections": sections}, headers=supervisor_headers
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_out_of_range_score_rejected(self, client, supervisor_headers, provision_teacher):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        response = client.post(
            f"{API}/evaluations",
            json={"teacher_id": teacher["id"], "sections": full_sections(overrides={"feedback": 6})},
            headers=supervisor_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_teacher(self, client, supervisor_headers):
        response = client.post(
            f"{API}/evaluations", json={"teacher_id": 404, "sections": full_sections()}, headers=supervisor_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_nothing_written_on_rejection(self, client, supervisor_headers, provision_teacher):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        client.post(
            f"{API}/evaluations",
            json={"teacher_id": teacher["id"], "sections": {"classroom": {}}},
            headers=supervisor_headers,
        )
        data = client.get(f"{API}/evaluations", headers=supervisor_headers).json()
        assert data["total"] == 0

    def test_teacher_cannot_submit(self, client, provision_teacher):
        teacher = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        headers = login(client, "amal@school.example", TEACHER_PASSWORD)
        response = client.post(
            f"{API}/evaluations", json={"teacher_id": teacher["id"], "sections": full_sections(5)}, headers=headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestListEvaluations:
    """Tests for GET /api/v1/evaluations."""

    def _seed(self, provision_teacher, submit_evaluation):
        amal = provision_teacher("Amal Haddad", "amal@school.example", department="Sciences")["teacher"]
        basma = provision_teacher("Basma Nour", "basma@school.example", department="Languages")["teacher"]
        submit_evaluation(amal["id"], score=2)
        submit_evaluation(basma["id"], score=5)
        submit_evaluation(amal["id"], score=4)
        return amal, basma

    def test_newest_first(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        self._seed(provision_teacher, submit_evaluation)
        data = client.get(f"{API}/evaluations", headers=supervisor_headers).json()
        assert data["total"] == 3
        assert [item["average_percent"] for item in data["items"]] == [80, 100, 40]

    def test_filters(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        amal, _ = self._seed(provision_teacher, submit_evaluation)

        by_department = client.get(
            f"{API}/evaluations", params={"department": "Languages"}, headers=supervisor_headers
        ).json()
        assert [item["teacher_name"] for item in by_department["items"]] == ["Basma Nour"]

        by_teacher = client.get(
            f"{API}/evaluations", params={"teacher_id": amal["id"]}, headers=supervisor_headers
        ).json()
        assert by_teacher["total"] == 2

        by_percent = client.get(
            f"{API}/evaluations", params={"min_percent": 80}, headers=supervisor_headers
        ).json()
        assert [item["average_percent"] for item in by_percent["items"]] == [80, 100]

    def test_teacher_sees_only_own(self, client, provision_teacher, submit_evaluation):
        amal, basma = self._seed(provision_teacher, submit_evaluation)
        headers = login(client, "basma@school.example", TEACHER_PASSWORD)

        data = client.get(f"{API}/evaluations", headers=headers).json()
        assert data["total"] == 1
        assert data["items"][0]["teacher_id"] == basma["id"]

        # Asking for someone else's rows returns nothing
        data = client.get(f"{API}/evaluations", params={"teacher_id": amal["id"]}, headers=headers).json()
        assert data["total"] == 0

    def test_teacher_cannot_read_other_evaluation(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        amal, _ = self._seed(provision_teacher, submit_evaluation)
        first = client.get(
            f"{API}/evaluations", params={"teacher_id": amal["id"]}, headers=supervisor_headers
        ).json()["items"][0]

        headers = login(client, "basma@school.example", TEACHER_PASSWORD)
        response = client.get(f"{API}/evaluations/{first['id']}", headers=headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
