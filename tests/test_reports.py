# tests/test_reports.py

"""
Dashboard and Report Tests - headline numbers, rankings and report sections.
"""

from fastapi import status

from tests.helpers import API, TEACHER_PASSWORD, login


class TestDashboard:
    """Tests for GET /api/v1/dashboard."""

    def test_empty_school(self, client, supervisor_headers):
        response = client.get(f"{API}/dashboard", headers=supervisor_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "total_teachers": 0,
            "completed_evaluations": 0,
            "pending_evaluations": 0,
            "overall_average": 0,
            "latest_evaluations": [],
            "top_teachers": [],
        }

    def test_counts_and_top_teachers(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        ids = {}
        for name, email in [
            ("Amal Haddad", "amal@school.example"),
            ("Basma Nour", "basma@school.example"),
            ("Karim Aziz", "karim@school.example"),
            ("Dalia Fares", "dalia@school.example"),
        ]:
            ids[name] = provision_teacher(name, email)["teacher"]["id"]

        submit_evaluation(ids["Amal Haddad"], score=3)
        submit_evaluation(ids["Basma Nour"], score=5)
        submit_evaluation(ids["Karim Aziz"], score=4)
        submit_evaluation(ids["Dalia Fares"], score=2)
        submit_evaluation(ids["Dalia Fares"], score=5, status="draft")

        data = client.get(f"{API}/dashboard", headers=supervisor_headers).json()
        assert data["total_teachers"] == 4
        assert data["completed_evaluations"] == 4
        assert data["pending_evaluations"] == 1
        # (3 + 5 + 4 + 2) / 4 = 3.5 -> 70%
        assert data["overall_average"] == 70
        assert [t["name"] for t in data["top_teachers"]] == ["Basma Nour", "Karim Aziz", "Amal Haddad"]
        assert data["top_teachers"][0]["average_percent"] == 100
        # Drafts are not listed as latest submissions
        assert len(data["latest_evaluations"]) == 4
        assert data["latest_evaluations"][0]["teacher_name"] == "Dalia Fares"

    def test_latest_limited_to_five(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        teacher_id = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]["id"]
        for _ in range(7):
            submit_evaluation(teacher_id)
        data = client.get(f"{API}/dashboard", headers=supervisor_headers).json()
        assert len(data["latest_evaluations"]) == 5

    def test_teacher_dashboard_is_own_data(self, client, provision_teacher, submit_evaluation):
        amal = provision_teacher("Amal Haddad", "amal@school.example")["teacher"]
        basma = provision_teacher("Basma Nour", "basma@school.example")["teacher"]
        submit_evaluation(amal["id"], score=2)
        submit_evaluation(basma["id"], score=5)

        headers = login(client, "amal@school.example", TEACHER_PASSWORD)
        data = client.get(f"{API}/dashboard", headers=headers).json()
        assert data["total_teachers"] == 1
        assert data["completed_evaluations"] == 1
        assert data["overall_average"] == 40
        assert [t["teacher_id"] for t in data["top_teachers"]] == [amal["id"]]


class TestReports:
    """Tests for GET /api/v1/reports."""

    def _seed(self, provision_teacher, submit_evaluation):
        amal = provision_teacher("Amal Haddad", "amal@school.example", department="Sciences")["teacher"]
        karim = provision_teacher("Karim Aziz", "karim@school.example", department="Sciences")["teacher"]
        basma = provision_teacher("Basma Nour", "basma@school.example", department="Languages")["teacher"]
        submit_evaluation(amal["id"], score=5)
        submit_evaluation(amal["id"], score=3)
        submit_evaluation(karim["id"], score=2)
        submit_evaluation(basma["id"], score=4, overrides={"feedback": 2})
        return amal, karim, basma

    def test_report_sections(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        amal, karim, basma = self._seed(provision_teacher, submit_evaluation)

        response = client.get(f"{API}/reports", params={"period": "all"}, headers=supervisor_headers)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()

        assert data["evaluation_count"] == 4
        assert [t["teacher_id"] for t in data["top_teachers"]] == [amal["id"], basma["id"], karim["id"]]
        # Basma: nine 4s and one 2 -> 38 / 10 = 3.8 -> 76%
        assert data["top_teachers"][1]["average_percent"] == 76

        departments = {row["name"]: row for row in data["departments"]}
        # Sciences: per-evaluation 100, 60, 40 -> 66.67 -> 67
        assert departments["Sciences"]["average_percent"] == 67
        assert departments["Sciences"]["evaluation_count"] == 3

        stats = {row["department"]: row for row in data["department_stats"]}
        assert stats["Sciences"]["teacher_count"] == 2
        assert stats["Sciences"]["max_percent"] == 80
        assert stats["Sciences"]["min_percent"] == 40

        categories = {row["key"]: row for row in data["categories"]}
        assert len(categories) == 10
        # feedback: 100, 60, 40, 40 -> 60
        assert categories["feedback"]["average_percent"] == 60

        details = {row["teacher_id"]: row for row in data["teacher_details"]}
        assert details[basma["id"]]["categories"]["feedback"] == 40
        assert details[amal["id"]]["evaluation_count"] == 2

        assert sum(row["evaluation_count"] for row in data["monthly"]) == 4

    def test_department_filter(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        _, _, basma = self._seed(provision_teacher, submit_evaluation)
        data = client.get(
            f"{API}/reports", params={"department": "Languages", "period": "current"}, headers=supervisor_headers
        ).json()
        assert data["department"] == "Languages"
        assert data["evaluation_count"] == 1
        assert [t["teacher_id"] for t in data["top_teachers"]] == [basma["id"]]

    def test_all_departments(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        self._seed(provision_teacher, submit_evaluation)
        data = client.get(f"{API}/reports", params={"department": "all"}, headers=supervisor_headers).json()
        assert data["department"] is None
        assert data["evaluation_count"] == 4

    def test_previous_period_empty(self, client, supervisor_headers, provision_teacher, submit_evaluation):
        self._seed(provision_teacher, submit_evaluation)
        data = client.get(f"{API}/reports", params={"period": "previous"}, headers=supervisor_headers).json()
        assert data["evaluation_count"] == 0
        assert data["top_teachers"] == []
        assert all(row["average_percent"] == 0 for row in data["categories"])

    def test_reports_are_supervisor_only(self, client, provision_teacher):
        provision_teacher("Amal Haddad", "amal@school.example")
        headers = login(client, "amal@school.example", TEACHER_PASSWORD)
        assert client.get(f"{API}/reports", headers=headers).status_code == status.HTTP_403_FORBIDDEN
