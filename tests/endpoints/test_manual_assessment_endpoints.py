from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error_code


def payload(course_id, **overrides):
    data = {
        "title": "Quiz 1",
        "description": "Short quiz",
        "course_id": course_id,
        "course_unit": "Algorithms",
        "course_unit_code": "CSC2101",
        "duration": 30,
        "created_by": "Dr. Achieng",
        "scheduled_date": "2099-02-01 00:00:00",
        "start_time": "10:00:00",
        "end_time": "10:30:00",
        "questions": [{"question_text": "2+2?", "options": ["3", "4"], "correct_answer": "4"}],
    }
    data.update(overrides)
    return data


class TestManualAssessmentEndpoints:
    def test_crud_round(self, client: TestClient, lecturer_headers, course_factory):
        course_id = course_factory().id

        created = api_call(
            client, "POST", "/manual-assessments/", headers=lecturer_headers, json=payload(course_id),
            expected_min=201, expected_max=202,
        ).json()["data"]
        assert created["start_time"] == "10:00:00"
        assert created["questions"][0]["question_number"] == 1

        listed = api_call(client, "GET", "/manual-assessments/", headers=lecturer_headers).json()["data"]
        assert [a["id"] for a in listed] == [created["id"]]

        updated = api_call(
            client, "PUT", f"/manual-assessments/{created['id']}", headers=lecturer_headers,
            json={"title": "Quiz 1b", "description": None},
        ).json()["data"]
        assert updated["title"] == "Quiz 1b"
        assert updated["description"] == "Short quiz"
        assert len(updated["questions"]) == 1

        api_call(client, "DELETE", f"/manual-assessments/{created['id']}", headers=lecturer_headers)
        missing = client.get(f"/manual-assessments/{created['id']}", headers=lecturer_headers)
        assert_error_code(missing, 404, "NOT_FOUND")

    def test_invalid_time_on_create(self, client: TestClient, lecturer_headers, course_factory):
        response = client.post(
            "/manual-assessments/", headers=lecturer_headers, json=payload(course_factory().id, end_time="10:30")
        )

        assert_error_code(response, 400, "INVALID_TIME_FORMAT")

    def test_students_cannot_create(self, client: TestClient, token_for_role, course_factory):
        headers = {"Authorization": f"Bearer {token_for_role('student')}"}

        response = client.post("/manual-assessments/", headers=headers, json=payload(course_factory().id))

        assert response.status_code == 403


class TestUpcomingExams:
    def test_student_sees_own_upcoming_exams(self, client: TestClient, lecturer_headers, token_for_role,
                                             course_factory, student_factory):
        course = course_factory(course_name="Algorithms")
        student = student_factory("student@test.com", courses=[course])
        api_call(
            client, "POST", "/manual-assessments/", headers=lecturer_headers, json=payload(course.id),
            expected_min=201, expected_max=202,
        )
        headers = {"Authorization": f"Bearer {token_for_role('student', user_id=student.id)}"}

        exams = api_call(client, "GET", f"/manual-assessments/upcoming/{student.id}", headers=headers).json()["data"]

        assert exams == [{
            "title": "Quiz 1",
            "course_name": "Algorithms",
            "scheduled_date": "2099-02-01 00:00:00",
            "start_time": "10:00:00",
            "end_time": "10:30:00",
        }]

    def test_student_cannot_read_another_students_exams(self, client: TestClient, token_for_role, student_factory):
        other = student_factory("other@test.com")
        headers = {"Authorization": f"Bearer {token_for_role('student', user_id=other.id + 1)}"}

        response = client.get(f"/manual-assessments/upcoming/{other.id}", headers=headers)

        assert response.status_code == 403

    def test_staff_can_read_any_student(self, client: TestClient, lecturer_headers, student_factory):
        student = student_factory("someone@test.com")

        response = api_call(client, "GET", f"/manual-assessments/upcoming/{student.id}", headers=lecturer_headers)

        assert response.json()["data"] == []
