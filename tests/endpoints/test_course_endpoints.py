from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error_code


class TestCourseEndpoints:
    def test_list_courses(self, client: TestClient, token_for_role, course_factory):
        course_factory(course_name="Algorithms")
        course_factory(course_name="Databases")
        headers = {"Authorization": f"Bearer {token_for_role('student')}"}

        courses = api_call(client, "GET", "/courses/", headers=headers).json()["data"]

        assert [c["course_name"] for c in courses] == ["Algorithms", "Databases"]

    def test_course_units_are_numbered_from_one(self, client: TestClient, lecturer_headers, course_factory):
        course = course_factory(course_units=["Sorting", "Graphs"], course_unit_code="CSC3101")

        units = api_call(client, "GET", f"/courses/{course.id}/units", headers=lecturer_headers).json()["data"]

        assert units["course_units"] == [
            {"id": 1, "unit_name": "Sorting", "unit_code": "CSC3101"},
            {"id": 2, "unit_name": "Graphs", "unit_code": "CSC3101"},
        ]

    def test_unknown_course_units(self, client: TestClient, lecturer_headers):
        assert_error_code(client.get("/courses/123/units", headers=lecturer_headers), 404, "NOT_FOUND")

    def test_health_check(self, client: TestClient):
        assert client.get("/").json()["status"] == "ok"

    def test_request_id_is_echoed_into_the_error_envelope(self, client: TestClient, lecturer_headers):
        headers = dict(lecturer_headers, **{"X-Request-ID": "trace-123"})

        response = client.get("/courses/123/units", headers=headers)

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"
