from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from exam_service.models.assessment import Assessment
from exam_service.models.question import Question
from tests.helpers.csv_files import csv_bytes


def test_exam_paper_full_flow(client: TestClient, token_for_role, course_factory, db_session: Session):
    """
    Upload a sheet, edit and prune questions, publish, then tear the paper down.
    """
    print("\n[TEST] Exam paper full flow")

    headers = {"Authorization": f"Bearer {token_for_role('lecturer')}"}
    student_headers = {"Authorization": f"Bearer {token_for_role('student', user_id=2)}"}
    course = course_factory(course_name="Flow Course")

    print("[1] Uploading exported sheet with a split options column and one broken row")
    sheet = csv_bytes(
        'Capital of Kenya?,Nairobi,"[""Nairobi"",","""Mombasa""]"',
        "Broken row,A,not json",
        'Largest lake?,Victoria,"[""Victoria"",""Turkana""]"',
        'Longest river?,,"""Nile"",""Tana"""',
        header="content,answer,options",
    )
    r_upload = client.post(
        "/exam-papers/upload",
        headers=headers,
        data={
            "title": "Geography",
            "course_id": str(course.id),
            "course_unit": "Physical Geography",
            "course_unit_code": "GEO1101",
            "duration": "45",
            "created_by": "Dr. Wanjiru",
            "scheduled_date": "2030-05-01 00:00:00",
            "start_time": "08:00:00",
            "end_time": "08:45:00",
        },
        files={"file": ("geography.csv", sheet, "text/csv")},
    )
    assert r_upload.status_code == 201, f"Upload failed: {r_upload.text}"
    paper = r_upload.json()["data"]
    paper_id = paper["id"]
    assert [q["content"] for q in paper["questions"]] == ["Capital of Kenya?", "Largest lake?", "Longest river?"]
    assert paper["questions"][0]["options"] == ["Nairobi", "Mombasa"]
    assert paper["questions"][2]["options"] == ["Nile", "Tana"]
    assert paper["questions"][2]["answer"] == ""
    print(f"[OK] Exam paper {paper_id} created with {len(paper['questions'])} questions")

    print("[2] Removing the first question")
    first_id = paper["questions"][0]["id"]
    r_delete = client.delete(f"/exam-papers/{paper_id}/questions/{first_id}", headers=headers)
    assert r_delete.status_code == 200, r_delete.text
    r_questions = client.get(f"/exam-papers/{paper_id}/questions", headers=headers)
    numbered = [(q["question_number"], q["content"]) for q in r_questions.json()["data"]]
    assert numbered == [(1, "Largest lake?"), (2, "Longest river?")]
    print("[OK] Survivors renumbered 1..2")

    print("[3] Filling in the missing answer and publishing")
    river_id = r_questions.json()["data"][1]["id"]
    r_answer = client.put(
        f"/exam-papers/{paper_id}/questions/{river_id}", headers=headers, json={"answer": "Nile"}
    )
    assert r_answer.json()["data"]["answer"] == "Nile"
    r_publish = client.patch(f"/exam-papers/{paper_id}/publish", headers=headers)
    assert r_publish.json()["data"]["status"] == "published"
    r_upcoming = client.get("/exam-papers/stats/upcoming", headers=student_headers)
    assert r_upcoming.json()["data"] == 1
    print("[OK] Published and counted as upcoming")

    print("[4] Student view carries no answers")
    r_student = client.get(f"/exam-papers/{paper_id}/questions/no-answer", headers=student_headers)
    assert r_student.status_code == 200
    assert all("answer" not in q for q in r_student.json()["data"])

    print("[5] Tearing down")
    assert client.delete(f"/exam-papers/{paper_id}", headers=headers).status_code == 409
    assert client.delete(f"/exam-papers/{paper_id}/questions", headers=headers).json()["data"] == 2
    assert client.delete(f"/exam-papers/{paper_id}", headers=headers).status_code == 200
    assert db_session.query(Assessment).count() == 0
    assert db_session.query(Question).count() == 0
    print("[OK] Exam paper removed")
