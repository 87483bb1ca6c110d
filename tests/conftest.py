import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from exam_service.core.config import settings
from exam_service.core.constants import RoleEnum
from exam_service.crud.assessment import assessment as crud_assessment
from exam_service.models.base import Base
from exam_service.models.course import Course
from exam_service.models.user import User
from exam_service.schemas.question import ParsedQuestion
from exam_service.utils import deps as deps_utils
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite://"


@pytest.fixture(scope="function")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(
            test_db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def token_for_role():
    """Mint tokens the way the identity service does."""
    def _create_token_for_role(role_name: str, user_id: int = 1):
        payload = {
            "sub": str(user_id),
            "role": RoleEnum(role_name).value,
            "email": f"{role_name}-{user_id}@test.com",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return _create_token_for_role


@pytest.fixture
def lecturer_headers(token_for_role):
    return {"Authorization": f"Bearer {token_for_role('lecturer')}"}


@pytest.fixture
def course_factory(db_session):
    def _course_factory(course_name="Computer Science", course_units=None, course_unit_code="CSC2101"):
        course = Course(
            course_name=course_name,
            course_units=course_units if course_units is not None else ["Data Structures", "Algorithms"],
            course_unit_code=course_unit_code,
        )
        db_session.add(course)
        db_session.commit()
        db_session.refresh(course)
        return course
    return _course_factory


@pytest.fixture
def student_factory(db_session):
    def _student_factory(email, courses=(), role=RoleEnum.STUDENT):
        student = User(full_name="Test Student", email=email, role=role)
        for course in courses:
            student.enrolled_courses.append(course)
        db_session.add(student)
        db_session.commit()
        db_session.refresh(student)
        return student
    return _student_factory


@pytest.fixture
def exam_paper_factory(db_session):
    """Persist an exam paper through the repository with the given question contents."""
    def _exam_paper_factory(course, contents=("Q1", "Q2", "Q3"), is_draft=True,
                            scheduled_date=datetime(2025, 1, 1), start=(9, 0), end=(11, 0)):
        return crud_assessment.create_with_questions(
            db_session,
            obj_in={
                "title": "Midterm",
                "description": "Weeks 1-6",
                "course_id": course.id,
                "course_unit": "Data Structures",
                "course_unit_code": "CSC2101",
                "duration": 120,
                "created_by": "Dr. Achieng",
                "scheduled_date": scheduled_date,
                "start_time": scheduled_date.replace(hour=start[0], minute=start[1]),
                "end_time": scheduled_date.replace(hour=end[0], minute=end[1]),
                "is_draft": is_draft,
            },
            questions=[
                ParsedQuestion(content=content, options=["A", "B"], answer="A")
                for content in contents
            ],
        )
    return _exam_paper_factory
