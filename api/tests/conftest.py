"""
Shared fixtures: an isolated in-memory database and an API client bound to it.
"""
import os

# Keep the application engine off any real database while modules import
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from school_admin.api.deps import get_today
from school_admin.core.database import get_session
from school_admin.main import app
from school_admin.models.models import Course, Group, GroupStatus, Lesson, LessonStatus, User

# Monday
TODAY = date(2024, 3, 4)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def teacher(session):
    user = User(name="Олена Коваль", email="olena@example.com")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def course(session):
    course = Course(title="Робототехніка")
    session.add(course)
    session.commit()
    session.refresh(course)
    return course


@pytest.fixture
def make_group(session, teacher, course):
    """Factory for groups with a sensible default weekly slot."""
    def _make_group(**overrides):
        fields = {
            "title": "Група",
            "course_id": course.id,
            "teacher_id": teacher.id,
            "weekly_day": 1,
            "start_time": "10:00",
            "duration_minutes": 60,
            "status": GroupStatus.ACTIVE,
        }
        fields.update(overrides)
        group = Group(**fields)
        session.add(group)
        session.commit()
        session.refresh(group)
        return group
    return _make_group


@pytest.fixture
def make_lesson(session):
    """Factory for lessons stored directly, bypassing generation."""
    def _make_lesson(group, lesson_date, start="10:00", duration=60, **overrides):
        hours, minutes = (int(part) for part in start.split(":"))
        start_datetime = datetime.combine(lesson_date, datetime.min.time()).replace(hour=hours, minute=minutes)
        fields = {
            "group_id": group.id,
            "lesson_date": lesson_date,
            "start_datetime": start_datetime,
            "end_datetime": start_datetime + timedelta(minutes=duration),
            "status": LessonStatus.SCHEDULED,
        }
        fields.update(overrides)
        lesson = Lesson(**fields)
        session.add(lesson)
        session.commit()
        session.refresh(lesson)
        return lesson
    return _make_lesson


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def client(session, today):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_today] = lambda: today
    yield TestClient(app)
    app.dependency_overrides.clear()
