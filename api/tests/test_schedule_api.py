"""
API tests for schedule generation and the schedule grid.
"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from school_admin.models.models import GroupStatus, Lesson, LessonStatus


class TestGenerateAllEndpoint:
    """Test cases for POST /api/schedule/generate-all."""

    def test_returns_totals(self, client, make_group):
        make_group(title="Робототехніка 1")

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Заняття успішно згенеровано"
        assert data["totalGenerated"] == 2
        assert data["totalSkipped"] == 0
        assert data["totalFailed"] == 0
        assert data["results"][0]["groupTitle"] == "Робототехніка 1"
        assert data["results"][0]["generated"] == 2

    def test_second_run_skips_everything(self, client, make_group):
        make_group()
        client.post("/api/schedule/generate-all", json={"weeksAhead": 4})

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": 4})

        assert response.status_code == 200
        assert response.json()["totalGenerated"] == 0
        assert response.json()["totalSkipped"] == 4

    def test_missing_body_uses_default_horizon(self, client, session, make_group):
        make_group()

        response = client.post("/api/schedule/generate-all")

        assert response.status_code == 200
        assert response.json()["totalGenerated"] == 8

    @pytest.mark.parametrize("weeks_ahead", [0, 53, -2, "abc", 2.5, True])
    def test_invalid_weeks_ahead_is_400(self, client, session, make_group, weeks_ahead):
        make_group()

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": weeks_ahead})

        assert response.status_code == 400
        assert response.json()["type"] == "ValidationError"
        assert session.exec(select(Lesson)).all() == []

    def test_malformed_group_reported_not_fatal(self, client, make_group):
        make_group()
        broken = make_group(start_time=None)

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["totalGenerated"] == 2
        errors = [r for r in data["results"] if r["error"]]
        assert [r["groupId"] for r in errors] == [broken.id]

    def test_store_unavailable_is_500(self, client, session, make_group, monkeypatch):
        make_group()

        def broken_exec(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("could not connect to server"))

        monkeypatch.setattr(session, "exec", broken_exec)

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": 2})

        assert response.status_code == 500
        assert response.json()["type"] == "StoreUnavailableError"
        assert "results" not in response.json()


class TestGenerateGroupEndpoint:
    """Test cases for POST /api/groups/{id}/generate-lessons."""

    def test_generates_for_one_group(self, client, make_group):
        group = make_group()
        make_group(weekly_day=2)

        response = client.post(f"/api/groups/{group.id}/generate-lessons", json={"weeksAhead": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["groupId"] == group.id
        assert data["generated"] == 3
        assert data["skipped"] == 0

    def test_unknown_group_is_404(self, client):
        response = client.post("/api/groups/404/generate-lessons", json={"weeksAhead": 3})
        assert response.status_code == 404
        assert response.json()["detail"] == "Групу не знайдено"

    def test_inactive_group_is_400(self, client, make_group):
        group = make_group(status=GroupStatus.INACTIVE)
        response = client.post(f"/api/groups/{group.id}/generate-lessons", json={"weeksAhead": 3})
        assert response.status_code == 400

    def test_malformed_group_is_400(self, client, make_group):
        group = make_group(weekly_day=None)
        response = client.post(f"/api/groups/{group.id}/generate-lessons", json={"weeksAhead": 3})
        assert response.status_code == 400
        assert response.json()["type"] == "MalformedGroupError"

    def test_group_lessons_listing(self, client, make_group):
        group = make_group()
        client.post(f"/api/groups/{group.id}/generate-lessons", json={"weeksAhead": 3})

        response = client.get(f"/api/groups/{group.id}/lessons", params={"startDate": "2024-03-10"})

        assert response.status_code == 200
        dates = [lesson["lessonDate"] for lesson in response.json()["lessons"]]
        assert dates == ["2024-03-11", "2024-03-18"]


class TestScheduleView:
    """Test cases for GET /api/schedule."""

    def test_week_grid(self, client, make_group, make_lesson, teacher, course):
        group = make_group(title="Лего 2", weekly_day=1, start_time="10:00")
        make_lesson(group, date(2024, 3, 4), start="10:00", duration=60)

        response = client.get("/api/schedule", params={"startDate": "2024-03-04"})

        assert response.status_code == 200
        data = response.json()
        assert data["weekStart"] == "2024-03-04"
        assert data["weekEnd"] == "2024-03-10"
        assert data["totalLessons"] == 1
        assert len(data["days"]) == 7
        monday = data["days"][0]
        assert monday["dayOfWeek"] == 1
        assert monday["dayName"] == "Понеділок"
        lesson = monday["lessons"][0]
        assert lesson["groupTitle"] == "Лего 2"
        assert lesson["courseTitle"] == course.title
        assert lesson["teacherName"] == teacher.name
        assert lesson["startTime"] == "10:00"
        assert lesson["endTime"] == "11:00"
        assert lesson["status"] == "scheduled"
        assert all(day["lessons"] == [] for day in data["days"][1:])

    def test_end_time_wraps_past_midnight(self, client, make_group, make_lesson):
        group = make_group(start_time="23:30")
        make_lesson(group, date(2024, 3, 4), start="23:30", duration=60)

        lesson = client.get("/api/schedule", params={"startDate": "2024-03-04"}).json()["days"][0]["lessons"][0]

        assert lesson["startTime"] == "23:30"
        assert lesson["endTime"] == "00:30"

    @pytest.fixture
    def today(self):
        # Wednesday
        return date(2024, 3, 6)

    def test_defaults_to_current_week(self, client):
        response = client.get("/api/schedule")

        assert response.status_code == 200
        data = response.json()
        assert data["weekStart"] == "2024-03-04"
        assert data["weekEnd"] == "2024-03-10"
        assert [day["dayOfWeek"] for day in data["days"]] == [1, 2, 3, 4, 5, 6, 7]

    def test_explicit_range(self, client):
        response = client.get("/api/schedule", params={"startDate": "2024-03-01", "endDate": "2024-03-03"})
        assert [day["date"] for day in response.json()["days"]] == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_reversed_range_is_400(self, client):
        response = client.get("/api/schedule", params={"startDate": "2024-03-10", "endDate": "2024-03-04"})
        assert response.status_code == 400

    def test_filters_by_group_and_teacher(self, client, session, make_group, make_lesson, teacher):
        from school_admin.models.models import User
        other_teacher = User(name="Іван Петренко", email="ivan@example.com")
        session.add(other_teacher)
        session.commit()
        session.refresh(other_teacher)

        mine = make_group(weekly_day=1)
        theirs = make_group(weekly_day=1, teacher_id=other_teacher.id)
        make_lesson(mine, date(2024, 3, 4))
        make_lesson(theirs, date(2024, 3, 4), start="12:00")

        by_group = client.get("/api/schedule", params={"groupId": mine.id}).json()
        by_teacher = client.get("/api/schedule", params={"teacherId": other_teacher.id}).json()

        assert by_group["totalLessons"] == 1
        assert by_group["days"][0]["lessons"][0]["groupId"] == mine.id
        assert by_teacher["totalLessons"] == 1
        assert by_teacher["days"][0]["lessons"][0]["teacherId"] == other_teacher.id

    def test_canceled_lessons_are_shown(self, client, make_group, make_lesson):
        group = make_group()
        make_lesson(group, date(2024, 3, 4), status=LessonStatus.CANCELED)

        data = client.get("/api/schedule").json()

        assert data["days"][0]["lessons"][0]["status"] == "canceled"
