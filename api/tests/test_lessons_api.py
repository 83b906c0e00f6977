"""
API tests for lesson status changes and rescheduling.
"""
from datetime import date

import pytest
from sqlmodel import select

from school_admin.models.models import Lesson, LessonStatus


@pytest.fixture
def group(make_group):
    return make_group(weekly_day=1, start_time="10:00", duration_minutes=60)


@pytest.fixture
def lesson(group, make_lesson):
    return make_lesson(group, date(2024, 3, 4), start="10:00", duration=60)


class TestLessonQueries:
    """Test cases for reading lessons."""

    def test_get_lesson(self, client, lesson):
        response = client.get(f"/api/lessons/{lesson.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == lesson.id
        assert data["lessonDate"] == "2024-03-04"
        assert data["startDatetime"] == "2024-03-04T10:00:00"
        assert data["status"] == "scheduled"

    def test_unknown_lesson_is_404(self, client):
        response = client.get("/api/lessons/12345")
        assert response.status_code == 404
        assert response.json()["detail"] == "Заняття не знайдено"

    def test_upcoming_skips_past_and_canceled(self, client, group, make_lesson):
        make_lesson(group, date(2024, 2, 26))
        upcoming = make_lesson(group, date(2024, 3, 4))
        make_lesson(group, date(2024, 3, 11), status=LessonStatus.CANCELED)
        later = make_lesson(group, date(2024, 3, 18))

        response = client.get("/api/lessons")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["lessons"]] == [upcoming.id, later.id]

    def test_upcoming_limit(self, client, group, make_lesson):
        for day in (4, 11, 18):
            make_lesson(group, date(2024, 3, day))

        response = client.get("/api/lessons", params={"limit": 2})

        assert len(response.json()["lessons"]) == 2

    def test_lessons_of_group_include_canceled(self, client, group, make_lesson):
        make_lesson(group, date(2024, 3, 4), status=LessonStatus.CANCELED)
        make_lesson(group, date(2024, 3, 11))

        response = client.get("/api/lessons", params={"groupId": group.id})

        assert [item["status"] for item in response.json()["lessons"]] == ["canceled", "scheduled"]


class TestLessonStatusChanges:
    """Test cases for canceling, completing and topics."""

    def test_cancel_with_reason(self, client, lesson):
        response = client.post(f"/api/lessons/{lesson.id}/cancel", json={"reason": "Карантин"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Заняття скасовано"
        assert data["lesson"]["status"] == "canceled"
        assert data["lesson"]["topic"] == "Карантин"

    def test_cancel_without_reason(self, client, lesson):
        response = client.post(f"/api/lessons/{lesson.id}/cancel")

        assert response.status_code == 200
        assert response.json()["lesson"]["topic"] == "Скасовано"

    def test_cancel_twice_is_400(self, client, lesson):
        client.post(f"/api/lessons/{lesson.id}/cancel", json={})
        response = client.post(f"/api/lessons/{lesson.id}/cancel", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Заняття вже скасовано"

    def test_canceled_lesson_not_regenerated(self, client, session, lesson):
        client.post(f"/api/lessons/{lesson.id}/cancel", json={"reason": "Свято"})

        response = client.post("/api/schedule/generate-all", json={"weeksAhead": 1})

        assert response.json()["totalGenerated"] == 0
        assert response.json()["totalSkipped"] == 1
        session.expire_all()
        lessons = session.exec(select(Lesson)).all()
        assert len(lessons) == 1
        assert lessons[0].status == LessonStatus.CANCELED.value

    def test_mark_done(self, client, lesson):
        response = client.post(f"/api/lessons/{lesson.id}/done")

        assert response.status_code == 200
        assert response.json()["lesson"]["status"] == "done"

    def test_canceled_lesson_cannot_be_done(self, client, lesson):
        client.post(f"/api/lessons/{lesson.id}/cancel", json={})
        response = client.post(f"/api/lessons/{lesson.id}/done")
        assert response.status_code == 400

    def test_update_topic(self, client, lesson):
        response = client.patch(f"/api/lessons/{lesson.id}/topic", json={"topic": "  Датчики  "})

        assert response.status_code == 200
        assert response.json()["lesson"]["topic"] == "Датчики"

    def test_blank_topic_clears(self, client, lesson):
        client.patch(f"/api/lessons/{lesson.id}/topic", json={"topic": "Датчики"})
        response = client.patch(f"/api/lessons/{lesson.id}/topic", json={"topic": "   "})

        assert response.json()["lesson"]["topic"] is None


class TestReschedule:
    """Test cases for moving lessons."""

    def test_move_to_new_date_and_time(self, client, lesson):
        response = client.post(
            f"/api/lessons/{lesson.id}/reschedule",
            json={"newDate": "2024-03-07", "newTime": "15:30"}
        )

        assert response.status_code == 200
        data = response.json()["lesson"]
        assert data["lessonDate"] == "2024-03-07"
        assert data["startDatetime"] == "2024-03-07T15:30:00"
        assert data["endDatetime"] == "2024-03-07T16:30:00"

    def test_keeps_time_when_omitted(self, client, lesson):
        response = client.post(f"/api/lessons/{lesson.id}/reschedule", json={"newDate": "2024-03-05"})

        assert response.json()["lesson"]["startDatetime"] == "2024-03-05T10:00:00"

    def test_default_duration_without_keep(self, client, lesson):
        response = client.post(
            f"/api/lessons/{lesson.id}/reschedule",
            json={"newDate": "2024-03-05", "keepDuration": False}
        )

        assert response.json()["lesson"]["endDatetime"] == "2024-03-05T11:30:00"

    def test_canceled_lesson_becomes_scheduled(self, client, lesson):
        client.post(f"/api/lessons/{lesson.id}/cancel", json={})
        response = client.post(f"/api/lessons/{lesson.id}/reschedule", json={"newDate": "2024-03-05"})

        assert response.json()["lesson"]["status"] == "scheduled"

    def test_date_taken_is_409(self, client, group, lesson, make_lesson):
        make_lesson(group, date(2024, 3, 11))

        response = client.post(f"/api/lessons/{lesson.id}/reschedule", json={"newDate": "2024-03-11"})

        assert response.status_code == 409

    def test_bad_time_is_400(self, client, lesson):
        response = client.post(
            f"/api/lessons/{lesson.id}/reschedule",
            json={"newDate": "2024-03-05", "newTime": "26:00"}
        )
        assert response.status_code == 400

    def test_missing_date_is_422(self, client, lesson):
        response = client.post(f"/api/lessons/{lesson.id}/reschedule", json={"newTime": "12:00"})
        assert response.status_code == 422
