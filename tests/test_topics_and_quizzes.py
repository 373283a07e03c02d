"""Tests for topic and quiz submission API endpoints."""

from datetime import date

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from learnloop import models
from tests.conftest import OTHER_USER_HEADERS, USER_HEADERS

QUIZ_QUESTIONS = [
    {"question": "2 + 2?", "options": ["3", "4", "5", "6"], "correct_answer": 1, "explanation": ""},
    {"question": "3 * 3?", "options": ["6", "9", "12", "8"], "correct_answer": 1, "explanation": ""},
    {"question": "10 / 2?", "options": ["2", "4", "5", "8"], "correct_answer": 2, "explanation": ""},
]


def create_test_quiz(db_session: Session, topic: models.Topic) -> models.Quiz:
    quiz = models.Quiz(
        user_id=topic.user_id, topic_id=topic.id, title="Arithmetic Quiz", questions=QUIZ_QUESTIONS
    )
    db_session.add(quiz)
    db_session.commit()
    db_session.refresh(quiz)
    return quiz


class TestTopics:
    """Test suite for topic endpoints."""

    def test_create_topic_records_study_session(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/topics",
            json={"title": "Photosynthesis", "difficulty": "intermediate"},
            headers=USER_HEADERS,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["topic"]["title"] == "Photosynthesis"
        assert data["topic"]["difficulty"] == "intermediate"
        progress = data["progress"]
        assert progress["activity_type"] == "study"
        assert progress["xp_gained"] == 10
        assert progress["xp"] == 10
        assert progress["streak"] == 1
        assert progress["last_activity_date"] == date.today().isoformat()

        me = client.get("/api/v1/users/me", headers=USER_HEADERS).json()
        assert me["xp"] == 10
        assert me["streak"] == 1

        sessions = client.get("/api/v1/users/me/learning_sessions", headers=USER_HEADERS).json()
        assert len(sessions["sessions"]) == 1
        assert sessions["sessions"][0]["xp_applied"] is True
        assert sessions["sessions"][0]["topic_id"] == data["topic"]["id"]

    def test_second_topic_same_day_keeps_streak(self, client: TestClient) -> None:
        client.post("/api/v1/topics", json={"title": "Cells"}, headers=USER_HEADERS)
        response = client.post("/api/v1/topics", json={"title": "Genes"}, headers=USER_HEADERS)

        progress = response.json()["progress"]
        assert progress["xp"] == 20
        assert progress["streak"] == 1

    def test_blank_title_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/topics", json={"title": "   "}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "validation_error"
        me = client.get("/api/v1/users/me", headers=USER_HEADERS).json()
        assert me["xp"] == 0

    def test_topics_are_scoped_to_caller(self, client: TestClient) -> None:
        client.post("/api/v1/topics", json={"title": "Mine"}, headers=USER_HEADERS)
        client.post("/api/v1/topics", json={"title": "Theirs"}, headers=OTHER_USER_HEADERS)

        response = client.get("/api/v1/topics", headers=USER_HEADERS)

        assert response.status_code == status.HTTP_200_OK
        assert [t["title"] for t in response.json()["topics"]] == ["Mine"]


class TestQuizSubmission:
    """Test suite for grading quizzes."""

    def test_submit_grants_xp_per_correct_answer(
        self, client: TestClient, db_session: Session, test_topic: models.Topic
    ) -> None:
        quiz = create_test_quiz(db_session, test_topic)

        response = client.post(
            f"/api/v1/quizzes/{quiz.id}/submit",
            json={"answers": [1, 1, 0]},
            headers=USER_HEADERS,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["score"] == 2
        assert data["total_questions"] == 3
        assert data["progress"]["activity_type"] == "quiz"
        assert data["progress"]["xp_gained"] == 10
        assert data["progress"]["xp"] == 10

    def test_quiz_can_be_submitted_once(
        self, client: TestClient, db_session: Session, test_topic: models.Topic
    ) -> None:
        quiz = create_test_quiz(db_session, test_topic)
        url = f"/api/v1/quizzes/{quiz.id}/submit"
        client.post(url, json={"answers": [1, 1, 2]}, headers=USER_HEADERS)

        response = client.post(url, json={"answers": [1, 1, 2]}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_409_CONFLICT
        data = response.json()
        assert data["error"] == "quiz_already_submitted"
        assert data["retryable"] is False
        me = client.get("/api/v1/users/me", headers=USER_HEADERS).json()
        assert me["xp"] == 15

    def test_wrong_answer_count_rejected(
        self, client: TestClient, db_session: Session, test_topic: models.Topic
    ) -> None:
        quiz = create_test_quiz(db_session, test_topic)

        response = client.post(
            f"/api/v1/quizzes/{quiz.id}/submit", json={"answers": [1]}, headers=USER_HEADERS
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        db_session.refresh(quiz)
        assert quiz.score is None

    def test_other_users_quiz_not_found(
        self, client: TestClient, db_session: Session, test_topic: models.Topic
    ) -> None:
        quiz = create_test_quiz(db_session, test_topic)

        response = client.post(
            f"/api/v1/quizzes/{quiz.id}/submit",
            json={"answers": [1, 1, 2]},
            headers=OTHER_USER_HEADERS,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "not found" in response.json()["detail"].lower()

    @pytest.mark.parametrize("quiz_id", [0, -3])
    def test_invalid_quiz_id(self, client: TestClient, quiz_id: int) -> None:
        response = client.post(
            f"/api/v1/quizzes/{quiz_id}/submit", json={"answers": []}, headers=USER_HEADERS
        )

        assert response.status_code == 422

