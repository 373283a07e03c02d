"""Tests for posts, likes and the feed."""

import threading
import time
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from learnloop import models
from learnloop.application.social.use_cases.feed_use_case import FeedUseCase
from learnloop.application.social.use_cases.like_toggle_use_case import LikeToggleUseCase
from learnloop.core import container
from learnloop.domain.common.value_objects import UserId
from learnloop.domain.social.entities.like import LikeState
from learnloop.domain.social.services.feed_ranking import FeedItem, NewestFirstPolicy
from learnloop.exceptions import PostNotFoundError, ValidationError
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from learnloop.infrastructure.social.repositories.like_repository import LikeRepository
from learnloop.infrastructure.social.repositories.post_repository import PostRepository
from tests.conftest import OTHER_USER_HEADERS, USER_HEADERS, create_test_post


def like_rows(db_session: Session, post_id: int) -> int:
    return db_session.scalar(
        select(func.count(models.PostLike.id)).where(models.PostLike.post_id == post_id)
    )


class TestPosts:
    def test_create_post(self, client: TestClient) -> None:
        response = client.post("/api/v1/posts", json={"content": "  First!  "}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["content"] == "First!"
        assert data["like_count"] == 0
        assert data["user_id"] == "u1"

    @pytest.mark.parametrize("content", ["", "   ", "x" * 2001])
    def test_invalid_content_rejected(self, client: TestClient, content: str) -> None:
        response = client.post("/api/v1/posts", json={"content": content}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLikeToggle:
    """Test suite for the like toggle endpoint."""

    def test_toggle_sequence(self, client: TestClient, db_session: Session) -> None:
        """Like, unlike, then another user's like."""
        client.get("/api/v1/users/me", headers=USER_HEADERS)
        post = create_test_post(db_session)
        url = f"/api/v1/posts/{post.id}/like"

        first = client.post(url, headers=USER_HEADERS).json()
        second = client.post(url, headers=USER_HEADERS).json()
        third = client.post(url, headers=OTHER_USER_HEADERS).json()

        assert (first["liked"], first["state"], first["like_count"]) == (True, "liked", 1)
        assert (second["liked"], second["state"], second["like_count"]) == (False, "unliked", 0)
        assert (third["liked"], third["like_count"]) == (True, 1)
        assert like_rows(db_session, post.id) == 1

    def test_like_count_matches_rows_after_many_toggles(
        self, client: TestClient, db_session: Session
    ) -> None:
        client.get("/api/v1/users/me", headers=USER_HEADERS)
        post = create_test_post(db_session)
        url = f"/api/v1/posts/{post.id}/like"

        for _ in range(5):
            last = client.post(url, headers=USER_HEADERS).json()

        assert last["liked"] is True
        db_session.refresh(post)
        assert post.like_count == like_rows(db_session, post.id) == 1

    def test_unknown_post(self, client: TestClient) -> None:
        response = client.post("/api/v1/posts/9999/like", headers=USER_HEADERS)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "not_found"

    def test_like_is_broadcast_to_live_clients(
        self, client: TestClient, db_session: Session
    ) -> None:
        client.get("/api/v1/users/me", headers=USER_HEADERS)
        post = create_test_post(db_session)

        with client.websocket_connect("/ws") as websocket:
            client.post(f"/api/v1/posts/{post.id}/like", headers=USER_HEADERS)
            message = websocket.receive_json()

        assert message == {
            "event": "like_toggled",
            "user_id": "u1",
            "post_id": post.id,
            "liked": True,
            "state": "liked",
            "like_count": 1,
        }


class TestLikeToggleConflict:
    """A toggle that loses the insert race reports the current state."""

    def test_lost_insert_returns_current_state(self, use_cases: Any, db_session: Session) -> None:
        db_session.add(models.User(id="u1", xp=0, streak=0))
        db_session.commit()
        post = create_test_post(db_session)
        use_case: LikeToggleUseCase = use_cases.like_toggle_use_case()

        class RacingLikeRepository:
            """Behaves as if another request inserted the row between delete and insert."""

            def __init__(self, real: Any) -> None:
                self.real = real

            def delete(self, post_id: Any, user_id: Any) -> bool:
                return False

            def insert_if_absent(self, post_id: Any, user_id: Any) -> bool:
                self.real.insert_if_absent(post_id, user_id)
                db_session.commit()
                return False

            def exists(self, post_id: Any, user_id: Any) -> bool:
                return self.real.exists(post_id, user_id)

        use_case.like_repository = RacingLikeRepository(use_case.like_repository)

        result = use_case.toggle_like(post.id, "u1")

        assert result.state is LikeState.LIKED
        assert result.like_count == 0

    def test_post_row_locked_before_like_row_changes(
        self, use_cases: Any, db_session: Session
    ) -> None:
        db_session.add(models.User(id="u1", xp=0, streak=0))
        db_session.commit()
        post = create_test_post(db_session)
        use_case: LikeToggleUseCase = use_cases.like_toggle_use_case()
        calls: list[str] = []
        posts, likes = use_case.post_repository, use_case.like_repository

        class RecordingPostRepository:
            def find_by_id(self, post_id: Any, for_update: bool = False) -> Any:
                calls.append("find_for_update" if for_update else "find")
                return posts.find_by_id(post_id, for_update=for_update)

            def increment_like_count(self, post_id: Any, delta: int) -> int:
                return posts.increment_like_count(post_id, delta)

        class RecordingLikeRepository:
            def delete(self, post_id: Any, user_id: Any) -> bool:
                calls.append("delete")
                return likes.delete(post_id, user_id)

            def insert_if_absent(self, post_id: Any, user_id: Any) -> bool:
                calls.append("insert")
                return likes.insert_if_absent(post_id, user_id)

        use_case.post_repository = RecordingPostRepository()  # type: ignore[assignment]
        use_case.like_repository = RecordingLikeRepository()  # type: ignore[assignment]

        result = use_case.toggle_like(post.id, "u1")

        assert result.state is LikeState.LIKED
        assert calls == ["find_for_update", "delete", "insert"]

    def test_unknown_post_raises(self, use_cases: Any) -> None:
        with pytest.raises(PostNotFoundError):
            use_cases.like_toggle_use_case().toggle_like(404, "u1")


class TestFeed:
    """Test suite for the feed endpoint."""

    def test_feed_newest_first_with_viewer_flag(
        self, client: TestClient, db_session: Session
    ) -> None:
        client.get("/api/v1/users/me", headers=USER_HEADERS)
        older = create_test_post(db_session, content="older")
        newer = create_test_post(db_session, content="newer")
        client.post(f"/api/v1/posts/{older.id}/like", headers=OTHER_USER_HEADERS)

        as_u1 = client.get("/api/v1/feed", headers=USER_HEADERS).json()["items"]
        as_u2 = client.get("/api/v1/feed", headers=OTHER_USER_HEADERS).json()["items"]

        assert [i["id"] for i in as_u1] == [newer.id, older.id]
        assert [i["liked_by_viewer"] for i in as_u1] == [False, False]
        assert [i["liked_by_viewer"] for i in as_u2] == [False, True]
        assert [i["like_count"] for i in as_u2] == [0, 1]

    def test_feed_limit(self, client: TestClient, db_session: Session) -> None:
        client.get("/api/v1/users/me", headers=USER_HEADERS)
        for n in range(3):
            create_test_post(db_session, content=f"post {n}")

        response = client.get("/api/v1/feed", params={"limit": 2}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["items"]) == 2

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, client: TestClient, limit: int) -> None:
        response = client.get("/api/v1/feed", params={"limit": limit}, headers=USER_HEADERS)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "validation_error"

    def test_large_limit_is_clamped(self) -> None:
        class RecordingPostRepository:
            def __init__(self) -> None:
                self.limits: list[int] = []

            def list_recent_for_viewer(self, viewer_id: UserId, limit: int) -> list[FeedItem]:
                self.limits.append(limit)
                return []

        repository = RecordingPostRepository()
        use_case = FeedUseCase(repository, NewestFirstPolicy(), max_limit=100)  # type: ignore[arg-type]

        assert use_case.compose_feed("u1", limit=1000) == []
        assert repository.limits == [100]

        with pytest.raises(ValidationError):
            use_case.compose_feed("u1", limit=True)


U3_HEADERS = {"X-User-Id": "u3"}


def test_like_scenario_with_three_users(client: TestClient, db_session: Session) -> None:
    """u2 likes, u3 likes, u2 unlikes: the count follows each toggle."""
    client.get("/api/v1/users/me", headers=USER_HEADERS)
    post = create_test_post(db_session, content="p1")
    url = f"/api/v1/posts/{post.id}/like"

    u2_like = client.post(url, headers=OTHER_USER_HEADERS).json()
    u3_like = client.post(url, headers=U3_HEADERS).json()
    u2_unlike = client.post(url, headers=OTHER_USER_HEADERS).json()

    assert (u2_like["liked"], u2_like["like_count"]) == (True, 1)
    assert (u3_like["liked"], u3_like["like_count"]) == (True, 2)
    assert (u2_unlike["liked"], u2_unlike["like_count"]) == (False, 1)
    assert like_rows(db_session, post.id) == 1


@pytest.mark.parametrize("toggles", [4, 5])
def test_concurrent_toggles_never_double_count(
    session_factory: sessionmaker[Session], db_session: Session, toggles: int
) -> None:
    db_session.add(models.User(id="u1", xp=0, streak=0))
    db_session.commit()
    post = create_test_post(db_session)
    errors: list[Exception] = []

    def toggle() -> None:
        db = session_factory()
        try:
            use_case = LikeToggleUseCase(
                uow=SQLAlchemyUnitOfWork(db),
                post_repository=PostRepository(db),
                like_repository=LikeRepository(db),
            )
            use_case.toggle_like(post.id, "u1")
        except Exception as e:  # noqa: BLE001
            errors.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=toggle) for _ in range(toggles)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    db_session.expire_all()
    rows = like_rows(db_session, post.id)
    count = db_session.scalar(select(models.Post.like_count).where(models.Post.id == post.id))
    assert rows == count
    assert rows == toggles % 2


def test_concurrent_resolution_keeps_each_request_session(
    session_factory: sessionmaker[Session],
) -> None:
    """Use cases resolved on many threads at once are built on their own session."""
    resolve = inject_use_case(container.like_toggle_use_case)
    mismatches: list[int] = []

    def worker() -> None:
        for _ in range(300):
            db = session_factory()
            try:
                use_case = resolve(db)
                if (
                    use_case.uow.db is not db
                    or use_case.post_repository.db is not db
                    or use_case.like_repository.db is not db
                ):
                    mismatches.append(1)
            finally:
                db.close()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(mismatches) == 0


def test_toggle_waiting_on_store_lock_does_not_stall_other_requests(
    client: TestClient, db_session: Session, test_engine: Engine
) -> None:
    client.get("/api/v1/users/me", headers=USER_HEADERS)
    post_id = create_test_post(db_session).id
    db_session.rollback()

    locker = test_engine.raw_connection()
    cursor = locker.cursor()
    cursor.execute("BEGIN EXCLUSIVE")
    release = threading.Timer(2.0, lambda: cursor.execute("ROLLBACK"))
    release.start()

    responses: list[Any] = []
    toggle = threading.Thread(
        target=lambda: responses.append(
            client.post(f"/api/v1/posts/{post_id}/like", headers=USER_HEADERS)
        )
    )
    try:
        toggle.start()
        time.sleep(0.3)

        started = time.monotonic()
        health = client.get("/health")
        latency = time.monotonic() - started
    finally:
        toggle.join()
        release.join()
        locker.close()

    assert health.status_code == status.HTTP_200_OK
    assert latency < 0.5
    assert responses[0].status_code == status.HTTP_200_OK
    assert responses[0].json()["liked"] is True
