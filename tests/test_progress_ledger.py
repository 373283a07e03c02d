"""Tests for the progress ledger against a real database."""

import threading
from datetime import date, datetime, timedelta
from typing import Any

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from learnloop import models
from learnloop.application.progress.use_cases.progress_ledger_use_case import (
    ProgressLedgerUseCase,
)
from learnloop.domain.progress.services.achievement_rules import AchievementRules
from learnloop.domain.progress.services.streak_policy import StreakPolicy
from learnloop.exceptions import TopicNotFoundError, UserNotFoundError, ValidationError
from learnloop.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from learnloop.infrastructure.identity.repositories.user_repository import UserRepository
from learnloop.infrastructure.learning.repositories.topic_repository import TopicRepository
from learnloop.infrastructure.progress.repositories.achievement_repository import (
    AchievementRepository,
)
from learnloop.infrastructure.progress.repositories.learning_session_repository import (
    LearningSessionRepository,
)
from tests.conftest import create_test_topic

DAY_1 = date(2026, 3, 1)


@pytest.fixture
def ledger(use_cases: Any, test_user: models.User) -> ProgressLedgerUseCase:
    return use_cases.progress_ledger_use_case()


def build_ledger(db: Session) -> ProgressLedgerUseCase:
    return ProgressLedgerUseCase(
        uow=SQLAlchemyUnitOfWork(db),
        user_repository=UserRepository(db),
        topic_repository=TopicRepository(db),
        session_repository=LearningSessionRepository(db),
        achievement_repository=AchievementRepository(db),
        streak_policy=StreakPolicy(),
        achievement_rules=AchievementRules([100, 500], [3]),
    )


class TestRecordActivity:
    """Test suite for recording learning sessions."""

    def test_daily_activity_moves_xp_and_streak(
        self, ledger: ProgressLedgerUseCase, test_topic: models.Topic
    ) -> None:
        """Two activities on day one, one on day two, one after a gap."""
        days = [DAY_1, DAY_1, DAY_1 + timedelta(days=1), DAY_1 + timedelta(days=9)]
        observed = []
        for day in days:
            result = ledger.record_activity("u1", test_topic.id, "study", 10, activity_date=day)
            observed.append((result.xp, result.streak.streak))

        assert observed == [(10, 1), (20, 1), (30, 2), (40, 1)]

        user = ledger.get_progress("u1")
        assert user.xp == 40
        assert user.streak == 1
        assert user.last_activity_date == DAY_1 + timedelta(days=9)

    def test_out_of_order_day_does_not_regress_streak(
        self, ledger: ProgressLedgerUseCase
    ) -> None:
        ledger.record_activity("u1", None, "study", 10, activity_date=DAY_1)
        ledger.record_activity("u1", None, "study", 10, activity_date=DAY_1 + timedelta(days=1))

        result = ledger.record_activity("u1", None, "quiz", 5, activity_date=DAY_1)

        assert result.xp == 25
        assert result.streak.streak == 2
        assert result.streak.last_activity_date == DAY_1 + timedelta(days=1)

    def test_zero_xp_session_still_counts_for_streak(self, ledger: ProgressLedgerUseCase) -> None:
        result = ledger.record_activity("u1", None, "chat", 0, activity_date=DAY_1)

        assert result.xp == 0
        assert result.streak.streak == 1
        assert result.session.xp_gained == 0

    def test_session_with_owned_topic(
        self, ledger: ProgressLedgerUseCase, test_topic: models.Topic
    ) -> None:
        result = ledger.record_activity("u1", test_topic.id, "flashcards", 15, activity_date=DAY_1)

        assert result.session.topic_id is not None
        assert result.session.topic_id.value == test_topic.id

    @pytest.mark.parametrize(
        ("activity_type", "xp_gained"),
        [("study", -1), ("study", True), ("study", 2.5), ("sleeping", 10)],
    )
    def test_invalid_input_writes_nothing(
        self,
        ledger: ProgressLedgerUseCase,
        db_session: Session,
        activity_type: str,
        xp_gained: Any,
    ) -> None:
        with pytest.raises(ValidationError):
            ledger.record_activity("u1", None, activity_type, xp_gained, activity_date=DAY_1)

        assert db_session.scalar(select(func.count(models.LearningSession.id))) == 0
        assert ledger.get_progress("u1").xp == 0

    @pytest.mark.parametrize("activity_date", ["2026-03-02", datetime(2026, 3, 2, 12)])
    def test_malformed_date_writes_nothing(
        self, ledger: ProgressLedgerUseCase, db_session: Session, activity_date: Any
    ) -> None:
        with pytest.raises(ValidationError):
            ledger.record_activity("u1", None, "study", 10, activity_date=activity_date)

        assert db_session.scalar(select(func.count(models.LearningSession.id))) == 0
        user = ledger.get_progress("u1")
        assert (user.xp, user.streak) == (0, 0)

    def test_unknown_user(self, ledger: ProgressLedgerUseCase) -> None:
        with pytest.raises(UserNotFoundError):
            ledger.record_activity("nobody", None, "study", 10)

    def test_topic_of_another_user_is_not_found(
        self, ledger: ProgressLedgerUseCase, db_session: Session
    ) -> None:
        db_session.add(models.User(id="u2", xp=0, streak=0))
        db_session.commit()
        foreign_topic = create_test_topic(db_session, user_id="u2")

        with pytest.raises(TopicNotFoundError):
            ledger.record_activity("u1", foreign_topic.id, "study", 10)

        assert db_session.scalar(select(func.count(models.LearningSession.id))) == 0


class TestUpdateStreak:
    def test_dates_follow_streak_policy(self, ledger: ProgressLedgerUseCase) -> None:
        days = [DAY_1, DAY_1, DAY_1 + timedelta(days=1), DAY_1 + timedelta(days=5)]

        streaks = [ledger.update_streak("u1", day).state.streak for day in days]

        assert streaks == [1, 1, 2, 1]

    @pytest.mark.parametrize("activity_date", ["2026-03-02", datetime(2026, 3, 2, 12)])
    def test_malformed_date_rejected(
        self, ledger: ProgressLedgerUseCase, activity_date: Any
    ) -> None:
        ledger.update_streak("u1", DAY_1)

        with pytest.raises(ValidationError):
            ledger.update_streak("u1", activity_date)

        user = ledger.get_progress("u1")
        assert (user.streak, user.last_activity_date) == (1, DAY_1)


class TestAuditTrail:
    """Test suite for session attribution and reconciliation."""

    def test_sessions_listed_newest_first_with_xp_applied(
        self, ledger: ProgressLedgerUseCase
    ) -> None:
        first = ledger.record_activity("u1", None, "study", 10, activity_date=DAY_1)
        second = ledger.record_activity("u1", None, "quiz", 20, activity_date=DAY_1)

        entries = ledger.list_learning_sessions("u1", limit=10)

        assert [e.session.id for e in entries] == [second.session.id, first.session.id]
        assert all(e.xp_applied for e in entries)
        assert ledger.find_unapplied_sessions("u1") == []

    def test_session_without_marker_is_reported_unapplied(
        self, ledger: ProgressLedgerUseCase, db_session: Session
    ) -> None:
        ledger.record_activity("u1", None, "study", 10, activity_date=DAY_1)
        # A session stored without its XP ever being applied
        orphan = models.LearningSession(user_id="u1", activity_type="quiz", xp_gained=25)
        db_session.add(orphan)
        db_session.commit()

        unapplied = ledger.find_unapplied_sessions("u1")

        assert [s.id.value for s in unapplied] == [orphan.id]
        applied_total = sum(
            e.session.xp_gained for e in ledger.list_learning_sessions("u1") if e.xp_applied
        )
        assert applied_total == ledger.get_progress("u1").xp

    def test_limit_must_be_positive(self, ledger: ProgressLedgerUseCase) -> None:
        with pytest.raises(ValidationError):
            ledger.list_learning_sessions("u1", limit=0)


class TestAwardXp:
    """Test suite for direct XP awards."""

    @pytest.mark.parametrize("amount", [0, -5, True])
    def test_amount_must_be_positive_integer(
        self, ledger: ProgressLedgerUseCase, amount: Any
    ) -> None:
        with pytest.raises(ValidationError):
            ledger.award_xp("u1", amount)

    def test_unknown_user(self, ledger: ProgressLedgerUseCase) -> None:
        with pytest.raises(UserNotFoundError):
            ledger.award_xp("nobody", 10)

    def test_crossing_threshold_unlocks_achievement_once(
        self, ledger: ProgressLedgerUseCase
    ) -> None:
        assert ledger.award_xp("u1", 90) == 90
        assert ledger.award_xp("u1", 20) == 110
        assert ledger.award_xp("u1", 20) == 130

        criteria = [a.criteria for a in ledger.list_achievements("u1")]
        assert criteria == ["xp:100"]

    def test_streak_threshold_unlocks_achievement(self, ledger: ProgressLedgerUseCase) -> None:
        for offset in range(3):
            update = ledger.update_streak("u1", DAY_1 + timedelta(days=offset))

        assert update.state.streak == 3
        assert [c.key for c in update.unlocked] == ["streak:3"]
        assert [a.criteria for a in ledger.list_achievements("u1")] == ["streak:3"]

    def test_concurrent_awards_are_all_applied(
        self, session_factory: sessionmaker[Session], test_user: models.User
    ) -> None:
        """Increments from separate connections never overwrite each other."""
        workers, awards_per_worker, amount = 6, 5, 10
        errors: list[Exception] = []

        def work() -> None:
            db = session_factory()
            try:
                ledger = build_ledger(db)
                for _ in range(awards_per_worker):
                    ledger.award_xp("u1", amount)
            except Exception as e:  # noqa: BLE001
                errors.append(e)
            finally:
                db.close()

        threads = [threading.Thread(target=work) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        db = session_factory()
        try:
            ledger = build_ledger(db)
            assert ledger.get_progress("u1").xp == workers * awards_per_worker * amount
            assert [a.criteria for a in ledger.list_achievements("u1")] == ["xp:100"]
        finally:
            db.close()
