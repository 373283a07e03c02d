"""
Progress ledger: XP, daily streak, learning session audit trail and achievements.

XP is applied as a store-level atomic increment. The streak is applied with a
compare-and-set on the previously read state and retried on a lost race. A
learning session is committed before either counter moves, so a failure
afterwards leaves an audit record whose missing reconciliation marker shows
that its XP never reached the user's total.
"""

from collections.abc import Callable
from datetime import date

import structlog
from sqlalchemy.exc import SQLAlchemyError

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.identity.protocols.user_repository import UserRepositoryProtocol
from learnloop.application.learning.protocols.topic_repository import TopicRepositoryProtocol
from learnloop.application.progress.protocols.achievement_repository import (
    AchievementRepositoryProtocol,
)
from learnloop.application.progress.protocols.learning_session_repository import (
    LearningSessionRepositoryProtocol,
)
from learnloop.application.progress.use_cases.dtos import (
    ActivityResult,
    SessionAuditEntry,
    StreakUpdate,
    XpAward,
)
from learnloop.domain.common.domain_event import DomainEvent
from learnloop.domain.common.value_objects.ids import TopicId, UserId
from learnloop.domain.identity.entities.user import User
from learnloop.domain.progress.entities.achievement import Achievement
from learnloop.domain.progress.entities.learning_session import ActivityType, LearningSession
from learnloop.domain.progress.events import StreakThresholdCrossed, XpThresholdCrossed
from learnloop.domain.progress.services.achievement_rules import (
    AchievementCriteria,
    AchievementRules,
)
from learnloop.domain.progress.services.streak_policy import StreakPolicy
from learnloop.exceptions import (
    ConflictError,
    LearnLoopError,
    PartialActivityError,
    TopicNotFoundError,
    UserNotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

MAX_SESSION_PAGE_SIZE = 100


def _require_int(value: object, name: str) -> int:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


def _require_date(value: object) -> date:
    # datetime is a date subclass; a timestamp is not a day
    if type(value) is not date:
        raise ValidationError("Activity date must be a calendar date")
    return value


class ProgressLedgerUseCase:
    """Use case owning every mutation of a user's XP and streak."""

    def __init__(
        self,
        uow: UnitOfWork,
        user_repository: UserRepositoryProtocol,
        topic_repository: TopicRepositoryProtocol,
        session_repository: LearningSessionRepositoryProtocol,
        achievement_repository: AchievementRepositoryProtocol,
        streak_policy: StreakPolicy,
        achievement_rules: AchievementRules,
        max_retries: int = 3,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize use case with repository protocols and domain services."""
        self.uow = uow
        self.user_repository = user_repository
        self.topic_repository = topic_repository
        self.session_repository = session_repository
        self.achievement_repository = achievement_repository
        self.streak_policy = streak_policy
        self.achievement_rules = achievement_rules
        self.max_retries = max_retries
        self.today = today

    def award_xp(self, user_id: str, amount: int) -> int:
        """
        Add XP to a user's total.

        Args:
            user_id: ID of the user
            amount: Positive number of XP points

        Returns:
            The user's new XP total

        Raises:
            ValidationError: If amount is not a positive integer
            UserNotFoundError: If the user does not exist
        """
        amount = _require_int(amount, "XP amount")
        if amount <= 0:
            raise ValidationError("XP amount must be positive")

        with self.uow:
            award = self._apply_xp(UserId(user_id), amount)
            self.uow.commit()

        self._log_events(award.events)
        return award.total

    def update_streak(self, user_id: str, activity_date: date | None = None) -> StreakUpdate:
        """
        Apply an activity day to the user's streak.

        Args:
            user_id: ID of the user
            activity_date: Day of the activity, defaults to today

        Returns:
            The resulting streak state

        Raises:
            ValidationError: If activity_date is not a date
            UserNotFoundError: If the user does not exist
            ConflictError: If concurrent writers won every attempt
        """
        activity_date = self.today() if activity_date is None else _require_date(activity_date)
        update = self._update_streak(UserId(user_id), activity_date)
        self._log_events(update.events)
        return update

    def record_activity(
        self,
        user_id: str,
        topic_id: int | None,
        activity_type: str,
        xp_gained: int,
        activity_date: date | None = None,
    ) -> ActivityResult:
        """
        Record a learning session and apply its XP and streak effects.

        The session is committed first. XP (with its reconciliation marker and
        any achievements) and the streak are then applied as two independent
        atomic updates.

        Args:
            user_id: ID of the user
            topic_id: Optional ID of a topic owned by the user
            activity_type: One of study, quiz, flashcards, interview, chat
            xp_gained: Non-negative XP granted by the activity
            activity_date: Day of the activity, defaults to today

        Returns:
            ActivityResult with the stored session and resulting progress

        Raises:
            ValidationError: If any argument is malformed (nothing is written)
            UserNotFoundError: If the user does not exist
            TopicNotFoundError: If the topic does not exist or is not owned by the user
            PartialActivityError: If the session was stored but a progress update failed
        """
        xp_gained = _require_int(xp_gained, "XP gained")
        if xp_gained < 0:
            raise ValidationError("XP gained cannot be negative")
        try:
            activity = ActivityType(activity_type)
        except ValueError:
            allowed = ", ".join(t.value for t in ActivityType)
            raise ValidationError(f"Activity type must be one of: {allowed}") from None
        activity_date = self.today() if activity_date is None else _require_date(activity_date)

        user_id_vo = UserId(user_id)
        topic_id_vo = TopicId(topic_id) if topic_id is not None else None

        with self.uow:
            user = self.user_repository.find_by_id(user_id_vo)
            if user is None:
                raise UserNotFoundError(user_id)
            if topic_id_vo is not None and not self.topic_repository.find_by_id(
                topic_id_vo, user_id_vo
            ):
                raise TopicNotFoundError(topic_id_vo.value)

            session = self.session_repository.add(
                LearningSession.create(
                    user_id=user_id_vo,
                    topic_id=topic_id_vo,
                    activity_type=activity,
                    xp_gained=xp_gained,
                )
            )
            self.uow.commit()

        logger.info(
            "learning_session_recorded",
            session_id=session.id.value,
            user_id=user_id,
            activity_type=activity.value,
            xp_gained=xp_gained,
        )

        failures: list[str] = []
        xp_total = user.xp
        unlocked: list[AchievementCriteria] = []
        events: list[DomainEvent] = []

        if xp_gained > 0:
            try:
                with self.uow:
                    award = self._apply_xp(user_id_vo, xp_gained)
                    self.session_repository.mark_xp_applied(session.id)
                    self.uow.commit()
                xp_total = award.total
                unlocked.extend(award.unlocked)
                events.extend(award.events)
            except (LearnLoopError, SQLAlchemyError) as e:
                failures.append(f"xp: {e}")

        streak_state = user.streak_state
        try:
            streak = self._update_streak(user_id_vo, activity_date)
            streak_state = streak.state
            unlocked.extend(streak.unlocked)
            events.extend(streak.events)
        except (LearnLoopError, SQLAlchemyError) as e:
            failures.append(f"streak: {e}")

        if failures:
            reason = "; ".join(failures)
            logger.error(
                "activity_partially_applied",
                session_id=session.id.value,
                user_id=user_id,
                reason=reason,
            )
            raise PartialActivityError(session.id.value, reason)

        self._log_events(events)
        return ActivityResult(
            session=session,
            xp=xp_total,
            streak=streak_state,
            unlocked=unlocked,
            events=events,
        )

    def get_progress(self, user_id: str) -> User:
        """
        Get the user's current XP and streak.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_achievements(self, user_id: str) -> list[Achievement]:
        """Get the user's unlocked achievements, oldest first."""
        return self.achievement_repository.find_by_user(UserId(user_id))

    def list_learning_sessions(self, user_id: str, limit: int = 20) -> list[SessionAuditEntry]:
        """
        Get the user's most recent learning sessions with their XP attribution.

        Raises:
            ValidationError: If limit is not a positive integer
        """
        limit = _require_int(limit, "Limit")
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        rows = self.session_repository.find_by_user(
            UserId(user_id), min(limit, MAX_SESSION_PAGE_SIZE)
        )
        return [SessionAuditEntry(session=s, xp_applied=applied) for s, applied in rows]

    def find_unapplied_sessions(self, user_id: str) -> list[LearningSession]:
        """
        Sessions that granted XP which never reached the user's total.

        This is the detection side of reconciliation; nothing re-applies them.
        """
        return self.session_repository.find_unapplied(UserId(user_id))

    def _apply_xp(self, user_id: UserId, amount: int) -> XpAward:
        """Increment XP and unlock crossed achievements inside the caller's transaction."""
        total = self.user_repository.increment_xp(user_id, amount)
        if total is None:
            raise UserNotFoundError(user_id.value)

        crossed = self.achievement_rules.crossed_xp(total - amount, total)
        unlocked = self._unlock(user_id, crossed)
        events: list[DomainEvent] = [
            XpThresholdCrossed(user_id=user_id, threshold=c.threshold, total=total)
            for c in crossed
        ]
        logger.info("xp_awarded", user_id=user_id.value, amount=amount, total=total)
        return XpAward(total=total, unlocked=unlocked, events=events)

    def _update_streak(self, user_id: UserId, activity_date: date) -> StreakUpdate:
        for attempt in range(1, self.max_retries + 1):
            with self.uow:
                user = self.user_repository.find_by_id(user_id)
                if user is None:
                    raise UserNotFoundError(user_id.value)

                current = user.streak_state
                new_state = self.streak_policy.next_state(current, activity_date)
                if new_state is None:
                    return StreakUpdate(state=current, changed=False)

                if self.user_repository.compare_and_set_streak(
                    user_id,
                    expected_streak=current.streak,
                    expected_date=current.last_activity_date,
                    new_streak=new_state.streak,
                    new_date=activity_date,
                ):
                    crossed = self.achievement_rules.crossed_streak(
                        current.streak, new_state.streak
                    )
                    unlocked = self._unlock(user_id, crossed)
                    self.uow.commit()
                    logger.info(
                        "streak_updated",
                        user_id=user_id.value,
                        streak=new_state.streak,
                        activity_date=activity_date.isoformat(),
                        attempt=attempt,
                    )
                    return StreakUpdate(
                        state=new_state,
                        changed=True,
                        unlocked=unlocked,
                        events=[
                            StreakThresholdCrossed(
                                user_id=user_id, threshold=c.threshold, streak=new_state.streak
                            )
                            for c in crossed
                        ],
                    )

                self.uow.rollback()
                logger.warning("streak_update_conflict", user_id=user_id.value, attempt=attempt)

        raise ConflictError(
            f"Streak for user {user_id.value} changed concurrently on "
            f"{self.max_retries} attempts, please retry"
        )

    def _unlock(
        self, user_id: UserId, crossed: list[AchievementCriteria]
    ) -> list[AchievementCriteria]:
        return [
            criteria
            for criteria in crossed
            if self.achievement_repository.unlock(user_id, criteria.key, criteria.title)
        ]

    def _log_events(self, events: list[DomainEvent]) -> None:
        for event in events:
            logger.info("achievement_threshold_crossed", **event.to_log_fields())
