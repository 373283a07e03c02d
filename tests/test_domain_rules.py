"""Tests for pure domain rules."""

from datetime import UTC, date, datetime, timedelta

import pytest

from learnloop.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from learnloop.domain.common.value_objects import PostId, QuizId, TopicId, UserId
from learnloop.domain.learning.entities.quiz import Quiz, QuizQuestion
from learnloop.domain.learning.entities.topic import Topic
from learnloop.domain.progress.entities.learning_session import ActivityType, LearningSession
from learnloop.domain.progress.services.achievement_rules import AchievementRules
from learnloop.domain.progress.services.streak_policy import StreakPolicy, StreakState
from learnloop.domain.social.entities.like import LikeState
from learnloop.domain.social.entities.post import MAX_POST_CONTENT_LENGTH, Post
from learnloop.domain.social.services.feed_ranking import FeedItem, NewestFirstPolicy

DAY = date(2026, 1, 10)


class TestStreakPolicy:
    """Test suite for calendar-day streak rules."""

    def test_sequence_of_days(self) -> None:
        policy = StreakPolicy()
        state = StreakState(streak=0, last_activity_date=None)
        streaks = []
        for day in [DAY, DAY, DAY + timedelta(days=1), DAY + timedelta(days=6)]:
            state = policy.next_state(state, day) or state
            streaks.append(state.streak)

        assert streaks == [1, 1, 2, 1]

    def test_same_day_is_a_no_op(self) -> None:
        state = StreakState(streak=3, last_activity_date=DAY)

        assert StreakPolicy().next_state(state, DAY) is None

    def test_earlier_day_is_ignored(self) -> None:
        state = StreakState(streak=3, last_activity_date=DAY)

        assert StreakPolicy().next_state(state, DAY - timedelta(days=2)) is None

    def test_month_boundary_counts_as_consecutive(self) -> None:
        state = StreakState(streak=5, last_activity_date=date(2026, 1, 31))

        new_state = StreakPolicy().next_state(state, date(2026, 2, 1))

        assert new_state == StreakState(streak=6, last_activity_date=date(2026, 2, 1))

    def test_negative_streak_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            StreakState(streak=-1, last_activity_date=None)


class TestAchievementRules:
    def test_crossing_several_thresholds_at_once(self) -> None:
        rules = AchievementRules(xp_thresholds=[500, 100, 100], streak_thresholds=[3])

        crossed = rules.crossed_xp(90, 600)

        assert [c.key for c in crossed] == ["xp:100", "xp:500"]
        assert crossed[0].title == "Earned 100 XP"

    def test_landing_exactly_on_threshold_counts(self) -> None:
        rules = AchievementRules(xp_thresholds=[100], streak_thresholds=[7])

        assert [c.key for c in rules.crossed_xp(99, 100)] == ["xp:100"]
        assert rules.crossed_xp(100, 150) == []
        assert [c.title for c in rules.crossed_streak(6, 7)] == ["7-day streak"]

    def test_streak_reset_crosses_nothing(self) -> None:
        rules = AchievementRules(xp_thresholds=[], streak_thresholds=[1, 3])

        assert rules.crossed_streak(5, 1) == []


class TestLikeState:
    def test_toggle_is_its_own_inverse(self) -> None:
        for state in LikeState:
            assert state.flipped().flipped() is state
            assert state.flipped() is not state

    def test_from_liked(self) -> None:
        assert LikeState.from_liked(True) is LikeState.LIKED
        assert LikeState.from_liked(False) is LikeState.UNLIKED
        assert LikeState.LIKED.liked is True
        assert LikeState.UNLIKED.value == "unliked"


def _quiz(score: int | None = None) -> Quiz:
    questions = [
        QuizQuestion(question="2 + 2?", options=("3", "4"), correct_answer=1),
        QuizQuestion(question="Capital of France?", options=("Paris", "Rome", "Oslo"), correct_answer=0),
    ]
    return Quiz.create_with_id(
        id=QuizId(1),
        user_id=UserId("u1"),
        topic_id=TopicId(1),
        title="Basics Quiz",
        questions=questions,
        score=score,
        submitted_at=None,
        created_at=datetime.now(UTC),
    )


class TestQuiz:
    """Test suite for quiz grading."""

    def test_grade_counts_correct_answers(self) -> None:
        assert _quiz().grade([1, 0]) == 2
        assert _quiz().grade([0, 2]) == 0

    def test_answer_count_must_match(self) -> None:
        with pytest.raises(ValidationError):
            _quiz().grade([1])

    def test_graded_once(self) -> None:
        with pytest.raises(BusinessRuleViolationError):
            _quiz(score=1).grade([1, 0])

    def test_question_needs_valid_correct_answer(self) -> None:
        with pytest.raises(ValidationError):
            QuizQuestion(question="?", options=("a", "b"), correct_answer=2)

    def test_quiz_needs_questions(self) -> None:
        with pytest.raises(ValidationError):
            Quiz.create(UserId("u1"), TopicId(1), "Empty", [])


class TestEntities:
    def test_post_content_is_trimmed(self) -> None:
        post = Post.create(UserId("u1"), "  hello  ")

        assert post.content == "hello"
        assert post.like_count == 0

    @pytest.mark.parametrize("content", ["", "   ", "x" * (MAX_POST_CONTENT_LENGTH + 1)])
    def test_post_content_rules(self, content: str) -> None:
        with pytest.raises(ValidationError):
            Post.create(UserId("u1"), content)

    def test_session_rejects_negative_xp(self) -> None:
        with pytest.raises(ValidationError):
            LearningSession.create(UserId("u1"), None, ActivityType.STUDY, -1)

    def test_topic_title_required(self) -> None:
        with pytest.raises(ValidationError):
            Topic.create(user_id=UserId("u1"), title="  ")


class TestNewestFirstPolicy:
    def test_orders_by_time_then_id(self) -> None:
        noon = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

        def item(post_id: int, created_at: datetime) -> FeedItem:
            post = Post.create_with_id(PostId(post_id), UserId("u1"), "hi", 0, created_at)
            return FeedItem(post=post, liked_by_viewer=False)

        items = [
            item(1, noon),
            item(3, noon - timedelta(hours=1)),
            item(2, noon.replace(tzinfo=None)),
        ]

        ranked = NewestFirstPolicy().rank(items)

        assert [i.post.id.value for i in ranked] == [2, 1, 3]
