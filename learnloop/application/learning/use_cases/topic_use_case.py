"""Use case for creating and listing study topics."""

from dataclasses import dataclass

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.learning.protocols.topic_repository import TopicRepositoryProtocol
from learnloop.application.progress.use_cases.dtos import ActivityResult
from learnloop.application.progress.use_cases.progress_ledger_use_case import (
    ProgressLedgerUseCase,
)
from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.learning.entities.topic import Topic
from learnloop.domain.progress.entities.learning_session import ActivityType

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TopicCreated:
    topic: Topic
    activity: ActivityResult


class TopicUseCase:
    """Use case for study topics. Creating a topic counts as a study activity."""

    def __init__(
        self,
        uow: UnitOfWork,
        topic_repository: TopicRepositoryProtocol,
        progress_ledger: ProgressLedgerUseCase,
        study_xp: int = 10,
    ) -> None:
        """Initialize use case with repository protocols and the progress ledger."""
        self.uow = uow
        self.topic_repository = topic_repository
        self.progress_ledger = progress_ledger
        self.study_xp = study_xp

    def create_topic(
        self,
        user_id: str,
        title: str,
        description: str | None = None,
        difficulty: str = "beginner",
    ) -> TopicCreated:
        """
        Create a topic and record a study session for it.

        Raises:
            ValidationError: If the topic fields are invalid
            PartialActivityError: If the topic and session were stored but
                progress was not fully updated
        """
        with self.uow:
            topic = self.topic_repository.add(
                Topic.create(
                    user_id=UserId(user_id),
                    title=title,
                    description=description,
                    difficulty=difficulty,
                )
            )
            self.uow.commit()

        logger.info("topic_created", topic_id=topic.id.value, user_id=user_id)

        activity = self.progress_ledger.record_activity(
            user_id=user_id,
            topic_id=topic.id.value,
            activity_type=ActivityType.STUDY,
            xp_gained=self.study_xp,
        )
        return TopicCreated(topic=topic, activity=activity)

    def list_topics(self, user_id: str) -> list[Topic]:
        """Get the user's topics, newest first."""
        return self.topic_repository.find_by_user(UserId(user_id))
