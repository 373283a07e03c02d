from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from learnloop.application.identity.use_cases.user_use_case import UserUseCase
from learnloop.application.learning.use_cases.content_generation_use_case import (
    ContentGenerationUseCase,
)
from learnloop.application.learning.use_cases.quiz_submission_use_case import (
    QuizSubmissionUseCase,
)
from learnloop.application.learning.use_cases.topic_use_case import TopicUseCase
from learnloop.application.progress.use_cases.progress_ledger_use_case import (
    ProgressLedgerUseCase,
)
from learnloop.application.social.use_cases.feed_use_case import FeedUseCase
from learnloop.application.social.use_cases.like_toggle_use_case import LikeToggleUseCase
from learnloop.application.social.use_cases.post_use_case import PostUseCase
from learnloop.config import get_settings
from learnloop.domain.progress.services.achievement_rules import AchievementRules
from learnloop.domain.progress.services.streak_policy import StreakPolicy
from learnloop.domain.social.services.feed_ranking import NewestFirstPolicy
from learnloop.infrastructure.ai.ai_service import AIContentProvider
from learnloop.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from learnloop.infrastructure.identity.repositories.user_repository import UserRepository
from learnloop.infrastructure.learning.repositories.study_material_repository import (
    StudyMaterialRepository,
)
from learnloop.infrastructure.learning.repositories.topic_repository import TopicRepository
from learnloop.infrastructure.progress.repositories.achievement_repository import (
    AchievementRepository,
)
from learnloop.infrastructure.progress.repositories.learning_session_repository import (
    LearningSessionRepository,
)
from learnloop.infrastructure.social.realtime import LikeEventBroadcaster
from learnloop.infrastructure.social.repositories.like_repository import LikeRepository
from learnloop.infrastructure.social.repositories.post_repository import PostRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Callable(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)
    uow = providers.Factory(SQLAlchemyUnitOfWork, db=db)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    topic_repository = providers.Factory(TopicRepository, db=db)
    learning_session_repository = providers.Factory(LearningSessionRepository, db=db)
    achievement_repository = providers.Factory(AchievementRepository, db=db)
    study_material_repository = providers.Factory(StudyMaterialRepository, db=db)
    post_repository = providers.Factory(PostRepository, db=db)
    like_repository = providers.Factory(LikeRepository, db=db)

    # Domain services (pure domain logic, no db)
    streak_policy = providers.Singleton(StreakPolicy)
    achievement_rules = providers.Singleton(
        AchievementRules,
        xp_thresholds=settings.provided.XP_ACHIEVEMENT_THRESHOLDS,
        streak_thresholds=settings.provided.STREAK_ACHIEVEMENT_THRESHOLDS,
    )
    feed_ranking_policy = providers.Singleton(NewestFirstPolicy)

    # External collaborators
    content_provider = providers.Singleton(
        AIContentProvider,
        timeout_seconds=settings.provided.CONTENT_PROVIDER_TIMEOUT_SECONDS,
        max_attempts=settings.provided.CONTENT_PROVIDER_MAX_ATTEMPTS,
    )
    like_broadcaster = providers.Singleton(LikeEventBroadcaster)

    # Identity module, application use cases
    user_use_case = providers.Factory(UserUseCase, uow=uow, user_repository=user_repository)

    # Progress module, application use cases
    progress_ledger_use_case = providers.Factory(
        ProgressLedgerUseCase,
        uow=uow,
        user_repository=user_repository,
        topic_repository=topic_repository,
        session_repository=learning_session_repository,
        achievement_repository=achievement_repository,
        streak_policy=streak_policy,
        achievement_rules=achievement_rules,
        max_retries=settings.provided.PROGRESS_UPDATE_MAX_RETRIES,
    )

    # Learning module, application use cases
    topic_use_case = providers.Factory(
        TopicUseCase,
        uow=uow,
        topic_repository=topic_repository,
        progress_ledger=progress_ledger_use_case,
        study_xp=settings.provided.TOPIC_STUDY_XP,
    )
    content_generation_use_case = providers.Factory(
        ContentGenerationUseCase,
        uow=uow,
        content_provider=content_provider,
        topic_repository=topic_repository,
        material_repository=study_material_repository,
    )
    quiz_submission_use_case = providers.Factory(
        QuizSubmissionUseCase,
        uow=uow,
        material_repository=study_material_repository,
        progress_ledger=progress_ledger_use_case,
        xp_per_correct_answer=settings.provided.QUIZ_XP_PER_CORRECT_ANSWER,
    )

    # Social module, application use cases
    like_toggle_use_case = providers.Factory(
        LikeToggleUseCase,
        uow=uow,
        post_repository=post_repository,
        like_repository=like_repository,
    )
    feed_use_case = providers.Factory(
        FeedUseCase,
        post_repository=post_repository,
        ranking_policy=feed_ranking_policy,
        max_limit=settings.provided.FEED_MAX_LIMIT,
    )
    post_use_case = providers.Factory(PostUseCase, uow=uow, post_repository=post_repository)


container = Container()
