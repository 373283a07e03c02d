from fastapi import APIRouter

from learnloop.config import get_settings
from learnloop.feature_flags import get_feature_flags
from learnloop.infrastructure.common.schemas.settings_schemas import (
    AppSettingsResponse,
    FeedLimits,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_app_settings() -> AppSettingsResponse:
    """
    Get public application settings.

    Clients use the feature flags to hide AI and live update features that
    this server does not offer. No user header is required.
    """
    settings = get_settings()
    return AppSettingsResponse(
        version=settings.VERSION,
        feature_flags=get_feature_flags(),
        feed_limits=FeedLimits(
            default=settings.FEED_DEFAULT_LIMIT, maximum=settings.FEED_MAX_LIMIT
        ),
    )
