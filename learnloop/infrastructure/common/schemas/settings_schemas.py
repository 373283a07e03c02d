from pydantic import BaseModel, Field

from learnloop.feature_flags import FeatureFlags


class FeedLimits(BaseModel):
    default: int = Field(..., description="Feed page size when no limit is given")
    maximum: int = Field(..., description="Larger requested limits are clamped to this")


class AppSettingsResponse(BaseModel):
    """Public, non-user-specific application settings."""

    version: str
    feature_flags: FeatureFlags = Field(..., description="All feature flags")
    feed_limits: FeedLimits
