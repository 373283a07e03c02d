"""Server capabilities advertised to clients through ``GET /settings``."""

from typing import Literal

from pydantic import BaseModel, Field

from learnloop.config import get_settings


class FeatureFlags(BaseModel):
    ai: bool = Field(..., description="Whether AI content generation is enabled")
    live_updates: bool = Field(..., description="Whether the /ws live update channel is served")


FeatureFlagKey = Literal["ai", "live_updates"]


def get_feature_flags() -> FeatureFlags:
    """Derive the flags from the current settings; nothing is cached here."""
    settings = get_settings()
    return FeatureFlags(ai=settings.ai_enabled, live_updates=settings.LIVE_UPDATES_ENABLED)


def get_feature_flag(key: FeatureFlagKey) -> bool:
    return bool(getattr(get_feature_flags(), key))
