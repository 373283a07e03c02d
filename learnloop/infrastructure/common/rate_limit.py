"""Shared slowapi limiter for routes that call the content provider."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from learnloop.config import get_settings

limiter = Limiter(key_func=get_remote_address, enabled=get_settings().RATE_LIMIT_ENABLED)
