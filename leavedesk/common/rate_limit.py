"""Rate limiting configuration using slowapi.

The module-level Limiter is attached to the app in main.py; the leave write
endpoints (submit, approve, reject) also apply ``settings.RATE_LIMIT`` per route.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from leavedesk.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT],
)
