"""Per-client request limits.

Every route shares ``REQUEST_RATE_LIMIT``; sign-in has its own, much lower
``LOGIN_RATE_LIMIT``. Counters live in process memory.
"""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from program_review.config import LOGIN_REQUEST_LIMIT, RATE_LIMIT_WINDOW_MINUTES, REQUEST_LIMIT

REQUEST_RATE_LIMIT = f"{REQUEST_LIMIT} per {RATE_LIMIT_WINDOW_MINUTES} minutes"
LOGIN_RATE_LIMIT = f"{LOGIN_REQUEST_LIMIT} per {RATE_LIMIT_WINDOW_MINUTES} minutes"

limiter = Limiter(key_func=get_remote_address, default_limits=[REQUEST_RATE_LIMIT])
