from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

# Counters live in Redis so limits hold across workers.
# key_func: one bucket per client IP (visitors are anonymous)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.REDIS_URL
)
