from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from barberx.core import config

# Limits applied to credential endpoints
LOGIN_LIMIT = "5 per minute;20 per hour"
PASSWORD_RESET_LIMIT = "3 per minute;10 per hour"

# Global Limiter instance imported by controllers. create_app() disables it
# when RATE_LIMIT_ENABLED=0.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per hour", "50 per minute"],
    storage_uri=config.get_limiter_storage_uri(),
    enabled=True,
)
