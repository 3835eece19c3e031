# Controllers package initialization
# Each module exposes one or more Flask blueprints registered by create_app()

from . import (
    account_controller,
    auth_controller,
    barber_controller,
    customer_profile_controller,
    public_controller,
    salon_controller,
)

__all__ = [
    "account_controller",
    "auth_controller",
    "barber_controller",
    "customer_profile_controller",
    "public_controller",
    "salon_controller",
]
