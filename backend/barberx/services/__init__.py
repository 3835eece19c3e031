# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import auth_service
from . import barber_service
from . import customer_profile_service
from . import salon_service

__all__ = [
    "auth_service",
    "barber_service",
    "customer_profile_service",
    "salon_service",
]
