# Core package initialization
# Cross-cutting concerns: configuration, logging, security, errors, validation

from . import config, exceptions, security, validation

__all__ = [
    "config",
    "exceptions",
    "security",
    "validation",
]
