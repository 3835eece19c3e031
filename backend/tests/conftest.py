"""
Central pytest configuration for the BarberX backend tests.

Environment variables are set before any application module is imported so
that the lazy engine, the limiter and the config constants pick up test
values.
"""

import os
import sys
from pathlib import Path

import pytest

# Add backend/ to sys.path so ``barberx`` and ``tests`` import without install
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

# Test database configuration (set early so import-time config uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["LOG_TO_FILE"] = "0"
os.environ["FLASK_SECRET_KEY"] = "test-secret-key"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ.setdefault("LOYALTY_POINTS_PER_COMPLETED_BOOKING", "10")

from tests.config.markers import *  # noqa: E402,F401,F403
from tests.fixtures.integration_fixtures import *  # noqa: E402,F401,F403


# =====================================================
# BASIC MOCK FIXTURES
# =====================================================


@pytest.fixture
def mock_user_repo():
    from tests.factories.repository_factories import UserRepositoryFactory

    return UserRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_salon_repo():
    from tests.factories.repository_factories import SalonRepositoryFactory

    return SalonRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_barber_repo():
    from tests.factories.repository_factories import BarberRepositoryFactory

    return BarberRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_profile_repo():
    from tests.factories.repository_factories import CustomerProfileRepositoryFactory

    return CustomerProfileRepositoryFactory.create_mock_full()
