"""
Unit tests for CustomerProfileService and loyalty tier transitions.
"""

import pytest

from barberx.core import config
from barberx.core.exceptions import ConflictError, NotFoundError
from barberx.services.customer_profile_service import CustomerProfileService
from tests.factories.repository_factories import make_profile


@pytest.fixture
def service(mock_profile_repo):
    return CustomerProfileService(mock_profile_repo)


@pytest.fixture
def profile(mock_profile_repo):
    existing = make_profile(customer_id=2)
    mock_profile_repo.get_by_customer_id.return_value = existing
    return existing


class TestProfileLifecycle:
    def test_create_profile_with_default_preferences(self, service, mock_profile_repo):
        created = service.create_profile(
            2,
            {
                "first_name": "Ana",
                "last_name": "Silva",
                "preferences": {"notifications": {"sms": True}},
                "loyalty_points": 9000,
                "membership_tier": "platinum",
            },
        )

        assert created.customer_id == 2
        assert created.loyalty_points == 0
        assert created.membership_tier == "bronze"
        assert created.preferences["notifications"] == {
            "email": True,
            "sms": True,
            "push": True,
        }
        assert created.preferences["favoriteServices"] == []

    def test_one_profile_per_customer(self, service, profile, mock_profile_repo):
        with pytest.raises(ConflictError, match="Customer already has a profile"):
            service.create_profile(2, {"first_name": "Ana", "last_name": "Silva"})
        mock_profile_repo.create.assert_not_called()

    def test_missing_profile(self, service):
        with pytest.raises(NotFoundError, match="Customer profile not found"):
            service.get_profile_by_customer_id(2)

    def test_update_cannot_touch_loyalty(self, service, profile):
        updated = service.update_profile(
            2, {"first_name": "Anna", "loyalty_points": 10000, "membership_tier": "gold"}
        )

        assert updated.first_name == "Anna"
        assert updated.loyalty_points == 0
        assert updated.membership_tier == "bronze"

    def test_update_by_id(self, service, mock_profile_repo):
        mock_profile_repo.get_by_id.return_value = make_profile(id=50)

        updated = service.update_profile_by_id(50, {"gender": "female"})

        assert updated.gender == "female"

    def test_delete_profile(self, service, profile, mock_profile_repo):
        result = service.delete_profile(2)

        assert result == {"message": "Customer profile deleted successfully"}
        mock_profile_repo.delete.assert_called_once_with(profile.id)


class TestLoyalty:
    @pytest.mark.parametrize(
        "points, tier",
        [(499, "bronze"), (500, "silver"), (2000, "gold"), (4999, "gold"), (5000, "platinum")],
    )
    def test_add_points_recomputes_tier(self, service, profile, points, tier):
        updated = service.add_loyalty_points(2, points)

        assert updated.loyalty_points == points
        assert updated.membership_tier == tier

    def test_deduct_drops_tier(self, service, mock_profile_repo):
        mock_profile_repo.get_by_customer_id.return_value = make_profile(
            loyalty_points=2100, membership_tier="gold"
        )

        updated = service.deduct_loyalty_points(2, 200)

        assert updated.loyalty_points == 1900
        assert updated.membership_tier == "silver"

    def test_deduct_below_zero_keeps_negative_balance(self, service, mock_profile_repo):
        mock_profile_repo.get_by_customer_id.return_value = make_profile(
            loyalty_points=30
        )

        updated = service.deduct_loyalty_points(2, 100)

        assert updated.loyalty_points == -70
        assert updated.membership_tier == "bronze"

    @pytest.mark.parametrize("points", [0, -5, 2.5, True, "10"])
    def test_points_must_be_positive_integers(self, service, profile, points, mock_profile_repo):
        with pytest.raises(ValueError, match="Points must be a positive number"):
            service.add_loyalty_points(2, points)
        mock_profile_repo.update.assert_not_called()

    def test_completed_booking_credits_points(self, service, profile):
        updated = service.add_booking_history(
            2,
            {"salonId": 10, "serviceId": "cut", "date": "2026-01-05T10:00:00", "status": "completed", "rating": 5},
        )

        assert updated.loyalty_points == config.LOYALTY_POINTS_PER_COMPLETED_BOOKING
        assert updated.booking_history[-1]["rating"] == 5
        assert "review" not in updated.booking_history[-1]

    def test_cancelled_booking_credits_nothing(self, service, profile):
        updated = service.add_booking_history(
            2,
            {"salonId": 10, "serviceId": "cut", "date": "2026-01-05T10:00:00", "status": "cancelled"},
        )

        assert updated.loyalty_points == 0
        assert len(updated.booking_history) == 1

    def test_booking_can_cross_a_tier_boundary(self, service, mock_profile_repo):
        mock_profile_repo.get_by_customer_id.return_value = make_profile(
            loyalty_points=500 - config.LOYALTY_POINTS_PER_COMPLETED_BOOKING
        )

        updated = service.add_booking_history(
            2,
            {"salonId": 10, "serviceId": "cut", "date": "2026-01-05", "status": "completed"},
        )

        assert updated.membership_tier == "silver"


class TestPreferences:
    def test_preferred_salons_have_set_semantics(self, service, profile):
        service.add_preferred_salon(2, 10)
        updated = service.add_preferred_salon(2, 10)

        assert updated.preferences["preferredSalons"] == [10]

        updated = service.remove_preferred_salon(2, 10)
        assert updated.preferences["preferredSalons"] == []

    def test_notification_flags_merge(self, service, profile):
        updated = service.update_notification_preferences(2, {"push": False, "fax": True})

        assert updated.preferences["notifications"] == {
            "email": True,
            "sms": False,
            "push": False,
        }

    def test_favorite_services_skip_duplicates(self, service, profile):
        service.add_favorite_service(2, "Fade")
        updated = service.add_favorite_service(2, " Fade ")

        assert updated.preferences["favoriteServices"] == ["Fade"]

        updated = service.remove_favorite_service(2, "Fade")
        assert updated.preferences["favoriteServices"] == []

    def test_emergency_contact_keeps_known_keys(self, service, profile):
        updated = service.update_emergency_contact(
            2, {"name": "Rui", "phoneNumber": "555-0111", "age": 40}
        )

        assert updated.emergency_contact == {
            "name": "Rui",
            "phoneNumber": "555-0111",
            "relationship": None,
        }

    def test_deactivate_and_reactivate(self, service, profile):
        assert service.deactivate_profile(2).is_active is False
        assert service.reactivate_profile(2).is_active is True


class TestQueries:
    def test_search_requires_two_characters(self, service):
        with pytest.raises(ValueError, match="at least 2 characters"):
            service.search_profiles("a")

    def test_tier_listing_is_active_only(self, service, mock_profile_repo):
        service.get_profiles_by_membership_tier("gold")
        mock_profile_repo.list_profiles.assert_called_once_with(
            membership_tier="gold", is_active=True
        )

    def test_unknown_tier(self, service):
        with pytest.raises(ValueError, match="Membership tier must be one of"):
            service.get_profiles_by_membership_tier("diamond")

    def test_top_loyalty_default_limit(self, service, mock_profile_repo):
        service.get_top_loyalty_customers()
        mock_profile_repo.top_loyalty.assert_called_once_with(10)
