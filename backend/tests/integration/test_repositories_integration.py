"""
Repository tests against the in-memory SQLite database.

These cover the persistence details the services rely on: lower-cased
emails, JSON columns written back after in-place edits, and the active-only
queries.
"""

import pytest

from barberx.domain.entities import Barber, CustomerProfile, Salon, User
from barberx.repositories import like_pattern
from barberx.repositories.barber_repo import BarberRepository
from barberx.repositories.customer_profile_repo import CustomerProfileRepository
from barberx.repositories.salon_repo import SalonRepository
from barberx.repositories.user_repo import UserRepository


@pytest.fixture
def owner_account(db_session):
    return UserRepository(db_session).create(
        User(name="Owen Owner", email="Owen@Example.com", role="owner", password_hash="x")
    )


@pytest.fixture
def stored_salon(db_session, owner_account):
    return SalonRepository(db_session).create(
        Salon(
            owner_id=owner_account.id,
            salon_name="Fade Factory",
            address="12 Main Street",
            phone_number="555-0101",
            services=[{"name": "Haircut", "price": 25, "duration": 30, "description": None}],
        )
    )


class TestLikePattern:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("fade", "%fade%"),
            ("50%", "%50\\%%"),
            ("a_b", "%a\\_b%"),
            ("c:\\d", "%c:\\\\d%"),
        ],
    )
    def test_wildcards_are_escaped(self, query, expected):
        assert like_pattern(query) == expected

    def test_salon_search_is_literal(self, db_session, stored_salon):
        repo = SalonRepository(db_session)

        assert [s.salon_name for s in repo.search("factory")] == ["Fade Factory"]
        assert repo.search("%%") == []
        assert repo.search("F_de") == []


class TestUserRepository:
    def test_email_is_stored_lower_case(self, db_session, owner_account):
        repo = UserRepository(db_session)

        assert owner_account.email == "owen@example.com"
        assert repo.get_by_email("OWEN@EXAMPLE.COM").id == owner_account.id

    def test_password_update_clears_reset_token(self, db_session, owner_account):
        from datetime import datetime, timedelta, timezone

        repo = UserRepository(db_session)
        expires = datetime.now(timezone.utc) + timedelta(hours=1)
        repo.set_reset_token(owner_account.id, "abc123", expires)
        assert repo.get_by_reset_token("abc123").id == owner_account.id

        assert repo.update_password(owner_account.id, "new-hash") is True
        assert repo.get_by_reset_token("abc123") is None

    def test_update_password_unknown_user(self, db_session):
        assert UserRepository(db_session).update_password(999, "hash") is False


class TestSalonRepository:
    def test_in_place_service_edit_is_persisted(self, db_session, stored_salon):
        repo = SalonRepository(db_session)

        stored_salon.services[0]["price"] = 30
        stored_salon.services.append({"name": "Shave", "price": 15, "duration": 20})
        repo.update(stored_salon)
        db_session.expire_all()

        services = repo.get_by_id(stored_salon.id).services
        assert [s["price"] for s in services] == [30, 15]

    def test_returned_lists_are_copies(self, db_session, stored_salon):
        repo = SalonRepository(db_session)
        fetched = repo.get_by_id(stored_salon.id)
        fetched.services.clear()

        assert len(repo.get_by_id(stored_salon.id).services) == 1

    def test_listing_and_status_setters(self, db_session, stored_salon):
        repo = SalonRepository(db_session)

        assert repo.set_listing_status(stored_salon.id, "listed").listing_status == "listed"
        assert repo.set_status(stored_salon.id, "approved").status == "approved"
        assert repo.set_status(999, "approved") is None
        assert [s.id for s in repo.list_salons(status="approved", listing_status="listed")] == [
            stored_salon.id
        ]

    def test_update_requires_id(self, db_session, owner_account):
        salon = Salon(owner_id=owner_account.id, salon_name="No Id", address="Somewhere")
        with pytest.raises(ValueError, match="Salon ID is required for update"):
            SalonRepository(db_session).update(salon)

    def test_delete_removes_barbers(self, db_session, stored_salon):
        barbers = BarberRepository(db_session)
        barber = barbers.create(Barber(salon_id=stored_salon.id, name="Sam Blade"))

        assert SalonRepository(db_session).delete(stored_salon.id) is True
        assert barbers.get_by_id(barber.id) is None


class TestBarberRepository:
    def test_active_count_and_listing(self, db_session, stored_salon):
        repo = BarberRepository(db_session)
        sam = repo.create(
            Barber(salon_id=stored_salon.id, name="Sam Blade", specialties=["Fade"])
        )
        repo.create(Barber(salon_id=stored_salon.id, name="Ray Razor", specialties=["shave"]))

        repo.set_active(sam.id, False)

        assert repo.count_active_by_salon(stored_salon.id) == 1
        assert [b.name for b in repo.list_by_salon(stored_salon.id)] == ["Ray Razor"]
        assert len(repo.list_by_salon(stored_salon.id, active_only=False)) == 2

    def test_specialty_match_is_case_insensitive(self, db_session, stored_salon):
        repo = BarberRepository(db_session)
        repo.create(Barber(salon_id=stored_salon.id, name="Sam Blade", specialties=["Skin Fade"]))

        assert [b.name for b in repo.list_active(specialty="fade")] == ["Sam Blade"]
        assert repo.list_active(specialty="braids") == []

    def test_non_ascii_specialty_and_search(self, db_session, stored_salon):
        repo = BarberRepository(db_session)
        repo.create(
            Barber(salon_id=stored_salon.id, name="Lia Cor", specialties=["Coloração"])
        )

        assert [b.name for b in repo.list_active(specialty="COLORAÇÃO")] == ["Lia Cor"]
        assert [b.name for b in repo.search("ração")] == ["Lia Cor"]

    def test_top_rated_order(self, db_session, stored_salon):
        repo = BarberRepository(db_session)
        repo.create(Barber(salon_id=stored_salon.id, name="Low", rating_average=3.0))
        repo.create(Barber(salon_id=stored_salon.id, name="High", rating_average=4.8))

        assert [b.name for b in repo.top_rated(1)] == ["High"]


class TestCustomerProfileRepository:
    def test_preferences_round_trip_after_edit(self, db_session):
        customer = UserRepository(db_session).create(
            User(name="Ana Silva", email="ana@example.com", password_hash="x")
        )
        repo = CustomerProfileRepository(db_session)
        profile = repo.create(
            CustomerProfile(customer_id=customer.id, first_name="Ana", last_name="Silva")
        )

        profile.preferences["preferredSalons"].append(4)
        profile.booking_history.append({"salonId": 4, "status": "completed"})
        repo.update(profile)
        db_session.expire_all()

        stored = repo.get_by_customer_id(customer.id)
        assert stored.preferences["preferredSalons"] == [4]
        assert stored.booking_history == [{"salonId": 4, "status": "completed"}]
        assert repo.delete(stored.id) is True
        assert repo.get_by_id(stored.id) is None
