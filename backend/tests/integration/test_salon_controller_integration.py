"""
Integration tests for the salon controller.
"""

import pytest


@pytest.mark.salon
class TestSalonProfile:
    def test_create_salon(self, owner, sample_salon_data):
        response = owner.post("/api/salon", json=sample_salon_data)

        assert response.status_code == 201
        body = response.get_json()
        assert body["message"] == "Salon created successfully"
        salon = body["data"]
        assert salon["ownerId"] == owner.user_id
        assert salon["status"] == "pending"
        assert salon["listingStatus"] == "notListed"
        assert salon["location"] == {"type": "Point", "coordinates": [-97.7431, 30.2672]}
        assert [s["name"] for s in salon["services"]] == ["Haircut", "Beard Trim"]
        assert salon["operatingHours"][0]["isClosed"] is False

    def test_second_salon_is_a_conflict(self, salon_owner, sample_salon_data):
        response = salon_owner.post("/api/salon", json=sample_salon_data)
        assert response.status_code == 409
        assert response.get_json()["error"] == "Owner already has a salon profile"

    def test_create_validation(self, owner):
        response = owner.post("/api/salon", json={"salonName": "X", "address": "Main"})

        assert response.status_code == 400
        errors = response.get_json()["errors"]
        assert "Salon name is required and must be at least 2 characters long" in errors
        assert "Phone number is required" in errors

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"services": None}, "Services must be an array"),
            ({"services": "Cut"}, "Services must be an array"),
            ({"operatingHours": "Monday"}, "Operating hours must be an array"),
        ],
    )
    def test_create_rejects_wrong_collection_types(
        self, owner, sample_salon_data, overrides, message
    ):
        response = owner.post("/api/salon", json=dict(sample_salon_data, **overrides))

        assert response.status_code == 400
        body = response.get_json()
        assert body["message"] == "Validation failed"
        assert body["errors"] == [message]

    def test_update_rejects_wrong_collection_types(self, salon_owner):
        response = salon_owner.put(
            "/api/salon/my-salon", json={"amenities": "wifi", "location": "downtown"}
        )

        assert response.status_code == 400
        assert response.get_json()["errors"] == [
            "Amenities must be an array",
            "Location must be an object",
        ]

    def test_my_salon_missing(self, owner):
        response = owner.get("/api/salon/my-salon")
        assert response.status_code == 404
        assert response.get_json()["error"] == "Salon not found"

    def test_update_ignores_protected_fields(self, salon_owner):
        response = salon_owner.put(
            "/api/salon/my-salon",
            json={
                "description": "Now with espresso",
                "status": "approved",
                "listingStatus": "listed",
            },
        )

        assert response.status_code == 200
        salon = response.get_json()["data"]
        assert salon["description"] == "Now with espresso"
        assert salon["status"] == "pending"
        assert salon["listingStatus"] == "notListed"

    def test_delete_my_salon(self, salon_owner):
        response = salon_owner.delete("/api/salon/my-salon")
        assert response.status_code == 200
        assert response.get_json()["message"] == "Salon deleted successfully"
        assert salon_owner.get("/api/salon/my-salon").status_code == 404

    def test_customer_is_rejected(self, customer, sample_salon_data):
        assert customer.post("/api/salon", json=sample_salon_data).status_code == 403


@pytest.mark.salon
class TestSalonServices:
    def test_add_update_remove_service(self, salon_owner):
        response = salon_owner.post(
            "/api/salon/services", json={"name": "Hot Towel Shave", "price": 30, "duration": 40}
        )
        assert response.status_code == 201
        assert len(response.get_json()["data"]["services"]) == 3

        response = salon_owner.put(
            "/api/salon/services/2", json={"name": "Hot Towel Shave", "price": 35, "duration": 40}
        )
        assert response.status_code == 200
        assert response.get_json()["data"]["services"][2]["price"] == 35

        response = salon_owner.delete("/api/salon/services/0")
        assert response.status_code == 200
        names = [s["name"] for s in response.get_json()["data"]["services"]]
        assert names == ["Beard Trim", "Hot Towel Shave"]

    def test_service_index_out_of_range(self, salon_owner):
        response = salon_owner.delete("/api/salon/services/9")
        assert response.status_code == 404
        assert response.get_json()["error"] == "Service not found"

    def test_service_validation(self, salon_owner):
        response = salon_owner.post("/api/salon/services", json={"name": "Cut", "price": 0})
        assert response.status_code == 400
        assert "Service price is required and must be a positive number" in (
            response.get_json()["errors"]
        )


@pytest.mark.salon
class TestSalonListings:
    def test_status_update(self, salon_owner):
        response = salon_owner.put(
            f"/api/salon/{salon_owner.salon_id}/status", json={"status": "approved"}
        )
        assert response.status_code == 200
        assert response.get_json()["data"]["status"] == "approved"

        approved = salon_owner.get("/api/salon/approved").get_json()
        assert approved["count"] == 1

    def test_invalid_status(self, salon_owner):
        response = salon_owner.put(
            f"/api/salon/{salon_owner.salon_id}/status", json={"status": "open"}
        )
        assert response.status_code == 400

    def test_status_of_unknown_salon(self, owner):
        response = owner.put("/api/salon/999/status", json={"status": "approved"})
        assert response.status_code == 404

    def test_all_filters_by_status(self, salon_owner):
        assert salon_owner.get("/api/salon/all").get_json()["count"] == 1
        assert salon_owner.get("/api/salon/all?status=approved").get_json()["count"] == 0
        listed = salon_owner.get("/api/salon/all?listingStatus=notListed").get_json()
        assert listed["count"] == 1

    def test_get_by_id(self, salon_owner):
        response = salon_owner.get(f"/api/salon/{salon_owner.salon_id}")
        assert response.status_code == 200
        assert response.get_json()["data"]["salonName"] == "Fade Factory"
        assert salon_owner.get("/api/salon/999").status_code == 404


def _list_salon(owner, barber_data):
    owner.put(f"/api/salon/{owner.salon_id}/status", json={"status": "approved"})
    response = owner.post("/api/owner/barber", json=barber_data)
    assert response.status_code == 201


@pytest.mark.salon
class TestSalonDiscovery:
    def test_search_requires_two_characters(self, salon_owner):
        response = salon_owner.get("/api/salon/search?q=f")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Search query must be at least 2 characters long"

    def test_search_only_returns_listed_salons(self, salon_owner, sample_barber_data):
        assert salon_owner.get("/api/salon/search?q=fade").get_json()["count"] == 0

        _list_salon(salon_owner, sample_barber_data)
        body = salon_owner.get("/api/salon/search?q=FADE").get_json()
        assert body["count"] == 1

    def test_nearby_includes_distance(self, salon_owner, sample_barber_data):
        _list_salon(salon_owner, sample_barber_data)

        response = salon_owner.get(
            "/api/salon/nearby?latitude=30.2672&longitude=-97.7500&maxDistance=5000"
        )

        assert response.status_code == 200
        salons = response.get_json()["data"]
        assert len(salons) == 1
        assert 0 < salons[0]["distance"] < 1000

    def test_nearby_excludes_far_salons(self, salon_owner, sample_barber_data):
        _list_salon(salon_owner, sample_barber_data)
        response = salon_owner.get(
            "/api/salon/nearby?latitude=40.7128&longitude=-74.0060"
        )
        assert response.get_json()["count"] == 0

    def test_nearby_requires_coordinates(self, owner):
        response = owner.get("/api/salon/nearby?latitude=30.1")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Latitude and longitude are required"

    def test_nearby_rejects_non_numeric(self, owner):
        response = owner.get("/api/salon/nearby?latitude=north&longitude=1")
        assert response.status_code == 400

    def test_search_treats_wildcards_literally(self, salon_owner, sample_barber_data):
        _list_salon(salon_owner, sample_barber_data)

        assert salon_owner.get("/api/salon/search?q=%25%25").get_json()["count"] == 0
        assert salon_owner.get("/api/salon/search?q=__").get_json()["count"] == 0
        assert salon_owner.get("/api/salon/search?q=Factory").get_json()["count"] == 1
