"""
Authentication fixtures for integration tests.

``ApiActor`` registers an account through the public auth routes, logs in
and keeps the bearer headers for later calls.
"""

import itertools

import pytest

_counter = itertools.count(1)

DEFAULT_PASSWORD = "secret123"


class ApiActor:
    """A registered, logged-in account driving the API through the test client."""

    def __init__(self, client, role: str, email: str, password: str = DEFAULT_PASSWORD):
        self.client = client
        self.role = role
        self.email = email
        self.password = password
        self.user_id = None
        self.token = None

    def register(self, **extra):
        payload = {
            "name": extra.pop("name", f"Test {self.role.title()}"),
            "email": self.email,
            "password": self.password,
        }
        if self.role == "owner":
            payload["phoneNumber"] = extra.pop("phoneNumber", "555-0100")
        payload.update(extra)
        return self.client.post(f"/api/auth/signup/{self.role}", json=payload)

    def login(self):
        response = self.client.post(
            "/api/auth/login", json={"email": self.email, "password": self.password}
        )
        assert response.status_code == 200, response.get_json()
        data = response.get_json()["data"]
        self.token = data["token"]
        self.user_id = data["user"]["id"]
        return self

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.token}"}

    def get(self, path, **kwargs):
        return self.client.get(path, headers=self.headers, **kwargs)

    def post(self, path, **kwargs):
        return self.client.post(path, headers=self.headers, **kwargs)

    def put(self, path, **kwargs):
        return self.client.put(path, headers=self.headers, **kwargs)

    def delete(self, path, **kwargs):
        return self.client.delete(path, headers=self.headers, **kwargs)


def make_actor(client, role: str) -> ApiActor:
    """Register and log in a new account with a unique email."""
    actor = ApiActor(client, role, f"{role}{next(_counter)}@example.com")
    response = actor.register()
    assert response.status_code == 201, response.get_json()
    return actor.login()


@pytest.fixture
def owner(client):
    return make_actor(client, "owner")


@pytest.fixture
def other_owner(client):
    return make_actor(client, "owner")


@pytest.fixture
def customer(client):
    return make_actor(client, "customer")


@pytest.fixture
def other_customer(client):
    return make_actor(client, "customer")
