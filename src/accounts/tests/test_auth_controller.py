import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import Profile

pytestmark = pytest.mark.django_db


class TestRegister:
    def test_register(self, anon_client: Client) -> None:
        # Arrange
        payload = {
            "username": "erin",
            "email": "erin@example.com",
            "password": "Very-secret-pass-42",
            "first_name": "Erin",
            "last_name": "Example",
            "terms_accepted": True,
        }

        # Act
        response = anon_client.post(reverse("api:register"), data=orjson.dumps(payload), content_type="application/json")

        # Assert
        assert response.status_code == 201
        assert response.json() == {"message": "erin"}
        assert Profile.objects.filter(username="erin").exists()

    def test_register_without_terms(self, anon_client: Client) -> None:
        payload = {
            "username": "erin",
            "email": "erin@example.com",
            "password": "Very-secret-pass-42",
            "first_name": "Erin",
            "last_name": "Example",
            "terms_accepted": False,
        }

        response = anon_client.post(reverse("api:register"), data=orjson.dumps(payload), content_type="application/json")

        assert response.status_code == 400
        assert not Profile.objects.filter(username="erin").exists()


class TestTokenPair:
    def test_obtain_token_pair(self, anon_client: Client, profile: Profile) -> None:
        response = anon_client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": "alice", "password": "password"}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert {"access", "refresh"} <= set(response.json())

    def test_wrong_password(self, anon_client: Client, profile: Profile) -> None:
        response = anon_client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": "alice", "password": "wrong"}),
            content_type="application/json",
        )

        assert response.status_code == 401
