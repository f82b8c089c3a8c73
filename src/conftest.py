"""
Fixtures shared by the tests of all apps.
"""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken

from accounts.models import Profile
from events.models import Event, EventTeamMember, Organization, OrganizationMember


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttling state lives in the cache; start every test from a clean slate."""
    cache.clear()


@pytest.fixture(autouse=True)
def image_settings(settings: t.Any, tmp_path: t.Any) -> None:
    """Deterministic image URLs and a throwaway media root."""
    settings.STORAGE_PUBLIC_BASE_URL = "https://storage.test/public"
    settings.IMGPROXY_URL = "https://img.test"
    settings.IMGPROXY_KEY = ""
    settings.IMGPROXY_SALT = ""
    settings.MEDIA_ROOT = str(tmp_path / "media")


class ProfileFactory:
    """Factory for creating Profile instances for testing."""

    fake = faker.Faker()

    def create_profile(self, **kwargs: t.Any) -> Profile:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@example.com")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return Profile.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            terms_accepted=True,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> Profile:
        return self.create_profile(**kwargs)


@pytest.fixture
def profile_factory() -> ProfileFactory:
    return ProfileFactory()


@pytest.fixture
def profile(profile_factory: ProfileFactory) -> Profile:
    return profile_factory(username="alice", first_name="Alice")


@pytest.fixture
def other_profile(profile_factory: ProfileFactory) -> Profile:
    return profile_factory(username="bob", first_name="Bob")


def client_for(profile: Profile) -> Client:
    """API client authenticated as the given profile."""
    refresh = RefreshToken.for_user(profile)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def profile_client(profile: Profile) -> Client:
    return client_for(profile)


@pytest.fixture
def other_client(other_profile: Profile) -> Client:
    return client_for(other_profile)


@pytest.fixture
def anon_client() -> Client:
    return Client()


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )


class EventFactory:
    """Creates events whose registration is currently open."""

    def __init__(self) -> None:
        self.counter = 0

    def __call__(self, team: t.Iterable[Profile] = (), **kwargs: t.Any) -> Event:
        self.counter += 1
        now = timezone.now()
        defaults: dict[str, t.Any] = {
            "name": f"Event {self.counter}",
            "start_time": now + timedelta(days=7),
            "end_time": now + timedelta(days=7, hours=2),
            "participation_from": now - timedelta(days=1),
            "participation_until": now + timedelta(days=6),
            "published": True,
        }
        defaults.update(kwargs)
        event = Event.objects.create(**defaults)
        for profile in team:
            EventTeamMember.objects.create(event=event, profile=profile, is_privileged=True)
        return event


@pytest.fixture
def event_factory() -> EventFactory:
    return EventFactory()


@pytest.fixture
def admin_profile(profile_factory: ProfileFactory) -> Profile:
    return profile_factory(username="carol", first_name="Carol")


@pytest.fixture
def admin_client(admin_profile: Profile) -> Client:
    return client_for(admin_profile)


@pytest.fixture
def event(event_factory: EventFactory, admin_profile: Profile) -> Event:
    """A published event with open registration, administered by admin_profile."""
    return event_factory(
        team=[admin_profile],
        name="Community Summit",
        subline="All together",
        venue_city="Berlin",
        conference_link="https://meet.example.com/summit",
        conference_code="4711",
        visibility_settings={"subline": True, "venue_city": True},
    )


@pytest.fixture
def organization(admin_profile: Profile) -> Organization:
    organization = Organization.objects.create(
        name="Open Source Club",
        bio="We write code",
        city="Hamburg",
        email="club@example.com",
        visibility_settings={"city": True},
    )
    OrganizationMember.objects.create(organization=organization, profile=admin_profile, is_privileged=True)
    return organization
