"""
Fixtures shared by the tests of every app.
"""

import secrets
import string
import typing as t
from datetime import date, time, timedelta
from decimal import Decimal

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import User
from eventhub.celery import app as celery_app
from events.models import Event


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits for AuthThrottle to allow testing."""
    monkeypatch.setattr("common.throttling.AuthThrottle.rate", "1000/min")
    monkeypatch.setattr("common.throttling.UserRegistrationThrottle.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> t.Iterator[None]:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    previous = celery_app.conf.task_always_eager, celery_app.conf.task_eager_propagates
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True
    yield
    celery_app.conf.task_always_eager, celery_app.conf.task_eager_propagates = previous


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttling state lives in the cache: start every test from scratch."""
    cache.clear()


class UserFactory:
    """Factory for creating User instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> User:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@example.com")
        password = kwargs.pop("password", "strong-password-123!")
        display_name = kwargs.pop("display_name", self.fake.name())
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            display_name=display_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> User:
        return self.create_user(**kwargs)


@pytest.fixture
def user_factory() -> UserFactory:
    return UserFactory()


@pytest.fixture
def user(user_factory: UserFactory) -> User:
    """A standard, non-privileged user."""
    return user_factory(username="testuser", email="testuser@example.com", email_verified=True)


@pytest.fixture
def other_user(user_factory: UserFactory) -> User:
    return user_factory(username="otheruser", email="otheruser@example.com", email_verified=True)


@pytest.fixture
def admin_user(user_factory: UserFactory) -> User:
    """A platform admin."""
    return user_factory(username="platformadmin", email="admin@example.com", is_admin=True, email_verified=True)


@pytest.fixture
def superuser(user_factory: UserFactory) -> User:
    """A superuser."""
    return user_factory(username="superuser", email="superuser@example.com", is_superuser=True, is_staff=True)


def bearer_client(user: User) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")  # type: ignore[attr-defined]


@pytest.fixture
def user_client(user: User) -> Client:
    """API client for the standard user."""
    return bearer_client(user)


@pytest.fixture
def other_client(other_user: User) -> Client:
    return bearer_client(other_user)


@pytest.fixture
def admin_client(admin_user: User) -> Client:
    """API client for the platform admin.

    Shadows pytest-django's `admin_client`, which logs in through the session.
    """
    return bearer_client(admin_user)


@pytest.fixture
def anon_client() -> Client:
    return Client()


@pytest.fixture
def organizer(user_factory: UserFactory) -> User:
    """The owner of the test events."""
    return user_factory(username="organizer", email="organizer@example.com", email_verified=True)


@pytest.fixture
def organizer_client(organizer: User) -> Client:
    return bearer_client(organizer)


@pytest.fixture
def next_week() -> date:
    return timezone.localdate() + timedelta(days=7)


@pytest.fixture
def event(organizer: User, next_week: date) -> Event:
    """A free event next week, owned by the organizer."""
    return Event.objects.create(
        owner=organizer,
        title="Braai in the Park",
        description="Bring your own meat.",
        date=next_week,
        time=time(14, 0),
        location="Cape Town",
        category="Food & Drink",
        tags="braai,outdoors",
    )


@pytest.fixture
def paid_event(organizer: User, next_week: date) -> Event:
    """A paid event next week, owned by the organizer."""
    return Event.objects.create(
        owner=organizer,
        title="Jazz Night",
        description="Live jazz on the waterfront.",
        date=next_week,
        time=time(19, 30),
        location="Durban",
        category="Music",
        tags="jazz,music",
        is_free=False,
        price=Decimal("200.00"),
    )


@pytest.fixture
def client_for() -> t.Callable[[User], Client]:
    """Build an authenticated API client for any user."""
    return bearer_client
