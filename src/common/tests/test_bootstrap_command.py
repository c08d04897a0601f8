from io import StringIO

import pytest
from django.core.management import call_command

from accounts.models import User
from events.models import Event

pytestmark = pytest.mark.django_db


def test_bootstrap_creates_admin_and_sample_events() -> None:
    out = StringIO()

    call_command("bootstrap", "--skip-migrate", stdout=out)

    admin = User.objects.get(username="admin")
    assert admin.is_superuser
    assert admin.is_platform_admin
    assert admin.email_verified
    assert Event.objects.filter(owner=admin).exists()
    assert "default password" in out.getvalue()


def test_bootstrap_is_idempotent() -> None:
    call_command("bootstrap", "--skip-migrate", stdout=StringIO())
    count = Event.objects.count()
    out = StringIO()

    call_command("bootstrap", "--skip-migrate", stdout=out)

    assert User.objects.filter(username="admin").count() == 1
    assert Event.objects.count() == count
    assert "already exists" in out.getvalue()
