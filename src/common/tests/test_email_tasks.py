import typing as t
from datetime import timedelta

import pytest
from django.utils import timezone

from common.models import EmailLog, SiteSettings
from common.tasks import cleanup_email_logs, send_email, to_safe_email_address

pytestmark = pytest.mark.django_db


@pytest.fixture
def live_emails() -> SiteSettings:
    site_settings = SiteSettings.get_solo()
    site_settings.live_emails = True
    site_settings.save()
    return site_settings


def test_to_safe_email_address_rewrites_to_catchall() -> None:
    assert to_safe_email_address("thabo.m@mail.co.za") == "internal+thabo_dot_m_at_mail_dot_co_dot_za@example.com"


def test_to_safe_email_address_live(live_emails: SiteSettings) -> None:
    assert to_safe_email_address("thabo.m@mail.co.za") == "thabo.m@mail.co.za"


def test_send_email_logs_and_redirects(mailoutbox: list[t.Any]) -> None:
    send_email(to="someone@example.com", subject="Hello", body="Plain", html_body="<p>Html</p>")

    assert len(mailoutbox) == 1
    message = mailoutbox[0]
    assert message.subject == "Hello"
    assert message.bcc == ["internal+someone_at_example_dot_com@example.com"]
    assert message.alternatives[0][0] == "<p>Html</p>"

    log = EmailLog.objects.get()
    assert log.test_only is True
    assert log.body == "Plain"
    assert log.html == "<p>Html</p>"


def test_send_email_live_to_many(mailoutbox: list[t.Any], live_emails: SiteSettings) -> None:
    send_email(to=["a@example.com", "b@example.com"], subject="News", body="Body")

    assert mailoutbox[0].bcc == ["a@example.com", "b@example.com"]
    assert not mailoutbox[0].alternatives
    logs = EmailLog.objects.order_by("to")
    assert [log.to for log in logs] == ["a@example.com", "b@example.com"]
    assert all(log.test_only is False for log in logs)
    assert logs[0].html is None


def test_cleanup_email_logs() -> None:
    now = timezone.now()
    fresh = EmailLog(to="fresh@example.com", subject="fresh")
    stale = EmailLog(to="stale@example.com", subject="stale")
    old = EmailLog(to="old@example.com", subject="old")
    for log in (fresh, stale, old):
        log.set_body("body")
        log.save()
    EmailLog.objects.filter(pk=stale.pk).update(sent_at=now - timedelta(days=2))
    EmailLog.objects.filter(pk=old.pk).update(sent_at=now - timedelta(days=8))

    cleanup_email_logs()

    assert not EmailLog.objects.filter(pk=old.pk).exists()
    stale.refresh_from_db()
    assert stale.body is None
    fresh.refresh_from_db()
    assert fresh.body == "body"
