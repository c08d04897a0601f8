import typing as t
from datetime import timedelta

import pytest
from django.utils import timezone
from ninja_jwt.token_blacklist.models import OutstandingToken

from accounts.models import User
from accounts.tasks import flush_expired_tokens, send_password_reset_link, send_verification_email
from common.models import EmailLog

pytestmark = pytest.mark.django_db


def test_send_verification_email(mailoutbox: list[t.Any]) -> None:
    send_verification_email("new@example.com", "tok123")

    assert len(mailoutbox) == 1
    message = mailoutbox[0]
    assert message.subject == "Verify your EventHub email address"
    assert "/verify-email?token=tok123" in message.body
    assert EmailLog.objects.filter(subject=message.subject).exists()


def test_send_password_reset_link(mailoutbox: list[t.Any]) -> None:
    send_password_reset_link("user@example.com", "tok456")

    message = mailoutbox[0]
    assert message.subject == "Reset your EventHub password"
    assert "/reset-password?token=tok456" in message.body


def test_flush_expired_tokens(user: User) -> None:
    now = timezone.now()
    OutstandingToken.objects.create(user=user, jti="expired", token="x", expires_at=now - timedelta(minutes=1))
    OutstandingToken.objects.create(user=user, jti="valid", token="y", expires_at=now + timedelta(days=1))

    deleted = flush_expired_tokens()

    assert deleted == 1
    assert list(OutstandingToken.objects.values_list("jti", flat=True)) == ["valid"]
