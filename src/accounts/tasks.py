"""Tasks for the accounts app."""

import structlog
from celery import shared_task
from django.template.loader import render_to_string
from ninja_jwt.token_blacklist.models import OutstandingToken
from ninja_jwt.utils import aware_utcnow

from common.models import SiteSettings
from common.tasks import send_email

logger = structlog.get_logger(__name__)


@shared_task
def send_verification_email(email: str, token: str) -> None:
    """Send a verification email."""
    logger.info("verification_email_sending", email=email)
    subject = str(render_to_string("accounts/emails/email_verification_subject.txt")).strip()
    verification_link = SiteSettings.get_solo().frontend_base_url + f"/verify-email?token={token}"
    body = render_to_string("accounts/emails/email_verification_body.txt", {"verification_link": verification_link})
    html_body = render_to_string(
        "accounts/emails/email_verification_body.html", {"verification_link": verification_link}
    )
    send_email(to=email, subject=subject, body=body, html_body=html_body)
    logger.info("verification_email_sent", email=email)


@shared_task
def send_password_reset_link(email: str, token: str) -> None:
    """Send a password reset email."""
    logger.info("password_reset_email_sending", email=email)
    subject = str(render_to_string("accounts/emails/password_reset_subject.txt")).strip()
    password_reset_link = SiteSettings.get_solo().frontend_base_url + f"/reset-password?token={token}"
    body = render_to_string("accounts/emails/password_reset_body.txt", {"password_reset_link": password_reset_link})
    html_body = render_to_string(
        "accounts/emails/password_reset_body.html", {"password_reset_link": password_reset_link}
    )
    send_email(to=email, subject=subject, body=body, html_body=html_body)
    logger.info("password_reset_email_sent", email=email)


@shared_task
def flush_expired_tokens() -> int:
    """Delete expired refresh tokens from the outstanding token list.

    Blacklist entries of those tokens go with them. Scheduled daily with Celery beat.
    """
    deleted, _ = OutstandingToken.objects.filter(expires_at__lte=aware_utcnow()).delete()
    logger.info("expired_tokens_flushed", deleted=deleted)
    return deleted
