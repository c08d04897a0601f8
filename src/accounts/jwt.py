"""Single-use JWTs for e-mail flows (verification, password reset).

Read about JWT here: https://auth0.com/docs/secure/tokens/json-web-tokens/json-web-token-claims
"""

import typing as t

import jwt
import structlog
from django.conf import settings
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from ninja import Schema
from ninja.errors import HttpError
from ninja_jwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from ninja_jwt.utils import datetime_from_epoch

logger = structlog.get_logger(__name__)

T = t.TypeVar("T", bound=Schema)


def create_token(payload: dict[str, t.Any], secret: str | None = None, algorithm: str | None = None) -> str:
    """Helper function to create a JWT token.

    Args:
        payload (dict): The payload.
        secret (str): The secret key. Defaults to the Django secret key.
        algorithm (str): The algorithm. Defaults to JWT_ALGORITHM.

    Returns:
        str: The JWT token.
    """
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=algorithm or settings.JWT_ALGORITHM)


def token_to_payload(token: str, schema_class: t.Type[T]) -> T:
    """Decode a token and validate it against a schema.

    Args:
        token (str): The token to decode.
        schema_class (t.Type[Schema]): The schema to validate the token against.

    Returns:
        Schema: The decoded and validated token.
    """
    try:
        _payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM], audience=settings.JWT_AUDIENCE
        )
        return schema_class.model_validate(_payload)
    except jwt.ExpiredSignatureError:
        logger.warning("token_validation_expired", token_type=schema_class.__name__)
        raise HttpError(400, str(_("Token has expired.")))
    except Exception as e:
        logger.warning("token_validation_failed", token_type=schema_class.__name__, error=str(e))
        raise HttpError(400, str(_("Invalid token.")))


def check_blacklist(jti: str) -> None:
    """Checks if this token is present in the token blacklist.  Raises `HttpError` if so.

    A used token is refused with 400, like an expired one.
    """
    if BlacklistedToken.objects.filter(token__jti=jti).exists():
        logger.warning("token_reuse_rejected", jti=jti)
        raise HttpError(400, str(_("Token has already been used.")))


@transaction.atomic
def blacklist(token: str) -> BlacklistedToken:
    """Ensures this token is included in the outstanding token list and adds it to the blacklist."""
    payload = jwt.decode(
        token,
        key=settings.SECRET_KEY,
        audience=settings.JWT_AUDIENCE,
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_exp": False},
    )
    token_db, _ = OutstandingToken.objects.get_or_create(
        jti=payload["jti"],
        defaults={
            "token": token,
            "expires_at": datetime_from_epoch(payload["exp"]),
        },
    )
    return BlacklistedToken.objects.get_or_create(token=token_db)[0]
