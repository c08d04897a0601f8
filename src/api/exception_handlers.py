"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.service.paystack_client import PaystackError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    metadata = {
        "headers": obfuscate(dict(request.headers)),
        "method": request.method,
        "path": request.path,
        "GET": obfuscate(request.GET.dict()),
        # note: we can do request.user because we set the user in the auth flow
        "user": str(request.user) if getattr(request, "user", None) else None,
    }
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            metadata["json_payload"] = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            metadata["json_payload"] = None
    logger.exception("internal_server_error", exc_info=exc, **metadata)
    data = {"detail": "Internal Server Error."}
    is_admin = getattr(getattr(request, "user", None), "is_platform_admin", False)
    if settings.DEBUG or is_admin:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("validation_error", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(t.cast(ValidationError, exc).messages)}
    return Response(status=400, data={"errors": error_dict})


def handle_paystack_error(request: HttpRequest, exc: PaystackError | t.Type[PaystackError]) -> Response:
    """Paystack could not be reached or refused the request."""
    logger.error(
        "paystack_request_failed",
        path=request.path,
        status_code=getattr(exc, "status_code", None),
        reason=getattr(exc, "reason", None),
    )
    return Response(status=502, data={"detail": str(exc)})


SENSITIVE_KEYS = {"password", "password2", "token", "refresh", "x-api-key", "authorization", "x-paystack-signature"}


def obfuscate(data: t.Any) -> t.Any:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
