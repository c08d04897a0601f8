from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.auth import AuthController
from accounts.controllers.backoffice import UserAdminController
from accounts.controllers.following import FollowController, FriendsController
from accounts.controllers.users import UserController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers import EVENTS_CONTROLLERS
from events.service.paystack_client import PaystackError
from notifications.controllers.notification_controller import NotificationController

from .exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_paystack_error,
)

api = NinjaExtraAPI(
    title="EventHub API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"EventHub API {settings.VERSION}",
    app_name=f"eventhub-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Account controllers
    AuthController,
    UserController,
    FollowController,
    FriendsController,
    UserAdminController,
    # Event controllers, in path resolution order
    *EVENTS_CONTROLLERS,
    # Notification controllers
    NotificationController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    PaystackError: handle_paystack_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
