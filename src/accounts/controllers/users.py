from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja import Query
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from accounts import schema
from accounts.models import User
from accounts.service import account as account_service
from accounts.service import users as users_service
from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle


@api_controller("/users", auth=OptionalAuth(), tags=["Users"])
class UserController(UserAwareController):
    """User directory and profiles.

    Static routes are declared before /{uuid:user_id}.
    """

    @route.get("", url_name="list_users", response=PaginatedResponseSchema[schema.PublicUserSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["username", "display_name", "bio"])
    def list_users(self) -> QuerySet[User]:
        """Browse users. Use `search` to filter by username, display name or bio."""
        return users_service.list_users()

    @route.get("/search", url_name="search_users", response=list[schema.UserSearchResultSchema])
    def search_users(
        self,
        params: schema.UserSearchFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> list[User]:
        """Find users whose username, display name, bio or email contains `query`.

        `location` narrows the results down to users whose location contains it. With neither
        parameter the result is empty. Signed-in callers see whether they follow each result.
        """
        return users_service.search_users(params.query, params.location, self.maybe_user())

    @route.put(
        "/profile",
        url_name="update_profile",
        response=schema.UserSchema,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def update_profile(self, payload: schema.ProfileUpdateSchema) -> User:
        """Update the caller's profile. Only the fields that are sent are changed.

        Changing the email address requires verifying it again.
        """
        return account_service.update_profile(self.user(), payload)

    @route.get("/{uuid:user_id}", url_name="get_user", response=schema.UserProfileSchema)
    def get_user(self, user_id: UUID) -> User:
        """Public profile with follower, following and event counts."""
        return get_object_or_404(users_service.profiles(), pk=user_id)
