from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from accounts import schema
from accounts.models import User
from accounts.service import backoffice as backoffice_service
from common.auth_base import PlatformAdminAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle


@api_controller("/admin/users", auth=PlatformAdminAuth(), tags=["Backoffice"])
class UserAdminController(UserAwareController):
    """User management for platform admins."""

    def get_user(self, user_id: UUID) -> User:
        return get_object_or_404(User, pk=user_id)

    @route.get("", url_name="admin_list_users", response=PaginatedResponseSchema[schema.UserSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["username", "email", "display_name", "location"])
    def list_users(self) -> QuerySet[User]:
        """All users, banned ones included."""
        return User.objects.order_by("-date_joined")

    @route.get("/{uuid:user_id}", url_name="admin_get_user", response=schema.UserSchema)
    def retrieve_user(self, user_id: UUID) -> User:
        return self.get_user(user_id)

    @route.put("/{uuid:user_id}", url_name="admin_update_user", response=schema.UserSchema, throttle=WriteThrottle())
    def update_user(self, user_id: UUID, payload: schema.AdminUserUpdateSchema) -> User:
        """Edit a user's profile or grant and revoke platform admin rights."""
        return backoffice_service.update_user(self.get_user(user_id), payload, self.user())

    @route.post(
        "/{uuid:user_id}/toggle-ban",
        url_name="admin_toggle_ban",
        response=schema.BanStatusSchema,
        throttle=WriteThrottle(),
    )
    def toggle_ban(self, user_id: UUID) -> User:
        """Ban or unban a user. Banned users cannot log in and their tokens stop working."""
        return backoffice_service.toggle_ban(self.get_user(user_id), self.user())
