from uuid import UUID

from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja_extra import api_controller, route, status

from accounts import schema
from accounts.models import User
from accounts.service import follow as follow_service
from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import WriteThrottle


@api_controller("/users", auth=ActiveUserJWTAuth(), tags=["Following"])
class FollowController(UserAwareController):
    """Follow and unfollow users."""

    @route.post(
        "/{uuid:user_id}/follow",
        url_name="follow_user",
        response={status.HTTP_201_CREATED: ResponseMessage},
        throttle=WriteThrottle(),
    )
    def follow(self, user_id: UUID) -> tuple[int, ResponseMessage]:
        """Follow a user. The followed user is notified."""
        follow_service.follow_user(self.user(), user_id)
        return status.HTTP_201_CREATED, ResponseMessage(message=str(_("Successfully followed user")))

    @route.delete(
        "/{uuid:user_id}/follow", url_name="unfollow_user", response=ResponseMessage, throttle=WriteThrottle()
    )
    def unfollow(self, user_id: UUID) -> ResponseMessage:
        follow_service.unfollow_user(self.user(), user_id)
        return ResponseMessage(message=str(_("Successfully unfollowed user")))

    @route.get(
        "/{uuid:user_id}/followers",
        url_name="user_followers",
        response=list[schema.PublicUserSchema],
        auth=OptionalAuth(),
    )
    def followers(self, user_id: UUID) -> QuerySet[User]:
        """Users following the given user, newest first."""
        return follow_service.followers(user_id)

    @route.get(
        "/{uuid:user_id}/following",
        url_name="user_following",
        response=list[schema.PublicUserSchema],
        auth=OptionalAuth(),
    )
    def following(self, user_id: UUID) -> QuerySet[User]:
        """Users the given user follows, newest first."""
        return follow_service.following(user_id)

    @route.get("/{uuid:user_id}/is-following", url_name="is_following", response=schema.FollowStatusSchema)
    def is_following(self, user_id: UUID) -> schema.FollowStatusSchema:
        return schema.FollowStatusSchema(is_following=follow_service.is_following(self.user(), user_id))

    @route.get("/{uuid:user_id}/friendship", url_name="friendship", response=schema.FriendshipSchema)
    def friendship(self, user_id: UUID) -> schema.FriendshipSchema:
        """Whether the caller and the given user follow each other."""
        return schema.FriendshipSchema(are_friends=follow_service.are_friends(self.user(), user_id))


@api_controller("/friends", auth=ActiveUserJWTAuth(), tags=["Following"])
class FriendsController(UserAwareController):
    @route.get("", url_name="friends", response=list[schema.PublicUserSchema])
    def friends(self) -> QuerySet[User]:
        """Users the caller follows who follow the caller back."""
        return follow_service.friends(self.user())
