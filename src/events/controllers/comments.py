from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route

from common.authentication import ActiveUserJWTAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import WriteThrottle
from events import models, schema
from events.service import comment_service


@api_controller("/comments", auth=ActiveUserJWTAuth(), tags=["Event Social"], throttle=WriteThrottle())
class CommentController(UserAwareController):
    def get_comment(self, comment_id: UUID) -> models.Comment:
        return get_object_or_404(models.Comment.objects.select_related("user", "event"), pk=comment_id)

    @route.put("/{uuid:comment_id}", url_name="update_comment", response=schema.CommentSchema)
    def update_comment(self, comment_id: UUID, payload: schema.CommentEditSchema) -> models.Comment:
        """Edit one of your comments."""
        return comment_service.update_comment(self.get_comment(comment_id), self.user(), payload.content)

    @route.delete("/{uuid:comment_id}", url_name="delete_comment", response=ResponseMessage)
    def delete_comment(self, comment_id: UUID) -> ResponseMessage:
        """Delete a comment. Allowed for its author, the event owner and platform admins."""
        comment_service.delete_comment(self.get_comment(comment_id), self.user())
        return ResponseMessage(message="Comment deleted successfully")
