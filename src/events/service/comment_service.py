import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from events.models import Comment, Event
from notifications.service.notification_helpers import notify_new_comment

logger = structlog.get_logger(__name__)


def list_comments(event: Event) -> QuerySet[Comment]:
    return Comment.objects.filter(event=event).select_related("user").order_by("-created_at")


@transaction.atomic
def add_comment(event: Event, user: User, content: str) -> Comment:
    """Post a comment and let the event owner know."""
    comment = Comment.objects.create(event=event, user=user, content=content)
    logger.info("comment_created", comment_id=str(comment.id), event_id=str(event.id), user_id=str(user.id))
    transaction.on_commit(lambda: notify_new_comment(event, user))
    return comment


def update_comment(comment: Comment, user: User, content: str) -> Comment:
    """Edit a comment. Only its author may do so."""
    if comment.user_id != user.pk:
        raise HttpError(403, str(_("You can only edit your own comments")))
    comment.content = content
    comment.save(update_fields=["content", "updated_at"])
    return comment


def delete_comment(comment: Comment, user: User) -> None:
    """Delete a comment as its author, the event owner or a platform admin."""
    if not (comment.user_id == user.pk or comment.event.can_be_managed_by(user)):
        raise HttpError(403, str(_("You are not allowed to delete this comment")))
    logger.info("comment_deleted", comment_id=str(comment.id), user_id=str(user.id))
    comment.delete()
