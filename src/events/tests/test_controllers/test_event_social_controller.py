import typing as t

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import User
from events.models import Comment, Event, EventAttendee
from notifications.enums import NotificationType
from notifications.models import Notification

pytestmark = pytest.mark.django_db


def _json(payload: dict[str, t.Any]) -> dict[str, t.Any]:
    return {"data": orjson.dumps(payload), "content_type": "application/json"}


class TestComments:
    def test_add_comment_notifies_owner(
        self, user_client: Client, user: User, event: Event, django_capture_on_commit_callbacks: t.Any
    ) -> None:
        with django_capture_on_commit_callbacks(execute=True):
            response = user_client.post(
                reverse("api:add_comment", kwargs={"event_id": event.id}), **_json({"content": "Lekker!"})
            )

        assert response.status_code == 201
        data = response.json()
        assert data["content"] == "Lekker!"
        assert data["user"]["username"] == "testuser"
        notification = Notification.objects.get()
        assert notification.user_id == event.owner_id
        assert notification.notification_type == NotificationType.NEW_COMMENT
        assert notification.related_user == user

    def test_owner_comment_does_not_notify(
        self, organizer_client: Client, event: Event, django_capture_on_commit_callbacks: t.Any
    ) -> None:
        with django_capture_on_commit_callbacks(execute=True):
            organizer_client.post(
                reverse("api:add_comment", kwargs={"event_id": event.id}), **_json({"content": "See you there"})
            )

        assert not Notification.objects.exists()

    def test_list_comments_newest_first(self, anon_client: Client, event: Event, user: User) -> None:
        Comment.objects.create(event=event, user=user, content="first")
        Comment.objects.create(event=event, user=user, content="second")

        response = anon_client.get(reverse("api:list_comments", kwargs={"event_id": event.id}))

        assert [c["content"] for c in response.json()] == ["second", "first"]

    def test_empty_comment_rejected(self, user_client: Client, event: Event) -> None:
        response = user_client.post(reverse("api:add_comment", kwargs={"event_id": event.id}), **_json({"content": ""}))

        assert response.status_code == 422

    def test_only_author_can_edit(self, user_client: Client, other_client: Client, event: Event, user: User) -> None:
        comment = Comment.objects.create(event=event, user=user, content="typo")
        url = reverse("api:update_comment", kwargs={"comment_id": comment.id})

        assert other_client.put(url, **_json({"content": "mine now"})).status_code == 403

        response = user_client.put(url, **_json({"content": "fixed"}))
        assert response.status_code == 200
        assert response.json()["content"] == "fixed"

    @pytest.mark.parametrize("deleter", ["user_client", "organizer_client", "admin_client"])
    def test_delete_comment_allowed(
        self, request: pytest.FixtureRequest, event: Event, user: User, deleter: str
    ) -> None:
        comment = Comment.objects.create(event=event, user=user, content="bye")
        client: Client = request.getfixturevalue(deleter)

        response = client.delete(reverse("api:delete_comment", kwargs={"comment_id": comment.id}))

        assert response.status_code == 200
        assert response.json() == {"message": "Comment deleted successfully"}
        assert not Comment.objects.filter(pk=comment.pk).exists()

    def test_delete_comment_forbidden(self, other_client: Client, event: Event, user: User) -> None:
        comment = Comment.objects.create(event=event, user=user, content="stays")

        response = other_client.delete(reverse("api:delete_comment", kwargs={"comment_id": comment.id}))

        assert response.status_code == 403


class TestRatings:
    def test_rate_and_rerate(self, user_client: Client, other_client: Client, event: Event) -> None:
        url = reverse("api:rate_event", kwargs={"event_id": event.id})

        user_client.post(url, **_json({"rating": 5}))
        other_client.post(url, **_json({"rating": 4}))
        response = user_client.post(url, **_json({"rating": 2}))

        assert response.status_code == 200
        assert response.json() == {"average": "3.00", "count": 2, "user_rating": 2}
        event.refresh_from_db()
        assert event.rating_count == 2

    def test_rounds_to_two_decimals(
        self, user_client: Client, other_client: Client, organizer_client: Client, event: Event
    ) -> None:
        url = reverse("api:rate_event", kwargs={"event_id": event.id})
        for client, rating in ((user_client, 5), (other_client, 4), (organizer_client, 4)):
            client.post(url, **_json({"rating": rating}))

        response = user_client.get(reverse("api:get_ratings", kwargs={"event_id": event.id}))

        assert response.json() == {"average": "4.33", "count": 3, "user_rating": 5}

    def test_anonymous_summary(self, anon_client: Client, event: Event) -> None:
        response = anon_client.get(reverse("api:get_ratings", kwargs={"event_id": event.id}))

        assert response.json() == {"average": "0.00", "count": 0, "user_rating": None}

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range(self, user_client: Client, event: Event, rating: int) -> None:
        url = reverse("api:rate_event", kwargs={"event_id": event.id})
        response = user_client.post(url, **_json({"rating": rating}))

        assert response.status_code == 422


class TestAttendance:
    def test_set_and_get_attendance(
        self, user_client: Client, user: User, event: Event, django_capture_on_commit_callbacks: t.Any
    ) -> None:
        with django_capture_on_commit_callbacks(execute=True):
            response = user_client.post(
                reverse("api:set_attendance", kwargs={"event_id": event.id}), **_json({"status": "going"})
            )

        assert response.json() == {"status": "going", "attendees_count": 1}
        response = user_client.get(reverse("api:get_attendance", kwargs={"event_id": event.id}))
        assert response.json() == {"status": "going"}
        notification = Notification.objects.get()
        assert notification.notification_type == NotificationType.ATTENDANCE_UPDATE
        assert notification.title == "New Attendee"

    def test_no_attendance(self, user_client: Client, event: Event) -> None:
        response = user_client.get(reverse("api:get_attendance", kwargs={"event_id": event.id}))

        assert response.json() == {"status": None}

    def test_leaving_updates_count(self, user_client: Client, user: User, event: Event) -> None:
        url = reverse("api:set_attendance", kwargs={"event_id": event.id})
        user_client.post(url, **_json({"status": "going"}))

        response = user_client.post(url, **_json({"status": "not_going"}))

        assert response.json() == {"status": "not_going", "attendees_count": 0}

    def test_full_event(self, user_client: Client, other_user: User, event: Event) -> None:
        event.max_attendees = 1
        event.save()
        EventAttendee.objects.create(event=event, user=other_user, status=EventAttendee.Status.GOING)

        response = user_client.post(
            reverse("api:set_attendance", kwargs={"event_id": event.id}), **_json({"status": "going"})
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Event is full"

    def test_interested_allowed_when_full(self, user_client: Client, other_user: User, event: Event) -> None:
        event.max_attendees = 1
        event.save()
        EventAttendee.objects.create(event=event, user=other_user, status=EventAttendee.Status.GOING)

        response = user_client.post(
            reverse("api:set_attendance", kwargs={"event_id": event.id}), **_json({"status": "interested"})
        )

        assert response.status_code == 200

    def test_list_attendees(self, anon_client: Client, user: User, other_user: User, event: Event) -> None:
        EventAttendee.objects.create(event=event, user=user, status=EventAttendee.Status.GOING)
        EventAttendee.objects.create(event=event, user=other_user, status=EventAttendee.Status.INTERESTED)

        response = anon_client.get(reverse("api:list_attendees", kwargs={"event_id": event.id}))

        assert {(a["user"]["username"], a["status"]) for a in response.json()} == {
            ("testuser", "going"),
            ("otheruser", "interested"),
        }


class TestFavorites:
    def test_toggle_favorite(self, user_client: Client, event: Event) -> None:
        url = reverse("api:toggle_favorite", kwargs={"event_id": event.id})

        response = user_client.put(url)
        assert response.json() == {"is_favorited": True, "message": "Event added to favorites"}
        assert user_client.get(reverse("api:favorite_status", kwargs={"event_id": event.id})).json() == {
            "is_favorited": True
        }
        assert [e["id"] for e in user_client.get(reverse("api:my_favorites")).json()] == [str(event.id)]

        response = user_client.put(url)
        assert response.json() == {"is_favorited": False, "message": "Event removed from favorites"}
        assert user_client.get(reverse("api:my_favorites")).json() == []
