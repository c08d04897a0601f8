import typing as t
from unittest.mock import MagicMock, patch

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import User, UserFollow
from events.models import Event

pytestmark = pytest.mark.django_db


def test_list_users_is_public_and_paginated(anon_client: Client, user: User, other_user: User) -> None:
    response = anon_client.get(reverse("api:list_users"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    usernames = [u["username"] for u in data["results"]]
    assert usernames == ["otheruser", "testuser"]
    assert "email" not in data["results"][0]


def test_list_users_hides_banned(anon_client: Client, user: User, other_user: User) -> None:
    other_user.is_banned = True
    other_user.save()

    response = anon_client.get(reverse("api:list_users"))

    assert [u["username"] for u in response.json()["results"]] == ["testuser"]


def test_list_users_search(anon_client: Client, user_factory: t.Any) -> None:
    user_factory(username="thandi", display_name="Thandi Nkosi")
    user_factory(username="pieter", display_name="Pieter van Wyk")

    response = anon_client.get(reverse("api:list_users"), {"search": "nkosi"})

    assert [u["username"] for u in response.json()["results"]] == ["thandi"]


def test_search_users_without_criteria_is_empty(anon_client: Client, user: User) -> None:
    response = anon_client.get(reverse("api:search_users"))

    assert response.status_code == 200
    assert response.json() == []


def test_search_users_by_query_and_location(anon_client: Client, user_factory: t.Any) -> None:
    user_factory(username="lerato", location="Cape Town")
    user_factory(username="lebo", location="Pretoria")

    response = anon_client.get(reverse("api:search_users"), {"query": "le", "location": "cape"})

    data = response.json()
    assert [u["username"] for u in data] == ["lerato"]
    assert data[0]["is_following"] is False


def test_search_users_reports_follow_state(user_client: Client, user: User, user_factory: t.Any) -> None:
    followed = user_factory(username="followed_one", location="Durban")
    UserFollow.objects.create(follower=user, following=followed)

    response = user_client.get(reverse("api:search_users"), {"location": "durban"})

    data = response.json()
    assert len(data) == 1
    assert data[0]["is_following"] is True
    assert data[0]["followers_count"] == 1


def test_get_user_profile_counts_events(anon_client: Client, event: Event, organizer: User) -> None:
    response = anon_client.get(reverse("api:get_user", kwargs={"user_id": organizer.id}))

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "organizer"
    assert data["events_count"] == 1
    assert data["followers_count"] == 0


def test_get_user_not_found(anon_client: Client) -> None:
    response = anon_client.get(reverse("api:get_user", kwargs={"user_id": "00000000-0000-4000-8000-000000000000"}))

    assert response.status_code == 404


def test_update_profile_requires_auth(anon_client: Client) -> None:
    response = anon_client.put(
        reverse("api:update_profile"), data=orjson.dumps({"bio": "hi"}), content_type="application/json"
    )

    assert response.status_code == 401


@patch("accounts.tasks.send_verification_email.delay")
def test_update_profile(mock_send: MagicMock, user_client: Client, user: User) -> None:
    payload = {"display_name": "Test User", "gender": "female", "date_of_birth": "1990-05-17"}

    response = user_client.put(
        reverse("api:update_profile"), data=orjson.dumps(payload), content_type="application/json"
    )

    assert response.status_code == 200
    data = response.json()
    assert data["display_name"] == "Test User"
    assert data["gender"] == "female"
    assert data["date_of_birth"] == "1990-05-17"
    assert data["email_verified"] is True
    mock_send.assert_not_called()


def test_update_profile_future_birth_date(user_client: Client) -> None:
    payload = {"date_of_birth": "2999-01-01"}

    response = user_client.put(
        reverse("api:update_profile"), data=orjson.dumps(payload), content_type="application/json"
    )

    assert response.status_code == 422
