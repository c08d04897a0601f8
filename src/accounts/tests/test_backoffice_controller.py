import typing as t

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import User

pytestmark = pytest.mark.django_db


def test_admin_endpoints_reject_regular_users(user_client: Client, other_user: User) -> None:
    response = user_client.get(reverse("api:admin_list_users"))
    assert response.status_code == 403

    response = user_client.post(reverse("api:admin_toggle_ban", kwargs={"user_id": other_user.id}))
    assert response.status_code == 403


def test_admin_list_users_includes_banned(admin_client: Client, user: User, other_user: User) -> None:
    other_user.is_banned = True
    other_user.save()

    response = admin_client.get(reverse("api:admin_list_users"))

    assert response.status_code == 200
    usernames = {u["username"] for u in response.json()["results"]}
    assert {"testuser", "otheruser", "platformadmin"} <= usernames


def test_admin_list_users_search(admin_client: Client, user: User, other_user: User) -> None:
    response = admin_client.get(reverse("api:admin_list_users"), {"search": "otheruser@"})

    assert [u["username"] for u in response.json()["results"]] == ["otheruser"]


def test_admin_get_user_sees_private_fields(admin_client: Client, user: User) -> None:
    response = admin_client.get(reverse("api:admin_get_user", kwargs={"user_id": user.id}))

    assert response.status_code == 200
    assert response.json()["email"] == user.email


def test_admin_update_user_grants_admin(admin_client: Client, user: User) -> None:
    payload = {"is_admin": True, "display_name": "Promoted"}

    response = admin_client.put(
        reverse("api:admin_update_user", kwargs={"user_id": user.id}),
        data=orjson.dumps(payload),
        content_type="application/json",
    )

    assert response.status_code == 200
    user.refresh_from_db()
    assert user.is_admin is True
    assert user.display_name == "Promoted"


def test_admin_update_user_email_conflict(admin_client: Client, user: User, other_user: User) -> None:
    response = admin_client.put(
        reverse("api:admin_update_user", kwargs={"user_id": user.id}),
        data=orjson.dumps({"email": other_user.email}),
        content_type="application/json",
    )

    assert response.status_code == 400


def test_toggle_ban_twice(admin_client: Client, user: User) -> None:
    url = reverse("api:admin_toggle_ban", kwargs={"user_id": user.id})

    response = admin_client.post(url)
    assert response.status_code == 200
    assert response.json() == {"id": str(user.id), "username": "testuser", "is_banned": True}

    response = admin_client.post(url)
    assert response.json()["is_banned"] is False


def test_admin_cannot_ban_self(admin_client: Client, admin_user: User) -> None:
    response = admin_client.post(reverse("api:admin_toggle_ban", kwargs={"user_id": admin_user.id}))

    assert response.status_code == 400
    admin_user.refresh_from_db()
    assert admin_user.is_banned is False


def test_superuser_counts_as_platform_admin(client_for: t.Any, superuser: User, user: User) -> None:
    response = client_for(superuser).get(reverse("api:admin_get_user", kwargs={"user_id": user.id}))

    assert response.status_code == 200
