"""HTTP tests for the login stub and the bulletin board."""

from __future__ import annotations

import pytest

from classhq.services.auth import login, role_for


@pytest.mark.parametrize(
    "username,role",
    [
        ("admin", "OFFICER"),
        (" Admin ", "OFFICER"),
        ("Class Officer", "OFFICER"),
        ("treasurer_OFFICER", "OFFICER"),
        ("administrator", "STUDENT"),
        ("Juan", "STUDENT"),
    ],
)
def test_role_for(username, role):
    assert role_for(username) == role


def test_login_builds_user():
    user = login("  Maria  Clara ")

    assert user.id == "maria__clara"
    assert user.username == "Maria  Clara"
    assert "name=Maria++Clara" in user.avatar


def test_login_rejects_blank():
    with pytest.raises(ValueError):
        login("   ")


class TestAuthRoutes:
    def test_login_and_me(self, client):
        response = client.post("/auth/login", json={"username": "admin"})

        assert response.status_code == 200
        assert client.get("/auth/me").get_json()["role"] == "OFFICER"

    def test_blank_login_is_rejected(self, client):
        assert client.post("/auth/login", json={"username": ""}).status_code == 400
        assert client.get("/auth/me").status_code == 401

    def test_logout_clears_session(self, student_client):
        assert student_client.post("/auth/logout").status_code == 204
        assert student_client.get("/auth/me").status_code == 401


class TestBulletinRoutes:
    def test_announcements_newest_first(self, officer_client, app):
        first = officer_client.post("/bulletin/announcements", json={"title": "A", "content": "one"}).get_json()
        # Pin the first post in the past so ordering does not depend on clock resolution.
        repo = app.extensions["classhq"].bulletin_repo
        items = repo.list_announcements()
        for item in items:
            if item.id == first["id"]:
                item.date = "2000-01-01T00:00:00"
        repo.save_announcements(items)

        officer_client.post(
            "/bulletin/announcements",
            json={"title": "B", "content": "two", "isImportant": True, "tags": ["exam"]},
        )

        feed = officer_client.get("/bulletin/announcements").get_json()
        assert [a["title"] for a in feed] == ["B", "A"]
        assert feed[0]["author"] == "Class Officer"
        assert feed[0]["isImportant"] is True
        assert feed[0]["tags"] == ["exam"]

    def test_announcement_requires_title_and_content(self, officer_client):
        assert officer_client.post("/bulletin/announcements", json={"title": "A"}).status_code == 400

    def test_students_read_but_cannot_post(self, student_client):
        assert student_client.get("/bulletin/announcements").get_json() == []
        assert student_client.post("/bulletin/announcements", json={"title": "A", "content": "b"}).status_code == 403
        assert student_client.post("/bulletin/agenda", json={"title": "A", "date": "2024-01-08"}).status_code == 403

    def test_agenda_sorted_by_date_then_time(self, officer_client):
        officer_client.post("/bulletin/agenda", json={"title": "Late", "date": "2024-01-09", "time": "08:00"})
        officer_client.post("/bulletin/agenda", json={"title": "Noon", "date": "2024-01-08", "time": "12:00", "type": "exam"})
        officer_client.post("/bulletin/agenda", json={"title": "Early", "date": "2024-01-08", "time": "07:30"})

        agenda = officer_client.get("/bulletin/agenda").get_json()

        assert [a["title"] for a in agenda] == ["Early", "Noon", "Late"]
        assert agenda[1]["type"] == "EXAM"

    def test_agenda_validation(self, officer_client):
        response = officer_client.post(
            "/bulletin/agenda", json={"title": "", "date": "tomorrow", "time": "25:00", "type": "party"}
        )

        assert response.status_code == 400
        assert set(response.get_json()["fields"]) == {"title", "date", "time", "type"}

    def test_delete_items(self, officer_client):
        item = officer_client.post("/bulletin/agenda", json={"title": "X", "date": "2024-01-08"}).get_json()
        post = officer_client.post("/bulletin/announcements", json={"title": "A", "content": "b"}).get_json()

        assert officer_client.delete(f"/bulletin/agenda/{item['id']}").status_code == 204
        assert officer_client.delete(f"/bulletin/announcements/{post['id']}").status_code == 204
        assert officer_client.get("/bulletin/agenda").get_json() == []
        assert officer_client.get("/bulletin/announcements").get_json() == []
