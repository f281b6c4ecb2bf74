"""Tests for tags API endpoints."""

import pytest
from linkshelf.models.link import Link
from linkshelf.models.tag import Tag


@pytest.mark.unit
class TestListTags:
    def test_get_tags(self, client, auth_headers, test_link):
        response = client.get("/api/tags", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        tag = data[0]
        assert tag["name"] == "Technology"
        assert tag["linkCount"] == 1
        assert tag["links"] == [
            {"id": test_link.id, "url": "https://reactjs.org", "title": "React Documentation"}
        ]
        assert "createdAt" in tag

    def test_get_tags_requires_auth(self, client):
        response = client.get("/api/tags")

        assert response.status_code == 401
        assert "error" in response.json()

    def test_tags_ordered_by_name(self, client, auth_headers, db_session, test_user):
        for name in ["zeta", "Alpha", "beta"]:
            db_session.add(Tag(user_id=test_user.id, name=name))
        db_session.commit()

        data = client.get("/api/tags", headers=auth_headers).json()

        assert [tag["name"] for tag in data] == ["Alpha", "beta", "zeta"]

    def test_tags_scoped_to_owner(self, client, auth_headers, test_tag, other_tag):
        data = client.get("/api/tags", headers=auth_headers).json()

        assert [tag["id"] for tag in data] == [test_tag.id]


@pytest.mark.unit
class TestCreateTag:
    def test_create_tag(self, client, auth_headers):
        response = client.post("/api/tags", json={"name": "Reading"}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert "id" in data
        assert data["name"] == "Reading"
        assert data["links"] == []
        assert data["linkCount"] == 0

    def test_create_strips_whitespace(self, client, auth_headers):
        response = client.post(
            "/api/tags", json={"name": "  Reading  "}, headers=auth_headers
        )

        assert response.json()["name"] == "Reading"

    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}, {"name": "x" * 51}])
    def test_create_validation(self, client, auth_headers, body):
        response = client.post("/api/tags", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_create_duplicate_name(self, client, auth_headers, test_tag):
        response = client.post(
            "/api/tags", json={"name": "Technology"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Tag name already exists for this user"}

    def test_duplicate_check_ignores_case(self, client, auth_headers):
        first = client.post("/api/tags", json={"name": "Python"}, headers=auth_headers)
        second = client.post("/api/tags", json={"name": "pYTHON"}, headers=auth_headers)

        assert first.status_code == 201
        assert second.status_code == 400

    def test_same_name_for_different_users(
        self, client, auth_headers, other_auth_headers
    ):
        mine = client.post("/api/tags", json={"name": "Shared"}, headers=auth_headers)
        theirs = client.post(
            "/api/tags", json={"name": "Shared"}, headers=other_auth_headers
        )

        assert mine.status_code == 201
        assert theirs.status_code == 201


@pytest.mark.unit
class TestUpdateTag:
    def test_update_tag(self, client, auth_headers, test_tag):
        response = client.put(
            f"/api/tags/{test_tag.id}", json={"name": "Tech"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Tech"

    def test_change_case_of_own_name(self, client, auth_headers, test_tag):
        response = client.put(
            f"/api/tags/{test_tag.id}", json={"name": "technology"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "technology"

    def test_rename_to_existing_name(
        self, client, auth_headers, db_session, test_user, test_tag
    ):
        news = Tag(user_id=test_user.id, name="News")
        db_session.add(news)
        db_session.commit()

        response = client.put(
            f"/api/tags/{news.id}", json={"name": "TECHNOLOGY"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Tag name already exists for this user"}

    def test_update_blank_name(self, client, auth_headers, test_tag):
        response = client.put(
            f"/api/tags/{test_tag.id}", json={"name": " "}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_update_nonexistent_tag(self, client, auth_headers):
        response = client.put(
            "/api/tags/999999", json={"name": "Updated"}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Tag not found"}

    def test_update_other_users_tag(self, client, auth_headers, other_tag):
        response = client.put(
            f"/api/tags/{other_tag.id}", json={"name": "Mine now"}, headers=auth_headers
        )

        assert response.status_code == 403
        assert "error" in response.json()


@pytest.mark.unit
class TestDeleteTag:
    def test_delete_tag(self, client, auth_headers, db_session, test_tag):
        tag_id = test_tag.id

        response = client.delete(f"/api/tags/{tag_id}", headers=auth_headers)

        assert response.status_code == 200
        assert "message" in response.json()
        db_session.expire_all()
        assert db_session.get(Tag, tag_id) is None

    def test_delete_detaches_from_links(
        self, client, auth_headers, db_session, test_user, test_link
    ):
        tag_id = test_link.tags[0].id
        second = Link(
            user_id=test_user.id,
            url="https://vuejs.org",
            title="Vue",
            tags=[test_link.tags[0]],
        )
        db_session.add(second)
        db_session.commit()

        response = client.delete(f"/api/tags/{tag_id}", headers=auth_headers)

        assert response.status_code == 200
        links = client.get("/api/links", headers=auth_headers).json()["links"]
        assert len(links) == 2
        assert all(link["tags"] == [] for link in links)

    def test_delete_nonexistent_tag(self, client, auth_headers):
        response = client.delete("/api/tags/999999", headers=auth_headers)

        assert response.status_code == 404

    def test_delete_other_users_tag(self, client, auth_headers, db_session, other_tag):
        response = client.delete(f"/api/tags/{other_tag.id}", headers=auth_headers)

        assert response.status_code == 403
        db_session.expire_all()
        assert db_session.get(Tag, other_tag.id) is not None

    def test_delete_requires_auth(self, client, test_tag):
        response = client.delete(f"/api/tags/{test_tag.id}")

        assert response.status_code == 401
