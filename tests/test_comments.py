import pytest

POST = {"title": "T", "description": "D", "categories": ["sports"]}


@pytest.fixture
def post_id(client, login):
    session = login()
    return client.post("/posts", json=POST, headers=session["auth"]).json()["data"]["id"]


def add_comment(client, session, post_id, description="nice"):
    return client.post(f"/posts/{post_id}/comments", json={"description": description}, headers=session["headers"])


def test_add_and_fetch_comment(client, login, post_id):
    session = login()
    response = add_comment(client, session, post_id)

    assert response.status_code == 201
    comment_id = response.json()["data"]["id"]
    comment = client.get(f"/comments/{comment_id}").json()["data"]
    assert comment["description"] == "nice"
    assert comment["postId"] == post_id
    assert comment["createdBy"] == session["user_id"]
    assert comment["voteCount"] == 0


def test_add_comment_needs_logged_session(client, login, post_id):
    session = login()
    response = client.post(f"/posts/{post_id}/comments", json={"description": "x"}, headers=session["auth"])
    assert response.status_code == 401


def test_add_comment_to_missing_post(client, login):
    session = login()
    assert add_comment(client, session, "ghost").status_code == 404


def test_add_comment_requires_description(client, login, post_id):
    session = login()
    response = client.post(f"/posts/{post_id}/comments", json={}, headers=session["headers"])
    assert response.status_code == 400


def test_get_missing_comment(client):
    response = client.get("/comments/ghost")
    assert response.status_code == 404
    assert response.json()["message"] == "Comment not found"


def test_comments_of_post(client, login, post_id):
    session = login()
    first = add_comment(client, session, post_id, "one").json()["data"]["id"]
    second = add_comment(client, session, post_id, "two").json()["data"]["id"]

    data = client.get(f"/PostComments/{post_id}/comments").json()["data"]

    assert data["id"] == post_id
    assert {c["id"] for c in data["comments"]} == {first, second}
    assert client.get("/PostComments/ghost/comments").json()["data"]["comments"] == []


def test_update_comment_is_admin_or_owner(client, login, post_id):
    owner = login()
    other = login(email="b@x.com", username="b")
    admin = login(email="root@x.com", username="root", admin=True)
    comment_id = add_comment(client, owner, post_id).json()["data"]["id"]

    assert client.put(f"/comments/{comment_id}", json={"description": "x"}, headers=other["auth"]).status_code == 403
    mine = client.put(f"/comments/{comment_id}", json={"description": "edited"}, headers=owner["auth"])
    assert mine.status_code == 200
    assert mine.json()["data"]["description"] == "edited"
    assert client.put(f"/comments/{comment_id}", json={"description": "mod"}, headers=admin["auth"]).status_code == 200
    assert client.get(f"/comments/{comment_id}").json()["data"]["description"] == "mod"


def test_update_comment_requires_string_description(client, login, post_id):
    session = login()
    comment_id = add_comment(client, session, post_id).json()["data"]["id"]
    response = client.put(f"/comments/{comment_id}", json={"description": 5}, headers=session["auth"])
    assert response.status_code == 400


def test_update_and_delete_missing_comment(client, login):
    session = login()
    assert client.put("/comments/ghost", json={"description": "x"}, headers=session["auth"]).status_code == 404
    assert client.delete("/comments/ghost", headers=session["auth"]).status_code == 404


def test_vote_comment(client, login, post_id):
    session = login()
    comment_id = add_comment(client, session, post_id).json()["data"]["id"]
    url = f"/comments/{comment_id}/Vote"

    assert client.put(url, json={"voteCount": 1}, headers=session["headers"]).json()["data"]["voteCount"] == 1
    assert client.put(url, json={"voteCount": 1}, headers=session["headers"]).json()["data"]["voteCount"] == 2
    assert client.put(url, json={"voteCount": 5}, headers=session["headers"]).json()["data"]["voteCount"] == 2
    assert client.put(url, json={"voteCount": -1}, headers=session["headers"]).json()["data"]["voteCount"] == 1
    assert client.put("/comments/ghost/Vote", json={"voteCount": 1}, headers=session["headers"]).status_code == 404


def test_delete_comment(client, login, post_id):
    session = login()
    comment_id = add_comment(client, session, post_id).json()["data"]["id"]

    assert client.delete(f"/comments/{comment_id}", headers=session["auth"]).status_code == 200
    assert client.get(f"/comments/{comment_id}").status_code == 404


def test_deleting_a_post_keeps_its_comments(client, login):
    session = login()
    post_id = client.post("/posts", json=POST, headers=session["auth"]).json()["data"]["id"]
    comment_id = add_comment(client, session, post_id).json()["data"]["id"]

    assert client.delete(f"/posts/{post_id}", headers=session["auth"]).status_code == 200
    assert client.get(f"/comments/{comment_id}").status_code == 200
