def test_register_login_post_and_vote_twice(client):
    assert client.post("/users", json={"email": "a@x.com", "password": "p", "username": "a"}).status_code == 201

    login = client.post("/auth/login", json={"email": "a@x.com", "password": "p"})
    assert login.status_code == 200
    token = login.json()["data"]["token"]
    session_id = login.json()["data"]["sessionId"]
    auth = {"Authorization": f"Bearer {token}"}

    created = client.post(
        "/posts",
        json={"title": "T", "description": "D", "categories": ["sports"]},
        headers=auth,
    )
    assert created.status_code == 201

    posts = client.get("/posts").json()["data"]
    post = next(p for p in posts if p["title"] == "T")
    assert post["voteCount"] == 0

    headers = {**auth, "session": session_id}
    first = client.put(f"/posts/{post['id']}/Vote", json={"voteCount": 1}, headers=headers)
    assert first.json()["data"]["voteCount"] == 1

    # No duplicate-vote prevention: the same voter can vote again
    second = client.put(f"/posts/{post['id']}/Vote", json={"voteCount": 1}, headers=headers)
    assert second.json()["data"]["voteCount"] == 2
