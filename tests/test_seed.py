"""The demo data should produce a feed that looks like a real one."""
from seed.seed import insert_seed_data


def test_seed_inserts_a_welcome_post_once(client) -> None:
    assert insert_seed_data() is True
    assert insert_seed_data() is False

    posts = client.get("/api/posts").get_json()["posts"]
    assert len(posts) == 1
    welcome = posts[0]
    assert welcome["user"]["name"] == "ShareSpace Guide"
    assert welcome["likeCount"] == 1
    assert welcome["commentCount"] == 1

    login = client.post("/api/auth/login", json={"email": "member@example.com", "password": "password"})
    assert login.status_code == 200
