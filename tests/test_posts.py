"""HTTP tests for posts and kindness toggles."""
import pytest


def _create(client, headers, content="Hello world", **extra):
    return client.post("/api/posts", json={"content": content, **extra}, headers=headers)


def test_create_post_returns_empty_collections(client, signup) -> None:
    user_id, headers = signup("Alice")
    response = _create(client, headers, "  Hello world  ")
    assert response.status_code == 201
    post = response.get_json()["post"]
    assert post["content"] == "Hello world"
    assert post["likeCount"] == 0
    assert post["commentCount"] == 0
    assert post["likes"] == []
    assert post["comments"] == []
    assert post["imageUrl"] is None
    assert post["user"] == {"id": user_id, "name": "Alice", "profilePictureUrl": None}
    assert post["createdAt"]


def test_image_url_is_trimmed(client, signup) -> None:
    _, headers = signup()
    response = _create(client, headers, imageUrl="  /uploads/sunrise.png ")
    assert response.get_json()["post"]["imageUrl"] == "/uploads/sunrise.png"


@pytest.mark.parametrize(
    "content, status",
    [
        ("", 400),
        ("   \n\t ", 400),
        (None, 400),
        (42, 400),
        ("x", 201),
        ("x" * 500, 201),
        ("  " + "x" * 500 + "  ", 201),
        ("x" * 501, 400),
    ],
)
def test_content_length_rules(client, signup, content, status) -> None:
    _, headers = signup()
    response = client.post("/api/posts", json={"content": content}, headers=headers)
    assert response.status_code == status
    if status == 400:
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_list_posts_is_public_and_newest_first(client, signup) -> None:
    _, headers = signup()
    first = _create(client, headers, "first").get_json()["post"]["id"]
    second = _create(client, headers, "second").get_json()["post"]["id"]

    response = client.get("/api/posts")
    assert response.status_code == 200
    ids = [post["id"] for post in response.get_json()["posts"]]
    assert ids == [second, first]


def test_get_post(client, signup) -> None:
    _, headers = signup()
    post_id = _create(client, headers).get_json()["post"]["id"]
    response = client.get(f"/api/posts/{post_id}", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["post"]["id"] == post_id


def test_get_missing_post_is_404(client, signup) -> None:
    _, headers = signup()
    response = client.get("/api/posts/999", headers=headers)
    assert response.status_code == 404
    assert response.get_json()["message"] == "Post not found"


def test_only_author_can_delete_post(client, signup) -> None:
    _, alice = signup("Alice")
    _, bob = signup("Bob")
    post_id = _create(client, alice).get_json()["post"]["id"]

    response = client.delete(f"/api/posts/{post_id}", headers=bob)
    assert response.status_code == 403
    assert client.get(f"/api/posts/{post_id}", headers=alice).status_code == 200

    response = client.delete(f"/api/posts/{post_id}", headers=alice)
    assert response.status_code == 200
    assert response.get_json()["message"] == "Post deleted successfully"


def test_delete_missing_post_is_404(client, signup) -> None:
    _, headers = signup()
    assert client.delete("/api/posts/12345", headers=headers).status_code == 404


def test_toggle_like_twice_restores_state(client, signup) -> None:
    alice_id, alice = signup("Alice")
    post_id = _create(client, alice).get_json()["post"]["id"]

    liked = client.post(f"/api/posts/{post_id}/like", headers=alice)
    assert liked.status_code == 200
    body = liked.get_json()
    assert body["message"] == "Kindness added"
    assert body["liked"] is True
    assert body["post"]["likeCount"] == 1
    assert body["post"]["likes"] == [alice_id]

    unliked = client.post(f"/api/posts/{post_id}/like", headers=alice).get_json()
    assert unliked["message"] == "Kindness removed"
    assert unliked["liked"] is False
    assert unliked["post"]["likeCount"] == 0
    assert unliked["post"]["likes"] == []


def test_likes_from_different_users_accumulate(client, signup) -> None:
    alice_id, alice = signup("Alice")
    bob_id, bob = signup("Bob")
    post_id = _create(client, alice).get_json()["post"]["id"]

    client.post(f"/api/posts/{post_id}/like", headers=alice)
    body = client.post(f"/api/posts/{post_id}/like", headers=bob).get_json()
    assert body["post"]["likeCount"] == 2
    assert sorted(body["post"]["likes"]) == sorted([alice_id, bob_id])


def test_like_missing_post_is_404(client, signup) -> None:
    _, headers = signup()
    assert client.post("/api/posts/404/like", headers=headers).status_code == 404


def test_feed_scenario(client, signup) -> None:
    """Create, like, unlike, comment, then delete a post."""
    _, alice = signup("Alice")
    _, bob = signup("Bob")

    created = _create(client, alice, "Hello world")
    assert created.status_code == 201
    post = created.get_json()["post"]
    assert (post["likeCount"], post["commentCount"]) == (0, 0)
    post_id = post["id"]

    assert client.post(f"/api/posts/{post_id}/like", headers=alice).get_json()["post"]["likeCount"] == 1
    assert client.post(f"/api/posts/{post_id}/like", headers=alice).get_json()["post"]["likeCount"] == 0

    comment = client.post(f"/api/posts/{post_id}/comments", json={"text": "Nice!"}, headers=bob)
    assert comment.status_code == 201
    comment_id = comment.get_json()["comment"]["id"]
    post = client.get(f"/api/posts/{post_id}", headers=alice).get_json()["post"]
    assert post["commentCount"] == 1
    assert post["comments"] == [comment_id]
    listed = client.get(f"/api/posts/{post_id}/comments", headers=alice).get_json()["comments"]
    assert [c["text"] for c in listed] == ["Nice!"]

    assert client.delete(f"/api/posts/{post_id}", headers=alice).status_code == 200
    assert client.get(f"/api/posts/{post_id}", headers=alice).status_code == 404
    assert client.get(f"/api/posts/{post_id}/comments", headers=alice).status_code == 404
    # The comment went with its post
    assert client.delete(f"/api/comments/{comment_id}", headers=bob).status_code == 404


@pytest.mark.parametrize("body", [[1, 2], "hello", 5])
def test_body_must_be_a_json_object(client, signup, body) -> None:
    _, headers = signup()
    response = client.post("/api/posts", json=body, headers=headers)
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_long_image_url_is_stored_intact(client, signup) -> None:
    _, headers = signup()
    image_url = "https://cdn.example.com/" + "a" * 3000 + ".png"
    response = _create(client, headers, imageUrl=image_url)
    assert response.status_code == 201
    post_id = response.get_json()["post"]["id"]

    fetched = client.get(f"/api/posts/{post_id}", headers=headers).get_json()["post"]
    assert fetched["imageUrl"] == image_url
