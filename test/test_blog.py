from datetime import datetime

from sqlalchemy.orm import Session

from models import BlogPostDB

# ---------------------------------------------------------
# Helper
# ---------------------------------------------------------
def create_test_post(db: Session, slug, published=True, published_at=None, title=None):
    post = BlogPostDB(
        slug=slug,
        title=title or slug.replace("-", " ").title(),
        excerpt="A short excerpt",
        content=[{"type": "paragraph", "text": "Dough, fire and a village green."}],
        tags=["news"],
        is_published=published,
        published_at=published_at,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def post_payload(**overrides):
    payload = {
        "slug": "new-oven",
        "title": "Our new oven",
        "excerpt": "The van has a new wood-fired oven.",
        "content": [
            {"type": "paragraph", "text": "After ten years the old oven retired."},
            {"type": "image", "src": "https://example.com/oven.jpg", "alt": "The oven", "caption": "Hot"},
        ],
        "reading_time": 3,
        "tags": ["news", "kitchen"],
        "is_published": False,
    }
    payload.update(overrides)
    return payload

# =========================================================
# TEST: GET /blog
# =========================================================
def test_list_published_posts(client, db):
    create_test_post(db, "older", published_at=datetime(2024, 4, 1, 9, 0))
    create_test_post(db, "newer", published_at=datetime(2024, 5, 1, 9, 0))
    create_test_post(db, "draft", published=False)

    response = client.get("/blog")
    assert response.status_code == 200

    data = response.json()
    assert [post["slug"] for post in data["posts"]] == ["newer", "older"]
    assert data["posts"][0]["date"] == "2024-05-01"
    assert "content" not in data["posts"][0]
    assert data["pagination"]["total"] == 2

def test_list_posts_paginated(client, db):
    for day in range(1, 6):
        create_test_post(db, f"post-{day}", published_at=datetime(2024, 5, day, 9, 0))

    response = client.get("/blog", params={"page": 2, "limit": 2})

    data = response.json()
    assert [post["slug"] for post in data["posts"]] == ["post-3", "post-2"]
    assert data["pagination"]["totalPages"] == 3

# =========================================================
# TEST: GET /blog/{slug}
# =========================================================
def test_get_post_with_navigation(client, db):
    create_test_post(db, "first", published_at=datetime(2024, 4, 1, 9, 0), title="First")
    create_test_post(db, "second", published_at=datetime(2024, 5, 1, 9, 0), title="Second")
    create_test_post(db, "third", published_at=datetime(2024, 6, 1, 9, 0), title="Third")

    response = client.get("/blog/second")
    assert response.status_code == 200

    data = response.json()
    assert data["post"]["content"][0]["type"] == "paragraph"
    assert data["navigation"]["previous"] == {"slug": "first", "title": "First"}
    assert data["navigation"]["next"] == {"slug": "third", "title": "Third"}

def test_get_post_navigation_at_edges(client, db):
    create_test_post(db, "first", published_at=datetime(2024, 4, 1, 9, 0))
    create_test_post(db, "second", published_at=datetime(2024, 5, 1, 9, 0))

    assert client.get("/blog/first").json()["navigation"]["previous"] is None
    assert client.get("/blog/second").json()["navigation"]["next"] is None

def test_get_post_skips_drafts_in_navigation(client, db):
    create_test_post(db, "first", published_at=datetime(2024, 4, 1, 9, 0))
    create_test_post(db, "hidden", published=False, published_at=datetime(2024, 4, 15, 9, 0))
    create_test_post(db, "second", published_at=datetime(2024, 5, 1, 9, 0))

    navigation = client.get("/blog/second").json()["navigation"]
    assert navigation["previous"]["slug"] == "first"

def test_get_draft_post_not_found(client, db):
    create_test_post(db, "draft", published=False)

    response = client.get("/blog/draft")
    assert response.status_code == 404
    assert response.json()["detail"] == "Post not found"

def test_get_unknown_post(client):
    response = client.get("/blog/nothing-here")
    assert response.status_code == 404

# =========================================================
# TEST: admin blog
# =========================================================
def test_admin_create_post(client, admin_headers):
    response = client.post("/admin/blog", json=post_payload(), headers=admin_headers)
    assert response.status_code == 201

    post = response.json()["post"]
    assert post["is_published"] is False
    assert post["published_at"] is None
    assert post["content"][1] == {
        "type": "image",
        "src": "https://example.com/oven.jpg",
        "alt": "The oven",
        "caption": "Hot",
    }

    # drafts stay off the public site
    assert client.get("/blog/new-oven").status_code == 404

def test_admin_publish_stamps_date(client, admin_headers):
    response = client.post("/admin/blog", json=post_payload(is_published=True), headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["post"]["published_at"] is not None

    assert client.get("/blog/new-oven").status_code == 200

def test_admin_create_post_duplicate_slug(client, db, admin_headers):
    create_test_post(db, "new-oven")

    response = client.post("/admin/blog", json=post_payload(), headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "A post with this slug already exists"

def test_admin_create_post_unknown_block(client, admin_headers):
    payload = post_payload(content=[{"type": "video", "src": "https://example.com/v.mp4"}])

    response = client.post("/admin/blog", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"

def test_admin_create_post_invalid_fields(client, admin_headers):
    payload = post_payload(slug="Not A Slug", content=[], reading_time=0, tags=["x" * 51])

    response = client.post("/admin/blog", json=payload, headers=admin_headers)
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert "slug" in errors
    assert "content" in errors
    assert "reading_time" in errors

def test_admin_create_post_requires_admin(client):
    response = client.post("/admin/blog", json=post_payload())
    assert response.status_code == 401

def test_admin_list_posts_includes_drafts(client, db, admin_headers):
    create_test_post(db, "live", published_at=datetime(2024, 5, 1, 9, 0))
    create_test_post(db, "draft", published=False)

    response = client.get("/admin/blog", headers=admin_headers)
    assert response.status_code == 200
    assert {post["slug"] for post in response.json()["posts"]} == {"live", "draft"}

def test_admin_get_post(client, db, admin_headers):
    post = create_test_post(db, "draft", published=False)

    response = client.get(f"/admin/blog/{post.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["post"]["slug"] == "draft"

    assert client.get("/admin/blog/999", headers=admin_headers).status_code == 404

def test_admin_update_post(client, db, admin_headers):
    post = create_test_post(db, "new-oven", published=False)

    payload = post_payload(title="Our brand new oven", is_published=True)
    response = client.put(f"/admin/blog/{post.id}", json=payload, headers=admin_headers)
    assert response.status_code == 200

    updated = response.json()["post"]
    assert updated["title"] == "Our brand new oven"
    assert updated["is_published"] is True
    assert updated["published_at"] is not None

def test_admin_update_post_slug_taken(client, db, admin_headers):
    create_test_post(db, "taken")
    post = create_test_post(db, "new-oven")

    response = client.put(f"/admin/blog/{post.id}", json=post_payload(slug="taken"), headers=admin_headers)
    assert response.status_code == 409

def test_admin_delete_post(client, db, admin_headers):
    post = create_test_post(db, "gone", published_at=datetime(2024, 5, 1, 9, 0))

    response = client.delete(f"/admin/blog/{post.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "deleted": post.id}

    assert client.get("/blog/gone").status_code == 404
    assert client.delete(f"/admin/blog/{post.id}", headers=admin_headers).status_code == 404
