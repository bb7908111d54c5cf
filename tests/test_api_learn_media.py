"""Tests for the "Learn" section, flash infos and short videos."""

TOPIC = {
    "title": "Les institutions",
    "slug": "institutions",
    "description": "Comprendre la Ve République",
    "image_url": "https://cdn.example.org/institutions.png",
    "icon": "Landmark",
}


def _lesson(topic_id: int, slug: str, **overrides) -> dict:
    lesson = {
        "title": f"Leçon {slug}",
        "slug": slug,
        "content": "Le Parlement vote la loi.",
        "summary": "Le rôle du Parlement",
        "image_url": "https://cdn.example.org/parlement.png",
        "topic_id": topic_id,
    }
    lesson.update(overrides)
    return lesson


# MARK: Educational content

def test_topics_are_listed_in_display_order(admin_client, anon_client, api) -> None:
    admin_client.post(
        "/api/admin/educational-topics", json={**TOPIC, "slug": "elections", "display_order": 2}
    )
    created = admin_client.post("/api/admin/educational-topics", json={**TOPIC, "display_order": 1})

    assert created.status_code == 201
    assert created.json()["color"] == "#3B82F6"
    assert created.json()["author_id"] == api.admin_id

    topics = anon_client.get("/api/educational-topics").json()
    assert [t["slug"] for t in topics] == ["institutions", "elections"]
    assert anon_client.get("/api/educational-topics/institutions").json()["icon"] == "Landmark"
    assert anon_client.get("/api/educational-topics/inconnu").status_code == 404


def test_content_filtered_by_category(admin_client, anon_client) -> None:
    category = admin_client.post(
        "/api/admin/categories", json={"name": "Institutions", "slug": "institutions"}
    ).json()
    topic = admin_client.post("/api/admin/educational-topics", json=TOPIC).json()

    filed = admin_client.post(
        "/api/admin/educational-content",
        json=_lesson(topic["id"], "parlement", category_id=category["id"]),
    )
    assert filed.status_code == 201
    admin_client.post("/api/admin/educational-content", json=_lesson(topic["id"], "senat"))
    admin_client.post(
        "/api/admin/educational-content",
        json=_lesson(topic["id"], "brouillon", category_id=category["id"], published=False),
    )

    by_category = anon_client.get(
        "/api/educational-content", params={"categoryId": category["id"]}
    ).json()
    assert [lesson["slug"] for lesson in by_category["content"]] == ["parlement"]

    by_topic = anon_client.get("/api/educational-content", params={"topicId": topic["id"]}).json()
    assert by_topic["total"] == 2
    assert admin_client.get("/api/admin/educational-content").json()["total"] == 3


def test_get_content_by_id(admin_client, anon_client) -> None:
    topic = admin_client.post("/api/admin/educational-topics", json=TOPIC).json()
    lesson = admin_client.post(
        "/api/admin/educational-content", json=_lesson(topic["id"], "parlement")
    ).json()

    found = anon_client.get(f"/api/educational-content/{lesson['id']}")
    assert found.status_code == 200
    assert found.json()["summary"] == "Le rôle du Parlement"
    assert (found.json()["likes"], found.json()["views"]) == (0, 0)

    admin_client.put(f"/api/admin/educational-content/{lesson['id']}", json={"published": False})
    assert anon_client.get(f"/api/educational-content/{lesson['id']}").status_code == 404
    assert anon_client.get("/api/educational-content/999").status_code == 404
    assert anon_client.get("/api/educational-content/abc").status_code == 422


def test_content_requires_existing_topic(admin_client) -> None:
    response = admin_client.post("/api/admin/educational-content", json=_lesson(999, "orpheline"))
    assert response.status_code == 404


def test_content_patch_rejects_nulls(admin_client) -> None:
    topic = admin_client.post("/api/admin/educational-topics", json=TOPIC).json()
    lesson = admin_client.post(
        "/api/admin/educational-content", json=_lesson(topic["id"], "parlement")
    ).json()

    response = admin_client.put(
        f"/api/admin/educational-content/{lesson['id']}", json={"title": None}
    )
    assert response.status_code == 422


def test_topic_with_lessons_cannot_be_deleted(admin_client) -> None:
    topic = admin_client.post("/api/admin/educational-topics", json=TOPIC).json()
    lesson = admin_client.post(
        "/api/admin/educational-content", json=_lesson(topic["id"], "parlement")
    ).json()

    conflict = admin_client.delete(f"/api/admin/educational-topics/{topic['id']}")
    assert conflict.status_code == 409

    assert admin_client.delete(f"/api/admin/educational-content/{lesson['id']}").status_code == 204
    assert admin_client.delete(f"/api/admin/educational-topics/{topic['id']}").status_code == 204
    assert admin_client.delete(f"/api/admin/educational-topics/{topic['id']}").status_code == 404


def test_learn_admin_requires_admin(editor_client) -> None:
    assert editor_client.post("/api/admin/educational-topics", json=TOPIC).status_code == 403


# MARK: Flash infos

def test_only_active_flash_infos_are_listed(admin_client, anon_client) -> None:
    low = admin_client.post(
        "/api/admin/flash-infos", json={"title": "Remaniement", "content": "Nouveau gouvernement"}
    ).json()
    high = admin_client.post(
        "/api/admin/flash-infos",
        json={"title": "Dissolution", "content": "L'Assemblée est dissoute", "priority": 5},
    ).json()
    hidden = admin_client.post(
        "/api/admin/flash-infos",
        json={"title": "Archive", "content": "Ancienne info", "active": False},
    ).json()

    active = anon_client.get("/api/flash-infos").json()
    assert [f["id"] for f in active] == [high["id"], low["id"]]
    assert len(admin_client.get("/api/admin/flash-infos").json()) == 3

    assert anon_client.get(f"/api/flash-infos/{hidden['id']}").json()["title"] == "Archive"
    assert anon_client.get("/api/flash-infos/999").status_code == 404


def test_flash_info_update_and_delete(admin_client, anon_client) -> None:
    flash = admin_client.post(
        "/api/admin/flash-infos", json={"title": "Remaniement", "content": "Nouveau gouvernement"}
    ).json()

    updated = admin_client.put(f"/api/admin/flash-infos/{flash['id']}", json={"active": False})
    assert updated.json()["active"] is False
    assert anon_client.get("/api/flash-infos").json() == []

    assert admin_client.put(
        f"/api/admin/flash-infos/{flash['id']}", json={"content": None}
    ).status_code == 422

    assert admin_client.delete(f"/api/admin/flash-infos/{flash['id']}").status_code == 204
    assert anon_client.get(f"/api/flash-infos/{flash['id']}").status_code == 404


# MARK: Videos

def test_videos_newest_first_and_view_count(admin_client, anon_client) -> None:
    older = admin_client.post("/api/admin/videos", json={
        "title": "Questions au gouvernement",
        "video_id": "dQw4w9WgXcQ",
        "published_at": "2024-01-10T12:00:00",
    }).json()
    newer = admin_client.post("/api/admin/videos", json={
        "title": "Le budget en 60 secondes",
        "video_id": "abc_DEF-123",
        "published_at": "2024-03-01T08:00:00",
    }).json()

    assert [v["id"] for v in anon_client.get("/api/videos").json()] == [newer["id"], older["id"]]
    assert [v["id"] for v in anon_client.get("/api/videos", params={"limit": 1}).json()] == [newer["id"]]

    assert anon_client.get(f"/api/videos/{older['id']}").json()["views"] == 1
    assert anon_client.get(f"/api/videos/{older['id']}").json()["views"] == 2
    assert anon_client.get("/api/videos/999").status_code == 404


def test_video_id_must_be_a_youtube_id(admin_client) -> None:
    response = admin_client.post("/api/admin/videos", json={
        "title": "Lien complet",
        "video_id": "https://youtu.be/dQw4w9WgXcQ",
    })
    assert response.status_code == 422
