"""Tests for the public and admin live coverage API."""

from conftest import run_with_session
from src.db.repositories import ArticleRepository

COVERAGE = {
    "title": "Débat budgétaire",
    "slug": "debat-budgetaire",
    "subject": "Budget 2025",
    "context": "Examen du projet de loi de finances",
}


def _make_coverage(client, **overrides) -> dict:
    response = client.post("/api/admin/live-coverages", json={**COVERAGE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def _post_update(client, coverage_id: int, **body) -> dict:
    response = client.post(f"/api/admin/live-coverages/{coverage_id}/updates", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# MARK: Authentication and roles

def test_admin_routes_require_login(anon_client) -> None:
    assert anon_client.get("/api/admin/live-coverages").status_code == 401
    assert anon_client.post("/api/admin/live-coverages", json=COVERAGE).status_code == 401


def test_readers_cannot_manage_coverages(reader_client) -> None:
    assert reader_client.get("/api/admin/live-coverages").status_code == 403
    assert reader_client.post("/api/admin/live-coverages", json=COVERAGE).status_code == 403


def test_only_admins_delete_coverages(editor_client, admin_client) -> None:
    coverage = _make_coverage(editor_client)

    assert editor_client.delete(f"/api/admin/live-coverages/{coverage['id']}").status_code == 403
    assert admin_client.delete(f"/api/admin/live-coverages/{coverage['id']}").status_code == 204
    assert admin_client.delete(f"/api/admin/live-coverages/{coverage['id']}").status_code == 404


# MARK: Coverages

def test_create_and_read_coverage(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)

    assert coverage["slug"] == "debat-budgetaire"
    assert coverage["active"] is True
    assert coverage["image_url"] is None

    by_slug = anon_client.get("/api/live-coverages/debat-budgetaire")
    assert by_slug.status_code == 200
    assert by_slug.json()["id"] == coverage["id"]

    current = anon_client.get("/api/live-coverages/current")
    assert current.status_code == 200
    assert current.json()["id"] == coverage["id"]

    listing = anon_client.get("/api/live-coverages").json()
    assert listing["total"] == 1


def test_duplicate_slug_conflicts(editor_client) -> None:
    _make_coverage(editor_client)

    response = editor_client.post("/api/admin/live-coverages", json=COVERAGE)

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


def test_invalid_slug_is_rejected(editor_client) -> None:
    response = editor_client.post(
        "/api/admin/live-coverages", json={**COVERAGE, "slug": "Débat Budgétaire"}
    )
    assert response.status_code == 422


def test_no_current_coverage(anon_client) -> None:
    assert anon_client.get("/api/live-coverages/current").status_code == 404
    assert anon_client.get("/api/live-coverages/inconnu").status_code == 404


def test_closing_a_coverage(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)

    response = editor_client.put(
        f"/api/admin/live-coverages/{coverage['id']}", json={"active": False}
    )

    assert response.status_code == 200
    assert response.json()["active"] is False
    assert response.json()["title"] == COVERAGE["title"]
    assert anon_client.get("/api/live-coverages").json()["total"] == 0


def test_active_coverage_cap_conflicts(editor_client) -> None:
    for index in range(3):
        _make_coverage(editor_client, slug=f"direct-{index}")

    response = editor_client.post(
        "/api/admin/live-coverages", json={**COVERAGE, "slug": "direct-3"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "active_coverage_limit"


def test_reactivating_past_the_cap_conflicts(editor_client, anon_client) -> None:
    archived = _make_coverage(editor_client, slug="archive", active=False)
    for index in range(3):
        _make_coverage(editor_client, slug=f"direct-{index}")

    response = editor_client.put(
        f"/api/admin/live-coverages/{archived['id']}", json={"active": True}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "active_coverage_limit"
    assert anon_client.get("/api/live-coverages").json()["total"] == 3


def test_patch_cannot_null_required_fields(editor_client) -> None:
    coverage = _make_coverage(editor_client)

    for field in ("title", "slug", "subject", "active"):
        response = editor_client.put(
            f"/api/admin/live-coverages/{coverage['id']}", json={field: None}
        )
        assert response.status_code == 422, field

    unchanged = editor_client.get(f"/api/admin/live-coverages/{coverage['id']}").json()
    assert unchanged["title"] == COVERAGE["title"]


# MARK: Feed

def test_feed_carries_author_and_polling_headers(api, editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    _post_update(editor_client, coverage["id"], content="Ouverture de la séance")
    _post_update(editor_client, coverage["id"], content="Le ministre prend la parole", important=True)

    response = anon_client.get(f"/api/live-coverages/{coverage['id']}/updates")

    assert response.status_code == 200
    assert response.headers["X-Poll-Interval"] == "60"
    assert response.headers["Cache-Control"] == "no-store"
    body = response.json()
    assert body["total"] == 2
    assert body["poll_interval_seconds"] == 60
    first = body["updates"][0]
    assert first["content"] == "Le ministre prend la parole"
    assert first["important"] is True
    assert first["author_id"] == api.editor_id
    assert first["author"]["display_name"] == "Jeanne Dupont"
    assert first["author"]["title"] == "Journaliste politique"


def test_admin_feed_uses_back_office_interval(editor_client) -> None:
    coverage = _make_coverage(editor_client)

    response = editor_client.get(f"/api/admin/live-coverages/{coverage['id']}/updates")

    assert response.status_code == 200
    assert response.headers["X-Poll-Interval"] == "10"


def test_feed_of_unknown_coverage(anon_client, editor_client) -> None:
    assert anon_client.get("/api/live-coverages/999/updates").status_code == 404
    response = editor_client.post(
        "/api/admin/live-coverages/999/updates", json={"content": "Perdu"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_youtube_update_requires_url(editor_client) -> None:
    coverage = _make_coverage(editor_client)
    url = f"/api/admin/live-coverages/{coverage['id']}/updates"

    missing = editor_client.post(url, json={"content": "Vidéo", "payload": {"kind": "youtube"}})
    assert missing.status_code == 422

    created = _post_update(
        editor_client,
        coverage["id"],
        content="Vidéo",
        payload={"kind": "youtube", "youtube_url": "https://www.youtube.com/watch?v=abc123"},
    )
    assert created["update_type"] == "youtube"
    assert created["youtube_url"] == "https://www.youtube.com/watch?v=abc123"


def test_unknown_update_kind_is_rejected(editor_client) -> None:
    coverage = _make_coverage(editor_client)

    response = editor_client.post(
        f"/api/admin/live-coverages/{coverage['id']}/updates",
        json={"content": "?", "payload": {"kind": "podcast"}},
    )

    assert response.status_code == 422


def test_article_update(api, editor_client) -> None:
    coverage = _make_coverage(editor_client)
    url = f"/api/admin/live-coverages/{coverage['id']}/updates"

    missing = editor_client.post(
        url, json={"content": "À lire", "payload": {"kind": "article", "article_id": 404}}
    )
    assert missing.status_code == 404

    async def _create_article(session):
        article = await ArticleRepository(session).create({
            "title": "Le budget expliqué", "slug": "budget-explique", "content": "...",
        })
        return article.id

    article_id = run_with_session(api.database, _create_article)

    created = _post_update(
        editor_client, coverage["id"],
        content="À lire", payload={"kind": "article", "article_id": article_id},
    )
    assert created["update_type"] == "article"
    assert created["article_id"] == article_id


def test_election_update(editor_client) -> None:
    coverage = _make_coverage(editor_client)

    created = _post_update(
        editor_client,
        coverage["id"],
        content="Premiers résultats",
        payload={
            "kind": "election",
            "election_results": {
                "title": "Législatives",
                "date": "2024-06-30",
                "type": "legislative",
                "totalVotes": 1000,
                "results": [
                    {"candidate": "A", "party": "P1", "percentage": 52.5},
                    {"candidate": "B", "party": "P2", "percentage": 47.5},
                ],
            },
        },
    )

    assert created["update_type"] == "election"
    assert '"totalVotes":1000' in created["election_results"]


def test_delete_update(editor_client) -> None:
    coverage = _make_coverage(editor_client)
    update = _post_update(editor_client, coverage["id"], content="Coquille")

    assert editor_client.delete(f"/api/admin/live-coverages/updates/{update['id']}").status_code == 204
    assert editor_client.delete(f"/api/admin/live-coverages/updates/{update['id']}").status_code == 404


# MARK: Questions

def test_visitor_questions_wait_for_moderation(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    questions_url = f"/api/live-coverages/{coverage['id']}/questions"

    response = anon_client.post(
        questions_url,
        json={"username": "Marie", "content": "Quand a lieu le vote ?", "status": "approved"},
    )

    assert response.status_code == 201
    question = response.json()
    assert question["status"] == "pending"
    assert question["answered"] is False
    assert anon_client.get(questions_url).json()["total"] == 0

    moderated = editor_client.patch(
        f"/api/admin/live-coverages/questions/{question['id']}", json={"status": "approved"}
    )
    assert moderated.status_code == 200
    assert moderated.json()["status"] == "approved"

    public = anon_client.get(questions_url).json()
    assert [q["id"] for q in public["questions"]] == [question["id"]]


def test_moderation_rejects_unknown_status(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    question = anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "Question"},
    ).json()

    response = editor_client.patch(
        f"/api/admin/live-coverages/questions/{question['id']}", json={"status": "published"}
    )

    assert response.status_code == 422


def test_admin_question_listing_filters_by_status(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    url = f"/api/live-coverages/{coverage['id']}/questions"
    first = anon_client.post(url, json={"username": "Marie", "content": "Une"}).json()
    anon_client.post(url, json={"username": "Luc", "content": "Deux"})
    editor_client.patch(f"/api/admin/live-coverages/questions/{first['id']}", json={"status": "rejected"})

    admin_url = f"/api/admin/live-coverages/{coverage['id']}/questions"
    assert editor_client.get(admin_url).json()["total"] == 2
    assert editor_client.get(admin_url, params={"status": "pending"}).json()["total"] == 1
    assert editor_client.get(admin_url, params={"status": "unknown"}).status_code == 422


def test_overlong_question_is_rejected(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)

    response = anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "x" * 1001},
    )

    assert response.status_code == 422


def test_question_to_unknown_coverage(anon_client) -> None:
    response = anon_client.post(
        "/api/live-coverages/999/questions", json={"username": "Marie", "content": "Allô ?"}
    )
    assert response.status_code == 404


def test_answering_a_question(api, editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    question = anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "Quel calendrier ?"},
    ).json()

    response = editor_client.post(
        f"/api/admin/live-coverages/questions/{question['id']}/answer",
        json={"coverage_id": coverage["id"], "content": "Le vote aura lieu mardi"},
    )

    assert response.status_code == 201
    answer = response.json()
    assert answer["is_answer"] is True
    assert answer["question_id"] == question["id"]
    assert answer["author_id"] == api.editor_id

    public = anon_client.get(f"/api/live-coverages/{coverage['id']}/questions").json()
    assert public["questions"][0]["answered"] is True
    feed = anon_client.get(f"/api/live-coverages/{coverage['id']}/updates").json()
    assert feed["updates"][0]["id"] == answer["id"]


def test_remoderating_keeps_question_answered(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    question = anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "Quel calendrier ?"},
    ).json()
    editor_client.post(
        f"/api/admin/live-coverages/questions/{question['id']}/answer",
        json={"coverage_id": coverage["id"], "content": "Le vote aura lieu mardi"},
    )

    url = f"/api/admin/live-coverages/questions/{question['id']}"
    rejected = editor_client.patch(url, json={"status": "rejected"})
    approved = editor_client.patch(url, json={"status": "approved", "answered": False})

    assert (rejected.json()["status"], rejected.json()["answered"]) == ("rejected", True)
    assert (approved.json()["status"], approved.json()["answered"]) == ("approved", True)


def test_answer_with_wrong_coverage(editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    other = _make_coverage(editor_client, slug="autre-direct")
    question = anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "Quel calendrier ?"},
    ).json()

    response = editor_client.post(
        f"/api/admin/live-coverages/questions/{question['id']}/answer",
        json={"coverage_id": other["id"], "content": "Réponse"},
    )

    assert response.status_code == 404
    assert anon_client.get(f"/api/live-coverages/{other['id']}/updates").json()["total"] == 0


# MARK: Editors

def test_editor_assignment(api, admin_client, editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    url = f"/api/admin/live-coverages/{coverage['id']}/editors"

    assert editor_client.post(url, json={"editor_id": api.editor_id}).status_code == 403

    response = admin_client.post(url, json={"editor_id": api.editor_id, "role": "Présentatrice"})
    assert response.status_code == 201

    duplicate = admin_client.post(url, json={"editor_id": api.editor_id})
    assert duplicate.status_code == 409

    public = anon_client.get(f"/api/live-coverages/{coverage['id']}/editors").json()
    assert public["total"] == 1
    assert public["editors"][0]["role"] == "Présentatrice"
    assert public["editors"][0]["editor"]["display_name"] == "Jeanne Dupont"

    assert admin_client.delete(f"{url}/{api.editor_id}").status_code == 204
    assert admin_client.delete(f"{url}/{api.editor_id}").status_code == 404


def test_deleting_coverage_removes_children(api, admin_client, editor_client, anon_client) -> None:
    coverage = _make_coverage(editor_client)
    _post_update(editor_client, coverage["id"], content="Un")
    anon_client.post(
        f"/api/live-coverages/{coverage['id']}/questions",
        json={"username": "Marie", "content": "Question"},
    )
    admin_client.post(
        f"/api/admin/live-coverages/{coverage['id']}/editors", json={"editor_id": api.editor_id}
    )

    assert admin_client.delete(f"/api/admin/live-coverages/{coverage['id']}").status_code == 204

    assert anon_client.get(f"/api/live-coverages/{coverage['id']}/updates").status_code == 404
    assert anon_client.get(f"/api/live-coverages/{coverage['id']}/editors").json()["total"] == 0
    assert editor_client.get(
        f"/api/admin/live-coverages/{coverage['id']}/questions"
    ).json()["total"] == 0
