"""Tests for the site API: auth, articles, elections, alerts and team."""

ARTICLE = {
    "title": "Le budget 2025 adopté",
    "slug": "budget-2025-adopte",
    "content": "L'Assemblée a adopté le budget.",
    "excerpt": "Adoption en première lecture",
}

ELECTION = {
    "country": "France",
    "country_code": "FR",
    "title": "Législatives 2024 - 1er tour",
    "date": "2024-06-30T00:00:00",
    "type": "legislative",
    "round": 1,
    "results": [
        {"candidate": "Liste A", "party": "PA", "percentage": 33.2, "color": "#1d4ed8"},
        {"candidate": "Liste B", "party": "PB", "percentage": 28.0, "color": "#dc2626"},
        {"candidate": "Liste C", "party": "PC", "percentage": 20.8, "color": "#16a34a"},
    ],
}


# MARK: Auth

def test_login_and_me(admin_client) -> None:
    response = admin_client.get("/api/auth/me")

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "admin"
    assert body["role"] == "admin"
    assert "password_hash" not in body


def test_bad_credentials(anon_client) -> None:
    response = anon_client.post(
        "/api/auth/login", json={"username": "admin", "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert anon_client.post(
        "/api/auth/login", json={"username": "nobody", "password": "whatever"}
    ).status_code == 401
    assert anon_client.get("/api/auth/me").status_code == 401


def test_logout_clears_session(editor_client) -> None:
    assert editor_client.post("/api/auth/logout").status_code == 204
    assert editor_client.get("/api/auth/me").status_code == 401


def test_root_and_health(anon_client) -> None:
    assert anon_client.get("/health").json()["status"] == "healthy"
    assert anon_client.get("/").json()["status"] == "operational"


# MARK: Articles

def test_article_lifecycle(admin_client, anon_client, api) -> None:
    created = admin_client.post("/api/admin/articles", json=ARTICLE)
    assert created.status_code == 201
    article = created.json()
    assert article["author_id"] == api.admin_id
    assert article["view_count"] == 0

    first = anon_client.get(f"/api/articles/{ARTICLE['slug']}")
    second = anon_client.get(f"/api/articles/{ARTICLE['slug']}")
    assert first.json()["view_count"] == 1
    assert second.json()["view_count"] == 2

    updated = admin_client.put(f"/api/admin/articles/{article['id']}", json={"published": False})
    assert updated.status_code == 200
    assert anon_client.get(f"/api/articles/{ARTICLE['slug']}").status_code == 404
    assert anon_client.get("/api/articles").json()["total"] == 0
    assert admin_client.get("/api/admin/articles").json()["total"] == 1

    assert admin_client.delete(f"/api/admin/articles/{article['id']}").status_code == 204
    assert admin_client.delete(f"/api/admin/articles/{article['id']}").status_code == 404


def test_single_featured_article(admin_client, anon_client) -> None:
    first = admin_client.post("/api/admin/articles", json={**ARTICLE, "featured": True}).json()
    second = admin_client.post(
        "/api/admin/articles", json={**ARTICLE, "slug": "second-article", "featured": True}
    ).json()

    featured = anon_client.get("/api/articles/featured").json()
    assert [a["id"] for a in featured["articles"]] == [second["id"]]

    admin_client.put(f"/api/admin/articles/{first['id']}", json={"featured": True})
    featured = anon_client.get("/api/articles/featured").json()
    assert [a["id"] for a in featured["articles"]] == [first["id"]]


def test_article_filters(admin_client, anon_client) -> None:
    category = admin_client.post(
        "/api/admin/categories", json={"name": "Économie", "slug": "economie"}
    ).json()
    admin_client.post("/api/admin/articles", json={**ARTICLE, "category_id": category["id"]})
    admin_client.post(
        "/api/admin/articles",
        json={**ARTICLE, "slug": "retraites", "title": "Réforme des retraites"},
    )

    by_category = anon_client.get("/api/articles", params={"categoryId": category["id"]}).json()
    assert [a["slug"] for a in by_category["articles"]] == [ARTICLE["slug"]]

    by_search = anon_client.get("/api/articles", params={"search": "RETRAITES"}).json()
    assert [a["slug"] for a in by_search["articles"]] == ["retraites"]

    assert anon_client.get("/api/articles", params={"year": 1999}).json()["total"] == 0
    assert anon_client.get("/api/articles", params={"sort": "random"}).status_code == 422

    assert anon_client.get(f"/api/articles/by-category/{category['id']}").json()["total"] == 1
    assert anon_client.get("/api/articles/recent", params={"limit": 1}).json()["total"] == 1
    assert anon_client.get("/api/categories/economie").json()["color"] == "#FF4D4D"


def test_duplicate_article_slug_conflicts(admin_client) -> None:
    admin_client.post("/api/admin/articles", json=ARTICLE)
    assert admin_client.post("/api/admin/articles", json=ARTICLE).status_code == 409


def test_articles_admin_requires_admin(editor_client) -> None:
    assert editor_client.post("/api/admin/articles", json=ARTICLE).status_code == 403


# MARK: Elections

def test_election_results_warning(admin_client, anon_client) -> None:
    response = admin_client.post("/api/admin/elections", json=ELECTION)

    assert response.status_code == 201
    body = response.json()
    assert body["warning"] is not None
    assert "82.0%" in body["warning"]
    election_id = body["election"]["id"]

    fixed = admin_client.put(
        f"/api/admin/elections/{election_id}",
        json={"results": ELECTION["results"] + [
            {"candidate": "Liste D", "party": "PD", "percentage": 18.0, "color": "#6b7280"}
        ]},
    )
    assert fixed.status_code == 200
    assert fixed.json()["warning"] is None

    public = anon_client.get(f"/api/elections/{election_id}").json()
    assert len(public["results"]) == 4
    assert anon_client.get("/api/elections/recent").json()[0]["id"] == election_id
    assert anon_client.get("/api/elections/upcoming").json() == []

    assert admin_client.delete(f"/api/admin/elections/{election_id}").status_code == 204
    assert anon_client.get(f"/api/elections/{election_id}").status_code == 404


# MARK: Site alerts

def test_site_alert_toggle(admin_client, anon_client, api) -> None:
    low = admin_client.post("/api/admin/site-alerts", json={"message": "Maintenance ce soir"}).json()
    high = admin_client.post(
        "/api/admin/site-alerts", json={"message": "Édition spéciale", "priority": 9}
    ).json()

    assert high["created_by"] == api.admin_id
    assert high["background_color"] == "#dc2626"
    active = anon_client.get("/api/site-alerts").json()
    assert [a["id"] for a in active] == [high["id"], low["id"]]

    toggled = admin_client.patch(f"/api/admin/site-alerts/{high['id']}/toggle")
    assert toggled.json()["active"] is False
    assert [a["id"] for a in anon_client.get("/api/site-alerts").json()] == [low["id"]]
    assert len(admin_client.get("/api/admin/site-alerts").json()) == 2

    assert admin_client.post(
        "/api/admin/site-alerts", json={"message": "x", "priority": 11}
    ).status_code == 422


# MARK: Team

def test_team_page_lists_members(anon_client) -> None:
    team = anon_client.get("/api/team").json()

    assert [member["display_name"] for member in team] == ["Jeanne Dupont"]
    assert "username" not in team[0]


def test_team_application_review(admin_client, anon_client, api) -> None:
    submitted = anon_client.post("/api/team/applications", json={
        "full_name": "Léa Martin",
        "email": "lea@example.org",
        "position": "Journaliste",
        "message": "Je souhaite rejoindre la rédaction.",
    })
    assert submitted.status_code == 201
    application = submitted.json()
    assert application["status"] == "pending"

    assert anon_client.get("/api/admin/team/applications").status_code == 401

    reviewed = admin_client.patch(
        f"/api/admin/team/applications/{application['id']}/status",
        json={"status": "approved", "notes": "Entretien prévu"},
    )
    assert reviewed.status_code == 200
    assert reviewed.json()["reviewed_by"] == api.admin_id
    assert reviewed.json()["reviewed_at"] is not None

    pending = admin_client.get("/api/admin/team/applications", params={"status": "pending"})
    assert pending.json()["total"] == 0


def test_invalid_application_email(anon_client) -> None:
    response = anon_client.post("/api/team/applications", json={
        "full_name": "Léa Martin",
        "email": "pas-un-email",
        "position": "Journaliste",
        "message": "Bonjour",
    })
    assert response.status_code == 422


# MARK: Users

def test_user_management(admin_client, anon_client) -> None:
    created = admin_client.post("/api/admin/users", json={
        "username": "lmartin",
        "password": "long-enough-password",
        "display_name": "Léa Martin",
    })
    assert created.status_code == 201
    assert created.json()["role"] == "editor"

    duplicate = admin_client.post("/api/admin/users", json={
        "username": "lmartin",
        "password": "another-password",
        "display_name": "Autre",
    })
    assert duplicate.status_code == 409

    profile = admin_client.put(
        "/api/admin/users/lmartin/profile", json={"title": "Cheffe d'édition", "role": "admin"}
    )
    assert profile.json()["title"] == "Cheffe d'édition"
    assert profile.json()["role"] == "admin"

    assert admin_client.put(
        "/api/admin/users/lmartin/password", json={"password": "brand-new-password"}
    ).status_code == 204
    login = anon_client.post(
        "/api/auth/login", json={"username": "lmartin", "password": "brand-new-password"}
    )
    assert login.status_code == 200

    assert admin_client.delete("/api/admin/users/admin").status_code == 400
    assert admin_client.delete("/api/admin/users/lmartin").status_code == 204
    assert admin_client.delete("/api/admin/users/lmartin").status_code == 404
