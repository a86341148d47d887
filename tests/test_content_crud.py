def _create(client, path: str, payload: dict) -> dict:
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_project_lifecycle(owner_client):
    created = _create(
        owner_client,
        "/api/projects",
        {"title": "Portfolio", "technologies": ["python", "fastapi"], "featured": True},
    )
    assert created["technologies"] == ["python", "fastapi"]
    assert created["status"] == "completed"

    fetched = owner_client.get(f"/api/projects/{created['id']}").json()["data"]
    assert fetched["title"] == "Portfolio"

    updated = owner_client.put(f"/api/projects/{created['id']}", json={"status": "in_progress"})
    assert updated.status_code == 200
    assert updated.json()["message"] == "Project updated successfully"
    assert updated.json()["data"]["status"] == "in_progress"
    assert updated.json()["data"]["title"] == "Portfolio"

    deleted = owner_client.delete(f"/api/projects/{created['id']}")
    assert deleted.json() == {"success": True, "data": None, "message": "Project deleted successfully"}

    missing = owner_client.get(f"/api/projects/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "Project not found"


def test_project_listing_filters_and_order(owner_client):
    _create(owner_client, "/api/projects", {"title": "Side project"})
    _create(owner_client, "/api/projects", {"title": "Flagship", "featured": True})
    _create(owner_client, "/api/projects", {"title": "Idea", "status": "planned"})

    titles = [row["title"] for row in owner_client.get("/api/projects").json()["data"]]
    assert titles[0] == "Flagship"
    assert len(titles) == 3

    featured = owner_client.get("/api/projects", params={"featured": "true"}).json()["data"]
    assert [row["title"] for row in featured] == ["Flagship"]

    planned = owner_client.get("/api/projects", params={"status": "planned"}).json()["data"]
    assert [row["title"] for row in planned] == ["Idea"]

    limited = owner_client.get("/api/projects", params={"limit": "1"}).json()["data"]
    assert len(limited) == 1


def test_project_validation_errors_are_400(owner_client):
    response = owner_client.post("/api/projects", json={"description": "no title"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "title" in body["error"]

    response = owner_client.post("/api/projects", json={"title": "x", "status": "abandoned"})
    assert response.status_code == 400


def test_content_writes_require_owner(client):
    assert client.post("/api/projects", json={"title": "x"}).status_code == 401
    assert client.put("/api/education/1", json={"degree": "x"}).status_code == 401
    assert client.delete("/api/certificates/1").status_code == 401
    assert client.post("/api/skills", json={"name": "x"}).status_code == 401


def test_update_and_delete_of_missing_rows_are_404(owner_client):
    assert owner_client.put("/api/education/12345", json={"degree": "MSc"}).status_code == 404
    assert owner_client.delete("/api/skills/12345").status_code == 404


def test_education_and_certificates_ordered_newest_first(owner_client):
    _create(owner_client, "/api/education", {"institution": "A", "degree": "BSc", "start_date": "2015-09-01"})
    _create(owner_client, "/api/education", {"institution": "B", "degree": "MSc", "start_date": "2020-09-01"})
    _create(
        owner_client,
        "/api/certificates",
        {"title": "Old", "issuing_organization": "Org", "issue_date": "2019-01-10"},
    )
    _create(
        owner_client,
        "/api/certificates",
        {"title": "New", "issuing_organization": "Org", "issue_date": "2024-05-02"},
    )

    education = owner_client.get("/api/education").json()["data"]
    assert [row["institution"] for row in education] == ["B", "A"]

    certificates = owner_client.get("/api/certificates").json()["data"]
    assert [row["title"] for row in certificates] == ["New", "Old"]


def test_skills_filter_by_category(owner_client):
    _create(owner_client, "/api/skills", {"name": "SQL", "category": "data", "proficiency_level": 80})
    _create(owner_client, "/api/skills", {"name": "Python", "category": "languages"})
    _create(owner_client, "/api/skills", {"name": "Go", "category": "languages"})

    languages = owner_client.get("/api/skills", params={"category": "languages"}).json()["data"]
    assert [row["name"] for row in languages] == ["Go", "Python"]

    response = owner_client.post("/api/skills", json={"name": "Rust", "proficiency_level": 101})
    assert response.status_code == 400


def test_dashboard_stats_counts_content(owner_client):
    _create(owner_client, "/api/projects", {"title": "One"})
    _create(owner_client, "/api/projects", {"title": "Two"})
    _create(owner_client, "/api/education", {"institution": "A", "degree": "BSc"})

    response = owner_client.get("/api/dashboard/stats")

    assert response.status_code == 200
    assert response.json()["data"] == {"projects": 2, "education": 1, "certificates": 0}


def test_dashboard_stats_requires_owner(client):
    assert client.get("/api/dashboard/stats").status_code == 401
