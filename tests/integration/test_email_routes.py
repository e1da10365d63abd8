"""Integration tests for the HTTP surface."""

from types import SimpleNamespace

import pytest

from cold_mailer.integrations import WebPageLoader


@pytest.mark.integration
def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"Hello" in response.data


@pytest.mark.integration
@pytest.mark.parametrize("prefix", ["/email", "/api/email"])
def test_generate_from_data(client, auth_headers, prefix):
    """Test generate-from-data returns the normalized job and links."""
    response = client.post(
        f"{prefix}/generate-from-data",
        json={"jobData": {"role": "Backend Engineer", "skills": ["Node.js", "PostgreSQL"]}},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["email"] == "Hello hiring team"
    assert body["jobData"]["skills"] == ["Node.js", "PostgreSQL"]
    assert body["jobData"]["experience"] == ""
    assert len(body["portfolioLinks"]) <= 2


@pytest.mark.integration
def test_generate_from_data_returns_normalized_skills(client, auth_headers):
    response = client.post(
        "/email/generate-from-data",
        json={"jobData": {"role": "Designer", "skills": "Figma, , Sketch "}},
        headers=auth_headers,
    )
    assert response.get_json()["jobData"]["skills"] == ["Figma", "Sketch"]


@pytest.mark.integration
def test_generate_from_url(client, auth_headers, fetcher):
    response = client.post(
        "/email/generate",
        json={"jobUrl": "https://jobs.example.com/42"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert fetcher.urls == ["https://jobs.example.com/42"]
    assert response.get_json()["jobData"]["role"] == "Backend Engineer"


@pytest.mark.integration
def test_generate_accepts_legacy_joburl_key(client, auth_headers, fetcher):
    response = client.post(
        "/api/email/generate",
        json={"joburl": "https://jobs.example.com/7"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert fetcher.urls == ["https://jobs.example.com/7"]


@pytest.mark.integration
def test_token_from_cookie(client, make_token):
    client.set_cookie("token", make_token({"email": "cookie@b.com"}))
    response = client.post("/email/generate-from-data", json={"jobData": {"role": "Dev"}})
    assert response.status_code == 200


@pytest.mark.integration
def test_email_from_sub_claim(client, make_token, drafter):
    token = make_token({"sub": "sub@b.com"})
    client.post(
        "/email/generate-from-data",
        json={"jobData": {"role": "Dev"}},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert drafter.calls[0][2] == "sub@b.com"


@pytest.mark.integration
def test_missing_token_is_unauthenticated(client, drafter):
    response = client.post("/email/generate-from-data", json={"jobData": {"role": "Dev"}})

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "User authentication required"}
    assert drafter.calls == []


@pytest.mark.integration
@pytest.mark.parametrize("claims, secret", [
    ({"email": "a@b.com"}, "some-other-secret-that-is-long-enough"),
    ({"id": "user-123"}, None),
])
def test_bad_token_is_unauthenticated(client, make_token, claims, secret):
    token = make_token(claims, secret) if secret else make_token(claims)
    response = client.post(
        "/email/generate-from-data",
        json={"jobData": {"role": "Dev"}},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


@pytest.mark.integration
def test_missing_job_data(client, auth_headers):
    response = client.post("/email/generate-from-data", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": "Job data is required"}


@pytest.mark.integration
def test_unavailable_job_site_is_client_error(client, auth_headers, orchestrator):
    response_503 = SimpleNamespace(status_code=503, text="<h1>Service Unavailable</h1>")
    orchestrator.fetcher = WebPageLoader(session=SimpleNamespace(get=lambda url, **kwargs: response_503))

    response = client.post(
        "/email/generate",
        json={"jobUrl": "https://jobs.example.com/42"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["details"] == "HTTP 503"


@pytest.mark.integration
def test_malformed_body_is_treated_as_empty(client, auth_headers):
    response = client.post(
        "/email/generate-from-data",
        data="{not json",
        content_type="application/json",
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.integration
def test_missing_job_url(client, auth_headers):
    response = client.post("/email/generate", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Job URL is required"


@pytest.mark.integration
def test_error_page_returns_details(client, auth_headers):
    response = client.post(
        "/email/generate-from-data",
        json={"jobData": {"role": "Dev", "description": "503 error: service unavailable"}},
        headers=auth_headers,
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["details"] == "503 error: service unavailable"


@pytest.mark.integration
def test_insufficient_job_data(client, auth_headers):
    response = client.post(
        "/email/generate-from-data",
        json={"jobData": {"description": "Welcome to our homepage"}},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.integration
def test_collaborator_failure_is_server_error(client, auth_headers, fetcher):
    fetcher.error = ConnectionError("dns failure")
    response = client.post(
        "/email/generate",
        json={"jobUrl": "https://jobs.example.com/1"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "message": "Failed to generate email",
        "error": "dns failure",
    }


@pytest.mark.integration
def test_unexpected_error_is_structured(client, auth_headers, app):
    app.extensions["cold_mailer.orchestrator"].matcher = None
    response = client.post(
        "/email/generate-from-data",
        json={"jobData": {"role": "Dev"}},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.get_json()["success"] is False


@pytest.mark.integration
def test_test_endpoint_lists_routes(client):
    response = client.get("/api/email/test")

    body = response.get_json()
    assert response.status_code == 200
    assert "POST /api/email/generate" in body["availableEndpoints"]
    assert body["sampleJobData"]["skills"]


@pytest.mark.integration
def test_unknown_route_is_404(client):
    assert client.get("/nope").status_code == 404
