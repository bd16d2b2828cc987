def test_access_denied_page_anonymous(client):
    response = client.get("/access-denied")

    assert response.status_code == 200
    assert "Access Denied" in response.text
    assert "Signed in as" not in response.text


def test_clear_access_denied_session(client, make_user, login):
    make_user("guest", role="GUEST")
    login("guest")
    client.get("/profile/edit", follow_redirects=False)
    assert "/profile/edit" in client.get("/access-denied").text

    response = client.post("/clear-access-denied-session")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Session cleaned"
    assert "/profile/edit" not in client.get("/access-denied").text


def test_rate_limit_page_default_retry_after(client):
    response = client.get("/rate-limit")

    assert response.status_code == 200
    assert '<span id="retry-after">60</span>' in response.text


def test_rate_limit_page_retry_after_param(client):
    response = client.get("/rate-limit", params={"retryAfter": 15})

    assert '<span id="retry-after">15</span>' in response.text


def test_xhr_request_gets_json_403(user_client):
    response = user_client.post(
        "/api/dropdowns",
        json={"category": "TASK", "subcategory": "CLIENT", "itemValue": "Acme"},
        headers={"X-Requested-With": "XMLHttpRequest"},
    )

    assert response.status_code == 403
    assert response.json()["message"] == "You don't have permission to access this resource"


def test_access_denied_page_shows_signed_in_user(user_client):
    response = user_client.get("/access-denied")

    assert response.status_code == 200
    assert "Signed in as John Doe (jdoe)" in response.text
