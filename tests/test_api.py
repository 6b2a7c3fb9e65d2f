"""API endpoint tests for accounts and sessions."""


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/users/register",
        json={
            "email": "newuser@example.com",
            "firstName": "New",
            "lastName": "User",
            "password": "password123",
        },
    )
    assert response.status_code == 201
    assert isinstance(response.json()["userId"], int)


def test_register_duplicate_email(client, auth_headers):
    """Registering the same email twice is forbidden."""
    response = client.post(
        "/api/v1/users/register",
        json={
            "email": auth_headers.email,
            "firstName": "Dup",
            "lastName": "Licate",
            "password": "password123",
        },
    )
    assert response.status_code == 403
    assert "already in use" in response.json()["detail"]


def test_register_invalid_payload(client):
    """Schema failures are reported as 400."""
    response = client.post(
        "/api/v1/users/register",
        json={"email": "not-an-email", "firstName": "A", "lastName": "B", "password": "pw"},
    )
    assert response.status_code == 400


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/users/login",
        json={"email": auth_headers.email, "password": "testpass123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == auth_headers.user_id
    assert data["token"]


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/users/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401


def test_login_unknown_email(client):
    """Unknown accounts get the same 401 as bad passwords."""
    response = client.post(
        "/api/v1/users/login", json={"email": "nobody@example.com", "password": "whatever1"}
    )
    assert response.status_code == 401


def test_login_replaces_previous_session(client, auth_headers):
    """Only the most recent login token stays valid."""
    response = client.post(
        "/api/v1/users/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    new_token = response.json()["token"]
    assert new_token != auth_headers["X-Authorization"]

    response = client.post("/api/v1/users/logout", headers=auth_headers)
    assert response.status_code == 401

    response = client.post("/api/v1/users/logout", headers={"X-Authorization": new_token})
    assert response.status_code == 200


def test_logout_invalidates_token(client, auth_headers):
    """A logged-out token can no longer authenticate."""
    response = client.post("/api/v1/users/logout", headers=auth_headers)
    assert response.status_code == 200

    response = client.post("/api/v1/users/logout", headers=auth_headers)
    assert response.status_code == 401


def test_logout_requires_token(client):
    """Logout without a token is unauthorized."""
    response = client.post("/api/v1/users/logout")
    assert response.status_code == 401


def test_garbage_token_rejected(client):
    """Tokens that do not decode are unauthorized."""
    response = client.post("/api/v1/users/logout", headers={"X-Authorization": "not-a-token"})
    assert response.status_code == 401


def test_view_own_profile_includes_email(client, auth_headers):
    """Viewing yourself shows your email."""
    response = client.get(f"/api/v1/users/{auth_headers.user_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "firstName": "Olive",
        "lastName": "Owner",
        "email": auth_headers.email,
    }


def test_view_other_profile_hides_email(client, auth_headers, other_headers):
    """Other users and anonymous callers do not see the email."""
    response = client.get(f"/api/v1/users/{auth_headers.user_id}", headers=other_headers)
    assert response.status_code == 200
    assert "email" not in response.json()

    response = client.get(f"/api/v1/users/{auth_headers.user_id}")
    assert response.status_code == 200
    assert response.json()["firstName"] == "Olive"
    assert "email" not in response.json()


def test_view_missing_user(client):
    """Unknown user ids are 404."""
    response = client.get("/api/v1/users/999999")
    assert response.status_code == 404


def test_update_own_name(client, auth_headers):
    """Users can change their own name."""
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}",
        headers=auth_headers,
        json={"firstName": "Olivia"},
    )
    assert response.status_code == 200

    response = client.get(f"/api/v1/users/{auth_headers.user_id}", headers=auth_headers)
    assert response.json()["firstName"] == "Olivia"
    assert response.json()["lastName"] == "Owner"


def test_update_other_user_forbidden(client, auth_headers, other_headers):
    """Users cannot edit someone else's account."""
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}",
        headers=other_headers,
        json={"firstName": "Mallory"},
    )
    assert response.status_code == 403


def test_update_requires_auth(client, auth_headers):
    """Profile edits need a token."""
    response = client.patch(f"/api/v1/users/{auth_headers.user_id}", json={"firstName": "X"})
    assert response.status_code == 401


def test_update_with_no_fields(client, auth_headers):
    """An empty update is a bad request."""
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}", headers=auth_headers, json={}
    )
    assert response.status_code == 400


def test_update_email_in_use(client, auth_headers, other_headers):
    """Taking another account's email is forbidden."""
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}",
        headers=auth_headers,
        json={"email": other_headers.email},
    )
    assert response.status_code == 403


def test_change_password(client, auth_headers):
    """Password changes need the current password and take effect for login."""
    url = f"/api/v1/users/{auth_headers.user_id}"

    response = client.patch(url, headers=auth_headers, json={"password": "brandnew123"})
    assert response.status_code == 400

    response = client.patch(
        url, headers=auth_headers, json={"password": "brandnew123", "currentPassword": "wrong!!"}
    )
    assert response.status_code == 401

    response = client.patch(
        url,
        headers=auth_headers,
        json={"password": "testpass123", "currentPassword": "testpass123"},
    )
    assert response.status_code == 403

    response = client.patch(
        url,
        headers=auth_headers,
        json={"password": "brandnew123", "currentPassword": "testpass123"},
    )
    assert response.status_code == 200

    response = client.post(
        "/api/v1/users/login", json={"email": auth_headers.email, "password": "brandnew123"}
    )
    assert response.status_code == 200


def test_update_malformed_body_requires_auth(client, auth_headers):
    """A missing token is reported before an unparseable body."""
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 401


def test_register_email_race_is_forbidden(client, auth_headers, monkeypatch):
    """A duplicate email that slips past the pre-check is rolled back as 403."""
    monkeypatch.setattr("src.services.user_service.get_user_by_email", lambda db, email: None)

    response = client.post(
        "/api/v1/users/register",
        json={
            "email": auth_headers.email,
            "firstName": "Second",
            "lastName": "Writer",
            "password": "anotherpass1",
        },
    )
    assert response.status_code == 403

    response = client.post(
        "/api/v1/users/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.json()["userId"] == auth_headers.user_id


def test_update_email_race_is_forbidden(client, auth_headers, other_headers, monkeypatch):
    """Taking an email that slips past the pre-check is rolled back as 403."""
    monkeypatch.setattr("src.services.user_service.get_user_by_email", lambda db, email: None)
    url = f"/api/v1/users/{auth_headers.user_id}"

    response = client.patch(url, headers=auth_headers, json={"email": other_headers.email})
    assert response.status_code == 403

    response = client.get(url, headers=auth_headers)
    assert response.json()["email"] == auth_headers.email
