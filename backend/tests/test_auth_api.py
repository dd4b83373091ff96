from conftest import TEST_PASSWORD


def test_signup_creates_user(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "new@example.com", "password": TEST_PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "new@example.com"
    assert "hashed_password" not in body


def test_signup_duplicate_email_is_a_conflict(client, owner):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": owner.email, "password": TEST_PASSWORD},
    )

    assert response.status_code == 409
    assert response.json()["error_code"] == "USER_EXISTS"


def test_signup_short_password_rejected(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "new@example.com", "password": "short"},
    )

    assert response.status_code == 422
    assert "password" in response.json()["details"]["fields"]


def test_login_and_me(client, owner):
    response = client.post(
        "/api/v1/auth/login",
        data={"username": owner.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == str(owner.id)


def test_login_wrong_password(client, owner):
    response = client.post(
        "/api/v1/auth/login",
        data={"username": owner.email, "password": "wrong-password"},
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "AUTH_FAILED"


def test_me_requires_session(client):
    assert client.get("/api/v1/auth/me").status_code == 401
