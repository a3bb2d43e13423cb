def test_register_login_and_me(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Emma Brown", "email": "Emma@Example.com", "password": "emma-password"},
    )
    assert response.status_code == 201
    assert response.get_json()["user"]["email"] == "emma@example.com"

    response = client.post(
        "/api/auth/login",
        json={"email": "emma@example.com", "password": "emma-password"},
    )
    assert response.status_code == 200
    assert response.get_json()["user"]["isAdmin"] is False

    me = client.get("/api/auth/me").get_json()
    assert me["user"]["name"] == "Emma Brown"


def test_register_duplicate_email(client, voter):
    response = client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "another-pass"},
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "DuplicateEmail"


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"name": "Emma"})

    assert response.status_code == 400
    assert response.get_json()["fields"] == ["email", "password"]


def test_register_body_must_be_an_object(client):
    response = client.post("/api/auth/register", json="hello")

    assert response.status_code == 400
    assert response.get_json()["message"] == "Request body must be a JSON object."

    response = client.post("/api/auth/login", json=["emma@example.com"])
    assert response.status_code == 400


def test_login_with_bad_password(client, voter):
    response = client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "wrong-password"},
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "InvalidCredentials"


def test_logout(auth_client):
    response = auth_client.post("/api/auth/logout")

    assert response.status_code == 200
    assert auth_client.get("/api/auth/me").status_code == 401


def test_unknown_route_returns_json(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["error"] == "NotFound"
