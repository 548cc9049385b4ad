from sqlalchemy import delete, select

from storefront.db.models import User


def test_register_returns_token_and_public_profile(register_user):
    resp = register_user(full_name="Alice A", phone="555-0100", address="1 Main St")
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User registered successfully"
    assert body["token"]
    user = body["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@example.com"
    assert user["full_name"] == "Alice A"
    assert user["role"] == "customer"
    assert "password" not in user and "password_hash" not in user


def test_register_stores_salted_hash(register_user, db):
    register_user(password="s3cret!")
    stored = db.execute(select(User).where(User.username == "alice")).scalar_one()
    assert stored.password_hash != "s3cret!"
    assert stored.password_hash.startswith("$2")


def test_register_then_login_by_username_and_email(client, register_user):
    register_user()
    for ident in ("alice", "alice@example.com"):
        resp = client.post("/api/login", json={"username": ident, "password": "s3cret!"})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["message"] == "Login successful"
        assert body["user"]["username"] == "alice"
        assert body["token"]


def test_register_duplicate_username_or_email_conflicts(register_user):
    assert register_user().status_code == 201

    dup_name = register_user(email="other@example.com", password="different", full_name="X")
    assert dup_name.status_code == 400
    assert dup_name.json() == {"error": "Username or email already exists"}

    dup_email = register_user(username="alice2")
    assert dup_email.status_code == 400
    assert dup_email.json() == {"error": "Username or email already exists"}


def test_register_requires_username_email_password(client):
    for body in (
        {"email": "a@example.com", "password": "x"},
        {"username": "a", "password": "x"},
        {"username": "a", "email": "a@example.com"},
        {"username": "", "email": "a@example.com", "password": "x"},
    ):
        resp = client.post("/api/register", json=body)
        assert resp.status_code == 400
        assert "error" in resp.json()


def test_login_errors_do_not_reveal_which_part_failed(client, register_user):
    register_user()
    wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
    no_user = client.post("/api/login", json={"username": "mallory", "password": "nope"})
    assert wrong_password.status_code == no_user.status_code == 401
    assert wrong_password.json() == no_user.json() == {"error": "Invalid credentials"}


def test_login_requires_both_fields(client):
    resp = client.post("/api/login", json={"username": "alice"})
    assert resp.status_code == 400


def test_profile_reads_token_identity(client, auth_headers):
    resp = client.get("/api/profile", headers=auth_headers)
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["username"] == "alice"
    assert user["created_at"]


def test_profile_without_token_is_401(client):
    resp = client.get("/api/profile")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Access token required"}


def test_profile_with_bad_token_is_403(client):
    resp = client.get("/api/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Invalid or expired token"}


def test_profile_for_removed_user_is_404(client, auth_headers, db):
    db.execute(delete(User))
    db.commit()
    resp = client.get("/api/profile", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_email_is_stored_as_given_and_logs_in(client, register_user):
    resp = register_user(username="ann", email="Ann@Example.COM")
    assert resp.status_code == 201, resp.text
    assert resp.json()["user"]["email"] == "Ann@Example.COM"

    login = client.post("/api/login", json={"username": "Ann@Example.COM", "password": "s3cret!"})
    assert login.status_code == 200, login.text
    assert login.json()["user"]["username"] == "ann"


def test_register_accepts_local_domain_email(register_user):
    resp = register_user(username="lo", email="lo@shop.local")
    assert resp.status_code == 201, resp.text
    assert resp.json()["user"]["email"] == "lo@shop.local"
