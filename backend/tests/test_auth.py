from tiktik.services.auth_service import create_access_token, decode_access_token, hash_password, verify_password


ADMIN_EMAIL = "admin@tiktik.test"


def test_password_hash_roundtrip():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)


def test_token_carries_subject():
    token = create_access_token({"sub": "42"})
    assert decode_access_token(token)["sub"] == "42"
    assert decode_access_token(token + "x") is None


async def test_register_and_me(client, register):
    user, headers = await register("Alice@Example.com", name="Alice")
    assert user["email"] == "alice@example.com"
    assert user["is_admin"] is False
    assert "ui-avatars.com" in user["avatar"]

    res = await client.get("/auth/me", headers=headers)
    assert res.status_code == 200
    assert res.json()["user"]["id"] == user["id"]


async def test_register_duplicate_email(client, register):
    await register("bob@example.com")
    res = await client.post("/auth/register", json={"email": "BOB@example.com", "password": "x", "name": "Bob"})
    assert res.status_code == 400
    assert res.json()["detail"] == "User already exists"


async def test_register_missing_fields_is_bad_request(client):
    res = await client.post("/auth/register", json={"email": "carol@example.com"})
    assert res.status_code == 400
    assert "password" in res.json()["detail"]


async def test_login(client, register):
    await register("dave@example.com", password="pw-dave")
    res = await client.post("/auth/login", json={"email": "dave@example.com", "password": "pw-dave"})
    assert res.status_code == 200
    assert res.json()["token"]

    res = await client.post("/auth/login", json={"email": "dave@example.com", "password": "wrong"})
    assert res.status_code == 401
    res = await client.post("/auth/login", json={"email": "nobody@example.com", "password": "pw"})
    assert res.status_code == 401


async def test_me_requires_valid_token(client):
    assert (await client.get("/auth/me")).status_code == 401
    res = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


async def test_token_for_deleted_user_is_rejected(client, register):
    _, headers = await register("erin@example.com")
    assert (await client.delete("/users/me", headers=headers)).status_code == 200
    assert (await client.get("/auth/me", headers=headers)).status_code == 401


async def test_admin_email_gets_admin_flag(register):
    user, _ = await register(ADMIN_EMAIL)
    assert user["is_admin"] is True


async def test_health(client):
    res = await client.get("/health")
    assert res.json() == {"status": "ok"}
    assert "x-process-time" in res.headers
