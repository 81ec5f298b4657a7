"""Auth Routes — verifies register/login and that issued tokens open the directory."""

AUTH = "/api/v1/auth"


async def test_register_and_login(anon_client):
    res = await anon_client.post(
        f"{AUTH}/register", json={"username": "admin", "password": "s3cret"},
    )
    assert res.status_code == 201

    res = await anon_client.post(
        f"{AUTH}/login", json={"username": "admin", "password": "s3cret"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["username"] == "admin"

    res = await anon_client.get(
        "/api/v1/employees",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert res.status_code == 200


async def test_register_duplicate_username(anon_client):
    creds = {"username": "admin", "password": "s3cret"}
    await anon_client.post(f"{AUTH}/register", json=creds)
    res = await anon_client.post(f"{AUTH}/register", json=creds)
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "Username already exists"


async def test_login_wrong_password(anon_client):
    await anon_client.post(
        f"{AUTH}/register", json={"username": "admin", "password": "s3cret"},
    )
    res = await anon_client.post(
        f"{AUTH}/login", json={"username": "admin", "password": "nope"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_login_unknown_user(anon_client):
    res = await anon_client.post(
        f"{AUTH}/login", json={"username": "nobody", "password": "x"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_register_blank_username(anon_client):
    res = await anon_client.post(
        f"{AUTH}/register", json={"username": "  ", "password": "x"},
    )
    assert res.status_code == 400
