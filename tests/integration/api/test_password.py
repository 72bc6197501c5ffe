import pytest
from httpx import AsyncClient

from auth_service.domain.entities import UserStatus


async def forgot(client: AsyncClient, notifications) -> str:
    response = await client.post("/password/forgot-password", json={"email": "u@x.com"})
    assert response.status_code == 204
    return notifications.last("reset").token


@pytest.mark.asyncio
async def test_verify_password(client: AsyncClient, registered_user):
    ok = await client.post("/password/verify", json={"userId": str(registered_user.id), "password": "Secret123!"})
    wrong = await client.post("/password/verify", json={"userId": str(registered_user.id), "password": "Nope123!"})

    assert ok.status_code == 204
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_verify_password_over_72_bytes_is_unauthorized(client: AsyncClient, registered_user):
    response = await client.post(
        "/password/verify", json={"userId": str(registered_user.id), "password": "é" * 40}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_is_silent(client: AsyncClient, notifications):
    response = await client.post("/password/forgot-password", json={"email": "ghost@x.com"})

    assert response.status_code == 204
    assert notifications.messages == []


@pytest.mark.asyncio
async def test_forgot_password_suspended_user(client: AsyncClient, registered_user):
    registered_user.status = UserStatus.locked

    response = await client.post("/password/forgot-password", json={"email": "u@x.com"})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_reset_password(client: AsyncClient, notifications, registered_user):
    token = await forgot(client, notifications)

    response = await client.put(
        "/password/reset-password", json={"resetToken": token, "password": "NewSecret456!"}
    )

    assert response.status_code == 204
    old = await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})
    new = await client.post("/auth/login", json={"email": "u@x.com", "password": "NewSecret456!"})
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_reset_token_cannot_be_reused(client: AsyncClient, notifications, registered_user):
    """Reset-token reuse after consumption must fail"""
    token = await forgot(client, notifications)
    first = await client.put(
        "/password/reset-password", json={"resetToken": token, "password": "NewSecret456!"}
    )

    second = await client.put(
        "/password/reset-password", json={"resetToken": token, "password": "Another789!"}
    )

    assert first.status_code == 204
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "RESET_TOKEN_INVALID"


@pytest.mark.asyncio
async def test_reset_password_revokes_sessions(client: AsyncClient, notifications, registered_user):
    await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})
    token = await forgot(client, notifications)

    await client.put("/password/reset-password", json={"resetToken": token, "password": "NewSecret456!"})
    response = await client.post("/auth/token")

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "password",
    ["Short1!", "alllowercase1!", "ALLUPPERCASE1!", "NoDigitsHere!", "NoSpecial123", "A1!" + "a" * 62, "Aa1!" + "é" * 40],
)
async def test_reset_password_rejects_weak_passwords(client: AsyncClient, password):
    response = await client.put(
        "/password/reset-password", json={"resetToken": "abcdefghij0123456789", "password": password}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_password(client: AsyncClient, registered_user):
    await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})

    response = await client.put(
        "/password/update-password",
        json={"currentPassword": "Secret123!", "newPassword": "NewSecret456!"},
    )

    assert response.status_code == 204
    verify = await client.post(
        "/password/verify", json={"userId": str(registered_user.id), "password": "NewSecret456!"}
    )
    assert verify.status_code == 204


@pytest.mark.asyncio
async def test_update_password_requires_access_cookie(client: AsyncClient, registered_user):
    response = await client.put(
        "/password/update-password",
        json={"currentPassword": "Secret123!", "newPassword": "NewSecret456!"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_update_password_wrong_current(client: AsyncClient, registered_user):
    await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})

    response = await client.put(
        "/password/update-password",
        json={"currentPassword": "Wrong123!", "newPassword": "NewSecret456!"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_update_password_rejects_new_password_over_72_bytes(client: AsyncClient, registered_user):
    await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})

    response = await client.put(
        "/password/update-password",
        json={"currentPassword": "Secret123!", "newPassword": "Aa1!" + "é" * 40},
    )

    assert response.status_code == 422
