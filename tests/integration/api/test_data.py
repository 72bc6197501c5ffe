import pytest
from httpx import AsyncClient
from sqlmodel import select

from auth_service.domain.entities import Passcode, Password, RefreshToken, ResetToken


async def rows_for(db_session, user_id):
    db_session.expire_all()
    counts = {}
    for entity in (Password, Passcode, ResetToken, RefreshToken):
        result = await db_session.exec(select(entity).where(entity.user_id == user_id))
        counts[entity.__tablename__] = len(result.all())
    return counts


@pytest.mark.asyncio
async def test_delete_user_auth_data_is_idempotent(client: AsyncClient, db_session, registered_user):
    await client.post("/auth/login", json={"email": "u@x.com", "password": "Secret123!"})
    await client.post("/password/forgot-password", json={"email": "u@x.com"})
    assert sum((await rows_for(db_session, registered_user.id)).values()) == 4

    first = await client.delete(f"/data/{registered_user.id}")
    second = await client.delete(f"/data/{registered_user.id}")

    assert first.status_code == 204
    assert second.status_code == 204
    assert await rows_for(db_session, registered_user.id) == {
        "passwords": 0,
        "passcodes": 0,
        "reset_tokens": 0,
        "refresh_tokens": 0,
    }


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
