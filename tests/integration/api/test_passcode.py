from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from auth_service.domain.base import utcnow
from auth_service.domain.entities import Passcode


async def get_passcode(db_session, user_id):
    db_session.expire_all()
    result = await db_session.exec(select(Passcode).where(Passcode.user_id == user_id))
    return result.one_or_none()


@pytest.mark.asyncio
async def test_credentials_send_verification_passcode(client: AsyncClient, db_session, notifications, registered_user):
    message = notifications.last("verify")
    stored = await get_passcode(db_session, registered_user.id)

    assert message.email == "u@x.com"
    assert message.first_name == "Ada"
    assert stored.passcode == message.passcode


@pytest.mark.asyncio
async def test_verify_passcode(client: AsyncClient, db_session, notifications, user_profile, registered_user):
    passcode = notifications.last("verify").passcode

    response = await client.put(
        f"/auth/passcode/{registered_user.id}/verify-passcode", json={"passcode": passcode}
    )

    assert response.status_code == 204
    assert user_profile.users[registered_user.id].email_verified
    assert await get_passcode(db_session, registered_user.id) is None
    assert notifications.last("welcome").email == "u@x.com"


@pytest.mark.asyncio
async def test_verify_wrong_passcode(client: AsyncClient, registered_user):
    response = await client.put(
        f"/auth/passcode/{registered_user.id}/verify-passcode", json={"passcode": "000000"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PASSCODE_INVALID"


@pytest.mark.asyncio
async def test_verify_expired_passcode_keeps_row(client: AsyncClient, db_session, registered_user):
    """Passcode expired

    The stored passcode AB23XY expired a second ago: verifying with the
    correct code fails and the row is still present afterwards.
    """
    passcode = await get_passcode(db_session, registered_user.id)
    passcode.passcode = "AB23XY"
    passcode.expiry_date = utcnow() - timedelta(seconds=1)
    db_session.add(passcode)
    await db_session.commit()

    response = await client.put(
        f"/auth/passcode/{registered_user.id}/verify-passcode", json={"passcode": "AB23XY"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PASSCODE_EXPIRED"
    assert await get_passcode(db_session, registered_user.id) is not None


@pytest.mark.asyncio
async def test_reset_passcode_replaces_code(client: AsyncClient, db_session, notifications, registered_user):
    first = notifications.last("verify").passcode

    response = await client.put(f"/auth/passcode/{registered_user.id}/reset-passcode")

    assert response.status_code == 204
    second = notifications.last("verify").passcode
    assert len(notifications.messages) == 2
    assert (await get_passcode(db_session, registered_user.id)).passcode == second
    if first != second:
        stale = await client.put(
            f"/auth/passcode/{registered_user.id}/verify-passcode", json={"passcode": first}
        )
        assert stale.status_code == 400
