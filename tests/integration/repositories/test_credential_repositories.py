from datetime import timedelta
from uuid import uuid4

import pytest

from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.app.use_cases.maintenance import PurgeExpiredCredentialsUseCase
from auth_service.domain.base import utcnow


def set_passcode(code, expires_in):
    def apply(passcode):
        passcode.passcode = code
        passcode.expiry_date = utcnow() + expires_in

    return apply


@pytest.mark.asyncio
async def test_upsert_keeps_one_row_per_user(db_session):
    user_id = uuid4()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        first = await uow.passcodes.upsert(user_id, set_passcode("AAAAAA", timedelta(minutes=15)))
        second = await uow.passcodes.upsert(user_id, set_passcode("BBBBBB", timedelta(minutes=15)))
        first_id, second_id = first.id, second.id
        await uow.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        stored = await uow.passcodes.get_by_user_id(user_id)
        stored_code = stored.passcode

    assert first_id == second_id
    assert stored_code == "BBBBBB"


@pytest.mark.asyncio
async def test_refresh_token_compare_and_delete(db_session):
    user_id = uuid4()
    token_id = uuid4()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.refresh_tokens.create(token_id, user_id, utcnow() + timedelta(days=7))
        await uow.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        assert await uow.refresh_tokens.delete_by_id(token_id) is True
        assert await uow.refresh_tokens.delete_by_id(token_id) is False
        await uow.commit()


@pytest.mark.asyncio
async def test_refresh_token_lookup_is_bound_to_owner(db_session):
    token_id = uuid4()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.refresh_tokens.create(token_id, uuid4(), utcnow() + timedelta(days=7))
        assert await uow.refresh_tokens.get_by_id_and_user_id(token_id, uuid4()) is None
        assert await uow.refresh_tokens.get_by_id(token_id) is not None


@pytest.mark.asyncio
async def test_sweeper_removes_only_expired_rows(db_session):
    live_user, dead_user = uuid4(), uuid4()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.passcodes.upsert(live_user, set_passcode("AAAAAA", timedelta(minutes=5)))
        await uow.passcodes.upsert(dead_user, set_passcode("BBBBBB", -timedelta(minutes=5)))
        await uow.refresh_tokens.create(uuid4(), live_user, utcnow() + timedelta(days=1))
        await uow.refresh_tokens.create(uuid4(), dead_user, utcnow() - timedelta(seconds=1))
        await uow.commit()

    result = await PurgeExpiredCredentialsUseCase(SqlAlchemyUnitOfWork(db_session)).execute()

    assert result.value.passcodes == 1
    assert result.value.reset_tokens == 0
    assert result.value.refresh_tokens == 1

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        assert await uow.passcodes.get_by_user_id(live_user) is not None
        assert await uow.passcodes.get_by_user_id(dead_user) is None
