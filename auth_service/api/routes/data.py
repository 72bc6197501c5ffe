from uuid import UUID

from fastapi import APIRouter, Depends, status

from auth_service.api.error import raise_for_error
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.data import DeleteUserAuthDataUseCase
from auth_service.depends import get_unit_of_work

router = APIRouter(prefix="/data", tags=["Data"])


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_auth_data(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete User Auth Data

    Removes every credential stored for the user. Idempotent.
    """
    result = await DeleteUserAuthDataUseCase(uow).execute(user_id)

    if result.is_err():
        raise_for_error(result.error)
