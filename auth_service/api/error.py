from fastapi import status
from libs.result import Error
from auth_service.domain.entities import ErrorCode


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


CLIENT_ERROR_STATUS = {
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.SESSION_EXPIRED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_SUSPENDED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PASSCODE_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSCODE_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RESET_TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error):
    """Raise the HTTP-facing exception for a use case error"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)
