from .delete_user_auth_data_use_case import DeleteUserAuthDataUseCase

__all__ = ["DeleteUserAuthDataUseCase"]
