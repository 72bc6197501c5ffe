from .purge_expired_credentials_use_case import (
    PurgeExpiredCredentialsUseCase,
    PurgeResult,
)

__all__ = ["PurgeExpiredCredentialsUseCase", "PurgeResult"]
