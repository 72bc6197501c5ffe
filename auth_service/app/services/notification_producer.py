from abc import ABC, abstractmethod

from libs.result import Result
from .dtos import ResetPasswordEmail, VerificationEmail, WelcomeEmail


class INotificationProducer(ABC):
    """
    Email notification producer interface - application layer.

    Enqueue is fire-and-forget: success means the message bus accepted
    the message, not that the email was delivered.
    """

    @abstractmethod
    async def send_verification_email(self, message: VerificationEmail) -> Result[None]:
        pass

    @abstractmethod
    async def send_welcome_email(self, message: WelcomeEmail) -> Result[None]:
        pass

    @abstractmethod
    async def send_reset_password_email(self, message: ResetPasswordEmail) -> Result[None]:
        pass
