from abc import ABC, abstractmethod

from libs.result import Result


class IEmailDispatcher(ABC):
    """Outbound email interface - application layer"""

    @abstractmethod
    async def send_password_reset(
        self, to_address: str, reset_url: str, recipient_name: str
    ) -> Result[None]:
        """Deliver a password reset link.

        Returns an error result (DISPATCH_ERROR) instead of raising when
        delivery fails.
        """
        pass
