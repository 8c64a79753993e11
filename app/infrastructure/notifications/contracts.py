"""Contracts of the outbound notification collaborators."""

from abc import ABC, abstractmethod

from infrastructure.notifications.models import EmailMessage
from infrastructure.operations import OperationResult


class Mailer(ABC):
    """Sends emails.

    Implementations must report failures through the returned
    OperationResult rather than raising.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> OperationResult:
        """Send a message. `data` of a successful result is the message id."""


class PdfRenderer(ABC):
    """Renders HTML documents to PDF."""

    @abstractmethod
    async def render(self, html: str) -> bytes:
        """Render `html` to PDF bytes.

        Raises:
            Exception: Engine-specific rendering errors.
        """
