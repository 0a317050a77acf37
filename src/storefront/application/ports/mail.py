"""Mail transport port.

The notification service builds messages and hands them to a transport; the
transport owns delivery (SMTP in production, a recorder in tests).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MailAttachment:
    """A file attached to an outgoing message."""

    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass(frozen=True)
class MailMessage:
    """An outgoing HTML email."""

    to: str
    subject: str
    html_body: str
    attachments: tuple[MailAttachment, ...] = field(default_factory=tuple)


class MailTransport(ABC):
    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        """
        Deliver a message.

        Raises
        ------
        Exception
            Any delivery failure; callers translate it.
        """
