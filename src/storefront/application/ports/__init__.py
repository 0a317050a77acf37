"""Application layer ports (aka interfaces)."""

from storefront.application.ports.image_storage import ImageStorage, ImageUpload
from storefront.application.ports.mail import (
    MailAttachment,
    MailMessage,
    MailTransport,
)

__all__ = [
    "ImageStorage",
    "ImageUpload",
    "MailAttachment",
    "MailMessage",
    "MailTransport",
]
