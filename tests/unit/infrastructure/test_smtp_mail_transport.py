"""Unit tests for SmtpMailTransport."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from storefront.application.ports.mail import MailAttachment, MailMessage
from storefront.infrastructure.email import SmtpMailTransport
from storefront_config.settings import Settings


def _settings(**overrides) -> Settings:
    values = {
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "shop@example.com",
        "smtp_password": SecretStr("app-password"),
        "smtp_from_email": "shop@example.com",
        "smtp_from_name": "Storefront",
        "smtp_use_tls": True,
        "smtp_starttls": True,
    }
    values.update(overrides)
    return Settings(**values)


MESSAGE = MailMessage(
    to="customer@example.com",
    subject="Your lamp",
    html_body="<h2>Product Details</h2>",
    attachments=(MailAttachment(filename="manual.pdf", content=b"%PDF"),),
)


class TestSmtpMailTransport:
    async def test_disabled_smtp_sends_nothing(self):
        transport = SmtpMailTransport(_settings(smtp_enabled=False))

        with patch("smtplib.SMTP") as smtp_cls:
            await transport.send(MESSAGE)

        smtp_cls.assert_not_called()

    async def test_starttls_delivery(self):
        transport = SmtpMailTransport(_settings())
        server = MagicMock()

        with patch("smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = server
            await transport.send(MESSAGE)

        smtp_cls.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("shop@example.com", "app-password")

        sent = server.send_message.call_args.args[0]
        assert sent["To"] == "customer@example.com"
        assert sent["Subject"] == "Your lamp"
        assert sent["From"] == "Storefront <shop@example.com>"
        attachments = [p for p in sent.walk() if p.get_filename()]
        assert [a.get_filename() for a in attachments] == ["manual.pdf"]
        assert attachments[0].get_content_type() == "application/pdf"

    async def test_implicit_tls_delivery(self):
        transport = SmtpMailTransport(_settings(smtp_port=465, smtp_starttls=False))
        server = MagicMock()

        with patch("smtplib.SMTP_SSL") as smtp_ssl_cls:
            smtp_ssl_cls.return_value.__enter__.return_value = server
            await transport.send(MESSAGE)

        server.send_message.assert_called_once()

    async def test_delivery_error_propagates(self):
        transport = SmtpMailTransport(_settings())

        with patch("smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value.send_message.side_effect = (
                OSError("connection reset")
            )
            with pytest.raises(OSError, match="connection reset"):
                await transport.send(MESSAGE)
