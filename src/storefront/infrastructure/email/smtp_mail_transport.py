import asyncio
import logging
import smtplib
import ssl
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from storefront.application.ports.mail import MailMessage, MailTransport
from storefront_config.settings import Settings

logger = logging.getLogger(__name__)


class SmtpMailTransport(MailTransport):
    """Delivers mail over SMTP; the blocking client runs in a worker thread."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = message.subject
        msg["From"] = self._settings.mail_sender
        msg["To"] = message.to

        msg.attach(MIMEText(message.html_body, "html"))
        for attachment in message.attachments:
            _, _, subtype = attachment.content_type.partition("/")
            part = MIMEApplication(attachment.content, _subtype=subtype or "octet-stream")
            part.add_header(
                "Content-Disposition",
                "attachment",
                filename=attachment.filename,
            )
            msg.attach(part)

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                self._settings.smtp_host,
                self._settings.smtp_port,
                context=context,
            ) as server:
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(
                self._settings.smtp_host,
                self._settings.smtp_port,
            ) as server:
                if self._settings.smtp_starttls:
                    context = ssl.create_default_context()
                    server.starttls(context=context)
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)

        logger.info("Email sent to %s", to_email)

    async def send(self, message: MailMessage) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, email %r not sent to %s",
                message.subject,
                message.to,
            )
            return

        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise RuntimeError(msg)

        mime_message = self._create_message(message)
        await asyncio.to_thread(self._send_email, message.to, mime_message)
