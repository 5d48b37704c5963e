"""
SMTP mailer: delivers the fixed morning message via aiosmtplib.

Every call opens its own connection, so the scheduled send and any number of
manual triggers never share transport state.
"""

from email.message import EmailMessage
from email.utils import formatdate, make_msgid

import aiosmtplib
import structlog

from morning_mail.config import Settings
from morning_mail.mailer.base import Message, SendResult, build_message

logger = structlog.get_logger()


class Mailer:
    def __init__(self, settings: Settings, message: Message | None = None):
        self._settings = settings
        self._message = message or build_message(settings)

    @property
    def message(self) -> Message:
        return self._message

    def _build_mime(self) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._message.sender
        msg["To"] = self._message.recipient
        msg["Subject"] = self._message.subject
        msg["Date"] = formatdate(localtime=False, usegmt=True)
        msg["Message-ID"] = make_msgid(domain=self._settings.EMAIL_HOST)
        msg.set_content(self._message.text)
        msg.add_alternative(self._message.html, subtype="html")
        return msg

    async def send(self) -> SendResult:
        """Attempt one delivery. Never raises; failures come back as a result."""
        settings = self._settings

        try:
            # a bad envelope (e.g. CR/LF in EMAIL_FROM) fails here, not in SMTP
            mime = self._build_mime()
            message_id = mime["Message-ID"]
            await aiosmtplib.send(
                mime,
                hostname=settings.EMAIL_HOST,
                port=settings.EMAIL_PORT,
                username=settings.EMAIL_USER or None,
                password=settings.EMAIL_PASSWORD or None,
                use_tls=settings.EMAIL_SECURE,
                # None = STARTTLS only if the server offers it
                start_tls=False if settings.EMAIL_SECURE else None,
            )
        except Exception as e:
            logger.exception(
                "mailer.failed",
                host=settings.EMAIL_HOST,
                port=settings.EMAIL_PORT,
                recipient=self._message.recipient,
            )
            return SendResult.failed(str(e) or e.__class__.__name__)

        logger.info("mailer.sent", message_id=message_id, recipient=self._message.recipient)
        return SendResult.ok(message_id)
