from dataclasses import dataclass

from morning_mail.config import Settings

DEFAULT_SUBJECT = "Good Morning!"
DEFAULT_TEXT = "Good morning"
DEFAULT_HTML = "<h1>Good morning</h1><p>This email was sent automatically by a cron job!</p>"


@dataclass(frozen=True)
class Message:
    sender: str
    recipient: str
    subject: str
    text: str
    html: str


@dataclass(frozen=True)
class SendResult:
    success: bool
    message_id: str | None = None
    error: str | None = None

    def __post_init__(self):
        if self.success and (not self.message_id or self.error is not None):
            raise ValueError("successful send needs a message id and no error")
        if not self.success and (not self.error or self.message_id is not None):
            raise ValueError("failed send needs an error and no message id")

    @classmethod
    def ok(cls, message_id: str) -> "SendResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: str) -> "SendResult":
        return cls(success=False, error=error)


def build_message(settings: Settings) -> Message:
    """The one message this service ever sends."""
    return Message(
        sender=settings.EMAIL_FROM,
        recipient=settings.EMAIL_TO,
        subject=DEFAULT_SUBJECT,
        text=DEFAULT_TEXT,
        html=DEFAULT_HTML,
    )
