import pytest

from morning_mail.config import Settings
from morning_mail.mailer.base import SendResult


class FakeMailer:
    def __init__(self, result: SendResult):
        self.result = result
        self.calls = 0

    async def send(self) -> SendResult:
        self.calls += 1
        return self.result


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        EMAIL_HOST="smtp.example.com",
        EMAIL_PORT=2525,
        EMAIL_USER="mailer",
        EMAIL_PASSWORD="secret",
        SCHEDULER_ENABLED=False,
    )


@pytest.fixture
def ok_mailer():
    return FakeMailer(SendResult.ok("<abc123@smtp.example.com>"))


@pytest.fixture
def failing_mailer():
    return FakeMailer(SendResult.failed("Connection refused"))
