"""
Process lifecycle: run uvicorn and exit on SIGTERM / SIGINT.

Both signals end the process immediately with status 0. In-flight requests
are not drained.
"""

import contextlib
import signal
import sys
from typing import Generator

import structlog
import uvicorn

from morning_mail.config import Settings, get_settings
from morning_mail.main import configure_logging, create_app

logger = structlog.get_logger()

HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def handle_termination(signum, frame):
    logger.info("app.signal_received", signal=signal.Signals(signum).name)
    sys.exit(0)


class Server(uvicorn.Server):
    """uvicorn server whose signal handlers exit instead of draining."""

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        previous = {sig: signal.signal(sig, handle_termination) for sig in HANDLED_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)


def run(settings: Settings | None = None):
    settings = settings or get_settings()
    configure_logging(settings)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        access_log=False,
    )
    Server(config).run()
