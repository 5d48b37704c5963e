from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from morning_mail.api.routes import router as mail_router
from morning_mail.config import Settings, get_settings
from morning_mail.core.clock import PROCESS_STARTED_AT
from morning_mail.mailer.smtp import Mailer
from morning_mail.middleware.logging import LoggingMiddleware
from morning_mail.scheduler.engine import SchedulerEngine

logger = structlog.get_logger()


def configure_logging(settings: Settings):
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.APP_ENV == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_app(settings: Settings | None = None, mailer: Mailer | None = None) -> FastAPI:
    """Build the app. Settings and the Mailer are fixed for the app's lifetime."""
    settings = settings or get_settings()
    mailer = mailer or Mailer(settings)
    scheduler = SchedulerEngine(mailer)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app.startup", env=settings.APP_ENV)

        if settings.SCHEDULER_ENABLED:
            scheduler.start()

        logger.info(
            "app.ready",
            port=settings.PORT,
            health_check=f"http://localhost:{settings.PORT}/",
        )

        yield

        scheduler.shutdown()
        logger.info("app.shutdown")

    app = FastAPI(title="Morning Mail", lifespan=lifespan)
    app.state.settings = settings
    app.state.mailer = mailer
    app.state.scheduler = scheduler
    app.state.started_at = PROCESS_STARTED_AT

    app.add_middleware(LoggingMiddleware)
    app.include_router(mail_router)
    return app
