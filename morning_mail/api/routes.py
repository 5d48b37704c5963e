import time

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from morning_mail.api.deps import get_mailer, get_started_at
from morning_mail.core.clock import iso_now
from morning_mail.mailer.smtp import Mailer
from morning_mail.scheduler.engine import SCHEDULE_DESCRIPTION, TIMEZONE
from morning_mail.schemas.status import SendFailedOut, SendOut, ServiceInfoOut, StatusOut

router = APIRouter(tags=["mail"])
logger = structlog.get_logger()

SERVICE_NAME = "Good Morning Email Cron Service"


@router.get("/", response_model=ServiceInfoOut)
async def service_info():
    """Health check."""
    return ServiceInfoOut(
        status="running",
        message=SERVICE_NAME,
        nextRun=SCHEDULE_DESCRIPTION,
        timestamp=iso_now(),
    )


@router.post(
    "/",
    response_model=SendOut,
    responses={500: {"model": SendFailedOut}},
)
async def trigger_send(mailer: Mailer = Depends(get_mailer)):
    """Send the morning email now, outside the schedule."""
    logger.info("api.manual_trigger")
    result = await mailer.send()

    if not result.success:
        body = SendFailedOut(message="Failed to send email", error=result.error)
        return JSONResponse(status_code=500, content=body.model_dump())

    return SendOut(success=True, message="Email sent successfully", messageId=result.message_id)


@router.get("/status", response_model=StatusOut)
async def status(started_at: float = Depends(get_started_at)):
    return StatusOut(
        uptime=time.monotonic() - started_at,
        timestamp=iso_now(),
        timezone=TIMEZONE,
    )
