"""
Scheduled job: runs when APScheduler fires the daily trigger.

There is no HTTP request here, so the outcome only ever reaches the logs.
"""

import structlog

from morning_mail.mailer.base import SendResult
from morning_mail.mailer.smtp import Mailer

logger = structlog.get_logger()


async def run_scheduled_send(mailer: Mailer) -> SendResult:
    log = logger.bind(trigger="schedule")
    log.info("scheduler.triggered")

    result = await mailer.send()
    if result.success:
        log.info("scheduler.send_succeeded", message_id=result.message_id)
    else:
        log.error("scheduler.send_failed", error=result.error)
    return result
