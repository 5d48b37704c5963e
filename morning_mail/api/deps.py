from fastapi import Request

from morning_mail.mailer.smtp import Mailer


async def get_mailer(request: Request) -> Mailer:
    """The Mailer built once by the app factory."""
    return request.app.state.mailer


async def get_started_at(request: Request) -> float:
    return request.app.state.started_at
