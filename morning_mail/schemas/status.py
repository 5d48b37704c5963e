from pydantic import BaseModel


class ServiceInfoOut(BaseModel):
    status: str
    message: str
    nextRun: str
    timestamp: str


class SendOut(BaseModel):
    success: bool
    message: str
    messageId: str


class SendFailedOut(BaseModel):
    success: bool = False
    message: str
    error: str


class StatusOut(BaseModel):
    uptime: float
    timestamp: str
    timezone: str
