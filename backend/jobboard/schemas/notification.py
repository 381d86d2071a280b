from pydantic import BaseModel, Field

from jobboard.models.application import ApplicationStatus


class ShortlistSendRequest(BaseModel):
    boss_email: str
    optional_message: str | None = None
    min_experience: int | None = Field(None, ge=0)
    max_experience: int | None = Field(None, ge=0)
    status: ApplicationStatus | None = None


class ShortlistSendResponse(BaseModel):
    success: bool
    receipt: str | None
    sent_count: int
