from pydantic import BaseModel, EmailStr, Field

from jobboard.models.application import ApplicationStatus


class ApplicationCreate(BaseModel):
    applicant_name: str | None = None
    applicant_email: EmailStr | None = None
    age: int | None = Field(None, ge=0)
    experience_years: int | None = Field(None, ge=0)
    resume_url: str
    cover_letter: str | None = None


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class NotifyRequest(BaseModel):
    status: ApplicationStatus
    message: str | None = None


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    user_id: str
    applicant_name: str | None
    applicant_email: str | None
    age: int | None
    experience_years: int | None
    resume_url: str | None
    cover_letter: str | None
    status: ApplicationStatus
    created_at: str
    updated_at: str


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    total: int
    shortlisted: int


class NotifyResponse(BaseModel):
    success: bool
    receipt: str | None
    application: ApplicationResponse


class ResumeLinkResponse(BaseModel):
    url: str
    expires_in_seconds: int
