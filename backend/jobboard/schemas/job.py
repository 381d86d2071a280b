from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    company_id: str
    description: str | None = None
    requirements: str | None = None
    salary_range: str | None = None
    job_type: str = "Full-time"
    location: str | None = None
    is_active: bool = True
    minimum_experience: int = Field(0, ge=0)


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=1)
    company_id: str | None = None
    description: str | None = None
    requirements: str | None = None
    salary_range: str | None = None
    job_type: str | None = None
    location: str | None = None
    is_active: bool | None = None
    minimum_experience: int | None = Field(None, ge=0)


class JobResponse(BaseModel):
    id: str
    title: str
    company_id: str
    company_name: str | None
    owner_id: str | None
    description: str | None
    requirements: str | None
    salary_range: str | None
    job_type: str | None
    location: str | None
    is_active: bool
    minimum_experience: int
    created_at: str


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    warning: str | None = None
