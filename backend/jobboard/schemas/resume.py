from pydantic import BaseModel


class ResumeUploadResponse(BaseModel):
    resume_url: str
    size_bytes: int
