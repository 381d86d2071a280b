from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import require_actor
from jobboard.errors import Forbidden
from jobboard.models.user import Role
from jobboard.schemas.resume import ResumeUploadResponse
from jobboard.services import catalog_service, resume_service
from jobboard.services.authorization import Actor

router = APIRouter(prefix="/resumes", tags=["resumes"])

PDF_MIME_TYPE = "application/pdf"


@router.post("", response_model=ResumeUploadResponse, status_code=201)
async def upload_resume(
    file: UploadFile = File(...),
    job_id: str = Form(...),
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
):
    if actor.role != Role.JOB_SEEKER:
        raise Forbidden("Only job seekers can upload resumes")
    catalog_service.get_job(db, actor, job_id)

    if file.content_type != PDF_MIME_TYPE:
        raise HTTPException(status_code=400, detail="Please upload a PDF file only")

    max_bytes = settings.max_resume_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=f"Resume too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")

    reference = resume_service.store_resume(actor.user_id, job_id, content)
    return ResumeUploadResponse(resume_url=reference, size_bytes=size)


@router.get("/{owner_dir}/{filename}")
async def download_resume(
    owner_dir: str,
    filename: str,
    expires: int = Query(...),
    signature: str = Query(...),
):
    reference = f"{resume_service.RESUME_PREFIX}{owner_dir}/{filename}"
    path = resume_service.resolve_signed(reference, expires, signature)
    return FileResponse(path=str(path), filename=filename, media_type=PDF_MIME_TYPE)
