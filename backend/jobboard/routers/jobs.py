from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import optional_actor, require_actor
from jobboard.models.job import Job
from jobboard.schemas.job import JobCreate, JobListResponse, JobResponse, JobUpdate
from jobboard.services import catalog_service
from jobboard.services.authorization import Actor

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        company_id=job.company_id,
        company_name=job.company.name if job.company else None,
        owner_id=job.user_id,
        description=job.description,
        requirements=job.requirements,
        salary_range=job.salary_range,
        job_type=job.job_type,
        location=job.location,
        is_active=bool(job.is_active),
        minimum_experience=job.minimum_experience or 0,
        created_at=job.created_at,
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    job = catalog_service.create_job(db, actor, req.model_dump())
    return _job_to_response(job)


@router.get("/mine", response_model=JobListResponse)
async def list_my_jobs(actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    jobs = catalog_service.list_my_jobs(db, actor)
    return JobListResponse(jobs=[_job_to_response(j) for j in jobs])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, actor: Actor | None = Depends(optional_actor), db: Session = Depends(get_db)):
    return _job_to_response(catalog_service.get_job(db, actor, job_id))


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
):
    job = catalog_service.update_job(db, actor, job_id, req.model_dump(exclude_unset=True))
    return _job_to_response(job)


@router.delete("/{job_id}")
async def delete_job(job_id: str, actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    catalog_service.delete_job(db, actor, job_id)
    return {"message": "Job deleted"}
