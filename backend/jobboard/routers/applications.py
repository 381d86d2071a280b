from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import require_actor
from jobboard.models.application import Application, ApplicationStatus
from jobboard.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    NotifyRequest,
    NotifyResponse,
    ResumeLinkResponse,
    StatusUpdate,
)
from jobboard.schemas.notification import ShortlistSendRequest, ShortlistSendResponse
from jobboard.services import ledger_service
from jobboard.services.authorization import Actor
from jobboard.services.notification_service import NotificationDispatcher, get_dispatcher

router = APIRouter(tags=["applications"])


def _application_to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        user_id=application.user_id,
        applicant_name=application.applicant_name,
        applicant_email=application.applicant_email,
        age=application.age,
        experience_years=application.experience_years,
        resume_url=application.resume_url,
        cover_letter=application.cover_letter,
        status=application.status,
        created_at=application.created_at,
        updated_at=application.updated_at,
    )


@router.post("/jobs/{job_id}/applications", response_model=ApplicationResponse, status_code=201)
async def create_application(
    job_id: str,
    req: ApplicationCreate,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
):
    application = ledger_service.create_application(db, actor, job_id, req.model_dump())
    return _application_to_response(application)


@router.get("/jobs/{job_id}/applications", response_model=ApplicationListResponse)
async def list_job_applications(
    job_id: str,
    min_experience: int | None = Query(None, ge=0),
    max_experience: int | None = Query(None, ge=0),
    status: ApplicationStatus | None = None,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
):
    applications, total = ledger_service.list_job_applications(
        db, actor, job_id, min_experience, max_experience, status
    )
    shortlisted = sum(1 for a in applications if a.status == ApplicationStatus.SHORTLISTED.value)
    return ApplicationListResponse(
        applications=[_application_to_response(a) for a in applications],
        total=total,
        shortlisted=shortlisted,
    )


@router.post("/jobs/{job_id}/shortlist/send", response_model=ShortlistSendResponse)
async def send_shortlist(
    job_id: str,
    req: ShortlistSendRequest,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    receipt, count = await ledger_service.send_shortlist(
        db,
        actor,
        job_id,
        req.boss_email,
        dispatcher,
        message=req.optional_message,
        min_experience=req.min_experience,
        max_experience=req.max_experience,
        status=req.status,
    )
    return ShortlistSendResponse(success=True, receipt=receipt.id, sent_count=count)


@router.get("/applications/mine", response_model=list[ApplicationResponse])
async def list_my_applications(actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    return [_application_to_response(a) for a in ledger_service.list_my_applications(db, actor)]


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str, actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    return _application_to_response(ledger_service.get_application(db, actor, application_id))


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: str,
    req: StatusUpdate,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
):
    application = ledger_service.update_status(db, actor, application_id, req.status)
    return _application_to_response(application)


@router.post("/applications/{application_id}/notify", response_model=NotifyResponse)
async def notify_applicant(
    application_id: str,
    req: NotifyRequest,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Send the status email first; the status is saved only if the send succeeds."""
    application, receipt = await ledger_service.notify_and_update(
        db, actor, application_id, req.status, dispatcher, req.message
    )
    return NotifyResponse(success=True, receipt=receipt.id, application=_application_to_response(application))


@router.get("/applications/{application_id}/resume-link", response_model=ResumeLinkResponse)
async def resume_link(application_id: str, actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    url = ledger_service.resume_link(db, actor, application_id)
    return ResumeLinkResponse(url=url, expires_in_seconds=settings.resume_link_ttl_seconds)
