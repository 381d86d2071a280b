"""
Application ledger: one row per (job, applicant) and its status lifecycle.

Every operation takes the acting identity explicitly. Status changes have no
ordering constraint: the job owner may move an application from any status to
any other, including the one it already has.
"""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.errors import Conflict, Forbidden, NotFound, ValidationError
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.job import Job
from jobboard.models.user import Profile
from jobboard.services import catalog_service, resume_service
from jobboard.services.authorization import Actor, Operation, job_owner, require
from jobboard.services.notification_service import NotificationDispatcher, SendReceipt, ShortlistEntry

logger = logging.getLogger("jobboard.ledger")

DEFAULT_COMPANY_NAME = "Our Company"


def filter_applications(
    applications: list[Application],
    min_experience: int | None = None,
    max_experience: int | None = None,
    status: ApplicationStatus | None = None,
) -> list[Application]:
    """Inclusive experience range and exact status match.

    Missing experience counts as 0 years; a missing status counts as pending.
    """
    result = []
    for application in applications:
        experience = application.experience_years or 0
        if min_experience is not None and experience < min_experience:
            continue
        if max_experience is not None and experience > max_experience:
            continue
        if status is not None and (application.status or ApplicationStatus.PENDING.value) != status.value:
            continue
        result.append(application)
    return result


def _load(db: Session, application_id: str) -> Application:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise NotFound("Application", application_id)
    return application


def _company_name(job: Job) -> str:
    return job.company.name if job.company else DEFAULT_COMPANY_NAME


def _require_job_owner(db: Session, actor: Actor, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job", job_id)
    if job.user_id is None or job.user_id != actor.user_id:
        raise Forbidden("Only the job owner can manage its applicants")
    return job


def create_application(db: Session, actor: Actor, job_id: str, fields: dict) -> Application:
    job = catalog_service.get_job(db, actor, job_id)

    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    application = Application(
        id=str(uuid.uuid4()),
        job_id=job.id,
        user_id=actor.user_id,
        applicant_name=fields.get("applicant_name"),
        applicant_email=fields.get("applicant_email") or actor.email,
        age=fields.get("age"),
        experience_years=fields.get("experience_years"),
        resume_url=(fields.get("resume_url") or "").strip(),
        cover_letter=fields.get("cover_letter"),
        # Always starts pending, whatever the caller sent.
        status=ApplicationStatus.PENDING.value,
        created_at=now,
        updated_at=now,
    )
    require(actor, Operation.CREATE_APPLICATION, application)

    if not application.resume_url:
        raise ValidationError("resume_url", "a resume is required")
    if not resume_service.belongs_to(actor.user_id, application.resume_url):
        raise ValidationError("resume_url", "you can only attach your own uploaded resume")
    if not application.applicant_name:
        profile = db.query(Profile).filter(Profile.user_id == actor.user_id).first()
        application.applicant_name = profile.full_name if profile else None

    db.add(application)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("You have already applied for this job") from exc

    db.refresh(application)
    logger.info("User %s applied to job %s", actor.user_id, job.id)
    return application


def get_application(db: Session, actor: Actor, application_id: str) -> Application:
    application = _load(db, application_id)
    require(actor, Operation.READ_APPLICATION, application, job_owner(db, application.job_id))
    return application


def list_my_applications(db: Session, actor: Actor) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == actor.user_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def list_job_applications(
    db: Session,
    actor: Actor,
    job_id: str,
    min_experience: int | None = None,
    max_experience: int | None = None,
    status: ApplicationStatus | None = None,
) -> tuple[list[Application], int]:
    """Filtered applicants for an owned job, plus the unfiltered total."""
    _require_job_owner(db, actor, job_id)
    applications = (
        db.query(Application)
        .filter(Application.job_id == job_id)
        .order_by(Application.created_at.desc())
        .all()
    )
    return filter_applications(applications, min_experience, max_experience, status), len(applications)


def update_status(db: Session, actor: Actor, application_id: str, new_status: ApplicationStatus) -> Application:
    application = _load(db, application_id)
    require(actor, Operation.UPDATE_APPLICATION_STATUS, application, job_owner(db, application.job_id))

    previous = application.status
    application.status = new_status.value
    application.updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    db.commit()
    db.refresh(application)
    logger.info("Application %s: %s -> %s", application.id, previous, new_status.value)
    return application


async def notify_and_update(
    db: Session,
    actor: Actor,
    application_id: str,
    new_status: ApplicationStatus,
    dispatcher: NotificationDispatcher,
    message: str | None = None,
) -> tuple[Application, SendReceipt]:
    """Email the applicant, then record the status only if the send succeeded."""
    application = _load(db, application_id)
    require(actor, Operation.UPDATE_APPLICATION_STATUS, application, job_owner(db, application.job_id))

    job = application.job
    receipt = await dispatcher.notify(application, new_status, job.title, _company_name(job), message)
    return update_status(db, actor, application_id, new_status), receipt


async def send_shortlist(
    db: Session,
    actor: Actor,
    job_id: str,
    boss_email: str,
    dispatcher: NotificationDispatcher,
    message: str | None = None,
    min_experience: int | None = None,
    max_experience: int | None = None,
    status: ApplicationStatus | None = None,
) -> tuple[SendReceipt, int]:
    """Forward shortlisted applicants (or, if none, every filtered one) to a manager."""
    job = _require_job_owner(db, actor, job_id)
    filtered, _ = list_job_applications(db, actor, job_id, min_experience, max_experience, status)
    shortlisted = [a for a in filtered if a.status == ApplicationStatus.SHORTLISTED.value]
    selected = shortlisted or filtered

    entries = [
        ShortlistEntry(
            name=a.applicant_name or "Unknown",
            age=a.age,
            experience_years=a.experience_years,
            resume_url=resume_service.sign_resume_link(a.resume_url) if a.resume_url else None,
        )
        for a in selected
    ]
    receipt = await dispatcher.send_shortlist(
        boss_email, job.title, _company_name(job), entries, (message or "").strip() or None
    )
    return receipt, len(entries)


def resume_link(db: Session, actor: Actor, application_id: str) -> str:
    application = _load(db, application_id)
    require(actor, Operation.READ_RESUME, application, job_owner(db, application.job_id))
    if not application.resume_url:
        raise NotFound("Resume", application_id)
    return resume_service.sign_resume_link(application.resume_url)
