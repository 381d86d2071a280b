import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.errors import NotFound
from jobboard.models.catalog import Company, Domain
from jobboard.models.job import Job
from jobboard.services.authorization import Actor, Operation, can_access, require

logger = logging.getLogger("jobboard.catalog")

CATALOG_WARNING = "Catalog is temporarily unavailable"
REQUIRED_JOB_FIELDS = {"title", "company_id", "is_active", "minimum_experience"}


def _degrade(what: str, exc: Exception) -> tuple[list, str]:
    # Reads fall back to an empty list plus a warning.
    logger.warning("Failed to load %s: %s", what, exc)
    return [], CATALOG_WARNING


def list_domains(db: Session) -> tuple[list[Domain], str | None]:
    try:
        return db.query(Domain).order_by(Domain.name).all(), None
    except SQLAlchemyError as exc:
        db.rollback()
        return _degrade("domains", exc)


def list_companies(db: Session, domain_id: str | None = None) -> tuple[list[Company], str | None]:
    try:
        query = db.query(Company)
        if domain_id:
            query = query.filter(Company.domain_id == domain_id)
        return query.order_by(Company.name).all(), None
    except SQLAlchemyError as exc:
        db.rollback()
        return _degrade("companies", exc)


def list_jobs(db: Session, actor: Actor | None, company_id: str) -> tuple[list[Job], str | None]:
    """Active jobs for a company, plus the actor's own inactive ones."""
    try:
        visible = Job.is_active.is_(True)
        if actor is not None:
            visible = or_(visible, Job.user_id == actor.user_id)
        jobs = (
            db.query(Job)
            .filter(Job.company_id == company_id)
            .filter(visible)
            .order_by(Job.created_at.desc())
            .all()
        )
        return jobs, None
    except SQLAlchemyError as exc:
        db.rollback()
        return _degrade("jobs", exc)


def list_my_jobs(db: Session, actor: Actor) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.user_id == actor.user_id)
        .order_by(Job.created_at.desc())
        .all()
    )


def get_job(db: Session, actor: Actor | None, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    # Inactive jobs are indistinguishable from missing ones for non-owners.
    if not job or not can_access(actor, Operation.READ_JOB, job):
        raise NotFound("Job", job_id)
    return job


def create_job(db: Session, actor: Actor, fields: dict) -> Job:
    company = db.query(Company).filter(Company.id == fields["company_id"]).first()
    if not company:
        raise NotFound("Company", fields["company_id"])

    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    job = Job(
        id=str(uuid.uuid4()),
        title=fields["title"],
        company_id=company.id,
        user_id=actor.user_id,
        description=fields.get("description"),
        requirements=fields.get("requirements"),
        salary_range=fields.get("salary_range"),
        job_type=fields.get("job_type") or "Full-time",
        location=fields.get("location"),
        is_active=fields.get("is_active", True),
        minimum_experience=fields.get("minimum_experience", 0),
        created_at=now,
    )
    require(actor, Operation.CREATE_JOB, job)

    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Employer %s posted job %s", actor.user_id, job.id)
    return job


def update_job(db: Session, actor: Actor, job_id: str, changes: dict) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job", job_id)
    require(actor, Operation.UPDATE_JOB, job)

    if changes.get("company_id") is not None:
        company = db.query(Company).filter(Company.id == changes["company_id"]).first()
        if not company:
            raise NotFound("Company", changes["company_id"])

    for key, value in changes.items():
        if value is None and key in REQUIRED_JOB_FIELDS:
            continue
        setattr(job, key, value)
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, actor: Actor, job_id: str):
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job", job_id)
    require(actor, Operation.DELETE_JOB, job)

    db.delete(job)
    db.commit()
    logger.info("Employer %s deleted job %s", actor.user_id, job_id)
