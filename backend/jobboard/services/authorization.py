"""
Row-level authorization.

``can_access`` is a pure function of ``(actor, operation, row, job_owner)``.
Callers resolve ``job_owner`` with :func:`job_owner` before asking, so the
predicate never touches the session or any ambient state.
"""
import enum
from dataclasses import dataclass

from sqlalchemy.orm import Session

from jobboard.errors import Forbidden
from jobboard.models.job import Job
from jobboard.models.user import Role


@dataclass(frozen=True)
class Actor:
    user_id: str
    email: str
    role: Role | None = None


class Operation(str, enum.Enum):
    READ_CATALOG = "read_catalog"
    READ_JOB = "read_job"
    CREATE_JOB = "create_job"
    UPDATE_JOB = "update_job"
    DELETE_JOB = "delete_job"
    CREATE_APPLICATION = "create_application"
    READ_APPLICATION = "read_application"
    UPDATE_APPLICATION_STATUS = "update_application_status"
    READ_RESUME = "read_resume"
    SET_ROLE = "set_role"


def job_owner(db: Session, job_id: str) -> str | None:
    row = db.query(Job.user_id).filter(Job.id == job_id).first()
    return row.user_id if row else None


def _owns(actor: Actor | None, owner_id: str | None) -> bool:
    return actor is not None and owner_id is not None and owner_id == actor.user_id


def can_access(actor: Actor | None, operation: Operation, row=None, job_owner: str | None = None) -> bool:
    if operation == Operation.READ_CATALOG:
        return True

    if operation == Operation.READ_JOB:
        return bool(row.is_active) or _owns(actor, row.user_id)

    if operation == Operation.CREATE_JOB:
        return _owns(actor, row.user_id) and actor.role == Role.EMPLOYER

    if operation in (Operation.UPDATE_JOB, Operation.DELETE_JOB):
        return _owns(actor, row.user_id)

    if operation == Operation.CREATE_APPLICATION:
        return _owns(actor, row.user_id) and actor.role == Role.JOB_SEEKER

    if operation in (Operation.READ_APPLICATION, Operation.READ_RESUME):
        return _owns(actor, row.user_id) or _owns(actor, job_owner)

    if operation == Operation.UPDATE_APPLICATION_STATUS:
        return _owns(actor, job_owner)

    if operation == Operation.SET_ROLE:
        return _owns(actor, row.user_id)

    return False


def require(actor: Actor | None, operation: Operation, row=None, job_owner: str | None = None):
    if not can_access(actor, operation, row, job_owner):
        raise Forbidden(f"Not allowed to {operation.value.replace('_', ' ')}")
