import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.errors import Conflict
from jobboard.models.user import Role, UserRole
from jobboard.services.authorization import Actor, Operation, require

logger = logging.getLogger("jobboard.roles")


def get_role(db: Session, user_id: str) -> Role | None:
    row = db.query(UserRole).filter(UserRole.user_id == user_id).first()
    return Role(row.role) if row else None


def set_role(db: Session, actor: Actor, user_id: str, role: Role) -> Role:
    """Assign the user's single role. A second assignment is a conflict."""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    row = UserRole(id=str(uuid.uuid4()), user_id=user_id, role=role.value, created_at=now)
    require(actor, Operation.SET_ROLE, row)

    db.add(row)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("Role already assigned") from exc

    logger.info("Assigned role %s to user %s", role.value, user_id)
    return role
