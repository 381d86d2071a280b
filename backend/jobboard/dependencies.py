from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.services.auth_service import auth_service
from jobboard.services.authorization import Actor


def _bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return authorization[7:]


async def require_token(authorization: str = Header(...)) -> str:
    token = _bearer(authorization)
    if not auth_service.validate_token(token):
        raise HTTPException(status_code=401, detail="Session expired or invalid token")
    return token


async def require_actor(token: str = Depends(require_token), db: Session = Depends(get_db)) -> Actor:
    actor = auth_service.resolve_actor(db, auth_service.validate_token(token))
    if actor is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return actor


async def optional_actor(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> Actor | None:
    """Catalog reads are open to anonymous callers; a valid token only widens visibility.

    A stale or unknown token is treated as anonymous.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None
    user_id = auth_service.validate_token(authorization[7:])
    if user_id is None:
        return None
    return auth_service.resolve_actor(db, user_id)
