from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_actor, require_token
from jobboard.models.user import Profile
from jobboard.schemas.auth import (
    MeResponse,
    RoleRequest,
    RoleResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    ThrottleResponse,
)
from jobboard.services import role_registry
from jobboard.services.auth_service import auth_service
from jobboard.services.authorization import Actor

router = APIRouter(prefix="/auth", tags=["auth"])


def _me(actor: Actor, db: Session) -> MeResponse:
    profile = db.query(Profile).filter(Profile.user_id == actor.user_id).first()
    return MeResponse(
        id=actor.user_id,
        email=actor.email,
        role=actor.role,
        full_name=profile.full_name if profile else None,
    )


@router.post("/signup", response_model=MeResponse, status_code=201)
async def sign_up(req: SignUpRequest, db: Session = Depends(get_db)):
    user = auth_service.sign_up(db, req.email, req.password, req.full_name, req.role)
    return _me(auth_service.resolve_actor(db, user.id), db)


@router.post("/signin", response_model=SignInResponse | ThrottleResponse)
async def sign_in(req: SignInRequest, request: Request, db: Session = Depends(get_db)):
    client_host = request.client.host if request.client else "unknown"
    result = auth_service.sign_in(db, req.email, req.password, throttle_key=f"signin:{client_host}:{req.email.lower()}")
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if "error" in result:
        raise HTTPException(status_code=429, detail=result)
    return SignInResponse(**result)


@router.post("/signout")
async def sign_out(token: str = Depends(require_token)):
    auth_service.sign_out(token)
    return {"message": "Signed out"}


@router.get("/me", response_model=MeResponse)
async def me(actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    return _me(actor, db)


@router.post("/role", response_model=RoleResponse, status_code=201)
async def set_role(req: RoleRequest, actor: Actor = Depends(require_actor), db: Session = Depends(get_db)):
    role = role_registry.set_role(db, actor, actor.user_id, req.role)
    return RoleResponse(user_id=actor.user_id, role=role)
