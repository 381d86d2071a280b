import logging
import time
import uuid
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.errors import Conflict
from jobboard.models.user import Profile, Role, User
from jobboard.services import role_registry
from jobboard.services.authorization import Actor
from jobboard.utils.security import generate_token, hash_password, verify_password

logger = logging.getLogger("jobboard.auth")


class AuthService:
    """Local identity provider: accounts, bearer sessions and sign-in throttling."""

    def __init__(self):
        self._active_tokens: dict[str, tuple[str, float]] = {}  # token -> (user_id, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: entry for t, entry in self._active_tokens.items() if entry[1] > now
        }

    def sign_up(
        self,
        db: Session,
        email: str,
        password: str,
        full_name: str | None = None,
        role: Role | None = None,
    ) -> User:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        user = User(
            id=str(uuid.uuid4()),
            email=email.strip().lower(),
            password_hash=hash_password(password),
            created_at=now,
        )
        db.add(user)
        db.add(Profile(
            id=str(uuid.uuid4()),
            user_id=user.id,
            full_name=full_name,
            created_at=now,
            updated_at=now,
        ))
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise Conflict("This email is already registered") from exc

        if role is not None:
            role_registry.set_role(db, Actor(user_id=user.id, email=user.email), user.id, role)

        db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def sign_in(self, db: Session, email: str, password: str, throttle_key: str = "signin") -> dict | None:
        delay = self._get_throttle_delay(db, throttle_key)
        if delay > 0:
            logger.warning("Sign-in throttled for %s (%.0fs remaining)", throttle_key, delay)
            return {"error": "too_many_attempts", "retry_after_seconds": delay}

        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not verify_password(user.password_hash, password):
            self._record_failed_attempt(db, throttle_key)
            return None

        self._reset_failed_attempts(db, throttle_key)
        token = generate_token()
        self._active_tokens[token] = (user.id, time.time() + settings.session_ttl_seconds)
        return {"token": token, "expires_in_seconds": settings.session_ttl_seconds, "user_id": user.id}

    def sign_out(self, token: str):
        self._active_tokens.pop(token, None)

    def clear_sessions(self):
        self._active_tokens.clear()

    def validate_token(self, token: str) -> str | None:
        self._cleanup_expired()
        entry = self._active_tokens.get(token)
        return entry[0] if entry else None

    def resolve_actor(self, db: Session, user_id: str) -> Actor | None:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            return None
        return Actor(user_id=user.id, email=user.email, role=role_registry.get_role(db, user.id))

    def _get_throttle_delay(self, db: Session, key: str) -> float:
        row = db.execute(
            text("SELECT failed_attempts, last_failed_at FROM auth_throttle WHERE key = :key"),
            {"key": key},
        ).fetchone()
        if not row:
            return 0
        failed_attempts = int(row[0])
        last_failed_at = float(row[1])

        if failed_attempts < 3:
            return 0
        if failed_attempts < 5:
            delay = 5.0
        elif failed_attempts < 10:
            delay = 30.0
        else:
            delay = 300.0
        elapsed = time.time() - last_failed_at
        remaining = delay - elapsed
        return max(0, remaining)

    def _record_failed_attempt(self, db: Session, key: str):
        now = time.time()
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 1, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = failed_attempts + 1,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": now},
        )
        db.commit()

    def _reset_failed_attempts(self, db: Session, key: str):
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 0, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = 0,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": time.time()},
        )
        db.commit()


auth_service = AuthService()
