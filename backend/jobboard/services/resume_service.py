import time
from pathlib import Path
from urllib.parse import urlencode

from jobboard.config import settings
from jobboard.errors import Forbidden, JobBoardError, NotFound, ValidationError
from jobboard.utils.filesystem import ensure_user_resume_dir, resolve_inside, sanitize_filename
from jobboard.utils.security import sign, verify_signature

RESUME_PREFIX = "resumes/"


class LinkExpired(JobBoardError):
    status_code = 410


def store_resume(user_id: str, job_id: str, content: bytes, data_path: Path | None = None) -> str:
    """Write the PDF to disk and return its opaque reference."""
    user_dir = ensure_user_resume_dir(user_id, data_path)
    filename = f"{sanitize_filename(job_id)}-{int(time.time() * 1000)}.pdf"
    (user_dir / filename).write_bytes(content)
    return f"{RESUME_PREFIX}{user_dir.name}/{filename}"


def belongs_to(user_id: str, reference: str) -> bool:
    """Whether a stored reference points at a file in the user's own resume folder.

    External references are not stored here and always pass.
    """
    if not reference.startswith(RESUME_PREFIX):
        return True
    parts = reference[len(RESUME_PREFIX):].split("/")
    return (
        len(parts) == 2
        and parts[0] == sanitize_filename(user_id)
        and parts[1] not in ("", ".", "..")
    )


def _storage_path(reference: str) -> str:
    if not reference.startswith(RESUME_PREFIX):
        raise ValidationError("resume_url", "not a stored resume reference")
    return reference[len(RESUME_PREFIX):]


def sign_resume_link(reference: str, ttl_seconds: int | None = None, now: float | None = None) -> str:
    """Time-limited download URL for a stored resume.

    References that do not point into local storage (e.g. an external URL the
    applicant supplied) are returned unchanged.
    """
    if not reference.startswith(RESUME_PREFIX):
        return reference
    ttl = ttl_seconds if ttl_seconds is not None else settings.resume_link_ttl_seconds
    expires = int((now if now is not None else time.time()) + ttl)
    signature = sign(settings.signing_secret, f"{reference}:{expires}")
    query = urlencode({"expires": expires, "signature": signature})
    return f"{settings.public_base_url}{settings.api_prefix}/{reference}?{query}"


def resolve_signed(reference: str, expires: int, signature: str, now: float | None = None) -> Path:
    if not verify_signature(settings.signing_secret, f"{reference}:{expires}", signature):
        raise Forbidden("Invalid resume link signature")
    if (now if now is not None else time.time()) > expires:
        raise LinkExpired("Resume link has expired")

    path = resolve_inside(settings.resumes_dir, _storage_path(reference))
    if path is None or not path.is_file():
        raise NotFound("Resume", reference)
    return path
