from pathlib import Path
from jobboard.config import settings


def ensure_data_dirs(data_path: Path | None = None) -> Path:
    path = data_path or settings.data_path
    path.mkdir(parents=True, exist_ok=True)
    (path / "resumes").mkdir(exist_ok=True)
    return path


def ensure_user_resume_dir(user_id: str, data_path: Path | None = None) -> Path:
    path = data_path or settings.data_path
    user_dir = path / "resumes" / sanitize_filename(user_id)
    user_dir.mkdir(parents=True, exist_ok=True)
    return user_dir


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)


def resolve_inside(base: Path, relative: str) -> Path | None:
    """Resolve ``relative`` under ``base``; None if it escapes the directory."""
    base = base.resolve()
    candidate = (base / relative).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    return candidate
