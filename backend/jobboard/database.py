import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobboard.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- IDENTITY
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    id            TEXT PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS profiles (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
    full_name  TEXT,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS auth_throttle (
    key             TEXT PRIMARY KEY,
    failed_attempts INTEGER NOT NULL,
    last_failed_at  REAL NOT NULL
);

-- ============================================================
-- ROLE REGISTRY
-- ============================================================
CREATE TABLE IF NOT EXISTS user_roles (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
    role       TEXT NOT NULL CHECK(role IN ('job_seeker','employer')),
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ============================================================
-- CATALOG
-- ============================================================
CREATE TABLE IF NOT EXISTS job_domains (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL UNIQUE,
    description TEXT,
    icon        TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS companies (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    domain_id   TEXT NOT NULL REFERENCES job_domains(id) ON DELETE CASCADE,
    logo_url    TEXT,
    description TEXT,
    location    TEXT,
    website     TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_companies_domain ON companies(domain_id);

CREATE TABLE IF NOT EXISTS jobs (
    id                 TEXT PRIMARY KEY,
    title              TEXT NOT NULL,
    company_id         TEXT NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
    user_id            TEXT REFERENCES users(id),
    description        TEXT,
    requirements       TEXT,
    salary_range       TEXT,
    job_type           TEXT DEFAULT 'Full-time',
    location           TEXT,
    is_active          INTEGER NOT NULL DEFAULT 1,
    minimum_experience INTEGER NOT NULL DEFAULT 0 CHECK(minimum_experience >= 0),
    created_at         TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company_id);
CREATE INDEX IF NOT EXISTS idx_jobs_owner ON jobs(user_id);

-- ============================================================
-- APPLICATION LEDGER
-- ============================================================
CREATE TABLE IF NOT EXISTS job_applications (
    id               TEXT PRIMARY KEY,
    job_id           TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    user_id          TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    applicant_name   TEXT,
    applicant_email  TEXT,
    age              INTEGER,
    experience_years INTEGER,
    resume_url       TEXT,
    cover_letter     TEXT,
    status           TEXT NOT NULL DEFAULT 'pending'
                     CHECK(status IN ('pending','reviewed','shortlisted',
                                      'interviewed','selected','rejected')),
    created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    UNIQUE (job_id, user_id)
);

CREATE INDEX IF NOT EXISTS idx_applications_job ON job_applications(job_id);
CREATE INDEX IF NOT EXISTS idx_applications_user ON job_applications(user_id);
"""

SEED_SQL = """\
INSERT OR IGNORE INTO job_domains (id, name, description, icon) VALUES
('d0000000-0000-4000-8000-000000000001', 'Technology', 'Software, IT, and Tech companies', 'Monitor'),
('d0000000-0000-4000-8000-000000000002', 'Healthcare', 'Hospitals, clinics, and medical services', 'Heart'),
('d0000000-0000-4000-8000-000000000003', 'Finance', 'Banking, insurance, and financial services', 'DollarSign'),
('d0000000-0000-4000-8000-000000000004', 'Education', 'Schools, universities, and e-learning', 'GraduationCap'),
('d0000000-0000-4000-8000-000000000005', 'Marketing', 'Advertising, PR, and digital marketing', 'Megaphone'),
('d0000000-0000-4000-8000-000000000006', 'Manufacturing', 'Production and industrial companies', 'Factory');

INSERT OR IGNORE INTO companies (id, name, domain_id, description, location) VALUES
('c0000000-0000-4000-8000-000000000001', 'TechCorp Inc.', 'd0000000-0000-4000-8000-000000000001',
 'Leading software development company', 'San Francisco, CA'),
('c0000000-0000-4000-8000-000000000002', 'DataFlow Systems', 'd0000000-0000-4000-8000-000000000001',
 'Big data and analytics solutions', 'New York, NY'),
('c0000000-0000-4000-8000-000000000003', 'HealthFirst Medical', 'd0000000-0000-4000-8000-000000000002',
 'Premier healthcare provider', 'Boston, MA'),
('c0000000-0000-4000-8000-000000000004', 'GlobalBank', 'd0000000-0000-4000-8000-000000000003',
 'International banking services', 'Chicago, IL'),
('c0000000-0000-4000-8000-000000000005', 'EduTech Academy', 'd0000000-0000-4000-8000-000000000004',
 'Online education platform', 'Austin, TX');
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.executescript(SEED_SQL)
    conn.close()
