import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.config import settings
from jobboard.errors import JobBoardError
from jobboard.routers import applications, auth, catalog, jobs, resumes

logger = logging.getLogger("jobboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    # Startup: create the data directory and apply schema, seed data and migrations
    try:
        from jobboard.database import init_db
        from jobboard.utils.filesystem import ensure_data_dirs
        ensure_data_dirs()
        init_db()
        logger.info("Database ready at %s", settings.db_path)
    except Exception as exc:
        logger.error("Could not initialise database: %s", exc)
        raise
    if not settings.email_api_key:
        logger.warning("JOBBOARD_EMAIL_API_KEY is not set; applicant emails will fail.")
    yield
    # Shutdown: drop in-memory sessions
    from jobboard.services.auth_service import auth_service
    auth_service.clear_sessions()


app = FastAPI(
    title="Job Board",
    description="Job postings, applications and applicant management",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(catalog.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(resumes.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    import uvicorn
    uvicorn.run("jobboard.main:app", host=settings.host, port=settings.port)
