from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import optional_actor
from jobboard.models.catalog import Company, Domain
from jobboard.routers.jobs import _job_to_response
from jobboard.schemas.catalog import CompanyListResponse, CompanyResponse, DomainListResponse, DomainResponse
from jobboard.schemas.job import JobListResponse
from jobboard.services import catalog_service
from jobboard.services.authorization import Actor

router = APIRouter(tags=["catalog"])


def _domain_to_response(domain: Domain) -> DomainResponse:
    return DomainResponse(
        id=domain.id,
        name=domain.name,
        description=domain.description,
        icon=domain.icon,
    )


def _company_to_response(company: Company) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        domain_id=company.domain_id,
        logo_url=company.logo_url,
        description=company.description,
        location=company.location,
        website=company.website,
    )


@router.get("/domains", response_model=DomainListResponse)
async def list_domains(db: Session = Depends(get_db)):
    domains, warning = catalog_service.list_domains(db)
    return DomainListResponse(domains=[_domain_to_response(d) for d in domains], warning=warning)


@router.get("/domains/{domain_id}/companies", response_model=CompanyListResponse)
async def list_domain_companies(domain_id: str, db: Session = Depends(get_db)):
    companies, warning = catalog_service.list_companies(db, domain_id)
    return CompanyListResponse(companies=[_company_to_response(c) for c in companies], warning=warning)


@router.get("/companies", response_model=CompanyListResponse)
async def list_companies(db: Session = Depends(get_db)):
    companies, warning = catalog_service.list_companies(db)
    return CompanyListResponse(companies=[_company_to_response(c) for c in companies], warning=warning)


@router.get("/companies/{company_id}/jobs", response_model=JobListResponse)
async def list_company_jobs(
    company_id: str,
    actor: Actor | None = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    jobs, warning = catalog_service.list_jobs(db, actor, company_id)
    return JobListResponse(jobs=[_job_to_response(j) for j in jobs], warning=warning)
