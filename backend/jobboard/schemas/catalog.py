from pydantic import BaseModel


class DomainResponse(BaseModel):
    id: str
    name: str
    description: str | None
    icon: str | None


class DomainListResponse(BaseModel):
    domains: list[DomainResponse]
    warning: str | None = None


class CompanyResponse(BaseModel):
    id: str
    name: str
    domain_id: str
    logo_url: str | None
    description: str | None
    location: str | None
    website: str | None


class CompanyListResponse(BaseModel):
    companies: list[CompanyResponse]
    warning: str | None = None
