from jobboard.models.user import Role, User, UserRole, Profile
from jobboard.models.catalog import Domain, Company
from jobboard.models.job import Job
from jobboard.models.application import Application, ApplicationStatus

__all__ = ["Role", "User", "UserRole", "Profile", "Domain", "Company", "Job", "Application", "ApplicationStatus"]
