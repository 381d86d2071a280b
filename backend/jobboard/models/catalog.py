from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Domain(Base):
    __tablename__ = "job_domains"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    icon = Column(Text)
    created_at = Column(Text, nullable=False)

    companies = relationship("Company", back_populates="domain", cascade="all, delete-orphan")


class Company(Base):
    __tablename__ = "companies"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    domain_id = Column(Text, ForeignKey("job_domains.id", ondelete="CASCADE"), nullable=False)
    logo_url = Column(Text)
    description = Column(Text)
    location = Column(Text)
    website = Column(Text)
    created_at = Column(Text, nullable=False)

    domain = relationship("Domain", back_populates="companies")
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")
