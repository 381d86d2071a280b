from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company_id = Column(Text, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, ForeignKey("users.id"))
    description = Column(Text)
    requirements = Column(Text)
    salary_range = Column(Text)
    job_type = Column(Text, default="Full-time")
    location = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    minimum_experience = Column(Integer, nullable=False, default=0)
    created_at = Column(Text, nullable=False)

    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
