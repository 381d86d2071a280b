import enum

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from jobboard.database import Base


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    SELECTED = "selected"
    REJECTED = "rejected"


class Application(Base):
    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "user_id"),)

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    applicant_name = Column(Text)
    applicant_email = Column(Text)
    age = Column(Integer)
    experience_years = Column(Integer)
    resume_url = Column(Text)
    cover_letter = Column(Text)
    status = Column(Text, nullable=False, default=ApplicationStatus.PENDING.value)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")
