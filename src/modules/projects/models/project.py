from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base
from modules.common.clock import utcnow
from modules.users.models.user import new_id


class ProjectStatus(PyEnum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"
    CANCELLED = "CANCELLED"


class Project(Base):
    __tablename__ = 'projects'

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    status = Column(Enum(ProjectStatus), nullable=False, default=ProjectStatus.PLANNING)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    budget = Column(Float, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    manager_id = Column(String(32), ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)
    creator_id = Column(String(32), ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)

    manager = relationship("User", foreign_keys=[manager_id], back_populates="managed_projects")
    creator = relationship("User", foreign_keys=[creator_id], back_populates="created_projects")

    employees = relationship(
        "EmployeeProject",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    kpis = relationship(
        "Kpi",
        back_populates="project",
        cascade="all",
    )
