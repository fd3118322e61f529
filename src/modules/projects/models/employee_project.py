from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base
from modules.common.clock import utcnow
from modules.users.models.user import new_id


class EmployeeProject(Base):
    __tablename__ = 'employee_projects'
    __table_args__ = (
        UniqueConstraint('user_id', 'project_id', name='uq_employee_project'),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(String(32), ForeignKey('projects.id', ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=True)
    start_date = Column(DateTime, nullable=False, default=utcnow)
    end_date = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="memberships")
    project = relationship("Project", back_populates="employees")
