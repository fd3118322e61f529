import uuid
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from database import Base
from modules.common.clock import utcnow


def new_id() -> str:
    return uuid.uuid4().hex


class UserRole(PyEnum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class User(Base):
    __tablename__ = 'users'

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.EMPLOYEE)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Borrar un usuario arrastra todo lo que creó, gestiona o registró
    managed_projects = relationship(
        "Project",
        foreign_keys="Project.manager_id",
        back_populates="manager",
        cascade="all",
    )
    created_projects = relationship(
        "Project",
        foreign_keys="Project.creator_id",
        back_populates="creator",
        cascade="all",
    )
    memberships = relationship(
        "EmployeeProject",
        back_populates="user",
        cascade="all",
    )
    created_kpis = relationship(
        "Kpi",
        back_populates="creator",
        cascade="all",
    )
    kpi_values = relationship(
        "KpiValue",
        back_populates="user",
        cascade="all",
    )
