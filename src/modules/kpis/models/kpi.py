from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base
from modules.common.clock import utcnow
from modules.users.models.user import new_id


class KpiType(PyEnum):
    NUMERIC = "NUMERIC"
    PERCENTAGE = "PERCENTAGE"
    CURRENCY = "CURRENCY"
    BOOLEAN = "BOOLEAN"


class Kpi(Base):
    __tablename__ = 'kpis'

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    type = Column(Enum(KpiType), nullable=False, default=KpiType.NUMERIC)
    target = Column(Float, nullable=True)
    unit = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    project_id = Column(String(32), ForeignKey('projects.id', ondelete="CASCADE"), nullable=True, index=True)
    creator_id = Column(String(32), ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)

    project = relationship("Project", back_populates="kpis")
    creator = relationship("User", back_populates="created_kpis")

    values = relationship(
        "KpiValue",
        back_populates="kpi",
        order_by="KpiValue.date.desc()",
        cascade="all, delete-orphan",
    )
