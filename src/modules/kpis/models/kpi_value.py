from sqlalchemy import Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base
from modules.common.clock import utcnow
from modules.users.models.user import new_id


class KpiValue(Base):
    __tablename__ = "kpi_values"

    id      = Column(String(32), primary_key=True, default=new_id)
    kpi_id  = Column(String(32), ForeignKey("kpis.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    value   = Column(Float, nullable=False)
    date    = Column(DateTime, nullable=False, default=utcnow)
    notes   = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    kpi  = relationship("Kpi", back_populates="values")
    user = relationship("User", back_populates="kpi_values")
