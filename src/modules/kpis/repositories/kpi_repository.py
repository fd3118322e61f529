from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from modules.common.repository import SqlAlchemyRepository
from modules.kpis.models import Kpi, KpiType, KpiValue
from modules.projects.models import Project

KPI_LOAD_OPTIONS = (
    selectinload(Kpi.creator),
    selectinload(Kpi.project).selectinload(Project.employees),
)


class KpiRepository(SqlAlchemyRepository[Kpi]):
    model = Kpi

    def get_with_relations(self, kpi_id: str) -> Optional[Kpi]:
        return self.find_unique(kpi_id, options=KPI_LOAD_OPTIONS)

    def search(
        self,
        visibility=None,
        kpi_type: Optional[KpiType] = None,
        is_active: Optional[bool] = None,
        project_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Kpi]:
        criteria = []
        if visibility is not None:
            criteria.append(visibility)
        if kpi_type is not None:
            criteria.append(Kpi.type == kpi_type)
        if is_active is not None:
            criteria.append(Kpi.is_active == is_active)
        if project_id:
            criteria.append(Kpi.project_id == project_id)
        if search:
            pattern = f"%{search}%"
            criteria.append(or_(Kpi.name.ilike(pattern), Kpi.description.ilike(pattern)))
        return self.find_many(*criteria, order_by=Kpi.created_at.desc(), options=KPI_LOAD_OPTIONS)


class KpiValueRepository(SqlAlchemyRepository[KpiValue]):
    model = KpiValue

    def find_by_kpi(self, kpi_id: str) -> List[KpiValue]:
        return self.find_many(
            KpiValue.kpi_id == kpi_id,
            order_by=KpiValue.date.desc(),
            options=(selectinload(KpiValue.user),),
        )

    def find_in_kpi(self, kpi_id: str, value_id: str) -> Optional[KpiValue]:
        return (
            self.db.query(KpiValue)
            .options(selectinload(KpiValue.user))
            .filter(KpiValue.id == value_id, KpiValue.kpi_id == kpi_id)
            .first()
        )
