import logging
from typing import List, Optional

from modules.access import (
    Action,
    KpiContext,
    KpiValueContext,
    ProjectContext,
    Resource,
    authorize,
    kpi_involvement_clause,
)
from modules.access.policies import can_attach_kpi_to_project
from modules.auth.principal import Principal
from modules.common.clock import utcnow
from modules.common.errors import ForbiddenError, NotFoundError
from modules.kpis.models import Kpi, KpiType, KpiValue
from modules.kpis.repositories.kpi_repository import KpiRepository, KpiValueRepository
from modules.kpis.schemas import KpiCreate, KpiUpdate, KpiValueCreate, KpiValueUpdate
from modules.projects.repositories.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


class KpiService:
    """KPIs y sus valores.

    Los valores heredan el acceso de lectura del KPI: toda operación sobre
    valores valida primero el KPI padre y sólo después consulta el valor.
    """

    def __init__(self, kpis: KpiRepository, values: KpiValueRepository, projects: ProjectRepository):
        self.kpis = kpis
        self.values = values
        self.projects = projects

    # --- KPIs ---------------------------------------------------------------

    def list_kpis(
        self,
        principal: Principal,
        kpi_type: Optional[KpiType] = None,
        is_active: Optional[bool] = None,
        project_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Kpi]:
        authorize(principal, Resource.KPI, Action.LIST)
        visibility = None if principal.is_admin else kpi_involvement_clause(principal.id)
        return self.kpis.search(
            visibility=visibility,
            kpi_type=kpi_type,
            is_active=is_active,
            project_id=project_id,
            search=search,
        )

    def get_kpi(self, principal: Principal, kpi_id: str) -> Kpi:
        kpi = self._get_or_404(kpi_id)
        authorize(principal, Resource.KPI, Action.READ, KpiContext.from_model(kpi))
        return kpi

    def create_kpi(self, principal: Principal, data: KpiCreate) -> Kpi:
        authorize(principal, Resource.KPI, Action.CREATE)
        if data.project_id:
            self._ensure_project_access(
                principal, data.project_id,
                "Insufficient permissions to create KPI for this project",
            )

        kpi = self.kpis.create(
            name=data.name,
            description=data.description,
            type=data.type,
            target=data.target,
            unit=data.unit,
            is_active=data.is_active,
            project_id=data.project_id or None,
            creator_id=principal.id,
        )
        logger.info("KPI %s created by %s", kpi.id, principal.id)
        return kpi

    def update_kpi(self, principal: Principal, kpi_id: str, data: KpiUpdate) -> Kpi:
        kpi = self._get_or_404(kpi_id)
        authorize(principal, Resource.KPI, Action.UPDATE, KpiContext.from_model(kpi))

        update_data = data.model_dump(exclude_unset=True)
        for field in ("name", "type", "is_active"):
            if field in update_data and update_data[field] is None:
                del update_data[field]
        if "project_id" in update_data and not update_data["project_id"]:
            update_data["project_id"] = None

        new_project_id = update_data.get("project_id")
        if new_project_id and new_project_id != kpi.project_id:
            # el involucramiento se valida contra el proyecto nuevo
            self._ensure_project_access(
                principal, new_project_id,
                "Insufficient permissions to assign KPI to this project",
            )

        kpi = self.kpis.update(kpi, update_data)
        logger.info("KPI %s updated by %s (%s)", kpi.id, principal.id, ", ".join(update_data) or "no changes")
        return kpi

    def delete_kpi(self, principal: Principal, kpi_id: str) -> None:
        kpi = self._get_or_404(kpi_id)
        authorize(principal, Resource.KPI, Action.DELETE, KpiContext.from_model(kpi))
        self.kpis.delete(kpi)
        logger.info("KPI %s and its values deleted by %s", kpi_id, principal.id)

    # --- Valores ------------------------------------------------------------

    def list_values(self, principal: Principal, kpi_id: str) -> List[KpiValue]:
        kpi = self.get_kpi(principal, kpi_id)
        authorize(principal, Resource.KPI_VALUE, Action.LIST, KpiContext.from_model(kpi))
        return self.values.find_by_kpi(kpi_id)

    def get_value(self, principal: Principal, kpi_id: str, value_id: str) -> KpiValue:
        self.get_kpi(principal, kpi_id)
        value = self._get_value_or_404(kpi_id, value_id)
        authorize(principal, Resource.KPI_VALUE, Action.READ, KpiValueContext.from_model(value))
        return value

    def create_value(self, principal: Principal, kpi_id: str, data: KpiValueCreate) -> KpiValue:
        kpi = self.get_kpi(principal, kpi_id)
        authorize(principal, Resource.KPI_VALUE, Action.CREATE, KpiContext.from_model(kpi))

        value = self.values.create(
            kpi_id=kpi_id,
            user_id=principal.id,
            value=data.value,
            date=data.date or utcnow(),
            notes=data.notes,
        )
        logger.info("Value %s recorded on KPI %s by %s", value.id, kpi_id, principal.id)
        return value

    def update_value(self, principal: Principal, kpi_id: str, value_id: str, data: KpiValueUpdate) -> KpiValue:
        self.get_kpi(principal, kpi_id)
        value = self._get_value_or_404(kpi_id, value_id)
        authorize(principal, Resource.KPI_VALUE, Action.UPDATE, KpiValueContext.from_model(value))

        update_data = data.model_dump(exclude_unset=True)
        # value y date no se pueden borrar
        for field in ("value", "date"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        value = self.values.update(value, update_data)
        logger.info("Value %s of KPI %s updated by %s", value_id, kpi_id, principal.id)
        return value

    def delete_value(self, principal: Principal, kpi_id: str, value_id: str) -> None:
        self.get_kpi(principal, kpi_id)
        value = self._get_value_or_404(kpi_id, value_id)
        authorize(principal, Resource.KPI_VALUE, Action.DELETE, KpiValueContext.from_model(value))
        self.values.delete(value)
        logger.info("Value %s of KPI %s deleted by %s", value_id, kpi_id, principal.id)

    # --- helpers ------------------------------------------------------------

    def _get_or_404(self, kpi_id: str) -> Kpi:
        kpi = self.kpis.get_with_relations(kpi_id)
        if not kpi:
            raise NotFoundError("KPI not found")
        return kpi

    def _get_value_or_404(self, kpi_id: str, value_id: str) -> KpiValue:
        value = self.values.find_in_kpi(kpi_id, value_id)
        if not value:
            raise NotFoundError("KPI value not found")
        return value

    def _ensure_project_access(self, principal: Principal, project_id: str, message: str):
        project = self.projects.get_with_relations(project_id)
        if not project:
            raise NotFoundError("Project not found")
        if not can_attach_kpi_to_project(principal, ProjectContext.from_model(project)):
            logger.warning("User %s denied attaching KPI to project %s", principal.id, project_id)
            raise ForbiddenError(message)
