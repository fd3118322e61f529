import logging
from typing import List, Optional

from modules.access import Action, ProjectContext, Resource, authorize, project_involvement_clause
from modules.auth.principal import Principal
from modules.common.clock import utcnow
from modules.common.errors import ConflictError, InvalidReferenceError, NotFoundError
from modules.projects.models import EmployeeProject, Project, ProjectStatus
from modules.projects.repositories.project_repository import MembershipRepository, ProjectRepository
from modules.projects.schemas import AssignEmployeeRequest, ProjectCreate, ProjectUpdate
from modules.users.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(
        self,
        projects: ProjectRepository,
        memberships: MembershipRepository,
        users: UserRepository,
    ):
        self.projects = projects
        self.memberships = memberships
        self.users = users

    def list_projects(
        self,
        principal: Principal,
        status: Optional[ProjectStatus] = None,
        manager_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Project]:
        """Proyectos visibles para el usuario.

        Para quien no es ADMIN el filtro de involucramiento se aplica en la
        consulta: los proyectos ajenos simplemente no aparecen.
        """
        authorize(principal, Resource.PROJECT, Action.LIST)
        visibility = None if principal.is_admin else project_involvement_clause(principal.id)
        return self.projects.search(visibility=visibility, status=status, manager_id=manager_id, search=search)

    def get_project(self, principal: Principal, project_id: str) -> Project:
        project = self._get_or_404(project_id)
        authorize(principal, Resource.PROJECT, Action.READ, ProjectContext.from_model(project))
        return project

    def create_project(self, principal: Principal, data: ProjectCreate) -> Project:
        authorize(principal, Resource.PROJECT, Action.CREATE)
        self._ensure_active_manager(data.manager_id)

        project = self.projects.create(
            name=data.name,
            description=data.description,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
            budget=data.budget,
            manager_id=data.manager_id,
            creator_id=principal.id,
        )
        logger.info("Project %s created by %s", project.id, principal.id)
        return project

    def update_project(self, principal: Principal, project_id: str, data: ProjectUpdate) -> Project:
        project = self._get_or_404(project_id)
        authorize(principal, Resource.PROJECT, Action.UPDATE, ProjectContext.from_model(project))

        update_data = data.model_dump(exclude_unset=True)

        # name, status y manager_id no admiten null; las fechas sí (null = borrar)
        for field in ("name", "status", "manager_id"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if "manager_id" in update_data and update_data["manager_id"] != project.manager_id:
            self._ensure_active_manager(update_data["manager_id"])

        project = self.projects.update(project, update_data)
        logger.info("Project %s updated by %s (%s)", project.id, principal.id, ", ".join(update_data) or "no changes")
        return project

    def delete_project(self, principal: Principal, project_id: str) -> None:
        authorize(principal, Resource.PROJECT, Action.DELETE)
        project = self._get_or_404(project_id)
        self.projects.delete(project)
        logger.info("Project %s deleted by %s", project_id, principal.id)

    def assign_employee(self, principal: Principal, project_id: str, data: AssignEmployeeRequest) -> EmployeeProject:
        project = self._get_or_404(project_id)
        authorize(principal, Resource.PROJECT, Action.MANAGE_MEMBERS, ProjectContext.from_model(project))

        employee = self.users.find_unique(data.user_id)
        if not employee or not employee.is_active:
            raise InvalidReferenceError("Employee not found or inactive")

        if self.memberships.find_link(data.user_id, project_id):
            raise ConflictError("Employee is already assigned to this project")

        # si otra request crea el mismo vínculo entre medio, el UniqueConstraint responde con Conflict
        assignment = self.memberships.create(
            user_id=data.user_id,
            project_id=project_id,
            role=data.role,
            start_date=data.start_date or utcnow(),
            end_date=data.end_date,
        )
        logger.info("User %s assigned to project %s by %s", data.user_id, project_id, principal.id)
        return assignment

    def remove_employee(self, principal: Principal, project_id: str, user_id: str) -> None:
        project = self._get_or_404(project_id)
        authorize(principal, Resource.PROJECT, Action.MANAGE_MEMBERS, ProjectContext.from_model(project))

        assignment = self.memberships.find_link(user_id, project_id)
        if not assignment:
            raise NotFoundError("Employee is not assigned to this project")

        self.memberships.delete(assignment)
        logger.info("User %s removed from project %s by %s", user_id, project_id, principal.id)

    def _get_or_404(self, project_id: str) -> Project:
        project = self.projects.get_with_relations(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    def _ensure_active_manager(self, manager_id: str):
        manager = self.users.find_unique(manager_id)
        if not manager or not manager.is_active:
            raise InvalidReferenceError("Manager not found or inactive")
