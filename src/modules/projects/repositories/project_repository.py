from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from modules.common.repository import SqlAlchemyRepository
from modules.projects.models import EmployeeProject, Project, ProjectStatus

# Lo necesario para mostrar un proyecto y evaluar permisos sobre él
PROJECT_LOAD_OPTIONS = (
    selectinload(Project.manager),
    selectinload(Project.creator),
    selectinload(Project.employees).selectinload(EmployeeProject.user),
)


class ProjectRepository(SqlAlchemyRepository[Project]):
    model = Project

    def get_with_relations(self, project_id: str) -> Optional[Project]:
        return self.find_unique(project_id, options=PROJECT_LOAD_OPTIONS)

    def search(
        self,
        visibility=None,
        status: Optional[ProjectStatus] = None,
        manager_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Project]:
        criteria = []
        if visibility is not None:
            criteria.append(visibility)
        if status is not None:
            criteria.append(Project.status == status)
        if manager_id:
            criteria.append(Project.manager_id == manager_id)
        if search:
            pattern = f"%{search}%"
            criteria.append(or_(Project.name.ilike(pattern), Project.description.ilike(pattern)))
        return self.find_many(*criteria, order_by=Project.created_at.desc(), options=PROJECT_LOAD_OPTIONS)


class MembershipRepository(SqlAlchemyRepository[EmployeeProject]):
    model = EmployeeProject

    def find_link(self, user_id: str, project_id: str) -> Optional[EmployeeProject]:
        return (
            self.db.query(EmployeeProject)
            .filter(EmployeeProject.user_id == user_id, EmployeeProject.project_id == project_id)
            .first()
        )
