from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from modules.auth.dependencies import get_current_principal
from modules.auth.principal import Principal
from modules.common.schemas import MessageResponse
from modules.projects.models import ProjectStatus
from modules.projects.repositories.project_repository import MembershipRepository, ProjectRepository
from modules.projects.schemas import (
    AssignEmployeeRequest, AssignmentResponse, ProjectCreate,
    ProjectDetailResponse, ProjectResponse, ProjectUpdate
)
from modules.projects.services.project_service import ProjectService
from modules.users.repositories.user_repository import UserRepository

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(ProjectRepository(db), MembershipRepository(db), UserRepository(db))


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    manager_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    """Proyectos en los que participa el usuario (todos para ADMIN)"""
    return service.list_projects(principal, status=status_filter, manager_id=manager_id, search=search)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.create_project(principal, payload)


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(
    project_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.get_project(principal, project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.update_project(principal, project_id, payload)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    service.delete_project(principal, project_id)
    return MessageResponse(message="Project deleted successfully")


@router.post("/{project_id}/assign", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
def assign_employee(
    project_id: str,
    payload: AssignEmployeeRequest,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.assign_employee(principal, project_id, payload)


@router.delete("/{project_id}/assign/{user_id}", response_model=MessageResponse)
def remove_employee(
    project_id: str,
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    service.remove_employee(principal, project_id, user_id)
    return MessageResponse(message="Employee removed from project successfully")
