from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from modules.auth.dependencies import get_current_principal
from modules.auth.principal import Principal
from modules.common.schemas import MessageResponse
from modules.kpis.models import KpiType
from modules.kpis.repositories.kpi_repository import KpiRepository, KpiValueRepository
from modules.kpis.schemas import (
    KpiCreate, KpiResponse, KpiUpdate, KpiValueCreate, KpiValueResponse, KpiValueUpdate
)
from modules.kpis.services.kpi_service import KpiService
from modules.projects.repositories.project_repository import ProjectRepository

router = APIRouter(prefix="/kpis", tags=["kpis"])


def get_kpi_service(db: Session = Depends(get_db)) -> KpiService:
    return KpiService(KpiRepository(db), KpiValueRepository(db), ProjectRepository(db))


@router.get("", response_model=List[KpiResponse])
def list_kpis(
    kpi_type: Optional[KpiType] = Query(None, alias="type"),
    is_active: Optional[bool] = Query(None),
    project_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.list_kpis(
        principal, kpi_type=kpi_type, is_active=is_active, project_id=project_id, search=search
    )


@router.post("", response_model=KpiResponse, status_code=status.HTTP_201_CREATED)
def create_kpi(
    payload: KpiCreate,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.create_kpi(principal, payload)


@router.get("/{kpi_id}", response_model=KpiResponse)
def get_kpi(
    kpi_id: str,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.get_kpi(principal, kpi_id)


@router.put("/{kpi_id}", response_model=KpiResponse)
def update_kpi(
    kpi_id: str,
    payload: KpiUpdate,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.update_kpi(principal, kpi_id, payload)


@router.delete("/{kpi_id}", response_model=MessageResponse)
def delete_kpi(
    kpi_id: str,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    service.delete_kpi(principal, kpi_id)
    return MessageResponse(message="KPI deleted successfully")


@router.get("/{kpi_id}/values", response_model=List[KpiValueResponse])
def list_kpi_values(
    kpi_id: str,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.list_values(principal, kpi_id)


@router.post("/{kpi_id}/values", response_model=KpiValueResponse, status_code=status.HTTP_201_CREATED)
def create_kpi_value(
    kpi_id: str,
    payload: KpiValueCreate,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.create_value(principal, kpi_id, payload)


@router.get("/{kpi_id}/values/{value_id}", response_model=KpiValueResponse)
def get_kpi_value(
    kpi_id: str,
    value_id: str,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.get_value(principal, kpi_id, value_id)


@router.put("/{kpi_id}/values/{value_id}", response_model=KpiValueResponse)
def update_kpi_value(
    kpi_id: str,
    value_id: str,
    payload: KpiValueUpdate,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    return service.update_value(principal, kpi_id, value_id, payload)


@router.delete("/{kpi_id}/values/{value_id}", response_model=MessageResponse)
def delete_kpi_value(
    kpi_id: str,
    value_id: str,
    principal: Principal = Depends(get_current_principal),
    service: KpiService = Depends(get_kpi_service),
):
    service.delete_value(principal, kpi_id, value_id)
    return MessageResponse(message="KPI value deleted successfully")
