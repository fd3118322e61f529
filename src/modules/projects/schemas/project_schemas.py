from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from modules.common.schemas import OptionalDate, blank_to_none
from modules.kpis.models import KpiType
from modules.projects.models import ProjectStatus
from modules.users.schemas import UserSummary


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    budget: Optional[float] = Field(default=None, gt=0)
    manager_id: str = Field(min_length=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def clear_blank_dates(cls, value):
        return blank_to_none(value)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[ProjectStatus] = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    budget: Optional[float] = Field(default=None, gt=0)
    manager_id: Optional[str] = Field(default=None, min_length=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def clear_blank_dates(cls, value):
        return blank_to_none(value)


class AssignEmployeeRequest(BaseModel):
    user_id: str = Field(min_length=1)
    role: Optional[str] = Field(default=None, max_length=50)
    start_date: OptionalDate = None
    end_date: OptionalDate = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def clear_blank_dates(cls, value):
        return blank_to_none(value)


class AssignmentResponse(BaseModel):
    id: str
    user_id: str
    project_id: str
    role: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    user: UserSummary

    model_config = {"from_attributes": True}


class KpiSummary(BaseModel):
    id: str
    name: str
    type: KpiType
    target: Optional[float] = None
    unit: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    budget: Optional[float] = None
    manager_id: str
    creator_id: str
    created_at: datetime
    updated_at: datetime
    manager: UserSummary
    creator: UserSummary
    employees: List[AssignmentResponse] = []

    model_config = {"from_attributes": True}


class ProjectDetailResponse(ProjectResponse):
    kpis: List[KpiSummary] = []
