from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from modules.common.schemas import OptionalDate, blank_to_none
from modules.kpis.models import KpiType
from modules.users.schemas import UserSummary


class KpiCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    type: KpiType = KpiType.NUMERIC
    target: Optional[float] = None
    unit: Optional[str] = Field(default=None, max_length=20)
    is_active: bool = True
    project_id: Optional[str] = None


class KpiUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    type: Optional[KpiType] = None
    target: Optional[float] = None
    unit: Optional[str] = Field(default=None, max_length=20)
    is_active: Optional[bool] = None
    project_id: Optional[str] = None


class KpiValueCreate(BaseModel):
    value: float
    date: OptionalDate = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def clear_blank_date(cls, value):
        return blank_to_none(value)


class KpiValueUpdate(BaseModel):
    value: Optional[float] = None
    date: OptionalDate = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def clear_blank_date(cls, value):
        return blank_to_none(value)


class ProjectRef(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class KpiResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    type: KpiType
    target: Optional[float] = None
    unit: Optional[str] = None
    is_active: bool
    project_id: Optional[str] = None
    creator_id: str
    created_at: datetime
    updated_at: datetime
    creator: UserSummary
    project: Optional[ProjectRef] = None

    model_config = {"from_attributes": True}


class KpiValueResponse(BaseModel):
    id: str
    kpi_id: str
    user_id: str
    value: float
    date: datetime
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary

    model_config = {"from_attributes": True}
