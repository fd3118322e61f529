from .project_schemas import (
    ProjectCreate, ProjectUpdate, AssignEmployeeRequest,
    AssignmentResponse, KpiSummary, ProjectResponse, ProjectDetailResponse
)

__all__ = [
    'ProjectCreate', 'ProjectUpdate', 'AssignEmployeeRequest',
    'AssignmentResponse', 'KpiSummary', 'ProjectResponse', 'ProjectDetailResponse'
]
