from .kpi_schemas import (
    KpiCreate, KpiUpdate, KpiValueCreate, KpiValueUpdate,
    ProjectRef, KpiResponse, KpiValueResponse
)

__all__ = [
    'KpiCreate', 'KpiUpdate', 'KpiValueCreate', 'KpiValueUpdate',
    'ProjectRef', 'KpiResponse', 'KpiValueResponse'
]
