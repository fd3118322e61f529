from .involvement import (
    KpiContext,
    KpiValueContext,
    ProjectContext,
    kpi_involvement_clause,
    project_involvement_clause,
)
from .policies import Action, Resource, authorize, is_allowed, strip_protected_user_fields

__all__ = [
    'KpiContext', 'KpiValueContext', 'ProjectContext',
    'kpi_involvement_clause', 'project_involvement_clause',
    'Action', 'Resource', 'authorize', 'is_allowed', 'strip_protected_user_fields',
]
