from .project import Project, ProjectStatus
from .employee_project import EmployeeProject

__all__ = ['Project', 'ProjectStatus', 'EmployeeProject']
