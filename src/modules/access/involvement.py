"""Involvement predicates.

A user is involved with a project when they manage it, created it or are
assigned to it, and with a KPI when they created it or are involved with its
project. Each predicate is written once, as a table of owner attributes plus
a membership relation, and rendered two ways:

- ``*_involves(user_id, context)`` evaluates it over a loaded context
  (single-record checks);
- ``*_involvement_clause(user_id)`` renders it as a SQLAlchemy criterion
  (list filters), so both paths always agree.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from sqlalchemy import or_

from modules.kpis.models import Kpi, KpiValue
from modules.projects.models import EmployeeProject, Project

# Atributos que hacen "dueño" a un usuario. Son los mismos en el modelo y en el contexto.
PROJECT_OWNER_ATTRS = ("manager_id", "creator_id")
KPI_OWNER_ATTRS = ("creator_id",)


@dataclass(frozen=True)
class ProjectContext:
    id: str
    manager_id: str
    creator_id: str
    member_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_model(cls, project: Project) -> "ProjectContext":
        return cls(
            id=project.id,
            manager_id=project.manager_id,
            creator_id=project.creator_id,
            member_ids=frozenset(link.user_id for link in project.employees),
        )


@dataclass(frozen=True)
class KpiContext:
    id: str
    creator_id: str
    project: Optional[ProjectContext] = None

    @classmethod
    def from_model(cls, kpi: Kpi) -> "KpiContext":
        project = ProjectContext.from_model(kpi.project) if kpi.project is not None else None
        return cls(id=kpi.id, creator_id=kpi.creator_id, project=project)


@dataclass(frozen=True)
class KpiValueContext:
    id: str
    recorder_id: str
    kpi: KpiContext

    @classmethod
    def from_model(cls, value: KpiValue) -> "KpiValueContext":
        return cls(id=value.id, recorder_id=value.user_id, kpi=KpiContext.from_model(value.kpi))


def owns(user_id: str, context, owner_attrs) -> bool:
    return any(getattr(context, attr) == user_id for attr in owner_attrs)


def project_involves(user_id: str, project: ProjectContext) -> bool:
    return owns(user_id, project, PROJECT_OWNER_ATTRS) or user_id in project.member_ids


def kpi_involves(user_id: str, kpi: KpiContext) -> bool:
    if owns(user_id, kpi, KPI_OWNER_ATTRS):
        return True
    return kpi.project is not None and project_involves(user_id, kpi.project)


def project_involvement_clause(user_id: str):
    return or_(
        *(getattr(Project, attr) == user_id for attr in PROJECT_OWNER_ATTRS),
        Project.employees.any(EmployeeProject.user_id == user_id),
    )


def kpi_involvement_clause(user_id: str):
    return or_(
        *(getattr(Kpi, attr) == user_id for attr in KPI_OWNER_ATTRS),
        Kpi.project.has(project_involvement_clause(user_id)),
    )
