"""Permission rules per resource and action.

Every rule is a pure function ``rule(principal, context) -> bool`` over an
already loaded context; none touches the store. ``POLICIES`` maps
(resource, action) to its rule and ``authorize`` turns a deny into
``ForbiddenError``.
"""
import logging
from enum import Enum
from functools import wraps
from typing import Any, Dict, Optional

from modules.access.involvement import (
    KPI_OWNER_ATTRS,
    PROJECT_OWNER_ATTRS,
    KpiContext,
    KpiValueContext,
    ProjectContext,
    kpi_involves,
    owns,
    project_involves,
)
from modules.auth.principal import Principal
from modules.common.errors import ForbiddenError
from modules.users.models.user import UserRole

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    USER = "user"
    PROJECT = "project"
    KPI = "kpi"
    KPI_VALUE = "kpi_value"


class Action(str, Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    # user
    CHANGE_PASSWORD = "change_password"
    CHANGE_STATUS = "change_status"
    # project
    MANAGE_MEMBERS = "manage_members"


CREATOR_ROLES = {UserRole.ADMIN, UserRole.MANAGER}

# Campos que sólo un ADMIN puede escribir sobre un usuario
PROTECTED_USER_FIELDS = ("role", "is_active")


def admin_bypass(rule):
    """ADMIN passes every ownership and involvement check."""
    @wraps(rule)
    def wrapper(principal: Principal, context: Any = None) -> bool:
        return principal.is_admin or rule(principal, context)
    return wrapper


def allow_any(principal: Principal, context: Any = None) -> bool:
    return True


@admin_bypass
def admin_only(principal: Principal, context: Any = None) -> bool:
    return False


# --- Users -------------------------------------------------------------------

@admin_bypass
def is_self(principal: Principal, target_user_id: str) -> bool:
    return principal.id == target_user_id


def requires_current_password(principal: Principal, target_user_id: str) -> bool:
    return not principal.is_admin


def strip_protected_user_fields(principal: Principal, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drops role/is_active from a user write unless the caller is ADMIN.

    This is a silent downgrade, never an error.
    """
    if principal.is_admin:
        return dict(data)
    stripped = {k: v for k, v in data.items() if k not in PROTECTED_USER_FIELDS}
    if len(stripped) != len(data):
        logger.info("Ignoring protected user fields sent by non-admin %s", principal.id)
    return stripped


# --- Projects ----------------------------------------------------------------

@admin_bypass
def can_read_project(principal: Principal, project: ProjectContext) -> bool:
    return project_involves(principal.id, project)


def can_create_project(principal: Principal, context: Any = None) -> bool:
    return principal.role in CREATOR_ROLES


@admin_bypass
def can_update_project(principal: Principal, project: ProjectContext) -> bool:
    return owns(principal.id, project, PROJECT_OWNER_ATTRS)


@admin_bypass
def can_manage_members(principal: Principal, project: ProjectContext) -> bool:
    return project.manager_id == principal.id


# --- KPIs --------------------------------------------------------------------

@admin_bypass
def can_read_kpi(principal: Principal, kpi: KpiContext) -> bool:
    return kpi_involves(principal.id, kpi)


def can_create_kpi(principal: Principal, project: Optional[ProjectContext] = None) -> bool:
    if principal.role not in CREATOR_ROLES:
        return False
    return project is None or principal.is_admin or project_involves(principal.id, project)


@admin_bypass
def can_attach_kpi_to_project(principal: Principal, project: ProjectContext) -> bool:
    return project_involves(principal.id, project)


@admin_bypass
def can_modify_kpi(principal: Principal, kpi: KpiContext) -> bool:
    if owns(principal.id, kpi, KPI_OWNER_ATTRS):
        return True
    return kpi.project is not None and owns(principal.id, kpi.project, PROJECT_OWNER_ATTRS)


def can_read_kpi_value(principal: Principal, value: KpiValueContext) -> bool:
    return can_read_kpi(principal, value.kpi)


@admin_bypass
def can_modify_kpi_value(principal: Principal, value: KpiValueContext) -> bool:
    return value.recorder_id == principal.id or can_modify_kpi(principal, value.kpi)


POLICIES = {
    (Resource.USER, Action.LIST): admin_only,
    (Resource.USER, Action.READ): is_self,
    (Resource.USER, Action.CREATE): admin_only,
    (Resource.USER, Action.UPDATE): is_self,
    (Resource.USER, Action.DELETE): admin_only,
    (Resource.USER, Action.CHANGE_PASSWORD): is_self,
    (Resource.USER, Action.CHANGE_STATUS): admin_only,

    # el listado de proyectos y KPIs se filtra en la consulta
    (Resource.PROJECT, Action.LIST): allow_any,
    (Resource.PROJECT, Action.READ): can_read_project,
    (Resource.PROJECT, Action.CREATE): can_create_project,
    (Resource.PROJECT, Action.UPDATE): can_update_project,
    (Resource.PROJECT, Action.DELETE): admin_only,
    (Resource.PROJECT, Action.MANAGE_MEMBERS): can_manage_members,

    (Resource.KPI, Action.LIST): allow_any,
    (Resource.KPI, Action.READ): can_read_kpi,
    (Resource.KPI, Action.CREATE): can_create_kpi,
    (Resource.KPI, Action.UPDATE): can_modify_kpi,
    (Resource.KPI, Action.DELETE): can_modify_kpi,

    # registrar un valor sólo exige poder leer el KPI
    (Resource.KPI_VALUE, Action.LIST): can_read_kpi,
    (Resource.KPI_VALUE, Action.CREATE): can_read_kpi,
    (Resource.KPI_VALUE, Action.READ): can_read_kpi_value,
    (Resource.KPI_VALUE, Action.UPDATE): can_modify_kpi_value,
    (Resource.KPI_VALUE, Action.DELETE): can_modify_kpi_value,
}


def is_allowed(principal: Principal, resource: Resource, action: Action, context: Any = None) -> bool:
    rule = POLICIES.get((resource, action))
    if rule is None:
        return False
    return rule(principal, context)


def authorize(
    principal: Principal,
    resource: Resource,
    action: Action,
    context: Any = None,
    message: str = "Insufficient permissions",
):
    if not is_allowed(principal, resource, action, context):
        logger.warning(
            "Denied %s on %s for user %s (%s)",
            action.value, resource.value, principal.id, principal.role.value,
        )
        raise ForbiddenError(message)
