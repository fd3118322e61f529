import pytest

from conftest import DEFAULT_PASSWORD, make_user
from modules.auth.services.auth_service import AuthService
from modules.auth.services.token_service import TokenKind
from modules.common.errors import AuthenticationError, ConflictError
from modules.users.models import UserRole
from modules.users.repositories.user_repository import UserRepository


@pytest.fixture
def service(db, token_service):
    return AuthService(UserRepository(db), token_service)


def test_register_always_creates_employee(service, token_service):
    result = service.register("nueva@teamops.com", "Secret123!", "Nueva", "Persona")
    assert result.user.role == UserRole.EMPLOYEE
    assert token_service.verify(result.access_token, TokenKind.ACCESS).id == result.user.id
    assert token_service.verify(result.refresh_token, TokenKind.REFRESH).id == result.user.id


def test_register_duplicate_email(service, employee):
    with pytest.raises(ConflictError):
        service.register(employee.email, "Secret123!", "Otra", "Vez")


def test_login(service, employee):
    result = service.login(employee.email, DEFAULT_PASSWORD)
    assert result.user.id == employee.id


def test_login_failures_do_not_reveal_which_field(service, employee):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        service.login(employee.email, "incorrecta")
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        service.login("nadie@teamops.com", DEFAULT_PASSWORD)


def test_inactive_user_cannot_login(service, db):
    user = make_user(db, "inactivo@teamops.com", is_active=False)
    with pytest.raises(AuthenticationError, match="deactivated"):
        service.login(user.email, DEFAULT_PASSWORD)


def test_refresh_issues_access_token(service, token_service, employee):
    result = service.login(employee.email, DEFAULT_PASSWORD)
    access = service.refresh(result.refresh_token)
    assert token_service.verify(access, TokenKind.ACCESS).id == employee.id


def test_access_token_cannot_refresh(service, employee):
    result = service.login(employee.email, DEFAULT_PASSWORD)
    with pytest.raises(AuthenticationError):
        service.refresh(result.access_token)


def test_refresh_rejected_after_deactivation(service, db, employee):
    result = service.login(employee.email, DEFAULT_PASSWORD)
    employee.is_active = False
    db.commit()
    with pytest.raises(AuthenticationError, match="inactive"):
        service.refresh(result.refresh_token)
