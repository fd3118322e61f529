import os

# La configuración se lee al importar `config`: fijarla antes de cualquier import de la app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from create_tables import create_tables
from database import Base, get_db
from main import app
from modules.auth.principal import Principal
from modules.auth.services.auth_service import AuthService
from modules.auth.services.token_service import TokenService
from modules.kpis.models import Kpi, KpiValue
from modules.projects.models import EmployeeProject, Project
from modules.users.models import User, UserRole

DEFAULT_PASSWORD = "Password123!"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    return TokenService()


# --- datos -------------------------------------------------------------------

def make_user(db, email, role=UserRole.EMPLOYEE, is_active=True, password=DEFAULT_PASSWORD):
    user = User(
        email=email,
        password_hash=AuthService.get_password_hash(password),
        first_name=email.split("@")[0].capitalize(),
        last_name="Test",
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_project(db, manager, creator=None, members=(), name="Proyecto"):
    project = Project(name=name, manager_id=manager.id, creator_id=(creator or manager).id)
    db.add(project)
    db.flush()
    for member in members:
        db.add(EmployeeProject(user_id=member.id, project_id=project.id))
    db.commit()
    db.refresh(project)
    return project


def make_kpi(db, creator, project=None, name="KPI"):
    kpi = Kpi(name=name, creator_id=creator.id, project_id=project.id if project else None)
    db.add(kpi)
    db.commit()
    db.refresh(kpi)
    return kpi


def make_value(db, kpi, recorder, value=1.0):
    kpi_value = KpiValue(kpi_id=kpi.id, user_id=recorder.id, value=value)
    db.add(kpi_value)
    db.commit()
    db.refresh(kpi_value)
    return kpi_value


def principal_of(user):
    return Principal.from_user(user)


def auth_headers(token_service, user):
    return {"Authorization": f"Bearer {token_service.issue_access_token(principal_of(user))}"}


@pytest.fixture
def admin(db):
    return make_user(db, "admin@teamops.com", UserRole.ADMIN)


@pytest.fixture
def manager(db):
    return make_user(db, "manager@teamops.com", UserRole.MANAGER)


@pytest.fixture
def other_manager(db):
    return make_user(db, "other.manager@teamops.com", UserRole.MANAGER)


@pytest.fixture
def employee(db):
    return make_user(db, "employee@teamops.com", UserRole.EMPLOYEE)


@pytest.fixture
def outsider(db):
    return make_user(db, "outsider@teamops.com", UserRole.EMPLOYEE)
