import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from conftest import make_user
from create_tables import create_tables
from database import Base
from modules.common.errors import ConflictError, InvalidReferenceError
from modules.projects.models import EmployeeProject
from modules.projects.repositories.project_repository import MembershipRepository
from modules.users.repositories.user_repository import UserRepository


@pytest.fixture
def fk_db():
    """SQLite sólo valida claves foráneas con el pragma activo."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def test_unique_violation_is_conflict(db, employee):
    users = UserRepository(db)
    with pytest.raises(ConflictError):
        users.create(
            email=employee.email, password_hash="x", first_name="Dup", last_name="Licado"
        )
    assert users.find_by_email(employee.email).id == employee.id


def test_missing_foreign_key_is_invalid_reference(fk_db):
    # el proyecto fue borrado entre la verificación y el insert
    project_owner = make_user(fk_db, "owner@teamops.com")
    memberships = MembershipRepository(fk_db)

    with pytest.raises(InvalidReferenceError):
        memberships.create(user_id=project_owner.id, project_id="proyecto-borrado")

    assert fk_db.query(EmployeeProject).count() == 0
