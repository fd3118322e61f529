# create_tables.py
import logging

from database import engine, Base
# Importa todos los modelos para que se registren con Base
from modules.users.models import User
from modules.projects.models import Project, EmployeeProject
from modules.kpis.models import Kpi, KpiValue

logger = logging.getLogger(__name__)


def create_tables(bind=None):
    """Crea todas las tablas en la base de datos"""
    logger.info("Tables to create: %s", list(Base.metadata.tables.keys()))
    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    from logging_config import configure_logging

    configure_logging()
    create_tables()
    logger.info("Tables created")
