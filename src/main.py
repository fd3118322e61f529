import logging
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from create_tables import create_tables
from database import SessionLocal
from logging_config import configure_logging

from modules.auth.services.auth_service import AuthService
from modules.common.exception_handlers import register_exception_handlers
from modules.kpis.models import Kpi, KpiType, KpiValue
from modules.projects.models import EmployeeProject, Project, ProjectStatus
from modules.users.models import User, UserRole
from modules.auth.controllers.auth_controller import router as auth_router
from modules.health.controllers.health_controller import router as health_router
from modules.kpis.controllers.kpi_controller import router as kpi_router
from modules.projects.controllers.project_controller import router as project_router
from modules.users.controllers.user_controller import router as user_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup logic ---
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    create_tables()
    if settings.SEED_DEMO_DATA:
        _seed_demo_data()
    yield
    # --- Shutdown logic ---
    logger.info("Application stopped")


def _seed_demo_data():
    """Crea usuarios, un proyecto y KPIs de ejemplo si la base está vacía."""
    with SessionLocal() as session:
        if session.query(User).count() > 0:
            logger.info("Demo data already present")
            return

        admin = User(
            email="admin@teamops.com",
            password_hash=AuthService.get_password_hash("Admin123!"),
            first_name="Admin",
            last_name="User",
            role=UserRole.ADMIN,
        )
        manager = User(
            email="manager@teamops.com",
            password_hash=AuthService.get_password_hash("Manager123!"),
            first_name="John",
            last_name="Manager",
            role=UserRole.MANAGER,
        )
        employee = User(
            email="employee@teamops.com",
            password_hash=AuthService.get_password_hash("Employee123!"),
            first_name="Jane",
            last_name="Employee",
            role=UserRole.EMPLOYEE,
        )
        project = Project(
            name="Website Redesign",
            description="Complete redesign of the company website with modern UI/UX",
            status=ProjectStatus.IN_PROGRESS,
            start_date=datetime(2024, 1, 15),
            end_date=datetime(2024, 6, 30),
            budget=50000.0,
            manager=manager,
            creator=admin,
        )
        project.employees.append(EmployeeProject(user=employee, role="Frontend Developer"))

        completion = Kpi(
            name="Project Completion",
            description="Percentage of project tasks completed",
            type=KpiType.PERCENTAGE,
            target=100.0,
            unit="%",
            creator=manager,
            project=project,
        )
        budget = Kpi(
            name="Budget Utilization",
            description="Percentage of budget spent",
            type=KpiType.PERCENTAGE,
            target=80.0,
            unit="%",
            creator=manager,
            project=project,
        )
        satisfaction = Kpi(
            name="Team Satisfaction",
            description="Average team satisfaction score",
            type=KpiType.NUMERIC,
            target=4.5,
            unit="score",
            creator=manager,
        )
        values = [
            KpiValue(kpi=completion, user=manager, value=65.0, date=datetime(2024, 3, 15),
                     notes="Good progress on frontend development"),
            KpiValue(kpi=completion, user=manager, value=75.0, date=datetime(2024, 4, 1),
                     notes="Backend API completed"),
            KpiValue(kpi=budget, user=manager, value=45.0, date=datetime(2024, 3, 15),
                     notes="Under budget so far"),
            KpiValue(kpi=satisfaction, user=employee, value=4.2, date=datetime(2024, 4, 1),
                     notes="Team is happy with the project direction"),
        ]
        session.add_all([admin, manager, employee, project, completion, budget, satisfaction, *values])
        session.commit()

        logger.info("Demo data created:")
        logger.info("   - Admin: %s / Admin123!", admin.email)
        logger.info("   - Manager: %s / Manager123!", manager.email)
        logger.info("   - Employee: %s / Employee123!", employee.email)


app = FastAPI(
    title=settings.APP_NAME,
    description="API para gestión de proyectos, equipos y KPIs",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Accept",
        "Accept-Language",
        "Content-Language",
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Origin",
        "Access-Control-Request-Method",
        "Access-Control-Request-Headers"
    ],
    max_age=86400,
)
register_exception_handlers(app)

# Routers
app.include_router(health_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(project_router, prefix="/api")
app.include_router(kpi_router, prefix="/api")

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=not settings.is_production)
