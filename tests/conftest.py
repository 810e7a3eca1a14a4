"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it through the get_db override, and approved users with bearer headers.
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from pms_dash.core.security import create_access_token, get_password_hash
from pms_dash.db.session import get_db, init_db
from pms_dash.main import app
from pms_dash.models import (
    Project, ProjectCategory, ProjectStatus, RequestStatus, User, UserRole,
)

PASSWORD = "secret123"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    # Not entered as a context manager: the lifespan would initialise the configured database
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, employee_code, role, status=RequestStatus.APPROVED, full_name=None):
    user = User(
        employee_code=employee_code,
        full_name=full_name or f"Employee {employee_code}",
        password=get_password_hash(PASSWORD),
        role=role,
        approval_status=status,
        approved_at=datetime.utcnow().isoformat() if status == RequestStatus.APPROVED else None,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(subject=user.employee_code)}"}


@pytest.fixture()
def admin(session):
    return make_user(session, "ADM001", UserRole.ADMIN, full_name="Asha Admin")


@pytest.fixture()
def director(session):
    return make_user(session, "PD001", UserRole.PROJECT_DIRECTOR, full_name="Ravi Director")


@pytest.fixture()
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture()
def director_headers(director):
    return auth_headers(director)


@pytest.fixture()
def sample_project(session, director):
    project = Project(
        name="GSLV Mark IV Prototype",
        category=ProjectCategory.LAUNCH_VEHICLES,
        total_budget=120000000,
        expenditure=45000000,
        status=ProjectStatus.ON_TRACK,
        description="Heavy lift launch vehicle",
        milestones=[
            {"id": "m1", "title": "Propulsion Design", "due_date": "2024-03-01",
             "status": "Completed", "completed_date": "2024-02-25"},
            {"id": "m2", "title": "Static Fire Test", "due_date": "2024-06-15", "status": "In Progress"},
        ],
        owner_id=director.id,
    )
    session.add(project)
    session.commit()
    session.refresh(project)
    return project
