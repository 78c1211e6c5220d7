import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roster.auth.security import create_access_token
from roster.database import Base, get_db, enable_sqlite_foreign_keys
from roster.main import app
from roster.models import (
    Station,
    Division,
    Membership,
    UserRole,
    Person,
    ScheduleCycle,
    ShiftTemplate,
)
from roster.services.clock import FixedClock, get_clock
from roster.services.display_cache import display_cache

# Понедельник, середина дневной смены
TEST_NOW = datetime(2024, 1, 1, 10, 0)

ADMIN_USER = "admin-1"
EDITOR_USER = "editor-1"
VIEWER_USER = "viewer-1"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def auth_headers(user_id: str) -> dict:
    token = create_access_token({"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


# ============================================
# Fixtures
# ============================================
@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FixedClock(TEST_NOW)


@pytest.fixture(autouse=True)
def reset_display_cache():
    display_cache.clear()
    yield
    display_cache.clear()


@pytest.fixture
def client(db, clock):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def station(db):
    """Часть с тремя караулами A, B, C и пользователями всех ролей"""
    station = Station(name="Feuerwache 1")
    db.add(station)
    db.flush()

    divisions = [Division(station_id=station.id, name=name) for name in ("A", "B", "C")]
    db.add_all(divisions)
    db.flush()

    db.add_all([
        Membership(user_id=ADMIN_USER, station_id=station.id, role=UserRole.ADMIN),
        Membership(
            user_id=EDITOR_USER,
            station_id=station.id,
            role=UserRole.EDITOR,
            division_ids=[divisions[0].id],
        ),
        Membership(user_id=VIEWER_USER, station_id=station.id, role=UserRole.VIEWER),
    ])
    db.commit()
    return station


@pytest.fixture
def divisions(db, station):
    return db.query(Division).filter(Division.station_id == station.id).order_by(Division.name).all()


@pytest.fixture
def cycle(db, station, divisions):
    cycle = ScheduleCycle(
        station_id=station.id,
        start_date=date(2024, 1, 1),
        order_division_ids=[d.id for d in divisions],
        switch_hours=12,
    )
    db.add(cycle)
    db.commit()
    return cycle


@pytest.fixture
def templates(db, station):
    day = ShiftTemplate(station_id=station.id, label="DAY", start_time="07:00", end_time="19:00")
    night = ShiftTemplate(station_id=station.id, label="NIGHT", start_time="19:00", end_time="07:00")
    db.add_all([day, night])
    db.commit()
    return {"DAY": day, "NIGHT": night}


@pytest.fixture
def people(db, station):
    people = [
        Person(station_id=station.id, name="Anna Schmidt", rank="OBM"),
        Person(station_id=station.id, name="Jonas Weber", rank="HBM"),
    ]
    db.add_all(people)
    db.commit()
    return people


@pytest.fixture
def admin_headers():
    return auth_headers(ADMIN_USER)


@pytest.fixture
def editor_headers():
    return auth_headers(EDITOR_USER)


@pytest.fixture
def viewer_headers():
    return auth_headers(VIEWER_USER)
