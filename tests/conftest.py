import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from laundry.config.database import create_session_factory
from laundry.config.settings import Settings
from laundry.core.security import PasswordHasher
from laundry.db.init_db import init_db, seed_pass_schedule
from laundry.services import Controller

from helpers import NOW, FixedClock, register_details


@pytest.fixture
def test_settings():
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret-key",
        PASSWORD_BCRYPT_ROUNDS=4,
        LOCK_DURATION_MINUTES=5,
        ACTIVE_PASSES_ALLOWED=1,
        TOTAL_MONTH_PASSES_ALLOWED=6,
        LAUNDRY_ROOMS=[1, 2],
        PASS_RANGES=["07-12", "12-17", "17-22"],
        TIMEZONE="UTC",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def empty_session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session_factory(empty_session_factory, test_settings):
    seed_pass_schedule(empty_session_factory, test_settings)
    return empty_session_factory


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def controller(session_factory, test_settings, clock):
    return Controller(session_factory, test_settings, clock, PasswordHasher(4))


@pytest.fixture
def admin(controller):
    result = controller.register_administrator(register_details("admin"))
    assert result.status_code == 0
    return "admin"


@pytest.fixture
def resident(controller, admin):
    result = controller.register_resident(admin, register_details("alice"))
    assert result.status_code == 0
    return "alice"


@pytest.fixture
def other_resident(controller, admin):
    result = controller.register_resident(admin, register_details("bob"))
    assert result.status_code == 0
    return "bob"
