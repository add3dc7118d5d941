import os
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from salon_backend.database import Base  # noqa: E402
from salon_backend.models.appointment import Appointment  # noqa: E402
from salon_backend.models.employee import Employee  # noqa: E402
from salon_backend.models.order import Order  # noqa: E402
from salon_backend.models.tenant import Tenant  # noqa: E402

TABLES = [Tenant.__table__, Employee.__table__, Appointment.__table__, Order.__table__]


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=TABLES)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))
        engine.dispose()


@pytest.fixture
def tenant(db) -> Tenant:
    record = Tenant(name='Studio Norte', email='norte@example.com')
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def other_tenant(db) -> Tenant:
    record = Tenant(name='Studio Sur', email='sur@example.com')
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def employee(db, tenant) -> Employee:
    record = Employee(tenant_id=tenant.id, first_name='Lucia', last_name='Ramos')
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def now() -> datetime:
    return datetime(2030, 1, 7, 8, 0)
