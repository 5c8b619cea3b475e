from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import app.database.db as db_module
from app.core.security import hash_password
from app.models import Base, Client, Contract, Supplier, User
from app.models.enums import ContractStatus, ContractType, UserRole


@pytest.fixture
def db_session():
    engine = create_engine("sqlite:///:memory:")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def isolated_session_factory(monkeypatch, tmp_path):
    db_path = tmp_path / "pacta_test.db"
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    @contextmanager
    def _get_db_session():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    monkeypatch.setattr(db_module, "SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(db_module, "get_db_session", _get_db_session)
    yield TestingSessionLocal
    engine.dispose()


def _make_user(session, role: UserRole = UserRole.ADMIN, email: str | None = None, password: str = "s3cret-pass") -> User:
    user = User(
        name=f"{role.value.title()} User",
        email=email or f"{role.value}@example.com",
        hashed_password=hash_password(password, iterations=1000),
        role=role,
    )
    session.add(user)
    session.commit()
    return user


def _make_contract(
    session,
    number: str = "C-001",
    end_date: date = date(2026, 12, 31),
    status: ContractStatus = ContractStatus.ACTIVE,
    amount: str = "1000.00",
) -> Contract:
    client = session.query(Client).first() or Client(name="Acme Corp")
    supplier = session.query(Supplier).first() or Supplier(name="Globex Supplies")
    session.add_all([client, supplier])
    session.flush()
    contract = Contract(
        contract_number=number,
        title=f"Contract {number}",
        client_id=client.id,
        supplier_id=supplier.id,
        start_date=date(2026, 1, 1),
        end_date=end_date,
        amount=Decimal(amount),
        type=ContractType.SERVICE,
        status=status,
    )
    session.add(contract)
    session.commit()
    return contract


@pytest.fixture
def make_user():
    return _make_user


@pytest.fixture
def make_contract():
    return _make_contract
