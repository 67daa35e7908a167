"""
Shared fixtures: an in-memory SQLite database seeded with both projects
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from config.db_connection import get_engine
from models import LivingWaterProperty, HavahillsProperty, Client, Document, Balance
from services.deal_session_store import DealSessionStore

LIVING_WATER = "Living Water Subdivision"
HAVAHILLS = "Havahills Estate"


@pytest.fixture
def engine():
    """Fresh database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def seeded(engine):
    with Session(engine) as session:
        session.add_all([
            LivingWaterProperty(block="5", lot="12", status="Available", lot_area=120.0, price_per_sqm=10000.0, tcp=1200000.0),
            LivingWaterProperty(block="2", lot="3", status="available", lot_area=100.0, tcp=1000000.0),
            LivingWaterProperty(block="10", lot="1", status="AVAILABLE", lot_area=150.0, tcp=1500000.0),
            LivingWaterProperty(block="1", lot="1", status="Reserved", owner="Maria Santos", tcp=900000.0),
            LivingWaterProperty(
                block="3", lot="7", status="Sold", owner="Juan Dela Cruz", broker="Pedro Cruz",
                realty="Sunrise Realty", reservation_date="2024-03-01", reservation_fee=20000.0,
                terms="5 years", monthly_amortization=15000.0, tcp=1100000.0,
            ),
            LivingWaterProperty(block="4", lot="2", status="Sold", owner=None, tcp=950000.0),
            HavahillsProperty(block="1", lot="4", status="Available", lot_size=200.0, tsp=2500000.0),
            HavahillsProperty(
                block="2", lot="9", status="Sold", buyers_name="Ana Reyes", sales_director="Carlo Lim",
                agent="Leo Tan", date_of_reservation="2024-05-10", reservation_amount=50000.0,
                payment_terms="10 years", monthly_amortization=21000.0, tsp=2400000.0,
            ),
        ])
        session.add_all([
            Client(name="Juan Dela Cruz", email="juan@example.com"),
            Client(name="Ana Reyes", email="ana@example.com"),
            Client(name="Maria Santos", email="maria@example.com"),
            Document(name="Juan Dela Cruz", tin_id="123-456-789", contact_no="09171234567", marital_status="Married"),
            Document(name="Juan Dela Cruz", address="Quezon City"),
            Document(name="Ana Reyes", tin_id="987-654-321"),
            Balance(name="Juan Dela Cruz", project=LIVING_WATER, block="3", lot="7", remaining_balance=800000.0, amount=15000.0, tcp=1100000.0),
            Balance(name="Ana Reyes", project=HAVAHILLS, block="2", lot="9", remaining_balance=2000000.0, amount=21000.0, tcp=2400000.0),
        ])
        session.commit()
    return engine


@pytest.fixture
def deal_store():
    return DealSessionStore(ttl_hours=8)


@pytest.fixture
def client(seeded, deal_store):
    from main import app
    from routers.deals import get_deal_sessions

    app.dependency_overrides[get_engine] = lambda: seeded
    app.dependency_overrides[get_deal_sessions] = lambda: deal_store
    yield TestClient(app)
    app.dependency_overrides.clear()
