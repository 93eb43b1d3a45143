"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from retention_engine.api.main import create_app
from retention_engine.domain.models import ClientRef, MemberFacts


AS_OF = date(2026, 3, 15)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def risk_clients() -> list[ClientRef]:
    """Five at-risk members, deliberately out of risk order"""
    return [
        ClientRef(id="c1", full_name="Asha Rao", risk_percent=45),
        ClientRef(id="c2", full_name="Ben Okafor", risk_percent=90),
        ClientRef(id="c3", full_name="Chen Li", risk_percent=70),
        ClientRef(id="c4", full_name="Dara Singh", risk_percent=90),
        ClientRef(id="c5", full_name="Eli Moreno", risk_percent=30),
    ]


@pytest.fixture
def sample_members() -> list[MemberFacts]:
    """Active members covering each risk situation the report distinguishes"""
    return [
        # Expires in 2 days, unpaid, lapsed payer -> high risk
        MemberFacts(
            id="m_urgent",
            full_name="Priya Nair",
            subscription_end_date=AS_OF + timedelta(days=2),
            total_amount=3000,
            amount_paid=1000,
            last_payment_date=AS_OF - timedelta(days=120),
        ),
        # Expires in 20 days, fully paid, recent payment -> low risk, still in the expiring cohort
        MemberFacts(
            id="m_renewing",
            full_name="Tom Becker",
            subscription_end_date=AS_OF + timedelta(days=20),
            total_amount=2000,
            amount_paid=2000,
            last_payment_date=AS_OF - timedelta(days=10),
        ),
        # Long subscription but an outstanding balance -> medium risk
        MemberFacts(
            id="m_unpaid",
            full_name="Lena Fischer",
            subscription_end_date=AS_OF + timedelta(days=200),
            total_amount=5000,
            amount_paid=4000,
            last_payment_date=AS_OF - timedelta(days=5),
        ),
        # No end date, nothing owed -> stable
        MemberFacts(
            id="m_open",
            full_name="Omar Haddad",
            subscription_end_date=None,
            total_amount=1500,
            amount_paid=1500,
            last_payment_date=None,
        ),
        # Already ended -> not scored
        MemberFacts(
            id="m_ended",
            full_name="Rui Costa",
            subscription_end_date=AS_OF - timedelta(days=3),
            total_amount=1000,
            amount_paid=0,
            last_payment_date=AS_OF - timedelta(days=40),
        ),
    ]
