"""
test_health_api.py
------------------
Service checks: GET /api/health and GET /.

The failure case points the app at a SQLite file inside a directory that does
not exist, so opening a connection fails the same way an unreachable server would.
"""

import os
import tempfile

from sqlalchemy.orm import sessionmaker

from backend.db import build_engine, get_db
from backend.main import app


def test_root_message(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "Customer Management API is running!"}


def test_health_reports_counts(client):
    """Healthy/Connected with the number of customers and orders in the store."""
    client.post("/api/customers", json={"firstName": "H", "lastName": "C", "email": "h.c@email.com"})
    client.post("/api/orders", json={"orderNumber": "H-1", "totalAmount": 1})
    client.post("/api/orders", json={"orderNumber": "H-2", "totalAmount": 2})

    res = client.get("/api/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "Healthy"
    assert body["database"] == "Connected"
    assert body["customers"] == 1
    assert body["orders"] == 2
    assert body["timestamp"]


def test_health_counts_inactive_customers_too(client):
    created = client.post(
        "/api/customers", json={"firstName": "H", "lastName": "C", "email": "h.c@email.com"}
    ).json()
    client.delete(f"/api/customers/{created['customerId']}")

    assert client.get("/api/health").json()["customers"] == 1


def test_health_returns_500_when_database_is_unreachable(client):
    """
    A database error is reported as a 500 problem payload:
    {"title", "status": 500, "detail": "Database connection failed: ..."}
    """
    missing_dir = os.path.join(tempfile.gettempdir(), "no-such-dir-for-health-test")
    broken_engine = build_engine(f"sqlite:///{os.path.join(missing_dir, 'missing.db')}")
    BrokenSession = sessionmaker(bind=broken_engine)

    def broken_get_db():
        session = BrokenSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_get_db
    try:
        res = client.get("/api/health")
    finally:
        broken_engine.dispose()

    assert res.status_code == 500
    body = res.json()
    assert body["status"] == 500
    assert body["title"] == "Database connection failed"
    assert body["detail"].startswith("Database connection failed:")
