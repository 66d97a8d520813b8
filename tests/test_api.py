from __future__ import annotations

import json
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.claim_system.claim_system.container import wire_container
from src.claim_system.claim_system.core.enums import ClaimStatus, Role
from src.claim_system.claim_system.main import create_app
from src.claim_system.claim_system.users.model import User


@pytest.fixture
def users_repo(user_repo_of):
    return user_repo_of(
        User(1, "Dr. Smith", "lecturer", generate_password_hash("pw"), Role.LECTURER, lecturer_id="LEC-001"),
        User(2, "Coordinator", "coordinator", generate_password_hash("pw"), Role.PROGRAMME_COORDINATOR),
        User(3, "HR Officer", "hr", generate_password_hash("pw"), Role.HR),
        User(5, "Academic Manager", "manager", generate_password_hash("pw"), Role.ACADEMIC_MANAGER),
        User(4, "Gone", "gone", generate_password_hash("pw"), Role.HR, is_active=False),
    )


@pytest.fixture
def app(monkeypatch, users_repo, lecturers, claims_repo, reports_repo, settings, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        users_repo=users_repo,
        lecturers_repo=lecturers,
        claims_repo=claims_repo,
        reports_repo=reports_repo,
        settings=settings,
        clock=clock,
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username):
    resp = client.post("/login", json={"username": username, "password": "pw"})
    assert resp.status_code == 200
    return resp


def test_login_rejects_bad_password(client):
    resp = client.post("/login", json={"username": "lecturer", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_inactive_user_cannot_login(client):
    assert client.post("/login", json={"username": "gone", "password": "pw"}).status_code == 401


def test_me_requires_login(client):
    assert client.get("/me").status_code == 401


def test_lecturer_submits_claim_and_it_is_auto_approved(client):
    login(client, "lecturer")

    resp = client.post("/claims", json={"hours_worked": "100", "hourly_rate": 80})

    assert resp.status_code == 201
    claim = resp.get_json()["claim"]
    assert claim["status"] == "Approved"
    assert Decimal(claim["total_amount"]) == Decimal("8000")


def test_invalid_claim_returns_violations(client):
    login(client, "lecturer")

    resp = client.post("/claims", json={"hours_worked": "0.05", "hourly_rate": "80"})

    assert resp.status_code == 422
    assert "Hours worked must be between 0.1 and 200" in resp.get_json()["errors"]


def test_non_positive_input_is_bad_request(client):
    login(client, "lecturer")

    assert client.post("/claims", json={"hours_worked": "0", "hourly_rate": "80"}).status_code == 400


def test_coordinator_cannot_submit(client):
    login(client, "coordinator")

    assert client.post("/claims", json={"hours_worked": "10", "hourly_rate": "80"}).status_code == 403


def test_review_flow_then_invoice_and_payment(client, claims_repo):
    login(client, "lecturer")
    claim_id = client.post("/claims", json={"hours_worked": "150", "hourly_rate": "300"}).get_json()["claim"]["claim_id"]
    client.post("/logout")

    login(client, "hr")
    assert client.get(f"/claims/{claim_id}/invoice").status_code == 409
    client.post("/logout")

    login(client, "coordinator")
    pending = client.get("/claims/pending").get_json()["claims"]
    assert [c["claim_id"] for c in pending] == [claim_id]
    assert client.post(f"/claims/{claim_id}/approve").status_code == 200
    assert client.post(f"/claims/{claim_id}/approve").status_code == 409
    client.post("/logout")

    login(client, "hr")
    invoice = client.get(f"/claims/{claim_id}/invoice")
    assert invoice.status_code == 200
    payload = json.loads(invoice.data)
    assert payload["InvoiceNumber"].startswith(f"INV-{claim_id}-")
    assert Decimal(payload["TotalAmount"]) == Decimal("45000")

    assert client.post(f"/claims/{claim_id}/pay").status_code == 200
    assert claims_repo.get_by_id(claim_id).status == ClaimStatus.PAID


def test_hr_generates_monthly_report(client, reports_repo):
    login(client, "hr")

    resp = client.post("/reports/monthly", json={"month": "2025-03"})

    assert resp.status_code == 201
    report = resp.get_json()["report"]
    assert report["report_type"] == "Monthly"
    assert report["generated_by"] == "HR Officer"
    assert report["report_data"]["Month"] == "2025-03"
    assert len(reports_repo.rows) == 1
    assert len(client.get("/reports").get_json()["reports"]) == 1


def test_bad_month_is_rejected(client):
    login(client, "hr")

    assert client.post("/reports/monthly", json={"month": "March"}).status_code == 400


def test_lecturer_cannot_generate_reports(client):
    login(client, "lecturer")

    assert client.post("/reports/monthly", json={"month": "2025-03"}).status_code == 403


def test_lecturer_dashboard(client):
    login(client, "lecturer")
    client.post("/claims", json={"hours_worked": "10", "hourly_rate": "80"})

    data = client.get("/dashboard/lecturer").get_json()["dashboard"]

    assert data["approved_claims"] == 1
    assert Decimal(data["total_earnings"]) == Decimal("800")


def test_out_of_range_numbers_are_bad_request(client):
    login(client, "lecturer")

    assert client.post("/claims", json={"hours_worked": "9e999999", "hourly_rate": "1e999999"}).status_code == 400
    assert client.post("/claims", json={"hours_worked": "0.125", "hourly_rate": "80"}).status_code == 400


def test_summary_defaults_to_current_month_of_clock(client):
    login(client, "hr")

    resp = client.get("/reports/monthly/summary")

    assert resp.status_code == 200
    assert resp.get_json()["summary"]["Month"] == "2025-03"


def test_coordinator_dashboard_endpoint(client):
    login(client, "lecturer")
    client.post("/claims", json={"hours_worked": "150", "hourly_rate": "300"})
    client.post("/logout")

    login(client, "coordinator")
    data = client.get("/dashboard/coordinator").get_json()["dashboard"]

    assert data["pending_approvals"] == 1
    assert data["total_claims_processed"] == 0


def test_manager_dashboard_endpoint(client):
    login(client, "lecturer")
    client.post("/claims", json={"hours_worked": "10", "hourly_rate": "80"})
    client.post("/logout")

    login(client, "manager")
    resp = client.get("/dashboard/manager")

    assert resp.status_code == 200
    data = resp.get_json()["dashboard"]
    assert data["claims_this_month"] == 1
    assert Decimal(data["approval_rate"]) == Decimal("100")
    assert Decimal(data["average_processing_days"]) == Decimal("0")


def test_coordinator_cannot_open_manager_dashboard(client):
    login(client, "coordinator")

    assert client.get("/dashboard/manager").status_code == 403
