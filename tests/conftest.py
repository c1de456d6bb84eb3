"""Shared test fixtures for the GST billing test suite."""

import pytest
from fastapi.testclient import TestClient

from gst_billing.domain.models.invoice_tax import LineTaxInput


@pytest.fixture
def client() -> TestClient:
    """HTTP client bound to the FastAPI app."""
    from gst_billing.main import app

    return TestClient(app)


@pytest.fixture
def mixed_rate_lines() -> list[LineTaxInput]:
    """Rental invoice with an 18%, a 5% and an exempt line (no jurisdiction set)."""
    return [
        LineTaxInput(quantity=1, unit_rate=10000, gst_rate=18, description="Camera rental", hsn_code="9973"),
        LineTaxInput(quantity=1, unit_rate=5000, gst_rate=5, description="Lens kit", hsn_code="9973"),
        LineTaxInput(quantity=1, unit_rate=2000, gst_rate=0, description="Delivery"),
    ]


@pytest.fixture
def intra_state() -> dict:
    """Invoice header for an outlet and customer in the same state."""
    return {
        "region": "DOMESTIC",
        "outlet_state": "Karnataka",
        "customer_state": "Karnataka",
    }
