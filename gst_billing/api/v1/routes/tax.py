# gst_billing/api/v1/routes/tax.py
"""
Tax endpoints: rate list/validation, single-line tax, invoice preview,
invoice region classification.

All endpoints are stateless wrappers over the domain tax engine.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from gst_billing.api.v1.envelope import ok
from gst_billing.api.v1.schemas.tax import (
    InvoicePreviewRequest,
    LineIn,
    RateValidateRequest,
    RegionRequest,
)
from gst_billing.config.settings import settings
from gst_billing.domain.services.gstin_validation import is_valid_gstin, state_name_for_gstin
from gst_billing.domain.services.invoice_region import determine_invoice_region
from gst_billing.domain.services.invoice_tax import (
    ALLOWED_GST_RATES,
    calculate_invoice_from_lines,
    calculate_line_tax,
    format_rate,
    gst_rate_display_name,
    validate_gst_rate,
)
from gst_billing.domain.services.tax_summary import summarize_by_hsn, summarize_by_rate

logger = logging.getLogger("api.v1.tax")

router = APIRouter(prefix="/tax", tags=["Tax"])


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------


@router.get("/rates", response_model=dict)
async def list_gst_rates():
    """Statutory GST slabs with display labels, for rate pickers."""
    return ok(data={
        "rates": [
            {"rate": format_rate(r), "label": gst_rate_display_name(r)}
            for r in ALLOWED_GST_RATES
        ],
        "default_rate": format_rate(settings.DEFAULT_GST_RATE),
    })


@router.post("/rates/validate", response_model=dict)
async def validate_rate(body: RateValidateRequest):
    """Check a rate; out-of-range and non-standard rates are reported, not rejected."""
    result = validate_gst_rate(body.rate)
    return ok(data=result.to_dict(), message=result.message)


# ---------------------------------------------------------------------------
# Computation
# ---------------------------------------------------------------------------


@router.post("/line", response_model=dict)
async def line_tax(body: LineIn):
    """Compute tax for a single line."""
    result = calculate_line_tax(body.to_domain())
    return ok(data=result.to_dict())


@router.post("/preview", response_model=dict)
async def invoice_preview(body: InvoicePreviewRequest):
    """
    Live tax preview for an invoice being drafted.

    Returns invoice totals, the per-line breakdown, and rate-wise / HSN-wise
    summaries.
    """
    lines = [line.to_domain() for line in body.lines]
    summary = calculate_invoice_from_lines(
        lines,
        region=body.invoice_region,
        outlet_state=body.outlet_state,
        customer_state=body.customer_state,
    )
    data = summary.to_dict()
    data["by_rate"] = [b.to_dict() for b in summarize_by_rate(lines, summary.breakdown)]
    data["by_hsn"] = [b.to_dict() for b in summarize_by_hsn(lines, summary.breakdown)]
    return ok(data=data)


@router.post("/region", response_model=dict)
async def invoice_region(body: RegionRequest):
    """Classify a sale as DOMESTIC, SEZ or EXPORT."""
    gstin = (body.customer_gstin or "").strip() or None
    if gstin and not is_valid_gstin(gstin):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid GSTIN format: {gstin}",
        )

    customer_state = body.customer_state
    if customer_state is None and gstin:
        customer_state = state_name_for_gstin(gstin)
    if customer_state is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="customer_state is required when no GSTIN is given",
        )

    region = determine_invoice_region(
        gstin, body.outlet_state, customer_state, body.is_sez_customer,
    )
    return ok(data={"region": region.value, "customer_state": customer_state})
