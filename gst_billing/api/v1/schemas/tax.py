# gst_billing/api/v1/schemas/tax.py
"""Request schemas for the tax preview endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from gst_billing.config.settings import settings
from gst_billing.domain.models.invoice_tax import InvoiceRegion, LineTaxInput


class LineIn(BaseModel):
    """
    One invoice line.

    Negative amounts pass schema validation; calculate_line_tax raises a
    field-specific TaxInputError for them, returned as 422.
    """

    quantity: Decimal
    unit_rate: Decimal
    gst_rate: Decimal = Field(default_factory=lambda: settings.DEFAULT_GST_RATE)
    invoice_region: InvoiceRegion | None = None
    outlet_state: str | None = None
    customer_state: str | None = None
    description: str | None = Field(default=None, max_length=500)
    hsn_code: str | None = Field(default=None, max_length=8, description="HSN/SAC code (display only)")

    def to_domain(self) -> LineTaxInput:
        return LineTaxInput(
            quantity=self.quantity,
            unit_rate=self.unit_rate,
            gst_rate=self.gst_rate,
            invoice_region=self.invoice_region,
            outlet_state=self.outlet_state,
            customer_state=self.customer_state,
            description=self.description,
            hsn_code=self.hsn_code,
        )


class InvoicePreviewRequest(BaseModel):
    """Invoice-level jurisdiction applies to lines that do not set their own."""

    lines: list[LineIn] = Field(default_factory=list)
    invoice_region: InvoiceRegion | None = None
    outlet_state: str | None = None
    customer_state: str | None = None


class RateValidateRequest(BaseModel):
    rate: Decimal


class RegionRequest(BaseModel):
    customer_gstin: str | None = Field(default=None, description="15-character GSTIN, if registered")
    outlet_state: str
    customer_state: str | None = Field(
        default=None,
        description="Derived from the GSTIN state code when omitted",
    )
    is_sez_customer: bool = False
