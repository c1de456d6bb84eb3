# gst_billing/domain/services/invoice_region.py
"""
Invoice region classification: DOMESTIC, SEZ or EXPORT.

Stateless; the result feeds calculate_line_tax / calculate_invoice_from_lines.
"""

from __future__ import annotations

import logging

from gst_billing.domain.models.invoice_tax import InvoiceRegion
from gst_billing.domain.services.invoice_tax import normalize_state

logger = logging.getLogger("invoice_region")


def determine_invoice_region(
    customer_gstin: str | None,
    outlet_state: str | None,
    customer_state: str | None,
    is_sez_customer: bool = False,
) -> InvoiceRegion:
    """
    Classify a sale.

    - SEZ customer: always SEZ.
    - No GSTIN and a different state: EXPORT (unregistered / overseas buyer).
    - Anything else: DOMESTIC.
    """
    if is_sez_customer:
        return InvoiceRegion.SEZ

    has_gstin = bool(customer_gstin and customer_gstin.strip())
    if not has_gstin and normalize_state(outlet_state) != normalize_state(customer_state):
        logger.debug(
            "invoice_region: no GSTIN, %r -> %r classified as EXPORT",
            outlet_state, customer_state,
        )
        return InvoiceRegion.EXPORT

    return InvoiceRegion.DOMESTIC
