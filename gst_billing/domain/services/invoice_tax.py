# gst_billing/domain/services/invoice_tax.py
"""
GST tax engine for invoice lines.

Pure functions, no I/O:
  - validate_gst_rate: check a rate against the statutory GST slabs
  - calculate_line_tax: taxable value + CGST/SGST or IGST split for one line
  - calculate_invoice_from_lines: aggregate a whole invoice

Rounding is half-up to 2 decimals and is applied at every computed amount
(taxable, tax, CGST share) so line values stay audit-exact. Arithmetic runs in
a decimal context wide enough for the inputs, so large amounts are never
truncated to the default 28 significant digits.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable

from gst_billing.config.settings import settings
from gst_billing.domain.models.invoice_tax import (
    GstRateValidation,
    InvoiceRegion,
    InvoiceTaxSummary,
    LineTaxInput,
    LineTaxResult,
    TaxInputError,
    exact_sum,
    to_decimal,
    to_region,
)

logger = logging.getLogger("invoice_tax")

MONEY_ZERO = Decimal("0.00")
_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")
_TWO = Decimal("2")

# Statutory GST slabs (percent)
ALLOWED_GST_RATES: tuple[Decimal, ...] = tuple(
    Decimal(r) for r in ("0", "0.25", "3", "5", "12", "18", "28")
)
_ALLOWED_RATE_SET = frozenset(ALLOWED_GST_RATES)

_RATE_LABELS: dict[Decimal, str] = {
    Decimal("0"): "Exempt",
    Decimal("0.25"): "Precious metals",
    Decimal("3"): "Gold/Silver",
    Decimal("5"): "Essential goods",
    Decimal("12"): "Standard",
    Decimal("18"): "Standard",
    Decimal("28"): "Luxury",
}

_ZERO_RATED = (InvoiceRegion.SEZ, InvoiceRegion.EXPORT)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round2(value: Any) -> Decimal:
    """Round to currency precision, half-up."""
    value = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum of already-rounded amounts, re-rounded to 2 decimals."""
    return round2(exact_sum(values))


def _working_precision(*values: Decimal) -> int:
    """Digits needed to multiply ``values`` and quantize the product to cents exactly."""
    digits = sum(len(v.as_tuple().digits) + max(v.adjusted(), 0) for v in values)
    return digits + 10


def format_rate(rate: Any) -> str:
    """Render a rate without trailing zeros: 18.00 -> '18', 7.50 -> '7.5'."""
    return format(to_decimal(rate).normalize(), "f")


def normalize_state(state: str | None) -> str | None:
    """Case/whitespace-insensitive state key; blank counts as absent."""
    if state is None:
        return None
    state = state.strip()
    if not state:
        return None
    return state.casefold()


# ---------------------------------------------------------------------------
# Rate validation
# ---------------------------------------------------------------------------

def validate_gst_rate(rate: Any) -> GstRateValidation:
    """
    Check a GST percentage against the statutory slabs.

    Out-of-range rates (and NaN) are reported as ``is_valid=False``; in-range
    rates that are not a statutory slab are valid but flagged
    ``is_standard=False``.
    """
    rate = to_decimal(rate)

    if rate.is_nan() or rate < 0 or rate > _HUNDRED:
        return GstRateValidation(
            is_valid=False,
            is_standard=False,
            message="GST rate must be between 0 and 100",
        )

    if rate in _ALLOWED_RATE_SET:
        return GstRateValidation(is_valid=True, is_standard=True)

    if settings.WARN_ON_NON_STANDARD_RATE:
        logger.warning(
            "Non-standard GST rate used: %s%%. Standard rates are: %s",
            format_rate(rate),
            ", ".join(format_rate(r) for r in ALLOWED_GST_RATES),
        )
    return GstRateValidation(
        is_valid=True,
        is_standard=False,
        message=f"Non-standard GST rate: {format_rate(rate)}%",
    )


def gst_rate_display_name(rate: Any) -> str:
    """Label for rate pickers, e.g. ``'18% (Standard)'`` or ``'7.5% (Custom)'``."""
    rate = to_decimal(rate)
    label = _RATE_LABELS.get(rate, "Custom")
    return f"{format_rate(rate)}% ({label})"


# ---------------------------------------------------------------------------
# Line tax
# ---------------------------------------------------------------------------

def calculate_line_tax(line: LineTaxInput) -> LineTaxResult:
    """
    Compute taxable value and the GST split for one invoice line.

    - SEZ / EXPORT: zero-rated, no tax at all.
    - No region and no states given: no tax.
    - Otherwise tax = taxable x rate / 100, split CGST+SGST when outlet and
      customer are in the same state, IGST in every other case.

    Raises TaxInputError for a non-finite or negative quantity, unit rate or
    GST rate.
    """
    for name in ("quantity", "unit_rate", "gst_rate"):
        value = getattr(line, name)
        if not value.is_finite():
            raise TaxInputError(name, value, "must be a finite number")
        if value < 0:
            raise TaxInputError(name, value)

    region = line.invoice_region
    outlet = normalize_state(line.outlet_state)
    customer = normalize_state(line.customer_state)

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _working_precision(line.quantity, line.unit_rate, line.gst_rate))
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN

        taxable = round2(line.quantity * line.unit_rate)

        if region in _ZERO_RATED or (region is None and outlet is None and customer is None):
            return LineTaxResult(
                taxable=taxable,
                tax_amount=MONEY_ZERO,
                cgst=MONEY_ZERO,
                sgst=MONEY_ZERO,
                igst=MONEY_ZERO,
                line_total=taxable,
            )

        tax_amount = round2(taxable * line.gst_rate / _HUNDRED)

        if outlet is not None and outlet == customer:
            # Intra-state: SGST takes the odd paisa so the halves sum exactly
            cgst = round2(tax_amount / _TWO)
            sgst = tax_amount - cgst
            igst = MONEY_ZERO
        else:
            cgst = MONEY_ZERO
            sgst = MONEY_ZERO
            igst = tax_amount

        return LineTaxResult(
            taxable=taxable,
            tax_amount=tax_amount,
            cgst=cgst,
            sgst=sgst,
            igst=igst,
            line_total=taxable + tax_amount,
        )


# ---------------------------------------------------------------------------
# Invoice aggregation
# ---------------------------------------------------------------------------

def _inherit(
    line: LineTaxInput,
    region: InvoiceRegion | None,
    outlet_state: str | None,
    customer_state: str | None,
) -> LineTaxInput:
    """Fill the line's unset jurisdiction fields from the invoice header."""
    return replace(
        line,
        invoice_region=line.invoice_region if line.invoice_region is not None else region,
        outlet_state=line.outlet_state if line.outlet_state is not None else outlet_state,
        customer_state=line.customer_state if line.customer_state is not None else customer_state,
    )


def calculate_invoice_from_lines(
    lines: Iterable[LineTaxInput],
    region: InvoiceRegion | str | None = None,
    outlet_state: str | None = None,
    customer_state: str | None = None,
) -> InvoiceTaxSummary:
    """
    Aggregate line taxes into invoice totals.

    Header ``region`` / ``outlet_state`` / ``customer_state`` apply to every
    line that does not set its own. ``breakdown`` keeps input order.
    """
    region = to_region(region)

    breakdown = tuple(
        calculate_line_tax(_inherit(line, region, outlet_state, customer_state))
        for line in lines
    )

    taxable_value = money_sum(r.taxable for r in breakdown)
    cgst = money_sum(r.cgst for r in breakdown)
    sgst = money_sum(r.sgst for r in breakdown)
    igst = money_sum(r.igst for r in breakdown)

    summary = InvoiceTaxSummary(
        taxable_value=taxable_value,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total_amount=exact_sum((taxable_value, cgst, sgst, igst)),
        breakdown=breakdown,
    )
    logger.debug(
        "invoice_tax: %d lines, taxable=%s tax=%s total=%s",
        len(breakdown), summary.taxable_value, summary.total_tax, summary.total_amount,
    )
    return summary
