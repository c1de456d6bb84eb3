# gst_billing/domain/models/invoice_tax.py
"""
Value objects for the GST tax engine.

LineTaxInput: one billable line before tax.
LineTaxResult: computed tax for one line.
InvoiceTaxSummary: aggregate over all lines of an invoice.

All objects are immutable and recomputed on demand; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any, Iterable

ZERO = Decimal("0")


class InvoiceRegion(str, Enum):
    DOMESTIC = "DOMESTIC"
    SEZ = "SEZ"
    EXPORT = "EXPORT"


class TaxInputError(ValueError):
    """Raised when a line amount is missing, not finite, or negative."""

    def __init__(self, field: str, value: Any, problem: str = "must be non-negative") -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} {problem} (got {value})")


def to_decimal(value: Any) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal via its string form."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum without rounding to the context precision."""
    values = list(values)
    if not values:
        return ZERO
    top = max(v.adjusted() for v in values)
    bottom = min(min(v.as_tuple().exponent for v in values), 0)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, top - bottom + len(str(len(values))) + 1)
        return sum(values, ZERO)


def to_region(value: Any) -> InvoiceRegion | None:
    """``None`` stays unset; strings are matched case-insensitively."""
    if value is None or isinstance(value, InvoiceRegion):
        return value
    return InvoiceRegion(str(value).strip().upper())


@dataclass(frozen=True)
class LineTaxInput:
    """One invoice line as supplied by the caller."""

    quantity: Decimal
    unit_rate: Decimal
    gst_rate: Decimal
    invoice_region: InvoiceRegion | None = None
    outlet_state: str | None = None
    customer_state: str | None = None
    # Display-only, carried through for summaries
    description: str | None = None
    hsn_code: str | None = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__
        for name in ("quantity", "unit_rate", "gst_rate"):
            value = getattr(self, name)
            if value is None:
                raise TaxInputError(name, value, "is required")
            object.__setattr__(self, name, to_decimal(value))
        object.__setattr__(self, "invoice_region", to_region(self.invoice_region))


@dataclass(frozen=True)
class LineTaxResult:
    taxable: Decimal = ZERO
    tax_amount: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    line_total: Decimal = ZERO

    def to_dict(self) -> dict[str, str]:
        return {
            "taxable": str(self.taxable),
            "tax_amount": str(self.tax_amount),
            "cgst": str(self.cgst),
            "sgst": str(self.sgst),
            "igst": str(self.igst),
            "line_total": str(self.line_total),
        }


@dataclass(frozen=True)
class InvoiceTaxSummary:
    taxable_value: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_amount: Decimal = ZERO
    breakdown: tuple[LineTaxResult, ...] = field(default_factory=tuple)

    @property
    def total_tax(self) -> Decimal:
        return exact_sum((self.cgst, self.sgst, self.igst))

    def to_dict(self) -> dict[str, Any]:
        return {
            "taxable_value": str(self.taxable_value),
            "cgst": str(self.cgst),
            "sgst": str(self.sgst),
            "igst": str(self.igst),
            "total_tax": str(self.total_tax),
            "total_amount": str(self.total_amount),
            "breakdown": [line.to_dict() for line in self.breakdown],
        }


@dataclass(frozen=True)
class GstRateValidation:
    """Outcome of checking a GST rate against the statutory set."""

    is_valid: bool
    is_standard: bool
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "is_standard": self.is_standard,
            "message": self.message,
        }


@dataclass(frozen=True)
class RateBucket:
    """Rate-wise or HSN-wise slice of an invoice."""

    key: str
    line_count: int = 0
    taxable_value: Decimal = ZERO
    tax_amount: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "line_count": self.line_count,
            "taxable_value": str(self.taxable_value),
            "tax_amount": str(self.tax_amount),
        }
