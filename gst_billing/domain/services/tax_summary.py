# gst_billing/domain/services/tax_summary.py
"""
Rate-wise and HSN-wise slices of a computed invoice.

Inputs are the invoice lines and the matching ``breakdown`` from
calculate_invoice_from_lines (same order, same length).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Sequence

from gst_billing.domain.models.invoice_tax import LineTaxInput, LineTaxResult, RateBucket
from gst_billing.domain.services.invoice_tax import format_rate, money_sum

NO_HSN = "No HSN"


def _bucketize(
    lines: Sequence[LineTaxInput],
    results: Sequence[LineTaxResult],
    key_fn: Callable[[LineTaxInput], str],
) -> dict[str, RateBucket]:
    if len(lines) != len(results):
        raise ValueError(
            f"lines and results differ in length ({len(lines)} != {len(results)})"
        )

    grouped: dict[str, list[LineTaxResult]] = {}
    for line, result in zip(lines, results):
        grouped.setdefault(key_fn(line), []).append(result)

    # dicts keep first-appearance order
    return {
        key: RateBucket(
            key=key,
            line_count=len(members),
            taxable_value=money_sum(r.taxable for r in members),
            tax_amount=money_sum(tax for r in members for tax in (r.cgst, r.sgst, r.igst)),
        )
        for key, members in grouped.items()
    }


def summarize_by_rate(
    lines: Sequence[LineTaxInput],
    results: Sequence[LineTaxResult],
) -> list[RateBucket]:
    """One bucket per GST rate, lowest rate first."""
    buckets = _bucketize(lines, results, lambda line: format_rate(line.gst_rate))
    return sorted(buckets.values(), key=lambda b: Decimal(b.key))


def summarize_by_hsn(
    lines: Sequence[LineTaxInput],
    results: Sequence[LineTaxResult],
) -> list[RateBucket]:
    """One bucket per HSN/SAC code in order of first appearance."""
    def _hsn(line: LineTaxInput) -> str:
        code = (line.hsn_code or "").strip()
        return code or NO_HSN

    return list(_bucketize(lines, results, _hsn).values())
