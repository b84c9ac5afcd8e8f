"""
Financial statement arithmetic.

Statements are stored in the base currency. Each disbursement and our-cost
row totals ``charges + vat_amount``; summary rows carry their subtotal as
the total. The amount required is the sum of all three sections.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def calculate_line(line: Dict[str, Any]) -> Dict[str, Any]:
    charges = _number(line.get("charges"))
    vat_amount = _number(line.get("vat_amount"))
    return {**line, "charges": charges, "vat_amount": vat_amount, "total": round(charges + vat_amount, 2)}


def calculate_statement_totals(
    disbursements: Sequence[Dict[str, Any]],
    our_cost: Sequence[Dict[str, Any]],
    summary: Sequence[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Recompute every row and section total.

    Returns the normalized ``disbursements``, ``our_cost`` and ``summary``
    lists with ``total_disbursements``, ``total_our_costs`` and
    ``total_amount_required``.
    """
    disbursement_rows: List[Dict[str, Any]] = [calculate_line(dict(line)) for line in disbursements]
    cost_rows: List[Dict[str, Any]] = [calculate_line(dict(line)) for line in our_cost]
    summary_rows = []
    for line in summary:
        sub_total = _number(line.get("sub_total"))
        summary_rows.append({**line, "sub_total": sub_total, "total": sub_total})

    total_disbursements = round(sum(row["total"] for row in disbursement_rows), 2)
    total_our_costs = round(sum(row["total"] for row in cost_rows), 2)
    total_summary = sum(row["sub_total"] for row in summary_rows)
    return {
        "disbursements": disbursement_rows,
        "our_cost": cost_rows,
        "summary": summary_rows,
        "total_disbursements": total_disbursements,
        "total_our_costs": total_our_costs,
        "total_amount_required": round(total_disbursements + total_our_costs + total_summary, 2),
    }


def convert_statement(statement: Dict[str, Any], exchange_rate: float) -> Dict[str, Any]:
    """Return a copy of a serialized statement with every amount scaled by `exchange_rate`."""

    def scale(value: Any) -> float:
        return round(_number(value) * exchange_rate, 2)

    converted = dict(statement)
    for section in ("disbursements", "our_cost"):
        converted[section] = [
            {**row, "charges": scale(row.get("charges")), "vat_amount": scale(row.get("vat_amount")), "total": scale(row.get("total"))}
            for row in statement.get(section) or []
        ]
    converted["summary"] = [
        {**row, "sub_total": scale(row.get("sub_total")), "total": scale(row.get("total"))}
        for row in statement.get("summary") or []
    ]
    for key in ("total_disbursements", "total_our_costs", "total_amount_required"):
        converted[key] = scale(statement.get(key))
    return converted
