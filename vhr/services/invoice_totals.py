"""Invoice line-item arithmetic."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from vhr.utils.numbers import parse_leading_float


def _rate(value: Any) -> float:
    """Parse a percentage that may carry a trailing '%' (``"20%"`` -> 20.0)."""
    if value is None:
        return 0.0
    parsed = parse_leading_float(str(value).replace("%", ""))
    return parsed if parsed is not None else 0.0


def calculate_item(item: Dict[str, Any]) -> Dict[str, Any]:
    quantity = float(item.get("quantity") or 0)
    unit_amount = float(item.get("amount") or 0)
    sub_total = quantity * unit_amount
    vat_amount = sub_total * _rate(item.get("vat_rate")) / 100

    discount_amount = 0.0
    if item.get("is_discount"):
        value = float(item.get("discount_value") or 0)
        if (item.get("discount_type") or "").lower() == "percentage":
            discount_amount = sub_total * value / 100
        else:
            discount_amount = value

    total = sub_total + vat_amount - discount_amount
    return {
        **item,
        "sub_total": round(sub_total, 2),
        "vat_amount": round(vat_amount, 2),
        "discount_amount": round(discount_amount, 2),
        "total": round(total, 2),
    }


def calculate_invoice_totals(items: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compute per-item and invoice totals.

    Returns ``{"items", "sub_total", "vat_total", "discount_total", "amount"}``
    where ``amount`` (and so the outstanding balance) is the sum of item totals.
    """
    calculated: List[Dict[str, Any]] = [calculate_item(dict(item)) for item in items]
    return {
        "items": calculated,
        "sub_total": round(sum(i["sub_total"] for i in calculated), 2),
        "vat_total": round(sum(i["vat_amount"] for i in calculated), 2),
        "discount_total": round(sum(i["discount_amount"] for i in calculated), 2),
        "amount": round(sum(i["total"] for i in calculated), 2),
    }
