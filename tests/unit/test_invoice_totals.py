import pytest

from vhr.services.invoice_totals import calculate_invoice_totals, calculate_item


def test_item_with_vat_percentage_string():
    item = calculate_item({"quantity": 2, "amount": 50, "vat_rate": "20%"})
    assert item["sub_total"] == 100
    assert item["vat_amount"] == 20
    assert item["discount_amount"] == 0
    assert item["total"] == 120


def test_percentage_discount_applies_to_subtotal():
    item = calculate_item(
        {"quantity": 1, "amount": 200, "vat_rate": 10, "is_discount": True, "discount_type": "percentage", "discount_value": 25}
    )
    assert item["discount_amount"] == 50
    assert item["total"] == pytest.approx(200 + 20 - 50)


def test_flat_discount_and_ignored_when_flag_off():
    flat = calculate_item({"quantity": 3, "amount": 10, "is_discount": True, "discount_type": "fixed", "discount_value": 5})
    assert flat["total"] == 25
    off = calculate_item({"quantity": 3, "amount": 10, "is_discount": False, "discount_value": 5})
    assert off["total"] == 30


def test_invoice_totals_sum_items():
    totals = calculate_invoice_totals(
        [
            {"quantity": 1, "amount": 10, "vat_rate": None},
            {"quantity": 4, "amount": 25, "vat_rate": "15", "is_discount": True, "discount_type": "percentage", "discount_value": 10},
        ]
    )
    assert len(totals["items"]) == 2
    assert totals["sub_total"] == 110
    assert totals["vat_total"] == 15
    assert totals["discount_total"] == 10
    assert totals["amount"] == 115


def test_unparsable_vat_counts_as_zero():
    assert calculate_item({"quantity": 1, "amount": 10, "vat_rate": "n/a"})["total"] == 10
