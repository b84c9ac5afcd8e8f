import pytest

from vhr.services.financial_totals import calculate_line, calculate_statement_totals, convert_statement


def test_line_total_is_charges_plus_vat():
    line = calculate_line({"description": "Search", "charges": "100.5", "vat_amount": 20.1, "total": 999})
    assert line["charges"] == 100.5
    assert line["total"] == pytest.approx(120.6)
    assert line["description"] == "Search"


def test_missing_amounts_count_as_zero():
    assert calculate_line({"charges": None})["total"] == 0


def test_amount_required_sums_all_sections():
    totals = calculate_statement_totals(
        [{"charges": 100, "vat_amount": 20}, {"charges": 50}],
        [{"charges": 1000, "vat_amount": 200}],
        [{"label": "Deposit", "sub_total": -500}],
    )
    assert totals["total_disbursements"] == 170
    assert totals["total_our_costs"] == 1200
    assert totals["summary"] == [{"label": "Deposit", "sub_total": -500.0, "total": -500.0}]
    assert totals["total_amount_required"] == 870


def test_empty_statement():
    totals = calculate_statement_totals([], [], [])
    assert totals["total_amount_required"] == 0
    assert totals["disbursements"] == []


def test_convert_scales_every_amount():
    statement = {
        "id": 3,
        "disbursements": [{"charges": 10, "vat_amount": 2, "total": 12}],
        "our_cost": [],
        "summary": [{"label": "Deposit", "sub_total": -5, "total": -5}],
        "total_disbursements": 12,
        "total_our_costs": 0,
        "total_amount_required": 7,
    }
    converted = convert_statement(statement, 1.5)
    assert converted["disbursements"][0] == {"charges": 15, "vat_amount": 3, "total": 18}
    assert converted["summary"][0]["sub_total"] == -7.5
    assert converted["total_amount_required"] == 10.5
    assert converted["id"] == 3
    # the input is left untouched
    assert statement["total_amount_required"] == 7
