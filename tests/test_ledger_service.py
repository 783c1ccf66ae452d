from datetime import date

import pytest

from app.core.money import AmountParseError
from app.services.debtor_service import DebtorService
from app.services.ledger_service import LedgerService, balance_type
from tests.factories import make_customer, make_invoice, make_receipt


def test_full_history_ledger_for_acme(acme):
    customer, invoices, receipts = acme

    ledger = LedgerService.build_ledger(customer, invoices, receipts)

    rows = ledger["transactions"]
    assert [row["voucherNo"] for row in rows] == ["INV-1", "RCT-1", "INV-2"]
    assert [row["balance"] for row in rows] == [10000.0, 7000.0, 12000.0]
    assert all(row["balanceType"] == "Dr" for row in rows)
    assert rows[1]["refNo"] == "INV-1"
    assert rows[1]["credit"] == 3000.0 and rows[1]["debit"] == 0.0
    assert ledger["summary"] == {
        "openingBalance": 0.0,
        "totalDebits": 15000.0,
        "totalCredits": 3000.0,
        "closingBalance": 12000.0,
        "closingBalanceType": "Dr",
    }
    assert ledger["customer"]["name"] == "Acme Ltd"


def test_unbounded_ledger_closes_at_the_aggregated_balance(acme):
    customer, invoices, receipts = acme

    ledger = LedgerService.build_ledger(customer, invoices, receipts, None, None)
    debtors = DebtorService.build_debtor_list([customer], invoices, receipts)

    assert ledger["summary"]["openingBalance"] == 0.0
    assert ledger["summary"]["closingBalance"] == debtors["allDebtors"][0]["balance"]


def test_rows_before_from_date_only_feed_the_opening_balance(acme):
    customer, invoices, receipts = acme

    ledger = LedgerService.build_ledger(customer, invoices, receipts, from_date=date(2024, 2, 1))

    assert ledger["summary"]["openingBalance"] == 7000.0
    assert [row["voucherNo"] for row in ledger["transactions"]] == ["INV-2"]
    assert ledger["transactions"][0]["balance"] == 12000.0
    assert ledger["summary"]["closingBalance"] == 12000.0


def test_rows_after_to_date_are_excluded(acme):
    customer, invoices, receipts = acme

    ledger = LedgerService.build_ledger(customer, invoices, receipts, to_date=date(2024, 1, 31))

    assert len(ledger["transactions"]) == 2
    assert ledger["summary"]["closingBalance"] == 7000.0


def test_date_bounds_are_inclusive(acme):
    customer, invoices, receipts = acme

    ledger = LedgerService.build_ledger(
        customer, invoices, receipts, from_date=date(2024, 1, 5), to_date=date(2024, 1, 20)
    )

    assert [row["voucherNo"] for row in ledger["transactions"]] == ["INV-1", "RCT-1"]


@pytest.mark.parametrize("from_date, to_date", [
    (None, None),
    (date(2024, 1, 6), None),
    (None, date(2024, 1, 19)),
    (date(2024, 1, 10), date(2024, 2, 10)),
    (date(2025, 1, 1), date(2025, 12, 31)),
])
def test_closing_equals_opening_plus_debits_minus_credits(acme, from_date, to_date):
    customer, invoices, receipts = acme

    summary = LedgerService.build_ledger(customer, invoices, receipts, from_date, to_date)["summary"]

    assert summary["closingBalance"] == pytest.approx(
        summary["openingBalance"] + summary["totalDebits"] - summary["totalCredits"]
    )


def test_same_day_rows_keep_invoices_then_receipts_input_order():
    customer = make_customer("Acme Ltd")
    day = date(2024, 3, 1)
    invoices = [
        make_invoice("Acme Ltd", "100", day, "INV-B"),
        make_invoice("Acme Ltd", "200", day, "INV-A"),
    ]
    receipts = [make_receipt("Acme Ltd", "50", day, "RCT-1")]

    rows = LedgerService.build_ledger(customer, invoices, receipts)["transactions"]

    assert [row["voucherNo"] for row in rows] == ["INV-B", "INV-A", "RCT-1"]


def test_credit_balance_when_customer_has_overpaid():
    customer = make_customer("Acme Ltd")
    invoices = [make_invoice("Acme Ltd", "5000", date(2024, 1, 1))]
    receipts = [make_receipt("Acme Ltd", "6000", date(2024, 1, 15))]

    ledger = LedgerService.build_ledger(customer, invoices, receipts)

    assert ledger["transactions"][-1]["balance"] == -1000.0
    assert ledger["transactions"][-1]["balanceType"] == "Cr"
    assert ledger["summary"]["closingBalance"] == -1000.0
    assert ledger["summary"]["closingBalanceType"] == "Cr"


def test_empty_ledger():
    ledger = LedgerService.build_ledger(make_customer("New Co"), [], [])

    assert ledger["transactions"] == []
    assert ledger["summary"]["closingBalance"] == 0.0
    assert ledger["summary"]["closingBalanceType"] == "Dr"


def test_malformed_receipt_amount_raises(acme):
    customer, invoices, _ = acme
    receipts = [make_receipt("Acme Ltd", "three thousand", date(2024, 1, 20))]

    with pytest.raises(AmountParseError):
        LedgerService.build_ledger(customer, invoices, receipts)


def test_balance_type_sign_convention():
    assert balance_type(0) == "Dr"
    assert balance_type(1) == "Dr"
    assert balance_type(-1) == "Cr"
