import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from app.core.money import AmountParseError
from app.services.debtor_service import DebtorService
from tests.factories import make_customer, make_follow_up, make_invoice, make_receipt


def test_acme_example_is_listed_with_outstanding_balance(acme):
    customer, invoices, receipts = acme

    result = DebtorService.build_debtor_list([customer], invoices, receipts)

    assert len(result["allDebtors"]) == 1
    debtor = result["allDebtors"][0]
    assert debtor["customerId"] == customer.id
    assert debtor["balance"] == 12000.0
    assert debtor["totalInvoices"] == 15000.0
    assert debtor["totalReceipts"] == 3000.0
    assert debtor["invoiceCount"] == 2
    assert debtor["receiptCount"] == 1
    assert debtor["lastInvoiceDate"] == date(2024, 2, 10)
    assert debtor["lastPaymentDate"] == date(2024, 1, 20)


def test_settled_and_overpaid_customers_are_excluded():
    settled = make_customer("Settled Co")
    overpaid = make_customer("Overpaid Co")
    invoices = [
        make_invoice("Settled Co", "2500", date(2024, 1, 1)),
        make_invoice("Settled Co", "2500", date(2024, 1, 2)),
        make_invoice("Overpaid Co", "1000", date(2024, 1, 1)),
    ]
    receipts = [
        make_receipt("Settled Co", "5000", date(2024, 1, 10)),
        make_receipt("Overpaid Co", "1200", date(2024, 1, 10)),
    ]

    result = DebtorService.build_debtor_list([settled, overpaid], invoices, receipts)

    assert result["allDebtors"] == []
    assert all(bucket["count"] == 0 for bucket in result["categoryWise"].values())


def test_balance_equals_invoices_minus_receipts_for_every_debtor():
    customers = [make_customer(f"Customer {i}", ["Alpha", "Beta", "Gamma", "Delta"][i % 4]) for i in range(8)]
    invoices = [make_invoice(f"Customer {i}", f"{1000 + i * 333.33:.2f}", date(2024, 1, 1 + i)) for i in range(8)]
    invoices += [make_invoice(f"Customer {i}", "0.07", date(2024, 2, 1)) for i in range(0, 8, 2)]
    receipts = [make_receipt(f"Customer {i}", f"{i * 400.1:.2f}", date(2024, 3, 1)) for i in range(8)]

    result = DebtorService.build_debtor_list(customers, invoices, receipts)

    assert result["allDebtors"]
    for debtor in result["allDebtors"]:
        assert round(debtor["totalInvoices"] - debtor["totalReceipts"], 2) == debtor["balance"]
        assert debtor["balance"] > 0


def test_name_match_is_exact_and_case_sensitive():
    customer = make_customer("Acme Ltd")
    invoices = [
        make_invoice("ACME LTD", "1000", date(2024, 1, 1)),
        make_invoice("Acme Ltd ", "1000", date(2024, 1, 1)),
    ]

    result = DebtorService.build_debtor_list([customer], invoices, [])

    assert result["allDebtors"] == []


def test_unmatched_transactions_are_logged(caplog):
    customer = make_customer("Acme Ltd")
    invoices = [make_invoice("Acme Limited", "1000", date(2024, 1, 1))]

    with caplog.at_level(logging.WARNING, logger="app.services.debtor_service"):
        DebtorService.build_debtor_list([customer], invoices, [])

    assert "match no customer name" in caplog.text
    assert "Acme Limited" in caplog.text


def test_malformed_amount_aborts_the_whole_aggregation():
    good = make_customer("Good Co")
    bad = make_customer("Bad Co")
    invoices = [
        make_invoice("Good Co", "1000", date(2024, 1, 1)),
        make_invoice("Bad Co", "1,000.x", date(2024, 1, 1)),
    ]

    with pytest.raises(AmountParseError):
        DebtorService.build_debtor_list([good, bad], invoices, [])


def test_debtors_grouped_by_category_with_totals():
    customers = [
        make_customer("A1", "Alpha"),
        make_customer("A2", "Alpha"),
        make_customer("D1", "Delta"),
        make_customer("X1", "Unrated"),
    ]
    invoices = [
        make_invoice("A1", "100.10", date(2024, 1, 1)),
        make_invoice("A2", "200.20", date(2024, 1, 1)),
        make_invoice("D1", "50", date(2024, 1, 1)),
        make_invoice("X1", "75", date(2024, 1, 1)),
    ]

    result = DebtorService.build_debtor_list(customers, invoices, [])

    alpha = result["categoryWise"]["Alpha"]
    assert alpha["count"] == 2
    assert alpha["totalBalance"] == 300.3
    assert [d["name"] for d in alpha["debtors"]] == ["A1", "A2"]
    assert result["categoryWise"]["Delta"]["count"] == 1
    assert result["categoryWise"]["Beta"] == {"count": 0, "totalBalance": 0.0, "debtors": []}
    # Unknown categories still show up in the flat list
    assert [d["name"] for d in result["allDebtors"]] == ["A1", "A2", "D1", "X1"]


def test_last_and_next_follow_up_dates():
    customer = make_customer("Acme Ltd", customer_id="c1")
    invoices = [make_invoice("Acme Ltd", "1000", date(2024, 1, 1))]
    follow_ups = [
        make_follow_up("c1", datetime(2024, 5, 1, 10), status="Completed"),
        make_follow_up("c1", datetime(2024, 5, 9, 10), status="Completed"),
        make_follow_up("c1", datetime(2024, 6, 20, 10)),
        make_follow_up("c1", datetime(2024, 6, 12, 10)),
        make_follow_up("other", datetime(2024, 6, 1, 10)),
    ]

    debtor = DebtorService.build_debtor_list([customer], invoices, [], follow_ups)["allDebtors"][0]

    assert debtor["lastFollowUp"] == datetime(2024, 5, 9, 10)
    assert debtor["nextFollowUp"] == datetime(2024, 6, 12, 10)


def test_aggregation_is_idempotent_and_leaves_inputs_untouched(acme):
    customer, invoices, receipts = acme
    invoices_before = list(invoices)

    first = DebtorService.build_debtor_list([customer], invoices, receipts)
    second = DebtorService.build_debtor_list([customer], invoices, receipts)

    assert first == second
    assert invoices == invoices_before


class TestFollowUpStats:
    # Wednesday; the week closes on Sunday 16 June and the month on 30 June
    TODAY = date(2024, 6, 12)

    def _data(self):
        debtor = make_customer("Debtor", customer_id="d1")
        quiet = make_customer("Quiet", customer_id="q1")
        settled = make_customer("Settled", customer_id="s1")
        invoices = [
            make_invoice("Debtor", "1000", date(2024, 1, 1)),
            make_invoice("Quiet", "400", date(2024, 1, 1)),
            make_invoice("Settled", "300", date(2024, 1, 1)),
        ]
        receipts = [make_receipt("Settled", "300", date(2024, 2, 1))]
        follow_ups = [
            make_follow_up("d1", datetime(2024, 6, 10, 9)),
            make_follow_up("d1", datetime(2024, 6, 12, 18)),
            make_follow_up("d1", datetime(2024, 6, 13, 9)),
            make_follow_up("d1", datetime(2024, 6, 16, 9)),
            make_follow_up("d1", datetime(2024, 6, 20, 9)),
            make_follow_up("d1", datetime(2024, 7, 5, 9)),
            make_follow_up("d1", datetime(2024, 6, 1, 9), status="Completed"),
            make_follow_up("s1", datetime(2024, 6, 12, 9)),
        ]
        return [debtor, quiet, settled], invoices, receipts, follow_ups

    def test_pending_follow_ups_are_bucketed_by_due_day(self):
        stats = DebtorService.build_follow_up_stats(*self._data(), today=self.TODAY)

        for bucket in ("overdue", "dueToday", "dueTomorrow", "dueThisWeek", "dueThisMonth"):
            assert stats[bucket]["count"] == 1, bucket
            assert stats[bucket]["totalAmount"] == 1000.0
            assert stats[bucket]["customers"][0]["id"] == "d1"

        assert stats["dueToday"]["customers"][0]["followUpDate"] == datetime(2024, 6, 12, 18)

    def test_debtors_without_pending_follow_ups(self):
        stats = DebtorService.build_follow_up_stats(*self._data(), today=self.TODAY)

        assert stats["noFollowUp"]["count"] == 1
        assert stats["noFollowUp"]["totalAmount"] == 400.0
        assert stats["noFollowUp"]["customers"][0]["name"] == "Quiet"

    def test_week_window_on_a_sunday_runs_to_the_next_sunday(self):
        assert DebtorService._end_of_week(date(2024, 6, 16)) == date(2024, 6, 23)
        assert DebtorService._end_of_week(date(2024, 6, 10)) == date(2024, 6, 16)
        assert DebtorService._end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)


def test_credit_utilization():
    customers = [
        make_customer("Limited", credit_limit=Decimal("20000")),
        make_customer("No Limit"),
    ]
    invoices = [
        make_invoice("Limited", "5000", date(2024, 1, 1)),
        make_invoice("No Limit", "700", date(2024, 1, 1)),
    ]
    receipts = [make_receipt("Limited", "1000", date(2024, 1, 15))]

    rows = DebtorService.build_credit_utilization(customers, invoices, receipts)

    assert rows[0] == {
        "customerId": "limited",
        "customerName": "Limited",
        "category": "Alpha",
        "creditLimit": 20000.0,
        "utilizedLimit": 4000.0,
        "availableLimit": 16000.0,
        "utilizationPercentage": 20.0,
    }
    assert rows[1]["creditLimit"] == 0.0
    assert rows[1]["utilizationPercentage"] == 0.0
    assert rows[1]["availableLimit"] == -700.0
