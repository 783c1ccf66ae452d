import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from app.core.money import ZERO, parse_amount, to_money

logger = logging.getLogger(__name__)


def balance_type(balance: Decimal) -> str:
    """Positive balances are owed by the customer (Dr), negative ones are owed to them (Cr)."""
    return "Dr" if balance >= 0 else "Cr"


class LedgerService:

    @staticmethod
    def _entries(invoices: Sequence[Any], receipts: Sequence[Any]) -> List[Dict[str, Any]]:
        """
        Tag invoices as debits and receipts as credits, then order by date.
        sorted() is stable, so rows sharing a date keep invoices-then-receipts input order.
        """
        entries = [
            {
                "date": inv.invoice_date,
                "particulars": "Sales",
                "refNo": inv.invoice_number,
                "voucherType": "Invoice",
                "voucherNo": inv.invoice_number,
                "debit": parse_amount(inv.invoice_amount),
                "credit": ZERO,
            }
            for inv in invoices
        ]
        entries.extend(
            {
                "date": rec.date,
                "particulars": rec.remarks or "Payment received",
                "refNo": rec.invoice_number or "",
                "voucherType": rec.voucher_type or "Receipt",
                "voucherNo": rec.voucher_number,
                "debit": ZERO,
                "credit": parse_amount(rec.amount),
            }
            for rec in receipts
        )
        return sorted(entries, key=lambda entry: entry["date"])

    @staticmethod
    def build_ledger(
        customer: Any,
        invoices: Sequence[Any],
        receipts: Sequence[Any],
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Build a customer ledger statement for [from_date, to_date], both inclusive.

        Rows before from_date are folded into the opening balance; rows after
        to_date are left out. Passing no bounds covers the full history, so the
        opening balance is zero and the closing balance is the outstanding balance.
        """
        opening = ZERO
        total_debits = ZERO
        total_credits = ZERO
        running = ZERO
        transactions = []

        for entry in LedgerService._entries(invoices, receipts):
            if from_date is not None and entry["date"] < from_date:
                opening += entry["debit"] - entry["credit"]
                running = opening
                continue
            if to_date is not None and entry["date"] > to_date:
                continue

            running += entry["debit"] - entry["credit"]
            total_debits += entry["debit"]
            total_credits += entry["credit"]
            transactions.append({
                **entry,
                "debit": to_money(entry["debit"]),
                "credit": to_money(entry["credit"]),
                "balance": to_money(running),
                "balanceType": balance_type(running),
            })

        closing = opening + total_debits - total_credits
        logger.info(
            f"Built ledger for '{customer.client_name}': {len(transactions)} rows, "
            f"closing {closing} {balance_type(closing)}"
        )

        return {
            "customer": {
                "name": customer.client_name,
                "gstin": customer.gst_number,
                "address": customer.billing_address,
                "city": customer.city,
                "state": customer.state,
                "pincode": customer.pincode,
                "mobile": customer.primary_mobile,
                "email": customer.primary_email,
            },
            "transactions": transactions,
            "summary": {
                "openingBalance": to_money(opening),
                "totalDebits": to_money(total_debits),
                "totalCredits": to_money(total_credits),
                "closingBalance": to_money(closing),
                "closingBalanceType": balance_type(closing),
            },
        }
