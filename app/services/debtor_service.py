import calendar
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.core.money import ZERO, parse_amount, to_money
from app.models.debtors_follow_up import STATUS_COMPLETED, STATUS_PENDING
from app.models.master_customer import CATEGORIES

logger = logging.getLogger(__name__)

FOLLOW_UP_BUCKETS = ("overdue", "dueToday", "dueTomorrow", "dueThisWeek", "dueThisMonth", "noFollowUp")


class CustomerTotals:
    """Invoice and receipt totals for one customer, matched by name."""

    def __init__(self, invoices: List[Any], receipts: List[Any]):
        self.invoices = invoices
        self.receipts = receipts
        self.total_invoices = sum((parse_amount(inv.invoice_amount) for inv in invoices), ZERO)
        self.total_receipts = sum((parse_amount(rec.amount) for rec in receipts), ZERO)

    @property
    def balance(self) -> Decimal:
        return self.total_invoices - self.total_receipts


class DebtorService:
    """
    Customer balance aggregation over already-fetched rows.
    Invoices and receipts are associated with a customer by exact,
    case-sensitive equality of customer_name and the customer's client_name.
    """

    @staticmethod
    def _group_by_name(rows: Iterable[Any]) -> Dict[str, List[Any]]:
        grouped: Dict[str, List[Any]] = defaultdict(list)
        for row in rows:
            grouped[row.customer_name].append(row)
        return grouped

    @staticmethod
    def compute_totals(customers: Sequence[Any], invoices: Sequence[Any], receipts: Sequence[Any]) -> Dict[str, CustomerTotals]:
        """Totals keyed by customer id, for every customer."""
        invoices_by_name = DebtorService._group_by_name(invoices)
        receipts_by_name = DebtorService._group_by_name(receipts)

        known_names = {customer.client_name for customer in customers}
        unmatched = [
            row for name, rows in list(invoices_by_name.items()) + list(receipts_by_name.items())
            if name not in known_names
            for row in rows
        ]
        if unmatched:
            logger.warning(
                f"{len(unmatched)} invoice/receipt rows match no customer name "
                f"({sorted({row.customer_name for row in unmatched})})"
            )

        return {
            customer.id: CustomerTotals(
                invoices_by_name.get(customer.client_name, []),
                receipts_by_name.get(customer.client_name, []),
            )
            for customer in customers
        }

    @staticmethod
    def _last_completed(follow_ups: List[Any]) -> Optional[datetime]:
        completed = [f.follow_up_date_time for f in follow_ups if f.status == STATUS_COMPLETED]
        return max(completed) if completed else None

    @staticmethod
    def _next_pending(follow_ups: List[Any]) -> Optional[datetime]:
        pending = [f.follow_up_date_time for f in follow_ups if f.status == STATUS_PENDING]
        return min(pending) if pending else None

    @staticmethod
    def build_debtor_list(
        customers: Sequence[Any],
        invoices: Sequence[Any],
        receipts: Sequence[Any],
        follow_ups: Sequence[Any] = (),
    ) -> Dict[str, Any]:
        """
        Build the debtor list: every customer with a positive balance,
        plus per-category counts and totals.
        Raises AmountParseError if any amount is malformed.
        """
        totals = DebtorService.compute_totals(customers, invoices, receipts)
        follow_ups_by_customer: Dict[str, List[Any]] = defaultdict(list)
        for follow_up in follow_ups:
            follow_ups_by_customer[follow_up.customer_id].append(follow_up)

        category_totals = {category: ZERO for category in CATEGORIES}
        category_debtors: Dict[str, List[Dict[str, Any]]] = {category: [] for category in CATEGORIES}
        all_debtors: List[Dict[str, Any]] = []

        for customer in customers:
            customer_totals = totals[customer.id]
            balance = customer_totals.balance
            if balance <= 0:
                continue

            invoice_dates = [inv.invoice_date for inv in customer_totals.invoices]
            receipt_dates = [rec.date for rec in customer_totals.receipts]
            customer_follow_ups = follow_ups_by_customer.get(customer.id, [])

            debtor = {
                "customerId": customer.id,
                "name": customer.client_name,
                "category": customer.category,
                "salesPerson": customer.sales_person,
                "mobile": customer.primary_mobile,
                "email": customer.primary_email,
                "totalInvoices": to_money(customer_totals.total_invoices),
                "totalReceipts": to_money(customer_totals.total_receipts),
                "balance": to_money(balance),
                "invoiceCount": len(customer_totals.invoices),
                "receiptCount": len(customer_totals.receipts),
                "lastInvoiceDate": max(invoice_dates) if invoice_dates else None,
                "lastPaymentDate": max(receipt_dates) if receipt_dates else None,
                "lastFollowUp": DebtorService._last_completed(customer_follow_ups),
                "nextFollowUp": DebtorService._next_pending(customer_follow_ups),
            }
            all_debtors.append(debtor)

            if customer.category in category_debtors:
                category_debtors[customer.category].append(debtor)
                category_totals[customer.category] += balance

        logger.info(f"Built debtor list: {len(all_debtors)} debtors out of {len(customers)} customers")

        return {
            "categoryWise": {
                category: {
                    "count": len(category_debtors[category]),
                    "totalBalance": to_money(category_totals[category]),
                    "debtors": category_debtors[category],
                }
                for category in CATEGORIES
            },
            "allDebtors": all_debtors,
        }

    @staticmethod
    def _end_of_week(today: date) -> date:
        # Weeks end on Sunday; on a Sunday the window runs to the following Sunday
        days_since_sunday = (today.weekday() + 1) % 7
        return today + timedelta(days=7 - days_since_sunday)

    @staticmethod
    def _end_of_month(today: date) -> date:
        return today.replace(day=calendar.monthrange(today.year, today.month)[1])

    @staticmethod
    def build_follow_up_stats(
        customers: Sequence[Any],
        invoices: Sequence[Any],
        receipts: Sequence[Any],
        follow_ups: Sequence[Any],
        today: date,
    ) -> Dict[str, Any]:
        """
        Bucket pending follow-ups of current debtors by how soon they are due.
        Debtors without any pending follow-up are collected under noFollowUp.
        """
        totals = DebtorService.compute_totals(customers, invoices, receipts)
        debtors: Dict[str, Dict[str, Any]] = {}
        for customer in customers:
            balance = totals[customer.id].balance
            if balance > 0:
                debtors[customer.id] = {
                    "id": customer.id,
                    "name": customer.client_name,
                    "category": customer.category,
                    "mobile": customer.primary_mobile,
                    "email": customer.primary_email,
                    "balance": balance,
                }

        tomorrow = today + timedelta(days=1)
        end_of_week = DebtorService._end_of_week(today)
        end_of_month = DebtorService._end_of_month(today)

        amounts = {bucket: ZERO for bucket in FOLLOW_UP_BUCKETS}
        entries: Dict[str, List[Dict[str, Any]]] = {bucket: [] for bucket in FOLLOW_UP_BUCKETS}

        pending = [f for f in follow_ups if f.status == STATUS_PENDING]
        for follow_up in pending:
            debtor = debtors.get(follow_up.customer_id)
            if debtor is None:
                continue

            day = follow_up.follow_up_date_time.date()
            if day < today:
                bucket = "overdue"
            elif day == today:
                bucket = "dueToday"
            elif day == tomorrow:
                bucket = "dueTomorrow"
            elif day <= end_of_week:
                bucket = "dueThisWeek"
            elif day <= end_of_month:
                bucket = "dueThisMonth"
            else:
                continue

            amounts[bucket] += debtor["balance"]
            entries[bucket].append({
                **debtor,
                "balance": to_money(debtor["balance"]),
                "followUpDate": follow_up.follow_up_date_time,
                "followUpType": follow_up.type,
                "remarks": follow_up.remarks,
            })

        with_pending = {f.customer_id for f in pending}
        for customer_id, debtor in debtors.items():
            if customer_id not in with_pending:
                amounts["noFollowUp"] += debtor["balance"]
                entries["noFollowUp"].append({**debtor, "balance": to_money(debtor["balance"])})

        return {
            bucket: {
                "count": len(entries[bucket]),
                "totalAmount": to_money(amounts[bucket]),
                "customers": entries[bucket],
            }
            for bucket in FOLLOW_UP_BUCKETS
        }

    @staticmethod
    def build_credit_utilization(customers: Sequence[Any], invoices: Sequence[Any], receipts: Sequence[Any]) -> List[Dict[str, Any]]:
        """Credit limit usage per customer; utilized limit is the outstanding balance."""
        totals = DebtorService.compute_totals(customers, invoices, receipts)
        rows = []
        for customer in customers:
            utilized = totals[customer.id].balance
            credit_limit = parse_amount(customer.credit_limit) if customer.credit_limit is not None else ZERO
            percentage = (utilized / credit_limit * 100) if credit_limit > 0 else ZERO
            rows.append({
                "customerId": customer.id,
                "customerName": customer.client_name,
                "category": customer.category,
                "creditLimit": to_money(credit_limit),
                "utilizedLimit": to_money(utilized),
                "availableLimit": to_money(credit_limit - utilized),
                "utilizationPercentage": to_money(percentage),
            })
        return rows
