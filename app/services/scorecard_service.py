import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence

from app.core.money import ZERO, parse_amount, to_money

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_TERMS_DAYS = 30


class InvoiceSettlement:
    """Tracks how much of one invoice is still open while receipts are applied."""

    def __init__(self, invoice: Any, due_date: date):
        self.invoice = invoice
        self.due_date = due_date
        self.remaining = parse_amount(invoice.invoice_amount)
        self.settled_on: Optional[date] = None

    @property
    def is_settled(self) -> bool:
        return self.settled_on is not None


class ScorecardService:
    """
    Payment behaviour scorecard for a single customer.

    Score (0-100):
        round(ON_TIME_WEIGHT * onTimeRate + DELAY_WEIGHT * max(0, 100 - DELAY_PENALTY_PER_DAY * avgDelayDays))

    Classification by score: Star >= 80, Regular >= 60, Risky >= 40, otherwise Critical.
    """

    ON_TIME_WEIGHT = Decimal("0.7")
    DELAY_WEIGHT = Decimal("0.3")
    DELAY_PENALTY_PER_DAY = Decimal("2")
    # Customers with nothing due yet sit at the Regular threshold
    NEUTRAL_SCORE = 60

    CLASSIFICATION_THRESHOLDS = (
        (80, "Star"),
        (60, "Regular"),
        (40, "Risky"),
    )

    @staticmethod
    def due_date_for(invoice: Any, payment_terms_days: Optional[int]) -> date:
        if invoice.due_date is not None:
            return invoice.due_date
        terms = DEFAULT_PAYMENT_TERMS_DAYS if payment_terms_days is None else payment_terms_days
        return invoice.invoice_date + timedelta(days=terms)

    @staticmethod
    def allocate_receipts(customer: Any, invoices: Sequence[Any], receipts: Sequence[Any]) -> List[InvoiceSettlement]:
        """
        Apply receipts to invoices first-in first-out, both ordered by date.
        An invoice is settled on the date of the receipt that clears it.
        """
        settlements = [
            InvoiceSettlement(inv, ScorecardService.due_date_for(inv, customer.payment_terms_days))
            for inv in sorted(invoices, key=lambda inv: inv.invoice_date)
        ]
        open_settlements = iter(settlements)
        current = next(open_settlements, None)

        for receipt in sorted(receipts, key=lambda rec: rec.date):
            available = parse_amount(receipt.amount)
            while current is not None and available > 0:
                applied = min(available, current.remaining)
                current.remaining -= applied
                available -= applied
                if current.remaining <= 0:
                    current.settled_on = receipt.date
                    current = next(open_settlements, None)
            if current is None:
                break

        return settlements

    @staticmethod
    def classify(score: int) -> str:
        for threshold, label in ScorecardService.CLASSIFICATION_THRESHOLDS:
            if score >= threshold:
                return label
        return "Critical"

    @staticmethod
    def calculate_score(on_time_rate: Decimal, avg_delay_days: Decimal, evaluated: int) -> int:
        if evaluated == 0:
            return ScorecardService.NEUTRAL_SCORE
        delay_component = max(ZERO, 100 - ScorecardService.DELAY_PENALTY_PER_DAY * avg_delay_days)
        score = ScorecardService.ON_TIME_WEIGHT * on_time_rate + ScorecardService.DELAY_WEIGHT * delay_component
        return int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def build_scorecard(customer: Any, invoices: Sequence[Any], receipts: Sequence[Any], as_of: date) -> Dict[str, Any]:
        settlements = ScorecardService.allocate_receipts(customer, invoices, receipts)

        on_time_count = 0
        late_delays: List[int] = []
        total_outstanding = ZERO
        overdue_outstanding = ZERO

        for settlement in settlements:
            if settlement.is_settled:
                delay = (settlement.settled_on - settlement.due_date).days
                if delay <= 0:
                    on_time_count += 1
                else:
                    late_delays.append(delay)
                continue

            total_outstanding += settlement.remaining
            if as_of > settlement.due_date:
                late_delays.append((as_of - settlement.due_date).days)
                overdue_outstanding += settlement.remaining

        late_count = len(late_delays)
        evaluated = on_time_count + late_count
        on_time_rate = (Decimal(on_time_count) * 100 / evaluated) if evaluated else ZERO
        avg_delay = (Decimal(sum(late_delays)) / late_count) if late_count else ZERO
        on_time_rate = on_time_rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        avg_delay = avg_delay.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)

        score = ScorecardService.calculate_score(on_time_rate, avg_delay, evaluated)

        logger.info(
            f"Scorecard for '{customer.client_name}': {on_time_count} on time, "
            f"{late_count} late, score {score}"
        )

        return {
            "customer": {
                "id": customer.id,
                "clientName": customer.client_name,
                "category": customer.category,
                "primaryMobile": customer.primary_mobile,
                "primaryEmail": customer.primary_email,
            },
            "metrics": {
                "totalInvoices": len(settlements),
                "onTimeCount": on_time_count,
                "lateCount": late_count,
                "onTimeRate": float(on_time_rate),
                "avgDelayDays": float(avg_delay),
                "paymentScore": score,
                "classification": ScorecardService.classify(score),
            },
            "outstanding": {
                "totalAmount": to_money(total_outstanding),
                "overdueAmount": to_money(overdue_outstanding),
            },
        }
