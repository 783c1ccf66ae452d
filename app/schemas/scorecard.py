from typing import Literal, Optional

from pydantic import BaseModel

Classification = Literal["Star", "Regular", "Risky", "Critical"]


class ScorecardCustomer(BaseModel):
    id: str
    clientName: str
    category: str
    primaryMobile: Optional[str] = None
    primaryEmail: Optional[str] = None


class ScorecardMetrics(BaseModel):
    totalInvoices: int
    onTimeCount: int
    lateCount: int
    onTimeRate: float
    avgDelayDays: float
    paymentScore: int
    classification: Classification


class OutstandingSummary(BaseModel):
    totalAmount: float
    overdueAmount: float


class PaymentScorecardResponse(BaseModel):
    customer: ScorecardCustomer
    metrics: ScorecardMetrics
    outstanding: OutstandingSummary
