from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class DebtorSummary(BaseModel):
    customerId: str
    name: str
    category: str
    salesPerson: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    totalInvoices: float
    totalReceipts: float
    balance: float
    invoiceCount: int
    receiptCount: int
    lastInvoiceDate: Optional[date] = None
    lastPaymentDate: Optional[date] = None
    lastFollowUp: Optional[datetime] = None
    nextFollowUp: Optional[datetime] = None


class CategoryBucket(BaseModel):
    count: int = 0
    totalBalance: float = 0.0
    debtors: List[DebtorSummary] = []


class DebtorListResponse(BaseModel):
    categoryWise: Dict[str, CategoryBucket]
    allDebtors: List[DebtorSummary]


class FollowUpCustomer(BaseModel):
    id: str
    name: str
    category: str
    mobile: Optional[str] = None
    email: Optional[str] = None
    balance: float
    followUpDate: Optional[datetime] = None
    followUpType: Optional[str] = None
    remarks: Optional[str] = None


class FollowUpBucket(BaseModel):
    count: int = 0
    totalAmount: float = 0.0
    customers: List[FollowUpCustomer] = []


class FollowUpStatsResponse(BaseModel):
    overdue: FollowUpBucket
    dueToday: FollowUpBucket
    dueTomorrow: FollowUpBucket
    dueThisWeek: FollowUpBucket
    dueThisMonth: FollowUpBucket
    noFollowUp: FollowUpBucket


class DebtorsFollowUpCreate(BaseModel):
    type: str = Field(..., min_length=1)
    remarks: str = ""
    followUpDateTime: datetime
    priority: Literal["Low", "Medium", "High"] = "Medium"
    status: Literal["Pending", "Completed"] = "Pending"
    nextFollowUpDate: Optional[datetime] = None


class DebtorsFollowUpUpdate(BaseModel):
    remarks: Optional[str] = None
    followUpDateTime: Optional[datetime] = None
    priority: Optional[Literal["Low", "Medium", "High"]] = None
    status: Optional[Literal["Pending", "Completed"]] = None
    nextFollowUpDate: Optional[datetime] = None

    @field_validator("remarks", "followUpDateTime", "priority", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class DebtorsFollowUpResponse(BaseModel):
    id: str
    customerId: str
    type: str
    remarks: str
    followUpDateTime: datetime
    priority: str
    status: str
    nextFollowUpDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
