from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel

BalanceType = Literal["Dr", "Cr"]


class LedgerCustomer(BaseModel):
    name: str
    gstin: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None


class LedgerTransaction(BaseModel):
    date: date
    particulars: str
    refNo: str
    voucherType: str
    voucherNo: str
    debit: float
    credit: float
    balance: float
    balanceType: BalanceType


class LedgerSummary(BaseModel):
    openingBalance: float
    totalDebits: float
    totalCredits: float
    closingBalance: float
    closingBalanceType: BalanceType


class LedgerResponse(BaseModel):
    customer: LedgerCustomer
    transactions: List[LedgerTransaction]
    summary: LedgerSummary
