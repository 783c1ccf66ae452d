from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

class InvoiceCreate(BaseModel):
    invoiceNumber: str = Field(..., min_length=1)
    customerName: str = Field(..., min_length=1)
    invoiceDate: date
    dueDate: Optional[date] = None
    invoiceAmount: float = Field(..., gt=0)
    status: str = "Unpaid"
    remarks: Optional[str] = None

class InvoiceResponse(BaseModel):
    id: str
    invoiceNumber: str
    customerName: str
    invoiceDate: date
    dueDate: Optional[date] = None
    invoiceAmount: float
    status: str
    remarks: Optional[str] = None
    createdAt: Optional[datetime] = None

class InvoiceListResponse(BaseModel):
    items: List[InvoiceResponse]
    total: int
    page: int
    limit: int

class ReceiptCreate(BaseModel):
    voucherType: str = "Receipt"
    voucherNumber: str = Field(..., min_length=1)
    invoiceNumber: Optional[str] = None
    customerName: str = Field(..., min_length=1)
    date: date
    amount: float = Field(..., gt=0)
    remarks: Optional[str] = None

class ReceiptResponse(BaseModel):
    id: str
    voucherType: str
    voucherNumber: str
    invoiceNumber: Optional[str] = None
    customerName: str
    date: date
    amount: float
    remarks: Optional[str] = None
    createdAt: Optional[datetime] = None

class ReceiptListResponse(BaseModel):
    items: List[ReceiptResponse]
    total: int
    page: int
    limit: int
