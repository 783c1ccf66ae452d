from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Category = Literal["Alpha", "Beta", "Gamma", "Delta"]


class MasterCustomerBase(BaseModel):
    clientName: str = Field(..., min_length=1)
    category: Category
    billingAddress: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    gstNumber: Optional[str] = None
    primaryContactName: Optional[str] = None
    primaryMobile: Optional[str] = None
    primaryEmail: Optional[str] = None
    paymentTermsDays: int = Field(30, ge=0)
    creditLimit: Optional[float] = Field(None, ge=0)
    salesPerson: Optional[str] = None
    isActive: Literal["Active", "Inactive"] = "Active"


class MasterCustomerCreate(MasterCustomerBase):
    pass


class MasterCustomerUpdate(BaseModel):
    clientName: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    billingAddress: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    gstNumber: Optional[str] = None
    primaryContactName: Optional[str] = None
    primaryMobile: Optional[str] = None
    primaryEmail: Optional[str] = None
    paymentTermsDays: Optional[int] = Field(None, ge=0)
    creditLimit: Optional[float] = Field(None, ge=0)
    salesPerson: Optional[str] = None
    isActive: Optional[Literal["Active", "Inactive"]] = None

    @field_validator("clientName", "category", "paymentTermsDays", "isActive")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class MasterCustomerResponse(MasterCustomerBase):
    id: str
    createdAt: Optional[datetime] = None


class ImportResponse(BaseModel):
    success: bool
    message: str
    imported: int


class CreditUtilization(BaseModel):
    customerId: str
    customerName: str
    category: str
    creditLimit: float
    utilizedLimit: float
    availableLimit: float
    utilizationPercentage: float


class CreditUtilizationResponse(BaseModel):
    items: List[CreditUtilization]
