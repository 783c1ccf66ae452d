from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Numeric, String

from app.core.database import Base
from app.models.master_customer import _uuid

class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(String, primary_key=True, default=_uuid)
    tenant_id = Column(String, index=True, nullable=False)
    voucher_type = Column(String, nullable=False, default="Receipt")
    voucher_number = Column(String, nullable=False)
    invoice_number = Column(String, nullable=True)
    customer_name = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    remarks = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
