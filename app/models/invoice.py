from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Numeric, String

from app.core.database import Base
from app.models.master_customer import _uuid

class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(String, primary_key=True, default=_uuid)
    tenant_id = Column(String, index=True, nullable=False)
    invoice_number = Column(String, nullable=False, index=True)
    customer_name = Column(String, nullable=False, index=True) # joined to master_customers.client_name
    invoice_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date, nullable=True)
    invoice_amount = Column(Numeric(15, 2), nullable=False)
    status = Column(String, nullable=False, default="Unpaid")
    remarks = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
