import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.core.database import Base

CATEGORIES = ("Alpha", "Beta", "Gamma", "Delta")


def _uuid() -> str:
    return str(uuid.uuid4())


class MasterCustomer(Base):
    __tablename__ = "master_customers"

    id = Column(String, primary_key=True, default=_uuid)
    tenant_id = Column(String, index=True, nullable=False)
    client_name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False) # Alpha, Beta, Gamma, Delta
    billing_address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    pincode = Column(String, nullable=True)
    gst_number = Column(String, nullable=True)
    primary_contact_name = Column(String, nullable=True)
    primary_mobile = Column(String, nullable=True)
    primary_email = Column(String, nullable=True)
    payment_terms_days = Column(Integer, nullable=False, default=30)
    credit_limit = Column(Numeric(15, 2), nullable=True)
    sales_person = Column(String, nullable=True)
    is_active = Column(String, nullable=False, default="Active")
    created_at = Column(DateTime, default=datetime.utcnow)

    follow_ups = relationship(
        "DebtorsFollowUp",
        back_populates="customer",
        cascade="all, delete-orphan",
    )
