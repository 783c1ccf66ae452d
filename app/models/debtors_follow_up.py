from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.master_customer import _uuid

STATUS_PENDING = "Pending"
STATUS_COMPLETED = "Completed"


class DebtorsFollowUp(Base):
    __tablename__ = "debtors_follow_ups"

    id = Column(String, primary_key=True, default=_uuid)
    tenant_id = Column(String, index=True, nullable=False)
    customer_id = Column(
        String,
        ForeignKey("master_customers.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    type = Column(String, nullable=False) # Call, Email, WhatsApp, Visit
    remarks = Column(String, nullable=False, default="")
    follow_up_date_time = Column(DateTime, nullable=False, index=True)
    priority = Column(String, nullable=False, default="Medium")
    status = Column(String, nullable=False, default=STATUS_PENDING, index=True)
    next_follow_up_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("MasterCustomer", back_populates="follow_ups")
