import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.repositories.customer_repository import CustomerRepository
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.ledger import LedgerResponse
from app.services.ledger_service import LedgerService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{customer_id}", response_model=LedgerResponse)
async def get_ledger(
    customer_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    from_date: Optional[datetime.date] = Query(None, alias="fromDate"),
    to_date: Optional[datetime.date] = Query(None, alias="toDate"),
):
    """Customer ledger with running Dr/Cr balance. Omitted dates leave that side unbounded."""
    if from_date and to_date and from_date > to_date:
        raise HTTPException(status_code=400, detail="fromDate must not be after toDate")

    customer = CustomerRepository.get_customer(db, tenant_id, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    invoices = TransactionRepository.list_invoices(db, tenant_id, customer.client_name)
    receipts = TransactionRepository.list_receipts(db, tenant_id, customer.client_name)
    return LedgerService.build_ledger(customer, invoices, receipts, from_date, to_date)
