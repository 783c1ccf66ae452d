import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.repositories.customer_repository import CustomerRepository
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.scorecard import PaymentScorecardResponse
from app.services.scorecard_service import ScorecardService

router = APIRouter()


@router.get("/{customer_id}", response_model=PaymentScorecardResponse)
async def get_payment_scorecard(
    customer_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    as_of: Optional[datetime.date] = Query(None, alias="asOf"),
):
    customer = CustomerRepository.get_customer(db, tenant_id, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    invoices = TransactionRepository.list_invoices(db, tenant_id, customer.client_name)
    receipts = TransactionRepository.list_receipts(db, tenant_id, customer.client_name)
    return ScorecardService.build_scorecard(customer, invoices, receipts, as_of or datetime.date.today())
