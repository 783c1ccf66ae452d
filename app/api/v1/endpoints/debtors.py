import datetime
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.models.debtors_follow_up import DebtorsFollowUp
from app.models.master_customer import CATEGORIES
from app.repositories.customer_repository import CustomerRepository
from app.repositories.follow_up_repository import FollowUpRepository
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.customers import CreditUtilizationResponse
from app.schemas.debtors import (
    DebtorListResponse,
    DebtorsFollowUpCreate,
    DebtorsFollowUpResponse,
    DebtorsFollowUpUpdate,
    FollowUpStatsResponse,
)
from app.services.debtor_service import DebtorService

router = APIRouter()
logger = logging.getLogger(__name__)

FOLLOW_UP_FIELDS = {
    "type": "type",
    "remarks": "remarks",
    "followUpDateTime": "follow_up_date_time",
    "priority": "priority",
    "status": "status",
    "nextFollowUpDate": "next_follow_up_date",
}


def to_follow_up_response(follow_up: DebtorsFollowUp) -> DebtorsFollowUpResponse:
    return DebtorsFollowUpResponse(
        id=follow_up.id,
        customerId=follow_up.customer_id,
        type=follow_up.type,
        remarks=follow_up.remarks,
        followUpDateTime=follow_up.follow_up_date_time,
        priority=follow_up.priority,
        status=follow_up.status,
        nextFollowUpDate=follow_up.next_follow_up_date,
        createdAt=follow_up.created_at,
    )


def _load_tenant_rows(db: Session, tenant_id: str):
    customers = CustomerRepository.list_customers(db, tenant_id)
    invoices = TransactionRepository.list_invoices(db, tenant_id)
    receipts = TransactionRepository.list_receipts(db, tenant_id)
    return customers, invoices, receipts


@router.get("", response_model=DebtorListResponse)
async def get_debtors(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    """
    Customers with an outstanding balance, grouped by category.
    Balances are recomputed from every invoice and receipt on each call.
    """
    customers, invoices, receipts = _load_tenant_rows(db, tenant_id)
    follow_ups = FollowUpRepository.list_follow_ups(db, tenant_id)
    return DebtorService.build_debtor_list(customers, invoices, receipts, follow_ups)


@router.get("/followup-stats", response_model=FollowUpStatsResponse)
async def get_follow_up_stats(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    today: Optional[datetime.date] = Query(None, description="Reference day, defaults to the server date"),
):
    customers, invoices, receipts = _load_tenant_rows(db, tenant_id)
    follow_ups = FollowUpRepository.list_follow_ups(db, tenant_id)
    return DebtorService.build_follow_up_stats(
        customers, invoices, receipts, follow_ups, today or datetime.date.today()
    )


@router.get("/credit-utilization", response_model=CreditUtilizationResponse)
async def get_credit_utilization(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    customers, invoices, receipts = _load_tenant_rows(db, tenant_id)
    return {"items": DebtorService.build_credit_utilization(customers, invoices, receipts)}


@router.get("/followups/category/{category}", response_model=List[DebtorsFollowUpResponse])
async def get_follow_ups_by_category(
    category: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if category not in CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Category must be one of {', '.join(CATEGORIES)}")
    return [to_follow_up_response(f) for f in FollowUpRepository.list_by_category(db, tenant_id, category)]


@router.patch("/followups/{follow_up_id}", response_model=DebtorsFollowUpResponse)
async def update_follow_up(
    follow_up_id: str,
    payload: DebtorsFollowUpUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    """Update a follow-up, typically to mark it Completed once actioned."""
    fields = {FOLLOW_UP_FIELDS[key]: value for key, value in payload.model_dump(exclude_unset=True).items()}
    follow_up = FollowUpRepository.update_follow_up(db, tenant_id, follow_up_id, fields)
    if not follow_up:
        raise HTTPException(status_code=404, detail="Follow-up not found")
    logger.info(f"Updated follow-up {follow_up_id}: {sorted(fields)}")
    return to_follow_up_response(follow_up)


@router.delete("/followups/{follow_up_id}", status_code=204)
async def delete_follow_up(
    follow_up_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not FollowUpRepository.delete_follow_up(db, tenant_id, follow_up_id):
        raise HTTPException(status_code=404, detail="Follow-up not found")


@router.get("/{customer_id}/followups", response_model=List[DebtorsFollowUpResponse])
async def get_customer_follow_ups(
    customer_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not CustomerRepository.get_customer(db, tenant_id, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    return [to_follow_up_response(f) for f in FollowUpRepository.list_by_customer(db, tenant_id, customer_id)]


@router.post("/{customer_id}/followups", response_model=DebtorsFollowUpResponse, status_code=201)
async def create_customer_follow_up(
    customer_id: str,
    payload: DebtorsFollowUpCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not CustomerRepository.get_customer(db, tenant_id, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    fields = {FOLLOW_UP_FIELDS[key]: value for key, value in payload.model_dump().items()}
    follow_up = FollowUpRepository.create_follow_up(db, tenant_id, customer_id, fields)
    logger.info(f"Scheduled {follow_up.type} follow-up for customer {customer_id} at {follow_up.follow_up_date_time}")
    return to_follow_up_response(follow_up)
