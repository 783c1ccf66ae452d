import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.models.master_customer import MasterCustomer
from app.repositories.customer_repository import CustomerRepository
from app.schemas.customers import (
    ImportResponse,
    MasterCustomerCreate,
    MasterCustomerResponse,
    MasterCustomerUpdate,
)
from app.services.import_service import ImportService

router = APIRouter()
logger = logging.getLogger(__name__)

# Request field -> model column
FIELD_MAP = {
    "clientName": "client_name",
    "category": "category",
    "billingAddress": "billing_address",
    "city": "city",
    "state": "state",
    "pincode": "pincode",
    "gstNumber": "gst_number",
    "primaryContactName": "primary_contact_name",
    "primaryMobile": "primary_mobile",
    "primaryEmail": "primary_email",
    "paymentTermsDays": "payment_terms_days",
    "creditLimit": "credit_limit",
    "salesPerson": "sales_person",
    "isActive": "is_active",
}


def to_response(customer: MasterCustomer) -> MasterCustomerResponse:
    return MasterCustomerResponse(
        id=customer.id,
        clientName=customer.client_name,
        category=customer.category,
        billingAddress=customer.billing_address,
        city=customer.city,
        state=customer.state,
        pincode=customer.pincode,
        gstNumber=customer.gst_number,
        primaryContactName=customer.primary_contact_name,
        primaryMobile=customer.primary_mobile,
        primaryEmail=customer.primary_email,
        paymentTermsDays=customer.payment_terms_days,
        creditLimit=float(customer.credit_limit) if customer.credit_limit is not None else None,
        salesPerson=customer.sales_person,
        isActive=customer.is_active,
        createdAt=customer.created_at,
    )


def _to_fields(payload: dict) -> dict:
    return {FIELD_MAP[key]: value for key, value in payload.items() if key in FIELD_MAP}


@router.get("", response_model=List[MasterCustomerResponse])
async def list_customers(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    category: Optional[str] = Query(None, description="Filter by category (Alpha, Beta, Gamma, Delta)"),
):
    return [to_response(customer) for customer in CustomerRepository.list_customers(db, tenant_id, category)]


@router.post("", response_model=MasterCustomerResponse, status_code=201)
async def create_customer(
    payload: MasterCustomerCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    customer = CustomerRepository.create_customer(db, tenant_id, _to_fields(payload.model_dump()))
    logger.info(f"Created customer {customer.id} ('{customer.client_name}')")
    return to_response(customer)


@router.post("/import", response_model=ImportResponse)
async def import_customers(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    """Bulk import master customers from a CSV or Excel sheet."""
    df = await ImportService.read_upload(file)
    rows = ImportService.customer_rows(df)
    imported = CustomerRepository.create_customers(db, tenant_id, rows)
    logger.info(f"Imported {imported} customers from {file.filename}")
    return ImportResponse(success=True, message=f"Imported {imported} customers", imported=imported)


@router.get("/{customer_id}", response_model=MasterCustomerResponse)
async def get_customer(
    customer_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    customer = CustomerRepository.get_customer(db, tenant_id, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return to_response(customer)


@router.put("/{customer_id}", response_model=MasterCustomerResponse)
async def update_customer(
    customer_id: str,
    payload: MasterCustomerUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    fields = _to_fields(payload.model_dump(exclude_unset=True))
    customer = CustomerRepository.update_customer(db, tenant_id, customer_id, fields)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return to_response(customer)


@router.delete("/{customer_id}", status_code=204)
async def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not CustomerRepository.delete_customer(db, tenant_id, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
