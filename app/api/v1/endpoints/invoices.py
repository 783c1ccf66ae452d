import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.core.money import parse_amount
from app.models.invoice import Invoice
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.customers import ImportResponse
from app.schemas.transactions import InvoiceCreate, InvoiceListResponse, InvoiceResponse
from app.services.import_service import ImportService

router = APIRouter()
logger = logging.getLogger(__name__)


def to_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        id=invoice.id,
        invoiceNumber=invoice.invoice_number,
        customerName=invoice.customer_name,
        invoiceDate=invoice.invoice_date,
        dueDate=invoice.due_date,
        invoiceAmount=float(parse_amount(invoice.invoice_amount)),
        status=invoice.status,
        remarks=invoice.remarks,
        createdAt=invoice.created_at,
    )


@router.get("", response_model=InvoiceListResponse)
async def read_invoices(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    status: Optional[str] = Query(None, description="Filter by invoice status (e.g., 'Unpaid', 'Paid')"),
):
    items, total = TransactionRepository.page_invoices(db, tenant_id, skip, limit, status)
    return InvoiceListResponse(
        items=[to_response(invoice) for invoice in items],
        total=total,
        page=(skip // limit) + 1,
        limit=limit,
    )


@router.post("", response_model=InvoiceResponse, status_code=201)
async def create_invoice(
    payload: InvoiceCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    invoice = TransactionRepository.create_invoice(db, tenant_id, {
        "invoice_number": payload.invoiceNumber,
        "customer_name": payload.customerName,
        "invoice_date": payload.invoiceDate,
        "due_date": payload.dueDate,
        "invoice_amount": parse_amount(payload.invoiceAmount),
        "status": payload.status,
        "remarks": payload.remarks,
    })
    logger.info(f"Created invoice {invoice.invoice_number} for '{invoice.customer_name}'")
    return to_response(invoice)


@router.post("/import", response_model=ImportResponse)
async def import_invoices(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    df = await ImportService.read_upload(file)
    rows = ImportService.invoice_rows(df)
    imported = TransactionRepository.create_invoices(db, tenant_id, rows)
    logger.info(f"Imported {imported} invoices from {file.filename}")
    return ImportResponse(success=True, message=f"Imported {imported} invoices", imported=imported)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    invoice = TransactionRepository.get_invoice(db, tenant_id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return to_response(invoice)


@router.delete("/{invoice_id}", status_code=204)
async def delete_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not TransactionRepository.delete_invoice(db, tenant_id, invoice_id):
        raise HTTPException(status_code=404, detail="Invoice not found")
