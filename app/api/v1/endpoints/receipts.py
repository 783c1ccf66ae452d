import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_tenant_id
from app.core.database import get_db
from app.core.money import parse_amount
from app.models.receipt import Receipt
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.customers import ImportResponse
from app.schemas.transactions import ReceiptCreate, ReceiptListResponse, ReceiptResponse
from app.services.import_service import ImportService

router = APIRouter()
logger = logging.getLogger(__name__)


def to_response(receipt: Receipt) -> ReceiptResponse:
    return ReceiptResponse(
        id=receipt.id,
        voucherType=receipt.voucher_type,
        voucherNumber=receipt.voucher_number,
        invoiceNumber=receipt.invoice_number,
        customerName=receipt.customer_name,
        date=receipt.date,
        amount=float(parse_amount(receipt.amount)),
        remarks=receipt.remarks,
        createdAt=receipt.created_at,
    )


@router.get("", response_model=ReceiptListResponse)
async def read_receipts(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
):
    items, total = TransactionRepository.page_receipts(db, tenant_id, skip, limit)
    return ReceiptListResponse(
        items=[to_response(receipt) for receipt in items],
        total=total,
        page=(skip // limit) + 1,
        limit=limit,
    )


@router.post("", response_model=ReceiptResponse, status_code=201)
async def create_receipt(
    payload: ReceiptCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    receipt = TransactionRepository.create_receipt(db, tenant_id, {
        "voucher_type": payload.voucherType,
        "voucher_number": payload.voucherNumber,
        "invoice_number": payload.invoiceNumber,
        "customer_name": payload.customerName,
        "date": payload.date,
        "amount": parse_amount(payload.amount),
        "remarks": payload.remarks,
    })
    logger.info(f"Created receipt {receipt.voucher_number} for '{receipt.customer_name}'")
    return to_response(receipt)


@router.post("/import", response_model=ImportResponse)
async def import_receipts(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    df = await ImportService.read_upload(file)
    rows = ImportService.receipt_rows(df)
    imported = TransactionRepository.create_receipts(db, tenant_id, rows)
    logger.info(f"Imported {imported} receipts from {file.filename}")
    return ImportResponse(success=True, message=f"Imported {imported} receipts", imported=imported)


@router.delete("/{receipt_id}", status_code=204)
async def delete_receipt(
    receipt_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
):
    if not TransactionRepository.delete_receipt(db, tenant_id, receipt_id):
        raise HTTPException(status_code=404, detail="Receipt not found")
