from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.invoice import Invoice
from app.models.receipt import Receipt


class TransactionRepository:
    """Invoices and receipts. Both are linked to customers by customer_name only."""

    @staticmethod
    def list_invoices(db: Session, tenant_id: str, customer_name: Optional[str] = None) -> List[Invoice]:
        query = db.query(Invoice).filter(Invoice.tenant_id == tenant_id)
        if customer_name is not None:
            query = query.filter(Invoice.customer_name == customer_name)
        return query.order_by(Invoice.created_at, Invoice.id).all()

    @staticmethod
    def page_invoices(db: Session, tenant_id: str, skip: int, limit: int, status: Optional[str] = None) -> Tuple[List[Invoice], int]:
        query = db.query(Invoice).filter(Invoice.tenant_id == tenant_id)
        if status:
            query = query.filter(Invoice.status == status)
        total = query.count()
        items = query.order_by(Invoice.invoice_date.desc(), Invoice.id).offset(skip).limit(limit).all()
        return items, total

    @staticmethod
    def get_invoice(db: Session, tenant_id: str, invoice_id: str) -> Optional[Invoice]:
        return db.query(Invoice).filter(Invoice.tenant_id == tenant_id, Invoice.id == invoice_id).first()

    @staticmethod
    def list_receipts(db: Session, tenant_id: str, customer_name: Optional[str] = None) -> List[Receipt]:
        query = db.query(Receipt).filter(Receipt.tenant_id == tenant_id)
        if customer_name is not None:
            query = query.filter(Receipt.customer_name == customer_name)
        return query.order_by(Receipt.created_at, Receipt.id).all()

    @staticmethod
    def page_receipts(db: Session, tenant_id: str, skip: int, limit: int) -> Tuple[List[Receipt], int]:
        query = db.query(Receipt).filter(Receipt.tenant_id == tenant_id)
        total = query.count()
        items = query.order_by(Receipt.date.desc(), Receipt.id).offset(skip).limit(limit).all()
        return items, total

    @staticmethod
    def get_receipt(db: Session, tenant_id: str, receipt_id: str) -> Optional[Receipt]:
        return db.query(Receipt).filter(Receipt.tenant_id == tenant_id, Receipt.id == receipt_id).first()

    @staticmethod
    def _create(db: Session, record):
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
            return record
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def _create_many(db: Session, records: list) -> int:
        try:
            if records:
                db.add_all(records)
            db.commit()
            return len(records)
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def _delete(db: Session, record) -> bool:
        if record is None:
            return False
        try:
            db.delete(record)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def create_invoice(db: Session, tenant_id: str, fields: Dict[str, Any]) -> Invoice:
        return TransactionRepository._create(db, Invoice(tenant_id=tenant_id, **fields))

    @staticmethod
    def create_invoices(db: Session, tenant_id: str, rows: List[Dict[str, Any]]) -> int:
        return TransactionRepository._create_many(db, [Invoice(tenant_id=tenant_id, **fields) for fields in rows])

    @staticmethod
    def delete_invoice(db: Session, tenant_id: str, invoice_id: str) -> bool:
        return TransactionRepository._delete(db, TransactionRepository.get_invoice(db, tenant_id, invoice_id))

    @staticmethod
    def create_receipt(db: Session, tenant_id: str, fields: Dict[str, Any]) -> Receipt:
        return TransactionRepository._create(db, Receipt(tenant_id=tenant_id, **fields))

    @staticmethod
    def create_receipts(db: Session, tenant_id: str, rows: List[Dict[str, Any]]) -> int:
        return TransactionRepository._create_many(db, [Receipt(tenant_id=tenant_id, **fields) for fields in rows])

    @staticmethod
    def delete_receipt(db: Session, tenant_id: str, receipt_id: str) -> bool:
        return TransactionRepository._delete(db, TransactionRepository.get_receipt(db, tenant_id, receipt_id))
