from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.master_customer import MasterCustomer


class CustomerRepository:
    @staticmethod
    def list_customers(db: Session, tenant_id: str, category: Optional[str] = None) -> List[MasterCustomer]:
        query = db.query(MasterCustomer).filter(MasterCustomer.tenant_id == tenant_id)
        if category:
            query = query.filter(MasterCustomer.category == category)
        return query.order_by(MasterCustomer.client_name, MasterCustomer.id).all()

    @staticmethod
    def get_customer(db: Session, tenant_id: str, customer_id: str) -> Optional[MasterCustomer]:
        return (
            db.query(MasterCustomer)
            .filter(MasterCustomer.tenant_id == tenant_id, MasterCustomer.id == customer_id)
            .first()
        )

    @staticmethod
    def create_customer(db: Session, tenant_id: str, fields: Dict[str, Any]) -> MasterCustomer:
        try:
            customer = MasterCustomer(tenant_id=tenant_id, **fields)
            db.add(customer)
            db.commit()
            db.refresh(customer)
            return customer
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def create_customers(db: Session, tenant_id: str, rows: List[Dict[str, Any]]) -> int:
        try:
            records = [MasterCustomer(tenant_id=tenant_id, **fields) for fields in rows]
            if records:
                db.add_all(records)
            db.commit()
            return len(records)
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update_customer(db: Session, tenant_id: str, customer_id: str, fields: Dict[str, Any]) -> Optional[MasterCustomer]:
        try:
            customer = CustomerRepository.get_customer(db, tenant_id, customer_id)
            if not customer:
                return None
            for name, value in fields.items():
                setattr(customer, name, value)
            db.commit()
            db.refresh(customer)
            return customer
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete_customer(db: Session, tenant_id: str, customer_id: str) -> bool:
        try:
            customer = CustomerRepository.get_customer(db, tenant_id, customer_id)
            if not customer:
                return False
            db.delete(customer)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
