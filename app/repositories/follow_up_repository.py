from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.debtors_follow_up import DebtorsFollowUp
from app.models.master_customer import MasterCustomer


class FollowUpRepository:
    @staticmethod
    def list_follow_ups(db: Session, tenant_id: str) -> List[DebtorsFollowUp]:
        return (
            db.query(DebtorsFollowUp)
            .filter(DebtorsFollowUp.tenant_id == tenant_id)
            .order_by(DebtorsFollowUp.follow_up_date_time, DebtorsFollowUp.id)
            .all()
        )

    @staticmethod
    def list_by_customer(db: Session, tenant_id: str, customer_id: str) -> List[DebtorsFollowUp]:
        return (
            db.query(DebtorsFollowUp)
            .filter(DebtorsFollowUp.tenant_id == tenant_id, DebtorsFollowUp.customer_id == customer_id)
            .order_by(DebtorsFollowUp.follow_up_date_time.desc())
            .all()
        )

    @staticmethod
    def list_by_category(db: Session, tenant_id: str, category: str) -> List[DebtorsFollowUp]:
        return (
            db.query(DebtorsFollowUp)
            .join(MasterCustomer, MasterCustomer.id == DebtorsFollowUp.customer_id)
            .filter(DebtorsFollowUp.tenant_id == tenant_id, MasterCustomer.category == category)
            .order_by(DebtorsFollowUp.follow_up_date_time.desc())
            .all()
        )

    @staticmethod
    def get_follow_up(db: Session, tenant_id: str, follow_up_id: str) -> Optional[DebtorsFollowUp]:
        return (
            db.query(DebtorsFollowUp)
            .filter(DebtorsFollowUp.tenant_id == tenant_id, DebtorsFollowUp.id == follow_up_id)
            .first()
        )

    @staticmethod
    def create_follow_up(db: Session, tenant_id: str, customer_id: str, fields: Dict[str, Any]) -> DebtorsFollowUp:
        try:
            follow_up = DebtorsFollowUp(tenant_id=tenant_id, customer_id=customer_id, **fields)
            db.add(follow_up)
            db.commit()
            db.refresh(follow_up)
            return follow_up
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update_follow_up(db: Session, tenant_id: str, follow_up_id: str, fields: Dict[str, Any]) -> Optional[DebtorsFollowUp]:
        try:
            follow_up = FollowUpRepository.get_follow_up(db, tenant_id, follow_up_id)
            if not follow_up:
                return None
            for name, value in fields.items():
                setattr(follow_up, name, value)
            db.commit()
            db.refresh(follow_up)
            return follow_up
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete_follow_up(db: Session, tenant_id: str, follow_up_id: str) -> bool:
        try:
            follow_up = FollowUpRepository.get_follow_up(db, tenant_id, follow_up_id)
            if not follow_up:
                return False
            db.delete(follow_up)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
