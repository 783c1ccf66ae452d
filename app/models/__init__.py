from app.models.master_customer import MasterCustomer
from app.models.invoice import Invoice
from app.models.receipt import Receipt
from app.models.debtors_follow_up import DebtorsFollowUp

__all__ = ["MasterCustomer", "Invoice", "Receipt", "DebtorsFollowUp"]
