from fastapi import APIRouter
from app.api.v1.endpoints import customers, invoices, receipts, debtors, ledgers, scorecard

api_router = APIRouter()
api_router.include_router(customers.router, prefix="/masters/customers", tags=["customers"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])
api_router.include_router(debtors.router, prefix="/debtors", tags=["debtors"])
api_router.include_router(ledgers.router, prefix="/ledgers", tags=["ledgers"])
api_router.include_router(scorecard.router, prefix="/payment-scorecard", tags=["scorecard"])
