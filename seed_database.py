#!/usr/bin/env python3
"""
Script to seed the database with dummy receivables data for testing purposes.
Run with: python3 seed_database.py [tenant_id]
"""

import sys
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from app.core.database import SessionLocal, engine, Base
from app.models import DebtorsFollowUp, Invoice, MasterCustomer, Receipt
from app.models.master_customer import CATEGORIES

# Create tables if they don't exist
Base.metadata.create_all(bind=engine)

TENANT_ID = sys.argv[1] if len(sys.argv) > 1 else "default"

# Initialize database session
db = SessionLocal()

CUSTOMER_NAMES = [
    "Acme Ltd", "Shree Traders", "Global Enterprises", "Innovation Labs",
    "Future Systems", "Digital Solutions", "Creative Agency", "Enterprise Plus",
    "Bharat Distributors", "Data Analytics Co", "Sai Hardware", "Retail Group Ltd",
    "Manufacturing Corp", "Healthcare Solutions", "Education Plus", "Media Networks",
]

def clear_database():
    """Clear existing data for the tenant"""
    print(f"Clearing existing data for tenant '{TENANT_ID}'...")
    db.query(DebtorsFollowUp).filter(DebtorsFollowUp.tenant_id == TENANT_ID).delete()
    db.query(Receipt).filter(Receipt.tenant_id == TENANT_ID).delete()
    db.query(Invoice).filter(Invoice.tenant_id == TENANT_ID).delete()
    db.query(MasterCustomer).filter(MasterCustomer.tenant_id == TENANT_ID).delete()
    db.commit()
    print("Database cleared.")

def seed_customers():
    print("Seeding master customers...")
    customers = []
    for i, name in enumerate(CUSTOMER_NAMES):
        customers.append(MasterCustomer(
            tenant_id=TENANT_ID,
            client_name=name,
            category=CATEGORIES[i % len(CATEGORIES)],
            city=["Mumbai", "Pune", "Delhi", "Chennai"][i % 4],
            primary_mobile=f"98{i:08d}",
            primary_email=f"accounts{i}@example.com",
            payment_terms_days=[15, 30, 45, 60][i % 4],
            credit_limit=Decimal(100000 + i * 25000),
            sales_person=["Ravi", "Priya", "Amit"][i % 3],
        ))
    db.add_all(customers)
    db.commit()
    print(f"✓ Added {len(customers)} customers")
    return customers

def seed_invoices_and_receipts():
    print("Seeding invoices and receipts...")
    base_date = date(2024, 4, 1)
    invoices = []
    receipts = []

    for i in range(80):
        name = CUSTOMER_NAMES[i % len(CUSTOMER_NAMES)]
        invoice_date = base_date + timedelta(days=i * 4)
        amount = Decimal(2000 + (i * 382.5)).quantize(Decimal("0.01"))
        invoices.append(Invoice(
            tenant_id=TENANT_ID,
            invoice_number=f"INV-2024-{i+1:05d}",
            customer_name=name,
            invoice_date=invoice_date,
            due_date=invoice_date + timedelta(days=30),
            invoice_amount=amount,
        ))

        # Every third invoice stays unpaid, every fourth is paid late, the rest on time
        if i % 3 == 0:
            continue
        paid_after = 45 if i % 4 == 0 else 20
        receipts.append(Receipt(
            tenant_id=TENANT_ID,
            voucher_number=f"RCT-{i+1:05d}",
            invoice_number=f"INV-2024-{i+1:05d}",
            customer_name=name,
            date=invoice_date + timedelta(days=paid_after),
            amount=amount,
        ))

    db.add_all(invoices)
    db.add_all(receipts)
    db.commit()
    print(f"✓ Added {len(invoices)} invoices and {len(receipts)} receipts")

def seed_follow_ups(customers):
    print("Seeding debtor follow-ups...")
    today = datetime.combine(date.today(), time(11, 0))
    follow_ups = []
    for i, customer in enumerate(customers):
        follow_ups.append(DebtorsFollowUp(
            tenant_id=TENANT_ID,
            customer_id=customer.id,
            type=["Call", "Email", "WhatsApp", "Visit"][i % 4],
            remarks="Payment reminder",
            follow_up_date_time=today + timedelta(days=(i % 7) - 2),
            priority=["Low", "Medium", "High"][i % 3],
            status="Completed" if i % 5 == 0 else "Pending",
        ))
    db.add_all(follow_ups)
    db.commit()
    print(f"✓ Added {len(follow_ups)} follow-ups")

def main():
    try:
        clear_database()
        customers = seed_customers()
        seed_invoices_and_receipts()
        seed_follow_ups(customers)
        print("\n✓ Database seeded successfully!")
    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
