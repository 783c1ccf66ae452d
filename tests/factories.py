"""Plain stand-ins for ORM rows, for exercising the services without a database."""
from types import SimpleNamespace


def make_customer(name, category="Alpha", customer_id=None, payment_terms_days=30, credit_limit=None, **extra):
    fields = dict(
        id=customer_id or name.lower().replace(" ", "-"),
        client_name=name,
        category=category,
        sales_person=None,
        primary_mobile=None,
        primary_email=None,
        gst_number=None,
        billing_address=None,
        city=None,
        state=None,
        pincode=None,
        payment_terms_days=payment_terms_days,
        credit_limit=credit_limit,
    )
    fields.update(extra)
    return SimpleNamespace(**fields)


def make_invoice(customer_name, amount, invoice_date, number=None, due_date=None):
    return SimpleNamespace(
        customer_name=customer_name,
        invoice_amount=amount,
        invoice_date=invoice_date,
        due_date=due_date,
        invoice_number=number or f"INV-{invoice_date.isoformat()}",
    )


def make_receipt(customer_name, amount, receipt_date, number=None, invoice_number=None):
    return SimpleNamespace(
        customer_name=customer_name,
        amount=amount,
        date=receipt_date,
        voucher_type="Receipt",
        voucher_number=number or f"RCT-{receipt_date.isoformat()}",
        invoice_number=invoice_number,
        remarks=None,
    )


def make_follow_up(customer_id, when, status="Pending", type="Call"):
    return SimpleNamespace(
        customer_id=customer_id,
        follow_up_date_time=when,
        status=status,
        type=type,
        remarks="Reminder",
    )
