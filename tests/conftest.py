import os
from datetime import date

# Settings are read at import time, so point the app at SQLite first
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, engine
from app.main import app
from tests.factories import make_customer, make_invoice, make_receipt


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def acme():
    """Acme Ltd: 10,000 and 5,000 invoiced, 3,000 received."""
    customer = make_customer("Acme Ltd", "Beta")
    invoices = [
        make_invoice("Acme Ltd", "10000.00", date(2024, 1, 5), "INV-1"),
        make_invoice("Acme Ltd", "5000.00", date(2024, 2, 10), "INV-2"),
    ]
    receipts = [make_receipt("Acme Ltd", "3000.00", date(2024, 1, 20), "RCT-1", "INV-1")]
    return customer, invoices, receipts
