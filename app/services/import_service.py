import io
import logging
import zipfile
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
from fastapi import HTTPException, UploadFile

from app.core.config import settings
from app.core.money import AmountParseError, parse_amount
from app.models.master_customer import CATEGORIES

logger = logging.getLogger(__name__)

# Spreadsheet header -> (model field, required)
CUSTOMER_COLUMNS: Dict[str, Tuple[str, bool]] = {
    "Client Name": ("client_name", True),
    "Category": ("category", True),
    "Billing Address": ("billing_address", False),
    "City": ("city", False),
    "State": ("state", False),
    "Pincode": ("pincode", False),
    "GST Number": ("gst_number", False),
    "Primary Contact Name": ("primary_contact_name", False),
    "Primary Mobile": ("primary_mobile", False),
    "Primary Email": ("primary_email", False),
    "Payment Terms Days": ("payment_terms_days", False),
    "Credit Limit": ("credit_limit", False),
    "Sales Person": ("sales_person", False),
}

INVOICE_COLUMNS: Dict[str, Tuple[str, bool]] = {
    "Invoice Number": ("invoice_number", True),
    "Customer Name": ("customer_name", True),
    "Invoice Date": ("invoice_date", True),
    "Due Date": ("due_date", False),
    "Amount": ("invoice_amount", True),
    "Status": ("status", False),
    "Remarks": ("remarks", False),
}

RECEIPT_COLUMNS: Dict[str, Tuple[str, bool]] = {
    "Voucher Number": ("voucher_number", True),
    "Voucher Type": ("voucher_type", False),
    "Invoice Number": ("invoice_number", False),
    "Customer Name": ("customer_name", True),
    "Date": ("date", True),
    "Amount": ("amount", True),
    "Remarks": ("remarks", False),
}

AMOUNT_FIELDS = {"invoice_amount", "amount", "credit_limit"}
DATE_FIELDS = {"invoice_date", "due_date", "date"}


class ImportService:

    @staticmethod
    def validate_file(file: UploadFile) -> None:
        if not any(file.filename.lower().endswith(ext) for ext in settings.allowed_extensions):
            raise HTTPException(
                status_code=400,
                detail=f"Invalid file type. Only {', '.join(settings.allowed_extensions)} files are allowed."
            )

    @staticmethod
    async def read_upload(file: UploadFile) -> pd.DataFrame:
        """Validate an uploaded spreadsheet and load it into a DataFrame."""
        ImportService.validate_file(file)
        content = await file.read()
        if len(content) > settings.max_file_size:
            raise HTTPException(
                status_code=413,
                detail=f"File {file.filename} exceeds maximum size of {settings.max_file_size / (1024*1024):.0f}MB"
            )
        return ImportService.parse_content(content, file.filename)

    @staticmethod
    def parse_content(content: bytes, filename: str) -> pd.DataFrame:
        try:
            if filename.lower().endswith(".csv"):
                df = pd.read_csv(io.StringIO(content.decode("utf-8")), dtype=str)
            else:
                df = pd.read_excel(io.BytesIO(content), dtype=str)
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail=f"File {filename} encoding is not supported. Please use UTF-8.")
        except pd.errors.EmptyDataError:
            raise HTTPException(status_code=400, detail=f"File {filename} is empty or invalid")
        except pd.errors.ParserError as e:
            raise HTTPException(status_code=400, detail=f"Error parsing {filename}: {str(e)}")
        except (ValueError, zipfile.BadZipFile, ImportError) as e:
            logger.error(f"Unreadable upload {filename}: {e}")
            raise HTTPException(status_code=400, detail=f"File {filename} could not be read as a spreadsheet")

        if df.empty:
            raise HTTPException(status_code=400, detail=f"File {filename} is empty")

        df.columns = [str(col).strip() for col in df.columns]
        return df

    @staticmethod
    def _parse_date(value: Any) -> date:
        parsed = pd.to_datetime(value, errors="raise")
        return parsed.date()

    @staticmethod
    def _parse_terms(value: Any) -> int:
        days = parse_amount(value)
        if days < 0 or days != days.to_integral_value():
            raise ValueError(f"payment terms must be a whole number of days, got {value!r}")
        return int(days)

    @staticmethod
    def _convert(field: str, value: Any) -> Any:
        if field in AMOUNT_FIELDS:
            return parse_amount(value)
        if field in DATE_FIELDS:
            return ImportService._parse_date(value)
        if field == "payment_terms_days":
            return ImportService._parse_terms(value)
        return str(value).strip()

    @staticmethod
    def map_rows(
        df: pd.DataFrame,
        columns: Dict[str, Tuple[str, bool]],
        validate: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Map spreadsheet rows to model fields.
        Any bad row rejects the whole file; row numbers in errors count the header as row 1.
        """
        missing = [header for header, (_, required) in columns.items() if required and header not in df.columns]
        if missing:
            raise HTTPException(status_code=400, detail=f"Missing required columns: {', '.join(missing)}")

        rows = []
        for index, record in enumerate(df.to_dict("records"), start=2):
            fields: Dict[str, Any] = {}
            for header, (field, required) in columns.items():
                value = record.get(header)
                if value is None or pd.isna(value) or str(value).strip() == "":
                    if required:
                        raise HTTPException(status_code=400, detail=f"Row {index}: '{header}' is required")
                    continue
                try:
                    fields[field] = ImportService._convert(field, value)
                except (AmountParseError, ValueError) as e:
                    raise HTTPException(status_code=400, detail=f"Row {index}: invalid '{header}' ({e})")
            if validate:
                try:
                    validate(fields)
                except ValueError as e:
                    raise HTTPException(status_code=400, detail=f"Row {index}: {e}")
            rows.append(fields)

        logger.info(f"Mapped {len(rows)} rows for import")
        return rows

    @staticmethod
    def _validate_customer(fields: Dict[str, Any]) -> None:
        if fields["category"] not in CATEGORIES:
            raise ValueError(f"Category must be one of {', '.join(CATEGORIES)}")

    @staticmethod
    def _validate_positive(field: str) -> Callable[[Dict[str, Any]], None]:
        def check(fields: Dict[str, Any]) -> None:
            if fields[field] <= 0:
                raise ValueError("Amount must be a positive number")
        return check

    @staticmethod
    def customer_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
        return ImportService.map_rows(df, CUSTOMER_COLUMNS, ImportService._validate_customer)

    @staticmethod
    def invoice_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
        return ImportService.map_rows(df, INVOICE_COLUMNS, ImportService._validate_positive("invoice_amount"))

    @staticmethod
    def receipt_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
        return ImportService.map_rows(df, RECEIPT_COLUMNS, ImportService._validate_positive("amount"))
