from typing import Optional

from fastapi import Header

from app.core.config import settings


def get_tenant_id(x_tenant_id: Optional[str] = Header(None)) -> str:
    """Tenant scope for the request, from the X-Tenant-ID header."""
    return x_tenant_id or settings.DEFAULT_TENANT_ID
