"""Company Service - issuing company details for document headers."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.models import CompanySettings

_FIELDS = ("name", "address", "phone", "email", "tax_number", "logo_url")


async def get_company_info(db: AsyncSession) -> dict:
    """First company_settings row; every field defaults to ""."""
    result = await db.execute(select(CompanySettings).order_by(CompanySettings.created_at).limit(1))
    row = result.scalar_one_or_none()
    return {name: (getattr(row, name) or "") if row else "" for name in _FIELDS}
