"""Display formatting for amounts and dates on documents.

Invariants:
    - Numbers use comma thousands separators and a dot decimal point
    - Missing or unparsable numbers render as zero; missing dates render as ""
    - Dates render day first: dd/mm/yyyy
"""

from datetime import date, datetime


def _parse_number(value: object) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_number(value: object, decimals: int = 2) -> str:
    number = _parse_number(value)
    if number is None:
        return f"{0:.{decimals}f}"
    return f"{number:,.{decimals}f}"


def format_currency(value: object, symbol: str = "₪", decimals: int = 2) -> str:
    return f"{symbol}{format_number(value, decimals)}"


def format_price(value: object, symbol: str = "₪") -> str:
    """Currency with up to two decimals and no trailing zeros: ₪1,250 / ₪99.5."""
    number = _parse_number(value) or 0.0
    text = f"{number:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{symbol}{text}"


def _parse_date(value: object) -> datetime | date | None:
    if not value:
        return None
    if isinstance(value, (datetime, date)):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: object) -> str:
    parsed = _parse_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else ""


def format_datetime(value: object) -> str:
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    if not isinstance(parsed, datetime):
        parsed = datetime(parsed.year, parsed.month, parsed.day)
    return parsed.strftime("%d/%m/%Y %H:%M")
