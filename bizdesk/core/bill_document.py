"""Bill Documents - renderer-agnostic layout of a bill, routed by bill type.

Invariants:
    - Every label goes through the translator for the document language
    - Payments come from the bill's payment rows; legacy single-payment columns
      are used only when the bill has no payment rows
    - Amounts are pre-formatted strings: renderers never do money math

Design Decisions:
    - The builder returns plain dataclasses so the PDF renderer (and tests)
      consume the same structure without touching bill rows
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from bizdesk.core.billing import (
    payment_rows, enum_value, first_amount, normalize_bill_type, split_gross, sum_payments,
    to_amount,
)
from bizdesk.core.domain_types import BillType, DealType, Language
from bizdesk.core.formatting import format_currency, format_date
from bizdesk.core.translations import translator

logger = logging.getLogger(__name__)

_TITLE_KEYS = {
    BillType.GENERAL: "general_bill",
    BillType.TAX_INVOICE: "tax_invoice",
    BillType.RECEIPT_ONLY: "receipt",
    BillType.TAX_INVOICE_RECEIPT: "tax_invoice_receipt",
}


@dataclass
class InfoSection:
    title: str
    items: list[tuple[str, str]]


@dataclass
class Table:
    headers: list[str]
    rows: list[list[str]]
    title: str | None = None


@dataclass
class SummaryRow:
    label: str
    value: str
    emphasis: bool = False


@dataclass
class BillDocument:
    title: str
    language: Language
    rtl: bool
    company: dict
    sections: list[InfoSection] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    summary: list[SummaryRow] = field(default_factory=list)
    signature: bool = False
    signature_labels: tuple[str, str] = ("", "")
    footer: str = ""


# ─── Payment rows ────────────────────────────────────────────────

def payment_details(payment: Mapping, t: Callable[[str], str]) -> str:
    """Method-specific detail string, e.g. 'Last Four Digits: 1234 | Installments: 3'."""
    method = enum_value(payment.get("payment_type"))
    if method == "visa":
        parts = [
            ("card_type", payment.get("visa_card_type")),
            ("last_four_digits", payment.get("visa_last_four")),
            ("approval_code", payment.get("approval_number")),
            ("installments", payment.get("visa_installments")),
        ]
    elif method == "bank_transfer":
        parts = [
            ("bank_name", payment.get("bank_name") or payment.get("transfer_bank_name")),
            ("branch_name", payment.get("bank_branch") or payment.get("transfer_branch")),
            ("account_number", payment.get("transfer_account_number")),
            ("transfer_number", payment.get("transfer_number")),
            ("account_holder", payment.get("transfer_holder_name")),
        ]
    elif method == "check":
        parts = [
            ("bank_name", payment.get("check_bank_name")),
            ("branch_name", payment.get("check_branch")),
            ("check_number", payment.get("check_number")),
            ("account_holder", payment.get("check_holder_name")),
        ]
    else:
        return t("cash_payment")
    return " | ".join(f"{t(key)}: {value}" for key, value in parts if value) or "-"


def legacy_payment_rows(bill: Mapping, t: Callable[[str], str]) -> list[dict]:
    """Payment-like rows from single-payment columns, zero amounts dropped."""
    bank = f"{t('bank_name')}: {bill.get('bank_name') or ''} | {t('branch_name')}: {bill.get('bank_branch') or ''}"
    candidates = [
        ("cash", bill.get("cash_amount"), t("cash_payment")),
        ("visa", bill.get("visa_amount"), t("payment_visa")),
        ("bank_transfer", to_amount(bill.get("bank_amount")) + to_amount(bill.get("transfer_amount")), bank),
        ("check", bill.get("check_amount"), t("payment_check")),
    ]
    return [
        {"payment_type": method, "amount": to_amount(amount), "details": details}
        for method, amount, details in candidates
        if to_amount(amount) > 0
    ]


def _payments_table(bill: Mapping, t: Callable[[str], str], currency: str) -> tuple[Table, float]:
    payments = payment_rows(bill, None)
    created = format_date(bill.get("created_at"))
    rows = []
    if payments:
        paid = sum_payments(payments)
        for payment in payments:
            method = enum_value(payment.get("payment_type"))
            rows.append([
                t(f"payment_{method}"),
                format_currency(payment.get("amount"), currency),
                format_date(payment.get("payment_date") or payment.get("created_at")) or created,
                payment_details(payment, t),
            ])
    else:
        legacy = legacy_payment_rows(bill, t)
        paid = round(sum(row["amount"] for row in legacy), 2)
        for row in legacy:
            rows.append([
                t(f"payment_{row['payment_type']}"),
                format_currency(row["amount"], currency),
                created,
                row["details"],
            ])
    table = Table(
        title=t("payment_details"),
        headers=[t("payment_method"), t("amount"), t("payment_date"), t("additional_details")],
        rows=rows,
    )
    return table, paid


# ─── Shared sections ─────────────────────────────────────────────

def _document_info(bill: Mapping, deal: Mapping | None, t: Callable[[str], str]) -> list[InfoSection]:
    customer = (deal or {}).get("customer") or {}
    na = t("not_available")
    bill_type = normalize_bill_type(bill.get("bill_type"))
    return [
        InfoSection(t("document_info"), [
            (t("bill_number"), str(bill.get("bill_number") or bill.get("id") or na)),
            (t("date"), format_date(bill.get("created_at")) or na),
            (t("bill_type"), t(_TITLE_KEYS[bill_type])),
        ]),
        InfoSection(t("customer_details"), [
            (t("customer_name"), bill.get("customer_name") or customer.get("name") or na),
            (t("customer_id"), customer.get("id_number") or na),
            (t("phone"), bill.get("customer_phone") or customer.get("phone") or na),
        ]),
    ]


def _car_description(deal: Mapping | None, bill: Mapping, t: Callable[[str], str]) -> str:
    car = (deal or {}).get("car")
    if car:
        text = " ".join(str(car.get(k)) for k in ("make", "model", "year") if car.get(k))
        if text:
            return text
    return bill.get("car_details") or bill.get("description") or t("not_available")


def _tax_rows(bill: Mapping, deal: Mapping | None, t: Callable[[str], str], currency: str) -> tuple[Table, list[SummaryRow]]:
    """Car details table plus pre-tax / tax / total summary."""
    car = (deal or {}).get("car") or {}
    buy = to_amount(car.get("buy_price"))
    sale = to_amount(car.get("sale_price"))
    loss = to_amount((deal or {}).get("loss_amount")) or max(0.0, buy - sale)
    subtotal = first_amount(bill, "subtotal", "total")
    tax = to_amount(bill.get("tax_amount"))
    total = first_amount(bill, "total_with_tax", "total_amount")
    rate = to_amount(bill.get("tax_rate"))
    if (deal or {}).get("deal_type") == DealType.NEW_USED_SALE_TAX_INCLUSIVE.value:
        # selling_price already includes tax
        inclusive = split_gross(to_amount(deal.get("selling_price")), rate)
        subtotal, tax, total = inclusive.net, inclusive.tax, inclusive.gross

    rows = [[t("car_details") if deal else t("description"), _car_description(deal, bill, t)]]
    if deal:
        rows.append([t("buy_price"), format_currency(buy, currency)])
        rows.append([t("sale_price"), format_currency(sale, currency)])
        if loss > 0:
            rows.append([t("loss"), format_currency(loss, currency)])
        rows.append([t("commission"), format_currency(to_amount(bill.get("commission")) or total, currency)])
    table = Table(headers=[t("label"), t("value")], rows=rows)

    rate_text = f"{rate:g}%" if rate else ""
    summary = [
        SummaryRow(t("pre_tax_total"), format_currency(subtotal, currency)),
        SummaryRow(f"{t('tax_amount')} ({rate_text})" if rate_text else t("tax_amount"), format_currency(tax, currency)),
        SummaryRow(t("total_with_tax"), format_currency(total, currency), emphasis=True),
    ]
    return table, summary


# ─── Builders ────────────────────────────────────────────────────

def _general(doc: BillDocument, bill: Mapping, deal, t, currency: str) -> None:
    doc.sections.extend(_document_info(bill, deal, t))
    amount = to_amount(bill.get("bill_amount"))
    doc.sections.append(InfoSection(t("bill_details"), [
        (t("description"), bill.get("bill_description") or bill.get("description") or t("no_description")),
        (t("amount"), format_currency(amount, currency)),
    ]))
    doc.summary.append(SummaryRow(t("total_amount"), format_currency(amount, currency), emphasis=True))


def _tax_invoice(doc: BillDocument, bill: Mapping, deal, t, currency: str) -> None:
    doc.sections.extend(_document_info(bill, deal, t))
    table, summary = _tax_rows(bill, deal, t, currency)
    doc.tables.append(table)
    doc.summary.extend(summary)


def _receipt_only(doc: BillDocument, bill: Mapping, deal, t, currency: str) -> None:
    doc.sections.extend(_document_info(bill, deal, t))
    table, paid = _payments_table(bill, t, currency)
    doc.tables.append(table)
    total = first_amount(bill, "total_with_tax", "total", "bill_amount") or paid
    doc.summary.append(SummaryRow(t("total_amount"), format_currency(total, currency)))
    doc.summary.append(SummaryRow(t("paid_amount"), format_currency(paid, currency), emphasis=True))
    if total - paid > 0:
        doc.summary.append(SummaryRow(t("remaining_amount"), format_currency(total - paid, currency)))


def _tax_invoice_receipt(doc: BillDocument, bill: Mapping, deal, t, currency: str) -> None:
    doc.sections.extend(_document_info(bill, deal, t))
    car_table, summary = _tax_rows(bill, deal, t, currency)
    payments_table, paid = _payments_table(bill, t, currency)
    doc.tables.extend([car_table, payments_table])
    doc.summary.extend(summary)
    total = first_amount(bill, "total_with_tax", "total_amount")
    doc.summary.append(SummaryRow(t("paid_amount"), format_currency(paid, currency)))
    doc.summary.append(SummaryRow(t("remaining_amount"), format_currency(max(0.0, total - paid), currency)))


_BUILDERS = {
    BillType.GENERAL: _general,
    BillType.TAX_INVOICE: _tax_invoice,
    BillType.RECEIPT_ONLY: _receipt_only,
    BillType.TAX_INVOICE_RECEIPT: _tax_invoice_receipt,
}


def build_bill_document(
    bill: Mapping,
    deal: Mapping | None = None,
    company: Mapping | None = None,
    language: Language | str = Language.HE,
    currency: str = "₪",
) -> BillDocument:
    """Lay out a bill for rendering.

    deal, when given, may embed "car" and "customer" dicts. Unknown bill
    types render as general bills.
    """
    language = Language(language)
    t = translator(language)
    bill_type = normalize_bill_type(bill.get("bill_type"))
    doc = BillDocument(
        title=t(_TITLE_KEYS[bill_type]),
        language=language,
        rtl=language.is_rtl,
        company=dict(company or {}),
        signature=True,
        signature_labels=(t("recipient_signature"), t("issuer_signature")),
        footer=(company or {}).get("name", ""),
    )
    _BUILDERS[bill_type](doc, bill, deal, t, currency)
    logger.debug(
        f"Built {bill_type.value} document with {len(doc.tables)} tables",
        extra={"bill_id": str(bill.get("id"))},
    )
    return doc
