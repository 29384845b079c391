"""Tests for bill document layout - routing by type, payment rows, summaries."""

from bizdesk.core.bill_document import build_bill_document, payment_details
from bizdesk.core.translations import translator

T_EN = translator("en")


def _summary(doc):
    return {row.label: row.value for row in doc.summary}


def test_general_bill():
    bill = {
        "bill_type": "general", "bill_number": "GEN-2026-00001", "bill_amount": 1500,
        "bill_description": "Detailing", "created_at": "2026-03-05T10:00:00",
    }
    doc = build_bill_document(bill, language="en", company={"name": "Auto Ltd"})
    assert doc.title == "General Bill"
    assert not doc.rtl
    assert doc.signature
    assert doc.footer == "Auto Ltd"
    assert doc.summary[-1].value == "₪1,500.00"
    assert doc.sections[0].items[0] == ("Bill Number", "GEN-2026-00001")
    assert doc.sections[0].items[1] == ("Date", "05/03/2026")


def test_hebrew_documents_are_rtl():
    doc = build_bill_document({"bill_type": "receipt", "payments": []}, language="he")
    assert doc.rtl
    assert doc.title == "קבלה"


def test_tax_invoice_with_car_details():
    deal = {
        "loss_amount": 0,
        "car": {"make": "Toyota", "model": "Corolla", "year": 2020, "buy_price": 50000, "sale_price": 45000},
    }
    bill = {
        "bill_type": "tax_invoice", "subtotal": 1000, "tax_amount": 180,
        "total_with_tax": 1180, "tax_rate": 18,
    }
    doc = build_bill_document(bill, deal=deal, language="en")
    rows = {label: value for label, value in doc.tables[0].rows}
    assert rows["Car Details"] == "Toyota Corolla 2020"
    assert rows["Loss"] == "₪5,000.00"
    assert rows["Commission"] == "₪1,180.00"
    summary = _summary(doc)
    assert summary["Tax Amount (18%)"] == "₪180.00"
    assert doc.summary[-1].emphasis
    assert doc.summary[-1].value == "₪1,180.00"


def test_tax_inclusive_deal_splits_selling_price():
    deal = {"deal_type": "new_used_sale_tax_inclusive", "selling_price": 118000, "car": {}}
    bill = {
        "bill_type": "tax_invoice", "subtotal": 500, "tax_amount": 90,
        "total_with_tax": 590, "tax_rate": 18,
    }
    summary = _summary(build_bill_document(bill, deal=deal, language="en"))
    assert summary["Total Pre-Tax"] == "₪100,000.00"
    assert summary["Tax Amount (18%)"] == "₪18,000.00"
    assert summary["Total with Tax"] == "₪118,000.00"


def test_tax_invoice_without_deal_uses_bill_text():
    bill = {"bill_type": "tax_invoice", "subtotal": 100, "car_details": "Mazda 3"}
    doc = build_bill_document(bill, language="en")
    assert doc.tables[0].rows == [["Description", "Mazda 3"]]


def test_receipt_payment_rows():
    bill = {
        "bill_type": "receipt_only",
        "created_at": "2026-03-05T10:00:00",
        "payments": [
            {"payment_type": "visa", "amount": 300, "visa_last_four": "1234", "visa_installments": 3},
            {"payment_type": "cash", "amount": 200, "payment_date": "2026-03-06"},
        ],
    }
    doc = build_bill_document(bill, language="en")
    table = doc.tables[0]
    assert len(table.rows) == 2
    assert table.rows[0][0] == "Visa"
    assert table.rows[0][2] == "05/03/2026"
    assert table.rows[0][3] == "Last Four Digits: 1234 | Installments: 3"
    assert table.rows[1][2] == "06/03/2026"
    assert table.rows[1][3] == "Cash Payment"
    assert _summary(doc)["Paid Amount"] == "₪500.00"
    assert "Remaining Amount" not in _summary(doc)


def test_receipt_from_legacy_columns():
    bill = {
        "bill_type": "receipt_only", "cash_amount": 100, "bank_amount": 50,
        "transfer_amount": 25, "bank_name": "Leumi",
    }
    doc = build_bill_document(bill, language="en")
    rows = doc.tables[0].rows
    assert [r[0] for r in rows] == ["Cash", "Bank Transfer"]
    assert rows[1][1] == "₪75.00"
    assert "Leumi" in rows[1][3]
    assert _summary(doc)["Paid Amount"] == "₪175.00"


def test_tax_invoice_receipt_shows_remaining():
    bill = {
        "bill_type": "tax_invoice_receipt", "subtotal": 1000, "tax_amount": 180,
        "total_with_tax": 1180, "payments": [{"payment_type": "check", "amount": 500}],
    }
    doc = build_bill_document(bill, language="en")
    assert len(doc.tables) == 2
    assert _summary(doc)["Remaining Amount"] == "₪680.00"


def test_unknown_type_renders_as_general():
    doc = build_bill_document({"bill_type": "xyz", "bill_amount": 10}, language="en")
    assert doc.title == "General Bill"


def test_payment_details_per_method():
    check = {"payment_type": "check", "check_number": "55", "check_bank_name": "Hapoalim"}
    assert payment_details(check, T_EN) == "Bank Name: Hapoalim | Check Number: 55"
    assert payment_details({"payment_type": "bank_transfer"}, T_EN) == "-"
