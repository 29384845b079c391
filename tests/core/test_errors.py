"""Tests for the error hierarchy and its response envelope."""

from bizdesk.core.errors import (
    BillValidationError, CustomerHasDealsError, DataIntegrityError, DuplicateTaxInvoiceError,
    ErrorContext, PricingValidationError, ResourceNotFoundError,
)


def test_bill_validation_error_carries_field():
    response = BillValidationError("bad", "payments.0.amount").to_response()
    assert response["error"]["code"] == "BILL_VALIDATION_ERROR"
    assert response["error"]["field"] == "payments.0.amount"
    assert response["error"]["category"] == "validation"


def test_pricing_error_lists_details():
    exc = PricingValidationError(["a", "b"])
    assert exc.message == "a; b"
    assert exc.to_response()["error"]["details"] == ["a", "b"]


def test_not_found_is_404_with_context():
    exc = ResourceNotFoundError("Customer", "c1", ErrorContext(customer_id="c1"))
    assert exc.http_status == 404
    assert exc.to_response()["error"]["context"]["customer_id"] == "c1"


def test_duplicate_tax_invoice_sets_booking_context():
    exc = DuplicateTaxInvoiceError("bk1", "INV-2026-00001")
    assert exc.http_status == 409
    assert exc.context.booking_id == "bk1"
    assert "INV-2026-00001" in exc.message


def test_customer_with_deals_is_conflict():
    exc = CustomerHasDealsError("c1", 2)
    assert exc.http_status == 409
    assert exc.deal_count == 2
    assert exc.to_response()["error"]["context"]["customer_id"] == "c1"


def test_integrity_error_is_conflict_not_outage():
    exc = DataIntegrityError("Write conflicts with existing data")
    assert exc.http_status == 409
    assert exc.to_response()["error"]["category"] == "conflict"
