"""Tests for booking pricing - destination base, service lines, validation."""

import pytest

from bizdesk.core.domain_types import RateType, ServiceType
from bizdesk.core.errors import PricingValidationError
from bizdesk.core.pricing import (
    DestinationPricing, ServiceSelection, SubService, calculate_booking_price,
    has_sub_services, rate_type_label, service_line_cost, service_rate,
    validate_pricing_inputs,
)


def _guide(**overrides):
    fields = dict(
        id="g1", name="Guide Dana", type=ServiceType.GUIDES,
        quantity=2, days=3, unit_price=300,
    )
    fields.update(overrides)
    return ServiceSelection(**fields)


def test_full_booking_price():
    show = ServiceSelection(
        id="e1", name="Show Co", type=ServiceType.EXTERNAL_ENTERTAINMENT_COMPANIES,
        quantity=1, days=1, unit_price=1000, rate_type=RateType.FIXED,
        sub_services=[SubService("s1", "Magic show", 150)],
    )
    calc = calculate_booking_price(DestinationPricing(100, 50), 20, 2, [_guide(), show])
    assert calc.students_cost == 2000
    assert calc.crew_cost == 100
    assert calc.destination_base == 2100
    assert [c.total_cost for c in calc.services_costs] == [1800, 1150]
    assert calc.services_costs[1].sub_services_cost == 150
    assert calc.services_total == 2950
    assert calc.total_price == 5050


def test_no_destination_pricing_means_no_base():
    calc = calculate_booking_price(None, 30, 3, [_guide()])
    assert calc.destination_base == 0
    assert calc.total_price == 1800


def test_breakdown_serializes_enum_values():
    data = calculate_booking_price(None, 0, 0, [_guide()]).to_dict()
    line = data["breakdown"]["services_costs"][0]
    assert line["service_type"] == "guides"
    assert line["rate_type"] == "daily"


def test_line_cost_days_default_to_one():
    assert service_line_cost(100, 2, 0) == 200


def test_booking_line_without_days_costs_one_day():
    calc = calculate_booking_price(None, 0, 0, [_guide(days=0)])
    assert calc.services_costs[0].base_service_cost == service_line_cost(300, 2, 0) == 600
    assert calc.total_price == 600


def test_service_rate_by_rate_type():
    provider = {"daily_rate": 400, "hourly_rate": 50}
    assert service_rate(provider, "hourly") == 50
    assert service_rate(provider, RateType.DAILY) == 400


def test_unknown_rate_type_uses_daily_rate():
    assert service_rate({"daily_rate": 400}, "bogus") == 400


def test_fixed_rate_falls_back_to_default_price():
    provider = {"price": None, "pricing_data": {"default_price": 750}}
    assert service_rate(provider, "fixed") == 750


def test_validation_lists_every_problem():
    with pytest.raises(PricingValidationError) as exc:
        validate_pricing_inputs(-1, 0, [_guide(quantity=0)])
    assert len(exc.value.errors) == 2
    assert exc.value.http_status == 400


def test_guides_cannot_carry_sub_services():
    guide = _guide(sub_services=[SubService("x", "Extra", 10)])
    with pytest.raises(PricingValidationError) as exc:
        validate_pricing_inputs(10, 1, [guide])
    assert "does not support sub-services" in exc.value.errors[0]


def test_sub_service_types_accept_plain_strings():
    assert has_sub_services("education_programs")
    assert has_sub_services(ServiceType.EXTERNAL_ENTERTAINMENT_COMPANIES)
    assert not has_sub_services("guides")
    assert not has_sub_services("unknown")


def test_rate_type_labels():
    assert rate_type_label("overnight") == "Overnight Rate"
    assert rate_type_label("x") == "Daily Rate"
