"""Tests for activity log entries."""

import pytest

from bizdesk.core.activity_log import build_activity_entry
from bizdesk.core.domain_types import ActivityType


def test_bill_activities_are_not_logged():
    assert build_activity_entry(ActivityType.BILL_CREATED, deal={"id": "d1"}) is None
    assert build_activity_entry("bill_deleted") is None


def test_deal_entry_embeds_customer_and_car():
    entry = build_activity_entry(
        ActivityType.DEAL_CREATED,
        deal={"id": "d1", "title": "Sale"},
        car={"id": "car1", "make": "Kia"},
        customer={"id": "c1", "name": "Dana"},
    )
    assert entry["type"] == "deal_created"
    assert entry["deal"]["customer"]["name"] == "Dana"
    assert entry["deal"]["car"]["make"] == "Kia"
    assert entry["car"] == {"id": "car1", "make": "Kia"}


def test_car_entry_embeds_provider():
    entry = build_activity_entry(
        "car_added", car={"id": "car1"}, provider_details={"name": "Imports Ltd"},
    )
    assert entry["deal"] is None
    assert entry["car"]["provider_details"]["name"] == "Imports Ltd"


def test_unknown_activity_rejected():
    with pytest.raises(ValueError):
        build_activity_entry("exploded")
