"""Tests for the JSON log formatter."""

import json
import logging

from bizdesk.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord("bizdesk.test", logging.INFO, __file__, 1, "Bill %s created", ("RCT-1",), None)
    record.__dict__.update(extra)
    return record


def test_json_log_has_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "bizdesk.test"
    assert log["message"] == "Bill RCT-1 created"


def test_extra_ids_surface_as_strings():
    log = json.loads(JSONFormatter().format(_record(bill_id=42, booking_id="bk1", unrelated="x")))
    assert log["bill_id"] == "42"
    assert log["booking_id"] == "bk1"
    assert "unrelated" not in log
