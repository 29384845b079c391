"""Activity Log Entries - the JSON payload stored for each audited action.

Invariants:
    - Bill activities produce no entry: bills are read live from their deals
    - A deal payload embeds its customer and car when they are known
    - A car payload embeds its provider as provider_details when known
"""

from typing import Mapping

from bizdesk.core.domain_types import ActivityType

_BILL_ACTIVITIES = frozenset({
    ActivityType.BILL_CREATED.value,
    ActivityType.BILL_UPDATED.value,
    ActivityType.BILL_DELETED.value,
})


def build_activity_entry(
    activity_type: ActivityType | str,
    deal: Mapping | None = None,
    car: Mapping | None = None,
    customer: Mapping | None = None,
    provider_details: Mapping | None = None,
) -> dict | None:
    """Row for activity_logs, or None when the activity is not logged.

    `car` is the deal's car for deal activities and the subject itself for
    car activities.
    """
    activity = ActivityType(activity_type).value
    if activity in _BILL_ACTIVITIES:
        return None

    entry: dict = {"type": activity, "deal": None, "car": None}
    if deal is not None:
        enriched = dict(deal)
        if customer is not None:
            enriched["customer"] = dict(customer)
        if car is not None:
            enriched["car"] = dict(car)
            entry["car"] = dict(car)
        entry["deal"] = enriched
    elif car is not None:
        enriched_car = dict(car)
        if provider_details is not None:
            enriched_car["provider_details"] = dict(provider_details)
        entry["car"] = enriched_car
    return entry
