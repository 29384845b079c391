"""Booking Pricing - destination base price plus per-service lines.

Invariants:
    - total = destination base + services total
    - destination base = students x student price + crew x crew price (0 without pricing)
    - service line = unit_price x quantity x days + sum(sub-service prices); days default to 1
    - Only entertainment companies and education programs carry sub-services

Design Decisions:
    - Dataclasses over dicts: quotes are built from validated API input, not DB rows
"""

from dataclasses import dataclass, field, asdict
from typing import Mapping

from bizdesk.core.domain_types import RateType, ServiceType
from bizdesk.core.errors import PricingValidationError

_RATE_TYPE_LABELS = {
    RateType.HOURLY: "Hourly Rate",
    RateType.DAILY: "Daily Rate",
    RateType.REGIONAL: "Regional Rate",
    RateType.OVERNIGHT: "Overnight Rate",
    RateType.FIXED: "Fixed Price",
}

_SUB_SERVICE_TYPES = frozenset({
    ServiceType.EXTERNAL_ENTERTAINMENT_COMPANIES,
    ServiceType.EDUCATION_PROGRAMS,
})


@dataclass(frozen=True)
class DestinationPricing:
    student: float = 0.0
    crew: float = 0.0


@dataclass(frozen=True)
class SubService:
    id: str
    label: str
    price: float = 0.0


@dataclass
class ServiceSelection:
    id: str
    name: str
    type: ServiceType
    quantity: int
    days: int
    unit_price: float
    rate_type: RateType = RateType.DAILY
    sub_services: list[SubService] = field(default_factory=list)


@dataclass(frozen=True)
class ServiceCost:
    service_id: str
    service_name: str
    service_type: ServiceType
    quantity: int
    days: int
    unit_price: float
    rate_type: RateType
    base_service_cost: float
    sub_services_cost: float
    total_cost: float


@dataclass(frozen=True)
class BookingPriceCalculation:
    destination_base: float
    services_total: float
    total_price: float
    students_cost: float
    crew_cost: float
    services_costs: list[ServiceCost]

    def to_dict(self) -> dict:
        return {
            "destination_base": self.destination_base,
            "services_total": self.services_total,
            "total_price": self.total_price,
            "breakdown": {
                "students_cost": self.students_cost,
                "crew_cost": self.crew_cost,
                "services_costs": [
                    {**asdict(c), "service_type": c.service_type.value, "rate_type": c.rate_type.value}
                    for c in self.services_costs
                ],
            },
        }


def service_line_cost(
    unit_price: float, quantity: int, days: int, sub_services: list[SubService] | None = None,
) -> float:
    base = (unit_price or 0) * (quantity or 0) * (days or 1)
    extras = sum(sub.price or 0 for sub in sub_services or [])
    return round(base + extras, 2)


def calculate_booking_price(
    destination_pricing: DestinationPricing | None,
    number_of_students: int,
    number_of_crew: int,
    selected_services: list[ServiceSelection],
) -> BookingPriceCalculation:
    """Full price of a booking with its breakdown."""
    students_cost = crew_cost = 0.0
    if destination_pricing:
        students_cost = round((destination_pricing.student or 0) * (number_of_students or 0), 2)
        crew_cost = round((destination_pricing.crew or 0) * (number_of_crew or 0), 2)
    destination_base = round(students_cost + crew_cost, 2)

    costs = []
    for service in selected_services:
        base = service_line_cost(service.unit_price, service.quantity, service.days)
        total = service_line_cost(
            service.unit_price, service.quantity, service.days, service.sub_services,
        )
        costs.append(ServiceCost(
            service_id=service.id,
            service_name=service.name,
            service_type=service.type,
            quantity=service.quantity,
            days=service.days,
            unit_price=service.unit_price,
            rate_type=service.rate_type,
            base_service_cost=base,
            sub_services_cost=round(total - base, 2),
            total_cost=total,
        ))

    services_total = round(sum(c.total_cost for c in costs), 2)
    return BookingPriceCalculation(
        destination_base=destination_base,
        services_total=services_total,
        total_price=round(destination_base + services_total, 2),
        students_cost=students_cost,
        crew_cost=crew_cost,
        services_costs=costs,
    )


def service_rate(service: Mapping, rate_type: RateType | str) -> float:
    """Rate a provider charges for rate_type; unknown rate types use the daily rate."""
    try:
        rate_type = RateType(rate_type)
    except ValueError:
        return float(service.get("daily_rate") or 0)
    if rate_type == RateType.FIXED:
        pricing_data = service.get("pricing_data") or {}
        return float(service.get("price") or pricing_data.get("default_price") or 0)
    return float(service.get(f"{rate_type.value}_rate") or 0)


def pricing_errors(
    number_of_students: int, number_of_crew: int, selected_services: list[ServiceSelection],
) -> list[str]:
    errors = []
    if number_of_students < 0:
        errors.append("Number of students cannot be negative")
    if number_of_crew < 0:
        errors.append("Number of crew cannot be negative")
    for service in selected_services:
        if service.quantity <= 0:
            errors.append(f'Service "{service.name}" must have quantity greater than 0')
        if service.days <= 0:
            errors.append(f'Service "{service.name}" must have days greater than 0')
        if service.unit_price < 0:
            errors.append(f'Service "{service.name}" has invalid unit price')
        if service.sub_services and not has_sub_services(service.type):
            errors.append(f'Service "{service.name}" does not support sub-services')
    return errors


def validate_pricing_inputs(
    number_of_students: int, number_of_crew: int, selected_services: list[ServiceSelection],
) -> None:
    """Raise PricingValidationError listing every problem found."""
    errors = pricing_errors(number_of_students, number_of_crew, selected_services)
    if errors:
        raise PricingValidationError(errors)


def has_sub_services(service_type: ServiceType | str) -> bool:
    try:
        return ServiceType(service_type) in _SUB_SERVICE_TYPES
    except ValueError:
        return False


def rate_type_label(rate_type: RateType | str) -> str:
    try:
        return _RATE_TYPE_LABELS[RateType(rate_type)]
    except ValueError:
        return "Daily Rate"
