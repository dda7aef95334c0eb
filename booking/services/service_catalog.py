"""
service_catalog.py
------------------
Resolves the services chosen for a booking into a total duration and a total
price.

Policy:
- Duplicates count once per occurrence (booking a service twice takes twice
  as long and costs twice as much); order is irrelevant.
- Unknown ids fail fast with ServiceNotFound. They are never skipped, so a
  typo in a service id cannot shrink the booked duration.
- An empty selection resolves to 0 minutes / 0.00; callers must treat a zero
  duration as invalid input.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..models import Service
from .exceptions import InvalidInput, ServiceNotFound


@dataclass(frozen=True)
class ServiceSelection:
    services: tuple
    duration_minutes: int
    total_price: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.services


EMPTY_SELECTION = ServiceSelection(services=(), duration_minutes=0, total_price=Decimal("0.00"))


def parse_service_ids(raw_ids) -> list:
    """Convert request values ('3', 3, ...) to ints; InvalidInput on junk."""
    try:
        return [int(str(value).strip()) for value in raw_ids]
    except (TypeError, ValueError):
        raise InvalidInput("Service ids must be integers.") from None


def resolve_services(service_ids) -> ServiceSelection:
    ids = parse_service_ids(service_ids)
    if not ids:
        return EMPTY_SELECTION

    by_id = Service.objects.in_bulk(set(ids))
    missing = [i for i in ids if i not in by_id]
    if missing:
        raise ServiceNotFound(missing)

    services = tuple(by_id[i] for i in ids)
    return ServiceSelection(
        services=services,
        duration_minutes=sum(s.duration_minutes for s in services),
        total_price=sum((s.price for s in services), Decimal("0.00")),
    )


def total_duration_for_services(service_ids) -> int:
    return resolve_services(service_ids).duration_minutes
