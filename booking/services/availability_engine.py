"""
availability_engine.py
----------------------
Computes availability for one employee on one day, and answers the
authoritative "does this booking overlap?" question.

- find_available_slots(): read-only, recomputed on every call. Busy ranges
  are the employee's appointments intersecting the *local* calendar day, at
  any shop (an employee cannot serve two shops at once).
- is_overlapping(): symmetric overlap test against every appointment of the
  employee:
      existing_start < new_end AND existing_end > new_start
  It must be evaluated again at commit time (BookingManager), because the
  slot list a customer saw may be stale by the time they submit.
"""

import logging
from datetime import timedelta

from django.utils import timezone

from .appointment_store import AppointmentStore
from .exceptions import InvalidInput
from .slot_utils import date_to_range, format_slot, generate_slots_for_day, parse_day

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    def __init__(self, store=None):
        self.store = store or AppointmentStore()

    def busy_ranges_for_day(self, employee_id, day):
        day_start, day_end = date_to_range(day)
        return self.store.appointments_for_employee_on_range(
            employee_id, None, day_start, day_end
        )

    def available_starts(self, employee_id, shop_id, day, duration_minutes, now=None):
        """Bookable start datetimes (aware, ascending)."""
        day = parse_day(day)
        if duration_minutes is None or duration_minutes <= 0:
            raise InvalidInput("Duration must be a positive number of minutes.")

        busy = self.busy_ranges_for_day(employee_id, day)
        slots = generate_slots_for_day(
            duration_minutes=duration_minutes,
            day=day,
            now=now or timezone.now(),
            busy_ranges=busy,
        )
        logger.debug(
            "Employee %s at shop %s on %s (%s min): %d busy range(s), %d slot(s)",
            employee_id, shop_id, day, duration_minutes, len(busy), len(slots),
        )
        return slots

    def find_available_slots(self, employee_id, shop_id, day, duration_minutes, now=None):
        """Bookable start times formatted as 'YYYY-MM-DD HH:MM'."""
        return [
            format_slot(start)
            for start in self.available_starts(employee_id, shop_id, day, duration_minutes, now=now)
        ]

    def is_overlapping(self, employee_id, start_time, duration_minutes: int) -> bool:
        if duration_minutes is None or duration_minutes <= 0:
            raise InvalidInput("Duration must be a positive number of minutes.")
        end_time = start_time + timedelta(minutes=duration_minutes)
        return self.store.has_overlap(employee_id, start_time, end_time)
