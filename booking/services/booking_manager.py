"""
booking_manager.py
------------------
Coordinates booking creation: the single atomic check-and-insert.

Serialization:
- In-process: a lock per employee id, held for the whole check + insert, so
  two requests for the same employee never interleave inside one worker.
- Across processes: the employee row is locked with SELECT ... FOR UPDATE
  inside the transaction (PostgreSQL/MySQL); SQLite serializes writers on its
  own.

No partial bookings: the appointment row and its service lines are written in
the same transaction, so a failure while attaching services rolls the
appointment back.
"""

import logging
import threading
from contextlib import contextmanager

from django.db import DatabaseError, transaction
from django.utils import timezone

from ..models import Employee
from .appointment_store import AppointmentStore
from .availability_engine import AvailabilityEngine
from .exceptions import BookingConflict, InvalidInput, NotFound, StorageFailure
from .service_catalog import parse_service_ids, resolve_services

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
# One lock per employee id; bounded by the number of employees, never pruned.
_employee_locks = {}


@contextmanager
def employee_lock(employee_id):
    with _registry_lock:
        lock = _employee_locks.setdefault(employee_id, threading.Lock())
    with lock:
        yield


class BookingManager:
    def __init__(self, store=None):
        self.store = store or AppointmentStore()
        self.availability = AvailabilityEngine(store=self.store)

    def book_appointment(self, employee, shop, customer, start_time, service_ids):
        """
        Create an appointment after re-checking for overlap.

        Args:
            employee: Employee instance
            shop: Shop instance
            customer: Customer instance, or None for a walk-in
            start_time: aware datetime
            service_ids: ids of the chosen services (duplicates allowed)

        Raises:
            InvalidInput: naive start_time, no services, zero total duration
            ServiceNotFound: an id does not match a service
            BookingConflict: the time overlaps an appointment of the employee
            StorageFailure: the database failed; nothing was written
        """
        if start_time is None or timezone.is_naive(start_time):
            raise InvalidInput("A timezone-aware start time is required.")
        ids = parse_service_ids(service_ids or [])
        if not ids:
            raise InvalidInput("At least one service must be selected.")

        with employee_lock(employee.pk):
            try:
                with transaction.atomic():
                    try:
                        Employee.objects.select_for_update().get(pk=employee.pk)
                    except Employee.DoesNotExist:
                        raise NotFound(f"Employee {employee.pk} does not exist.") from None

                    selection = resolve_services(ids)
                    if selection.duration_minutes <= 0:
                        raise InvalidInput("Invalid service durations.")

                    if self.availability.is_overlapping(employee.pk, start_time, selection.duration_minutes):
                        logger.info(
                            "Rejected booking for employee %s at %s (%s min): overlaps an existing appointment",
                            employee.pk, start_time.isoformat(), selection.duration_minutes,
                        )
                        raise BookingConflict("The selected time slot is already booked.")

                    appointment = self.store.insert_appointment(
                        employee_id=employee.pk,
                        shop_id=shop.pk,
                        customer_id=customer.pk if customer is not None else None,
                        start_time=start_time,
                        duration_minutes=selection.duration_minutes,
                    )
                    self.store.attach_services(appointment, selection)
            except DatabaseError as exc:
                logger.exception("Storage failure while booking for employee %s", employee.pk)
                raise StorageFailure("Failed to create appointment.") from exc

        logger.info(
            "Booked appointment #%s: employee %s, shop %s, %s (%s min, %s)",
            appointment.pk, employee.pk, shop.pk, start_time.isoformat(),
            appointment.duration_minutes, appointment.price,
        )
        return appointment
