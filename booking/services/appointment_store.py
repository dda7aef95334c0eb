"""
appointment_store.py
--------------------
The only code that reads and writes Appointment rows for the scheduling
core. Slot generation and the overlap guard read through it; the booking
manager writes through it inside its own transaction.
"""

from django.db.models import Prefetch

from ..models import Appointment, AppointmentService
from .time_range import TimeRange


class AppointmentStore:
    def insert_appointment(self, employee_id, shop_id, customer_id, start_time, duration_minutes):
        """
        Insert a new appointment with a zero price; the price is set by
        attach_services() once the chosen services are recorded.
        """
        return Appointment.objects.create(
            employee_id=employee_id,
            shop_id=shop_id,
            customer_id=customer_id,
            start_time=start_time,
            duration_minutes=duration_minutes,
            price=0,
        )

    def attach_services(self, appointment, selection):
        AppointmentService.objects.bulk_create(
            [AppointmentService(appointment=appointment, service=s) for s in selection.services]
        )
        appointment.price = selection.total_price
        appointment.save(update_fields=["price"])
        return appointment

    def _employee_ranges(self, employee_id, range_start, range_end, shop_id=None):
        qs = Appointment.objects.filter(
            employee_id=employee_id,
            start_time__lt=range_end,
            end_time__gt=range_start,
        )
        if shop_id is not None:
            qs = qs.filter(shop_id=shop_id)
        return qs

    def appointments_for_employee_on_range(self, employee_id, shop_id, range_start, range_end):
        """
        Busy TimeRanges of the employee intersecting [range_start, range_end),
        ordered by start. shop_id=None means appointments at every shop.
        """
        rows = (
            self._employee_ranges(employee_id, range_start, range_end, shop_id=shop_id)
            .order_by("start_time")
            .values_list("start_time", "end_time")
        )
        return [TimeRange(start=start, end=end) for start, end in rows]

    def has_overlap(self, employee_id, start_time, end_time) -> bool:
        """existing_start < end AND existing_end > start, for any shop."""
        return self._employee_ranges(employee_id, start_time, end_time).exists()

    def appointments_for_shop(self, shop_id):
        return (
            Appointment.objects.filter(shop_id=shop_id)
            .select_related("employee", "customer")
            .prefetch_related(
                Prefetch("service_lines", queryset=AppointmentService.objects.select_related("service"))
            )
            .order_by("start_time")
        )
