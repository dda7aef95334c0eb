# booking/tests/test_availability_engine.py

from datetime import date

from django.test import TestCase, override_settings

from booking.models import Appointment, Shop
from booking.services.availability_engine import AvailabilityEngine
from booking.services.exceptions import InvalidInput

from .helpers import aware, create_salon

DAY = date(2024, 6, 10)
EARLIER = aware(2024, 6, 1, 12, 0)


@override_settings(BUSINESS_HOURS={"start": "08:00", "end": "23:55"}, SLOT_INTERVAL_MINUTES=10)
class AvailabilityEngineTests(TestCase):
    def setUp(self):
        data = create_salon()
        self.shop = data["shop"]
        self.employee = data["employee"]
        self.engine = AvailabilityEngine()
        # Existing booking 10:00-11:00
        Appointment.objects.create(
            employee=self.employee,
            shop=self.shop,
            customer=data["customer"],
            start_time=aware(2024, 6, 10, 10, 0),
            duration_minutes=60,
        )

    def test_is_overlapping(self):
        self.assertTrue(self.engine.is_overlapping(self.employee.id, aware(2024, 6, 10, 10, 15), 30))
        self.assertTrue(self.engine.is_overlapping(self.employee.id, aware(2024, 6, 10, 9, 30), 45))
        self.assertFalse(self.engine.is_overlapping(self.employee.id, aware(2024, 6, 10, 11, 0), 30))
        self.assertFalse(self.engine.is_overlapping(self.employee.id, aware(2024, 6, 10, 9, 30), 30))

    def test_is_overlapping_requires_positive_duration(self):
        with self.assertRaises(InvalidInput):
            self.engine.is_overlapping(self.employee.id, aware(2024, 6, 10, 12, 0), 0)

    def test_slots_exclude_existing_appointment(self):
        slots = self.engine.find_available_slots(self.employee.id, self.shop.id, DAY, 60, now=EARLIER)
        self.assertEqual(slots[0], "2024-06-10 08:00")
        self.assertEqual(slots[-1], "2024-06-10 22:50")
        self.assertIn("2024-06-10 09:00", slots)
        self.assertIn("2024-06-10 11:00", slots)
        for hhmm in ("09:10", "09:50", "10:00", "10:50"):
            self.assertNotIn(f"2024-06-10 {hhmm}", slots)

    def test_appointment_at_another_shop_blocks_the_employee(self):
        other = Shop.objects.create(name="Harbour")
        self.employee.shops.add(other)
        Appointment.objects.create(
            employee=self.employee,
            shop=other,
            start_time=aware(2024, 6, 10, 14, 0),
            duration_minutes=30,
        )
        slots = self.engine.find_available_slots(self.employee.id, self.shop.id, DAY, 30, now=EARLIER)
        self.assertNotIn("2024-06-10 14:00", slots)
        self.assertIn("2024-06-10 14:30", slots)

    def test_other_days_do_not_matter(self):
        slots = self.engine.find_available_slots(self.employee.id, self.shop.id, date(2024, 6, 11), 60, now=EARLIER)
        self.assertIn("2024-06-11 10:00", slots)

    def test_repeated_calls_agree(self):
        first = self.engine.find_available_slots(self.employee.id, self.shop.id, DAY, 20, now=EARLIER)
        second = self.engine.find_available_slots(self.employee.id, self.shop.id, DAY, 20, now=EARLIER)
        self.assertEqual(first, second)
