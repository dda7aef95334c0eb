# booking/tests/test_admin_tools.py

from io import StringIO

from django.contrib.auth.models import User
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from booking.models import Appointment, Service

from .helpers import aware, create_salon


class AppointmentsCalendarTests(TestCase):
    def setUp(self):
        self.data = create_salon()
        Appointment.objects.create(
            employee=self.data["employee"],
            shop=self.data["shop"],
            customer=self.data["customer"],
            start_time=aware(2024, 6, 10, 10, 0),
            duration_minutes=60,
        )

    def test_requires_staff(self):
        resp = self.client.get("/admin/appointments-calendar/")
        self.assertEqual(resp.status_code, 302)

    def test_month_view_lists_appointments(self):
        admin = User.objects.create_user(username="admin", password="pass1234", is_staff=True)
        self.client.force_login(admin)
        resp = self.client.get("/admin/appointments-calendar/", {"year": 2024, "month": 6})
        self.assertEqual(resp.status_code, 200)
        day = next(c for c in resp.context["cells"] if not c["blank"] and c["day"] == 10)
        self.assertEqual([a["time"] for a in day["appointments"]], ["10:00"])

    def test_shop_filter(self):
        admin = User.objects.create_user(username="admin", password="pass1234", is_staff=True)
        self.client.force_login(admin)
        resp = self.client.get(
            "/admin/appointments-calendar/", {"year": 2024, "month": 6, "shop": self.data["shop"].id + 100}
        )
        self.assertTrue(all(not c.get("appointments") for c in resp.context["cells"]))


class SeedServicesCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_services", stdout=StringIO())
        count = Service.objects.count()
        self.assertGreater(count, 0)
        out = StringIO()
        call_command("seed_services", stdout=out)
        self.assertEqual(Service.objects.count(), count)
        self.assertIn("Created=0", out.getvalue())

    def test_seed_links_employee(self):
        employee = create_salon()["employee"]
        call_command("seed_services", "--employee", str(employee.id), stdout=StringIO())
        self.assertTrue(employee.services.filter(name="Beard Trim").exists())

    def test_unknown_employee(self):
        with self.assertRaises(CommandError):
            call_command("seed_services", "--employee", "9999", stdout=StringIO())


class AppointmentAdminTests(TestCase):
    def setUp(self):
        self.data = create_salon()
        self.existing = Appointment.objects.create(
            employee=self.data["employee"],
            shop=self.data["shop"],
            customer=self.data["customer"],
            start_time=aware(2024, 6, 10, 10, 0),
            duration_minutes=60,
        )
        admin = User.objects.create_superuser(username="root", password="pass1234", email="root@example.com")
        self.client.force_login(admin)

    def test_overlapping_appointment_cannot_be_added(self):
        resp = self.client.post(
            "/admin/booking/appointment/add/",
            {
                "employee": self.data["employee"].id,
                "shop": self.data["shop"].id,
                "customer": self.data["customer"].id,
                "start_time_0": "2024-06-10",
                "start_time_1": "10:15",
                "duration_minutes": 30,
                "price": "0",
                "service_lines-TOTAL_FORMS": "0",
                "service_lines-INITIAL_FORMS": "0",
            },
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(Appointment.objects.count(), 1)

    def test_appointment_cannot_be_moved(self):
        url = f"/admin/booking/appointment/{self.existing.id}/change/"
        self.assertEqual(self.client.get(url).status_code, 200)
        resp = self.client.post(
            url,
            {
                "employee": self.data["employee"].id,
                "shop": self.data["shop"].id,
                "start_time_0": "2024-06-10",
                "start_time_1": "12:00",
                "duration_minutes": 60,
                "price": "0",
            },
        )
        self.assertEqual(resp.status_code, 403)
        self.existing.refresh_from_db()
        self.assertEqual(self.existing.start_time, aware(2024, 6, 10, 10, 0))
