# booking/tests/test_booking_links.py

from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone

from booking.models import BookingLink, Customer
from booking.services.booking_links import (
    TOKEN_LENGTH,
    booking_url,
    ensure_customer_by_phone,
    generate_booking_link,
    mark_booking_link_used,
    purge_booking_links,
    resolve_booking_token,
)

from .helpers import create_salon


def age_link(link, minutes):
    BookingLink.objects.filter(pk=link.pk).update(created_at=timezone.now() - timedelta(minutes=minutes))


@override_settings(BOOKING_LINK_TTL_MINUTES=60, PUBLIC_BOOKING_URL="https://book.example.com/")
class BookingLinkTests(TestCase):
    def setUp(self):
        self.data = create_salon()
        self.customer = self.data["customer"]

    def test_ensure_customer_reuses_existing_phone(self):
        self.assertEqual(ensure_customer_by_phone(" 99999999 "), self.customer)
        fresh = ensure_customer_by_phone("12345678")
        self.assertEqual(fresh.status, Customer.STATUS_NEW)
        self.assertEqual(Customer.objects.count(), 2)

    def test_generated_token_shape(self):
        link = generate_booking_link(self.customer, self.data["shop"], "99999999")
        self.assertEqual(len(link.token), TOKEN_LENGTH)
        int(link.token, 16)  # hex
        self.assertFalse(link.used)

    def test_booking_url(self):
        self.assertEqual(booking_url("abc123"), "https://book.example.com/api/book?token=abc123")

    def test_fresh_link_resolves(self):
        link = generate_booking_link(self.customer, None, "99999999")
        self.assertEqual(resolve_booking_token(link.token), link)

    def test_expired_link_does_not_resolve(self):
        link = generate_booking_link(self.customer, None, "99999999")
        age_link(link, 61)
        with self.assertLogs("booking.services.booking_links", level="WARNING"):
            self.assertIsNone(resolve_booking_token(link.token))

    def test_used_link_does_not_resolve(self):
        link = generate_booking_link(self.customer, None, "99999999")
        self.assertTrue(mark_booking_link_used(link.token))
        with self.assertLogs("booking.services.booking_links", level="WARNING"):
            self.assertIsNone(resolve_booking_token(link.token))

    def test_unknown_or_empty_token(self):
        self.assertIsNone(resolve_booking_token("nope"))
        self.assertIsNone(resolve_booking_token(""))
        self.assertFalse(mark_booking_link_used("nope"))

    def test_purge_removes_used_and_old(self):
        keep = generate_booking_link(self.customer, None, "99999999")
        used = generate_booking_link(self.customer, None, "99999999")
        old = generate_booking_link(self.customer, None, "99999999")
        mark_booking_link_used(used.token)
        age_link(old, 120)

        self.assertEqual(purge_booking_links(), 2)
        self.assertEqual(list(BookingLink.objects.values_list("token", flat=True)), [keep.token])

    def test_purge_command(self):
        link = generate_booking_link(self.customer, None, "99999999")
        age_link(link, 30)
        out = StringIO()
        call_command("purge_booking_links", "--older-than", "10", stdout=out)
        self.assertIn("Purged 1", out.getvalue())
        self.assertFalse(BookingLink.objects.exists())
