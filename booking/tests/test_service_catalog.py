# booking/tests/test_service_catalog.py

from decimal import Decimal

from django.test import TestCase

from booking.models import Service
from booking.services.exceptions import InvalidInput, ServiceNotFound
from booking.services.service_catalog import (
    parse_service_ids,
    resolve_services,
    total_duration_for_services,
)


class ServiceCatalogTests(TestCase):
    def setUp(self):
        self.cut = Service.objects.create(name="Haircut", price=Decimal("300.00"), duration_minutes=30)
        self.shave = Service.objects.create(name="Shave", price=Decimal("120.50"), duration_minutes=15)

    def test_sum_of_durations_and_prices(self):
        selection = resolve_services([self.cut.id, self.shave.id])
        self.assertEqual(selection.duration_minutes, 45)
        self.assertEqual(selection.total_price, Decimal("420.50"))

    def test_order_does_not_matter(self):
        self.assertEqual(
            total_duration_for_services([self.cut.id, self.shave.id]),
            total_duration_for_services([self.shave.id, self.cut.id]),
        )

    def test_duplicates_count_per_occurrence(self):
        selection = resolve_services([self.shave.id, self.shave.id])
        self.assertEqual(selection.duration_minutes, 30)
        self.assertEqual(selection.total_price, Decimal("241.00"))
        self.assertEqual(len(selection.services), 2)

    def test_empty_selection_is_zero(self):
        selection = resolve_services([])
        self.assertTrue(selection.is_empty)
        self.assertEqual(selection.duration_minutes, 0)
        self.assertEqual(selection.total_price, Decimal("0.00"))

    def test_unknown_id_fails_fast(self):
        with self.assertRaises(ServiceNotFound) as ctx:
            resolve_services([self.cut.id, 9999, 9999])
        self.assertEqual(ctx.exception.missing_ids, [9999])

    def test_string_ids_are_accepted(self):
        self.assertEqual(total_duration_for_services([str(self.cut.id), f" {self.shave.id} "]), 45)

    def test_junk_ids_are_invalid_input(self):
        with self.assertRaises(InvalidInput):
            parse_service_ids(["abc"])
