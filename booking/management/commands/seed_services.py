"""
seed_services.py
----------------
Seeds (creates or updates) a starter service catalog so a fresh install has
something to book. Upserts by name; run it as often as you like.

Usage:
    python manage.py seed_services
    python manage.py seed_services --employee 3   # also link all to employee #3
"""

from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from booking.models import Employee, Service


CATALOG = [
    # Haircuts
    {"name": "Haircut - Short",        "duration_minutes": 30, "price": Decimal("350.00")},
    {"name": "Haircut - Long",         "duration_minutes": 45, "price": Decimal("450.00")},
    {"name": "Children's Haircut",     "duration_minutes": 20, "price": Decimal("250.00")},

    # Beard
    {"name": "Beard Trim",             "duration_minutes": 20, "price": Decimal("200.00")},
    {"name": "Hot Towel Shave",        "duration_minutes": 30, "price": Decimal("300.00")},

    # Colour & care
    {"name": "Colour",                 "duration_minutes": 60, "price": Decimal("700.00")},
    {"name": "Wash & Blow-dry",        "duration_minutes": 20, "price": Decimal("150.00")},
]


class Command(BaseCommand):
    help = "Seed or update the service catalog."

    def add_arguments(self, parser):
        parser.add_argument(
            "--employee",
            type=int,
            default=None,
            help="Employee id that should perform every seeded service.",
        )

    def handle(self, *args, **options):
        employee = None
        if options["employee"] is not None:
            employee = Employee.objects.filter(pk=options["employee"]).first()
            if employee is None:
                raise CommandError(f"Employee {options['employee']} does not exist.")

        created = 0
        updated = 0
        services = []

        for item in CATALOG:
            svc, is_created = Service.objects.get_or_create(
                name=item["name"],
                defaults={
                    "duration_minutes": item["duration_minutes"],
                    "price": item["price"],
                },
            )
            services.append(svc)
            if is_created:
                created += 1
                continue

            changed = False
            if svc.duration_minutes != item["duration_minutes"]:
                svc.duration_minutes = item["duration_minutes"]; changed = True
            if svc.price != item["price"]:
                svc.price = item["price"]; changed = True
            if changed:
                svc.save()
                updated += 1

        if employee is not None:
            employee.services.add(*services)

        self.stdout.write(self.style.SUCCESS(f"Seed complete. Created={created}, Updated={updated}"))
