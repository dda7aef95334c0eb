"""
purge_booking_links.py
----------------------
Delete booking links that were used or have outlived their TTL.

Usage:
    python manage.py purge_booking_links
    python manage.py purge_booking_links --older-than 1440

Behavior:
- Used links are always deleted.
- Unused links are deleted once older than --older-than minutes
  (default: settings.BOOKING_LINK_TTL_MINUTES).
- Meant to run from cron; safe to run any time.
"""

from django.core.management.base import BaseCommand, CommandError

from booking.services.booking_links import purge_booking_links


class Command(BaseCommand):
    help = "Delete used or expired one-time booking links."

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than",
            type=int,
            default=None,
            help="Age in minutes after which unused links are deleted.",
        )

    def handle(self, *args, **options):
        minutes = options["older_than"]
        if minutes is not None and minutes < 0:
            raise CommandError("--older-than must be zero or positive.")

        deleted = purge_booking_links(older_than_minutes=minutes)
        self.stdout.write(self.style.SUCCESS(f"Purged {deleted} booking link(s)."))
