"""
booking_links.py
----------------
One-time booking links: a short token that lets a customer (identified by
phone) open the booking form for a shop, without an account.

Lifecycle:
- generate_booking_link() when staff send a link to a customer
- resolve_booking_token() on every customer API call (valid = unused and
  younger than settings.BOOKING_LINK_TTL_MINUTES)
- mark_booking_link_used() once the confirmation page is shown
- purge_booking_links() from the `purge_booking_links` management command
"""

import logging
import uuid
from datetime import timedelta

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from ..models import BookingLink, Customer

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 12


def ensure_customer_by_phone(phone: str) -> Customer:
    customer, created = Customer.objects.get_or_create(
        phone=phone.strip(),
        defaults={"status": Customer.STATUS_NEW},
    )
    if created:
        logger.info("Created customer #%s for a new phone number", customer.pk)
    return customer


def generate_booking_link(customer, shop, phone: str) -> BookingLink:
    token = uuid.uuid4().hex[:TOKEN_LENGTH]
    return BookingLink.objects.create(
        token=token,
        phone=phone.strip(),
        customer=customer,
        shop=shop,
    )


def booking_url(token: str) -> str:
    return f"{settings.PUBLIC_BOOKING_URL.rstrip('/')}/api/book?token={token}"


def _expiry_cutoff(minutes=None):
    ttl = settings.BOOKING_LINK_TTL_MINUTES if minutes is None else minutes
    return timezone.now() - timedelta(minutes=ttl)


def resolve_booking_token(token):
    """Return the BookingLink for a usable token, or None."""
    if not token:
        return None
    link = BookingLink.objects.select_related("customer", "shop").filter(token=token).first()
    if link is None:
        return None
    if link.used or link.created_at <= _expiry_cutoff():
        logger.warning("Booking link used or too old: %s (used=%s)", token, link.used)
        return None
    return link


def mark_booking_link_used(token: str) -> bool:
    return BookingLink.objects.filter(token=token).update(used=True) > 0


def purge_booking_links(older_than_minutes=None) -> int:
    """Delete links that are used or older than the TTL; return how many."""
    deleted, _ = BookingLink.objects.filter(
        Q(used=True) | Q(created_at__lt=_expiry_cutoff(older_than_minutes))
    ).delete()
    logger.info("Deleted %d old or used booking link(s)", deleted)
    return deleted
