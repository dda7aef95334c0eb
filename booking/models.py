# booking/models.py
#
# Purpose:
# - Core domain models for shops, employees, services, customers,
#   appointments and one-time booking links.
#
# Design highlights:
# - Employee <-> Shop and Employee <-> Service are plain many-to-many links
#   ("works at" and "performs").
# - Appointment:
#   • start_time is an aware datetime (stored in UTC by Django)
#   • end_time is derived from start_time + duration_minutes in save(); it is
#     persisted so range/overlap queries stay simple SQL comparisons
#   • price starts at 0 and is set when the chosen services are attached
#   • rows are never updated in place by the booking flow
# - BookingLink: single-use, time-limited token handed to a customer.
#   shop=None means the customer may pick any shop.
#
# Notes for developers:
# - The "no two appointments of one employee overlap" invariant is enforced by
#   booking.services.booking_manager.BookingManager, not by a DB constraint
#   (SQLite has no exclusion constraints).
#
from datetime import timedelta

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


# -------------------------
# Shop
# -------------------------
class Shop(models.Model):
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=300, blank=True)
    directions = models.URLField(max_length=500, blank=True, help_text="Link to a map.")
    manager = models.ForeignKey(
        "staff.Manager",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="shops",
    )
    # Optional login for the shop itself (mobile API "shop" role).
    account = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="shop_account",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


# -------------------------
# Service catalog item
# -------------------------
class Service(models.Model):
    """
    A service offered by the shops.

    Rules:
    - price must be > 0
    - duration_minutes must be > 0
    """
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min, {self.price})"


# -------------------------
# Employee
# -------------------------
class Employee(models.Model):
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True)
    shops = models.ManyToManyField(Shop, related_name="employees", blank=True)
    services = models.ManyToManyField(Service, related_name="employees", blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


# -------------------------
# Customer (person who books)
# -------------------------
class Customer(models.Model):
    STATUS_NEW = "New"

    phone = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200, blank=True)
    status = models.CharField(max_length=30, default=STATUS_NEW)
    payment = models.IntegerField(default=0)
    language = models.IntegerField(default=0)

    def __str__(self):
        return self.name or self.phone


# -------------------------
# Appointment
# -------------------------
class Appointment(models.Model):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="appointments")
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name="appointments")
    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
        help_text="Empty for walk-ins booked by a manager.",
    )
    start_time = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    end_time = models.DateTimeField(editable=False)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    services = models.ManyToManyField(
        Service,
        through="AppointmentService",
        related_name="appointments",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["employee", "start_time"], name="appt_employee_start_idx"),
        ]

    def save(self, *args, **kwargs):
        self.end_time = self.start_time + timedelta(minutes=self.duration_minutes)
        super().save(*args, **kwargs)

    @property
    def start_millis(self):
        """Start instant as epoch milliseconds."""
        return int(self.start_time.timestamp() * 1000)

    def __str__(self):
        return f"{self.employee} @ {self.shop} on {self.start_time:%Y-%m-%d %H:%M} ({self.duration_minutes} min)"


class AppointmentService(models.Model):
    """One chosen service of an appointment (repeat a row to book a service twice)."""
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name="service_lines")
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name="+")

    def __str__(self):
        return f"#{self.appointment_id}: {self.service.name}"


# -------------------------
# One-time booking link
# -------------------------
class BookingLink(models.Model):
    token = models.CharField(max_length=32, unique=True)
    phone = models.CharField(max_length=20)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name="booking_links")
    shop = models.ForeignKey(
        Shop,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="booking_links",
        help_text="Empty: the customer may choose any shop.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    used = models.BooleanField(default=False)

    def __str__(self):
        return f"{self.token} ({self.phone})"
