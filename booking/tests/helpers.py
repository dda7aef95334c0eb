# booking/tests/helpers.py
#
# Small fixtures shared by the booking and staff test modules.
#
from datetime import datetime
from decimal import Decimal

from django.contrib.auth.models import User
from django.utils import timezone

from booking.models import Customer, Employee, Service, Shop
from staff.models import Manager


def aware(year, month, day, hour=0, minute=0):
    """Local (settings.TIME_ZONE) wall-clock time as an aware datetime."""
    return timezone.make_aware(datetime(year, month, day, hour, minute))


def create_manager(username="manager", password="pass1234", name="Mona Manager"):
    user = User.objects.create_user(username=username, password=password)
    return Manager.objects.create(user=user, name=name)


def create_salon(manager=None):
    """
    One shop with one employee who performs two services:
    "Haircut" (60 min, 300.00) and "Beard Trim" (20 min, 150.00).
    """
    shop = Shop.objects.create(name="Main Street", address="Main Street 1", manager=manager)
    haircut = Service.objects.create(name="Haircut", price=Decimal("300.00"), duration_minutes=60)
    beard = Service.objects.create(name="Beard Trim", price=Decimal("150.00"), duration_minutes=20)
    employee = Employee.objects.create(name="Eva", phone="11111111")
    employee.shops.add(shop)
    employee.services.add(haircut, beard)
    customer = Customer.objects.create(phone="99999999", name="Carl")
    return {
        "shop": shop,
        "employee": employee,
        "haircut": haircut,
        "beard": beard,
        "customer": customer,
    }
