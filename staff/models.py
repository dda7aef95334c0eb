# staff/models.py
#
# Purpose:
# - Managers (people who run one or more shops) and the closed set of login
#   roles used by the mobile API.
#
# Notes for developers:
# - Credentials live on the linked Django auth User (username + password hash),
#   so managers can also be given admin-console access by setting is_staff.
# - Shops point at their manager (booking.Shop.manager), not the other way.
#
from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    """Who a mobile-API token was issued to."""
    MANAGER = "manager", "Manager"
    SHOP = "shop", "Shop"


class Manager(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="manager_profile",
    )
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def username(self):
        return self.user.get_username()
