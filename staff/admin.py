# staff/admin.py
from django.contrib import admin

from .models import Manager


@admin.register(Manager)
class ManagerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "phone", "username")
    search_fields = ("name", "phone", "user__username")
