from django.contrib import admin

from .models import Appointment, AppointmentService, BookingLink, Customer, Employee, Service, Shop


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "address", "manager")
    list_filter = ("manager",)
    search_fields = ("name", "address")


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "duration_minutes")
    search_fields = ("name",)
    list_editable = ("price", "duration_minutes")


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "phone")
    list_filter = ("shops",)
    search_fields = ("name", "phone")
    filter_horizontal = ("shops", "services")


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "phone", "status")
    list_filter = ("status",)
    search_fields = ("name", "phone")


class AppointmentServiceInline(admin.TabularInline):
    model = AppointmentService
    extra = 0
    readonly_fields = ("service",)

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# Appointments are created only through BookingManager (customer and mobile
# APIs), which runs the overlap check and prices the services. The admin can
# view and delete them, never add or edit.
@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("id", "start_time", "duration_minutes", "employee", "shop", "customer", "price")
    list_filter = ("shop", "employee")
    search_fields = ("customer__name", "customer__phone", "employee__name")
    date_hierarchy = "start_time"
    readonly_fields = ("end_time", "created_at")
    inlines = [AppointmentServiceInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(BookingLink)
class BookingLinkAdmin(admin.ModelAdmin):
    list_display = ("token", "phone", "customer", "shop", "created_at", "used")
    list_filter = ("used", "shop")
    search_fields = ("token", "phone")
    readonly_fields = ("created_at",)
