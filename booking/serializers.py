from rest_framework import serializers

from .models import Appointment, Customer, Employee, Service, Shop
from .services.slot_utils import format_slot


class ShopSerializer(serializers.ModelSerializer):
    class Meta:
        model = Shop
        fields = ["id", "name", "address", "directions", "manager"]


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ["id", "name", "phone"]


class ServiceSerializer(serializers.ModelSerializer):
    duration = serializers.IntegerField(source="duration_minutes")
    price = serializers.DecimalField(max_digits=8, decimal_places=2, coerce_to_string=False)

    class Meta:
        model = Service
        fields = ["id", "name", "price", "duration"]


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "phone", "name", "status", "payment", "language"]


class AppointmentWithServicesSerializer(serializers.ModelSerializer):
    """Appointment plus the people and services involved (manager listing)."""
    employee_id = serializers.IntegerField(read_only=True)
    shop_id = serializers.IntegerField(read_only=True)
    start_time = serializers.SerializerMethodField()
    date_time = serializers.IntegerField(source="start_millis", read_only=True)
    duration = serializers.IntegerField(source="duration_minutes", read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)
    services = serializers.SerializerMethodField()
    employee = EmployeeSerializer(read_only=True)
    customer = CustomerSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "employee_id",
            "shop_id",
            "start_time",
            "date_time",
            "duration",
            "price",
            "services",
            "employee",
            "customer",
        ]

    def get_start_time(self, obj):
        return format_slot(obj.start_time)

    def get_services(self, obj):
        # service_lines keeps repeated services (one line per booked occurrence)
        return ServiceSerializer([line.service for line in obj.service_lines.all()], many=True).data
