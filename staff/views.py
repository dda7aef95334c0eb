# staff/views.py
#
# Purpose:
# - Mobile API for managers and shop accounts (JWT, see staff/auth.py):
#   * POST /api/mobile/login
#   * GET  /api/mobile/manager/appointments?shop_id=
#   * POST /api/mobile/manager/booking/create
#   * GET  /api/mobile/manager/shops
#   * GET  /api/mobile/manager/employees?shop_id=
#   * GET  /api/mobile/manager/services?employee_id=
#   * GET  /api/mobile/manager/timeslots?employee_id=&shop_id=&date=&duration=
#
# Access rules:
# - Managers act on the shops they manage; a shop account acts on itself.
# - Only managers may create bookings from the mobile API.
#
import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import BasePermission
from rest_framework.response import Response
from rest_framework.views import APIView

from booking.models import Customer, Employee, Shop
from booking.params import duration_param, int_param, list_param
from booking.serializers import (
    AppointmentWithServicesSerializer,
    EmployeeSerializer,
    ServiceSerializer,
    ShopSerializer,
)
from booking.services.appointment_store import AppointmentStore
from booking.services.availability_engine import AvailabilityEngine
from booking.services.booking_manager import BookingManager
from booking.services.exceptions import BookingError, InvalidInput
from booking.services.slot_utils import parse_appointment_time, parse_day
from booking.views import booking_error_response, get_employee_at_shop

from .auth import LoginInfo, generate_token, login_with_credentials
from .authentication import ManagerJWTAuthentication
from .models import Role

logger = logging.getLogger(__name__)


# -------------------- Permissions --------------------
class IsMobileUser(BasePermission):
    def has_permission(self, request, view):
        return isinstance(request.user, LoginInfo)


class MobileAPIView(APIView):
    authentication_classes = [ManagerJWTAuthentication]
    permission_classes = [IsMobileUser]

    def shop_for(self, request, shop_id):
        """The shop, if the caller may act on it; otherwise a 403 response."""
        shop = get_object_or_404(Shop, pk=shop_id)
        if not request.user.can_access_shop(shop):
            return None, Response({"detail": "Not authorized for this shop"}, status=status.HTTP_403_FORBIDDEN)
        return shop, None


# -------------------- Login --------------------
class MobileLoginView(APIView):
    """
    POST /api/mobile/login
    { "username": "...", "password": "..." }
    -> { "token": "<jwt>", "role": "manager" | "shop", "user_id": N }
    """
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        username = (request.data.get("username") or "").strip()
        password = request.data.get("password") or ""
        if not username or not password:
            return Response({"detail": "username and password are required."}, status=status.HTTP_400_BAD_REQUEST)

        info = login_with_credentials(username, password)
        if info is None:
            return Response({"detail": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        token = generate_token(info.user_id, info.role)
        logger.info("Issued mobile token for %s #%s", info.role.value, info.user_id)
        return Response({"token": token, "role": info.role.value, "user_id": info.user_id})


# -------------------- Lookups --------------------
class ManagerShopsView(MobileAPIView):
    def get(self, request):
        info = request.user
        if info.role == Role.MANAGER:
            shops = Shop.objects.filter(manager_id=info.manager_id).order_by("id")
        else:
            shops = Shop.objects.filter(pk=info.shop_id)
            if not shops.exists():
                return Response({"detail": "Shop not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(ShopSerializer(shops, many=True).data)


class ManagerEmployeesView(MobileAPIView):
    def get(self, request):
        try:
            shop_id = int_param(request.query_params.get("shop_id"), "shop_id")
        except BookingError as e:
            return booking_error_response(e)
        shop, denied = self.shop_for(request, shop_id)
        if denied:
            return denied
        return Response(EmployeeSerializer(shop.employees.all().order_by("id"), many=True).data)


class ManagerServicesView(MobileAPIView):
    def get(self, request):
        try:
            employee_id = int_param(request.query_params.get("employee_id"), "employee_id")
        except BookingError as e:
            return booking_error_response(e)
        employee = get_object_or_404(Employee, pk=employee_id)
        return Response(ServiceSerializer(employee.services.all().order_by("id"), many=True).data)


class ManagerTimeslotsView(MobileAPIView):
    engine = AvailabilityEngine()

    def get(self, request):
        query = request.query_params
        try:
            employee_id = int_param(query.get("employee_id"), "employee_id")
            shop_id = int_param(query.get("shop_id"), "shop_id")
            day = parse_day(query.get("date"))
            duration = duration_param(query)
        except BookingError as e:
            return booking_error_response(e)

        shop, denied = self.shop_for(request, shop_id)
        if denied:
            return denied
        try:
            employee = get_employee_at_shop(employee_id, shop)
            slots = self.engine.find_available_slots(employee.pk, shop.pk, day, duration)
        except BookingError as e:
            return booking_error_response(e)
        return Response(slots)


# -------------------- Appointments --------------------
class ManagerAppointmentsView(MobileAPIView):
    store = AppointmentStore()

    def get(self, request):
        info = request.user
        if info.role == Role.SHOP:
            shop_id = info.shop_id
        else:
            try:
                shop_id = int_param(request.query_params.get("shop_id"), "shop_id")
            except BookingError as e:
                return booking_error_response(e)

        shop, denied = self.shop_for(request, shop_id)
        if denied:
            return denied
        appointments = self.store.appointments_for_shop(shop.pk)
        return Response(AppointmentWithServicesSerializer(appointments, many=True).data)


class ManagerBookingCreateView(MobileAPIView):
    """
    POST /api/mobile/manager/booking/create
    Fields: shop_id, employee_id, appointment_time ('YYYY-MM-DD HH:MM'),
    service_ids (repeated or list), customer_id (optional; empty = walk-in).
    -> 201 {"appointment_id": N} | 409 on overlap
    """
    manager = BookingManager()

    def post(self, request):
        if not request.user.is_manager:
            return Response({"detail": "Not authorized for this shop"}, status=status.HTTP_403_FORBIDDEN)

        data = request.data
        try:
            shop_id = int_param(data.get("shop_id"), "shop_id")
            employee_id = int_param(data.get("employee_id"), "employee_id")
            customer_id = int_param(data.get("customer_id"), "customer_id", required=False)
            service_ids = list_param(data, "service_ids")
            raw_time = (data.get("appointment_time") or "").strip()
            if not service_ids or not raw_time:
                raise InvalidInput("Missing or invalid parameters")
            start_time = parse_appointment_time(raw_time)
        except BookingError as e:
            return booking_error_response(e)

        shop, denied = self.shop_for(request, shop_id)
        if denied:
            return denied
        customer = get_object_or_404(Customer, pk=customer_id) if customer_id else None

        try:
            employee = get_employee_at_shop(employee_id, shop)
            appointment = self.manager.book_appointment(
                employee=employee,
                shop=shop,
                customer=customer,
                start_time=start_time,
                service_ids=service_ids,
            )
        except BookingError as e:
            return booking_error_response(e)

        return Response({"appointment_id": appointment.pk}, status=status.HTTP_201_CREATED)
