# booking/views.py
#
# Purpose:
# - Customer booking API, authenticated by a one-time booking link token
#   (see booking/authentication.py):
#   * GET  /api/shops
#   * GET  /api/employees?shop_id=
#   * GET  /api/services?employee_id=
#   * GET  /api/timeslots?employee_id=&date=YYYY-MM-DD&duration=  (or service_ids=)
#   * POST /api/booking/submit
# - Booking link issuing for staff / managers:
#   * POST /api/booking/create
#
# Notes for developers:
# - shop_id from the query/form is only honored when the booking link is not
#   bound to a shop; otherwise the link's shop always wins.
# - The submit path never trusts the slot list the customer saw: it goes
#   through BookingManager, which re-checks overlap inside the same
#   transaction as the insert.
#
import logging

from django.contrib.auth.models import AnonymousUser
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse
from rest_framework import status
from rest_framework.authentication import SessionAuthentication
from rest_framework.permissions import BasePermission
from rest_framework.response import Response
from rest_framework.views import APIView

from staff.auth import LoginInfo
from staff.authentication import ManagerJWTAuthentication

from .authentication import BookingTokenAuthentication, HasBookingLink
from .models import Employee, Shop
from .params import duration_param, int_param, list_param
from .serializers import EmployeeSerializer, ServiceSerializer, ShopSerializer
from .services.availability_engine import AvailabilityEngine
from .services.booking_links import booking_url, ensure_customer_by_phone, generate_booking_link
from .services.booking_manager import BookingManager
from .services.exceptions import (
    BookingConflict,
    BookingError,
    InvalidInput,
    NotFound,
    StorageFailure,
)
from .services.slot_utils import parse_appointment_time, parse_day

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    BookingConflict: status.HTTP_409_CONFLICT,
    StorageFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def booking_error_response(exc: BookingError) -> Response:
    for exc_type, code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return Response({"detail": str(exc)}, status=code)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def get_employee_at_shop(employee_id, shop):
    employee = get_object_or_404(Employee, pk=employee_id)
    if not employee.shops.filter(pk=shop.pk).exists():
        raise NotFound(f"Employee {employee.pk} does not work at shop {shop.pk}.")
    return employee


# -------------------- Permissions --------------------
class CanIssueBookingLinks(BasePermission):
    """
    Staff users (admin console session) or mobile-API managers/shops.
    """
    def has_permission(self, request, view):
        user = getattr(request, "user", None) or AnonymousUser()
        if isinstance(user, LoginInfo):
            return True
        return bool(user.is_authenticated and user.is_staff)


# -------------------- Customer API --------------------
class BookingTokenAPIView(APIView):
    authentication_classes = [BookingTokenAuthentication]
    permission_classes = [HasBookingLink]

    def requested_shop(self, request, data=None):
        """The shop for this request, or None when neither link nor request names one."""
        raw = data.get("shop_id") if data is not None else None
        if raw in (None, ""):
            raw = request.query_params.get("shop_id")
        requested = int_param(raw, "shop_id", required=False)
        shop_id = request.user.resolve_shop_id(requested)
        if shop_id is None or shop_id <= 0:
            raise InvalidInput("Missing or invalid shop_id")
        return get_object_or_404(Shop, pk=shop_id)


class ShopListView(BookingTokenAPIView):
    def get(self, request):
        shops = Shop.objects.all().order_by("id")
        return Response({"shops": ShopSerializer(shops, many=True).data})


class EmployeeListView(BookingTokenAPIView):
    def get(self, request):
        try:
            shop = self.requested_shop(request)
        except BookingError as e:
            return booking_error_response(e)
        employees = shop.employees.all().order_by("id")
        return Response({"employees": EmployeeSerializer(employees, many=True).data})


class ServiceListView(BookingTokenAPIView):
    def get(self, request):
        try:
            employee_id = int_param(request.query_params.get("employee_id"), "employee_id")
        except BookingError as e:
            return booking_error_response(e)
        employee = get_object_or_404(Employee, pk=employee_id)
        services = employee.services.all().order_by("id")
        return Response({"services": ServiceSerializer(services, many=True).data})


class TimeslotView(BookingTokenAPIView):
    """
    GET /api/timeslots?employee_id=ID&date=YYYY-MM-DD&duration=MIN
    Response: ["2024-06-10 08:00", "2024-06-10 08:10", ...]
    """
    engine = AvailabilityEngine()

    def get(self, request):
        query = request.query_params
        try:
            employee_id = int_param(query.get("employee_id"), "employee_id")
            day = parse_day(query.get("date"))
            shop = self.requested_shop(request)
            employee = get_employee_at_shop(employee_id, shop)
            duration = duration_param(query)
            slots = self.engine.find_available_slots(employee.pk, shop.pk, day, duration)
        except BookingError as e:
            return booking_error_response(e)
        return Response(slots)


class BookingSubmitView(BookingTokenAPIView):
    """
    POST /api/booking/submit
    Form fields: employee_id, appointment_time ('YYYY-MM-DD HH:MM'),
    service_ids (repeated), shop_id (only for links not bound to a shop).

    Success: 302 to the confirmation page.
    Overlap: 409.
    """
    manager = BookingManager()

    def post(self, request):
        data = request.data
        try:
            shop = self.requested_shop(request, data=data)
            employee_id = int_param(data.get("employee_id"), "employee_id")
            raw_time = (data.get("appointment_time") or "").strip()
            service_ids = list_param(data, "service_ids")
            if not raw_time or not service_ids:
                raise InvalidInput("Missing required form data.")
            start_time = parse_appointment_time(raw_time)
            employee = get_employee_at_shop(employee_id, shop)

            appointment = self.manager.book_appointment(
                employee=employee,
                shop=shop,
                customer=request.user.customer,
                start_time=start_time,
                service_ids=service_ids,
            )
        except BookingError as e:
            return booking_error_response(e)

        url = f"{reverse('booking_confirmation')}?appointment_id={appointment.pk}"
        return redirect(url)


# -------------------- Booking links --------------------
class BookingLinkCreateView(APIView):
    """
    POST /api/booking/create  {shop_id, phone}
    Finds or creates the customer by phone and issues a one-time link.
    shop_id=-1 issues a link that lets the customer choose the shop.
    """
    authentication_classes = [SessionAuthentication, ManagerJWTAuthentication]
    permission_classes = [CanIssueBookingLinks]

    def post(self, request):
        data = request.data
        phone = (data.get("phone") or "").strip()
        try:
            shop_id = int_param(data.get("shop_id"), "shop_id")
            if not phone:
                raise InvalidInput("Missing shop_id or phone")
        except BookingError as e:
            return booking_error_response(e)

        shop = None
        if shop_id != -1:
            shop = get_object_or_404(Shop, pk=shop_id)
            user = request.user
            if isinstance(user, LoginInfo) and not user.can_access_shop(shop):
                return Response({"detail": "Not authorized for this shop"}, status=status.HTTP_403_FORBIDDEN)

        customer = ensure_customer_by_phone(phone)
        link = generate_booking_link(customer=customer, shop=shop, phone=phone)
        logger.info("Issued booking link for customer #%s (shop %s)", customer.pk, shop_id)
        return Response(
            {"token": link.token, "url": booking_url(link.token)},
            status=status.HTTP_201_CREATED,
        )
