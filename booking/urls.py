# booking/urls.py
#
# Purpose:
# - Customer booking API (JSON, booking-token authenticated)
# - Customer booking pages (HTML): booking form and confirmation
# - Booking link issuing for staff and managers
#
# Mounted under /api/ by shop_manager/urls.py.
#
from django.urls import path

from . import views, views_pages

urlpatterns = [
    # 1) JSON API (booking token)
    path("shops", views.ShopListView.as_view(), name="booking_shops"),
    path("employees", views.EmployeeListView.as_view(), name="booking_employees"),
    path("services", views.ServiceListView.as_view(), name="booking_services"),
    path("timeslots", views.TimeslotView.as_view(), name="booking_timeslots"),
    path("booking/submit", views.BookingSubmitView.as_view(), name="booking_submit"),

    # 2) Link issuing (staff session or manager JWT)
    path("booking/create", views.BookingLinkCreateView.as_view(), name="booking_link_create"),

    # 3) HTML pages
    path("book", views_pages.booking_form_page, name="booking_form"),
    path("booking/confirmation", views_pages.booking_confirmation_page, name="booking_confirmation"),
]
