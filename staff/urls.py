from django.urls import path

from . import views

urlpatterns = [
    path("login", views.MobileLoginView.as_view(), name="mobile_login"),
    path("manager/appointments", views.ManagerAppointmentsView.as_view(), name="mobile_appointments"),
    path("manager/booking/create", views.ManagerBookingCreateView.as_view(), name="mobile_booking_create"),
    path("manager/shops", views.ManagerShopsView.as_view(), name="mobile_shops"),
    path("manager/employees", views.ManagerEmployeesView.as_view(), name="mobile_employees"),
    path("manager/services", views.ManagerServicesView.as_view(), name="mobile_services"),
    path("manager/timeslots", views.ManagerTimeslotsView.as_view(), name="mobile_timeslots"),
]
