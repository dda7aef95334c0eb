# shop_manager/urls.py
#
# Purpose:
# - Project URL router.
# - Admin console (Django admin + appointment calendar) under /admin/.
# - Mobile/manager API (JWT) under /api/mobile/, customer booking API under /api/.
#
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from booking.views_calendar import appointments_calendar

urlpatterns = [
    # Staff-only pages; the calendar must precede admin.site.urls
    path("admin/appointments-calendar/", appointments_calendar, name="appointments_calendar"),
    path("admin/", admin.site.urls),

    # APIs
    path("api/mobile/", include("staff.urls")),
    path("api/", include("booking.urls")),
]

# Static files in DEBUG (dev only). In production, serve via web server / CDN.
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
