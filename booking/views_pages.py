# booking/views_pages.py
#
# Purpose:
# - HTML pages of the customer booking flow:
#   * GET /api/book?token=...                   -> booking form (sets booking_token cookie)
#   * GET /api/booking/confirmation?appointment_id=  -> confirmation; consumes the link
#
# Templates:
# - booking/templates/booking_form.html
# - booking/templates/booking_confirmation.html
#
from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest, HttpResponseNotFound
from django.shortcuts import get_object_or_404, render
from django.views.decorators.http import require_http_methods

from .authentication import BOOKING_TOKEN_COOKIE, booking_token_from_request
from .models import Appointment, Shop
from .services.booking_links import mark_booking_link_used, resolve_booking_token


@require_http_methods(["GET"])
def booking_form_page(request):
    """
    Serve the booking form for a valid link. The token is stored in an
    httpOnly cookie so the form's API calls authenticate without repeating it.
    """
    token = request.GET.get("token")
    if not token:
        return HttpResponseBadRequest("Missing token")

    link = resolve_booking_token(token)
    if link is None:
        return HttpResponseNotFound("Invalid or expired token")

    ctx = {
        "shop": link.shop,
        "customer": link.customer,
        # Unbound links let the customer pick a shop first.
        "shops": Shop.objects.all().order_by("id") if link.shop_id is None else [],
    }
    response = render(request, "booking_form.html", ctx)
    response.set_cookie(
        BOOKING_TOKEN_COOKIE,
        token,
        max_age=settings.BOOKING_LINK_TTL_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="Lax",
    )
    return response


@require_http_methods(["GET"])
def booking_confirmation_page(request):
    link = resolve_booking_token(booking_token_from_request(request))
    if link is None:
        return HttpResponse("Invalid or missing booking token.", status=401)

    raw_id = (request.GET.get("appointment_id") or "").strip()
    if not raw_id.isdigit():
        return HttpResponseBadRequest("Missing or invalid appointment_id")

    appointment = get_object_or_404(
        Appointment.objects.select_related("shop", "employee"),
        pk=int(raw_id),
        customer_id=link.customer_id,
    )
    mark_booking_link_used(link.token)

    ctx = {
        "appointment": appointment,
        "shop": appointment.shop,
        "employee": appointment.employee,
        "services": [line.service for line in appointment.service_lines.select_related("service")],
    }
    return render(request, "booking_confirmation.html", ctx)
