# booking/views_calendar.py
#
# Purpose:
# - Staff-only month-view calendar of appointments at /admin/appointments-calendar/.
# - Renders a simple, server-side month grid with appointments per day.
#
# Template:
# - booking/templates/appointments_calendar.html
#
# Behavior:
# - Only staff (or superusers) can access (enforced by @staff_member_required).
# - Query params: ?year=YYYY&month=MM (defaults to current month if missing/invalid)
#   and ?shop=ID to show a single shop.
#
import calendar
from datetime import datetime

from django.contrib.admin.views.decorators import staff_member_required
from django.shortcuts import render
from django.utils import timezone

from .models import Appointment, Shop


def _month_param(request, today):
    try:
        year = int(request.GET.get("year", today.year))
        month = int(request.GET.get("month", today.month))
    except (TypeError, ValueError):
        return today.year, today.month
    if not (1 <= month <= 12) or not (1 <= year <= 9998):
        return today.year, today.month
    return year, month


@staff_member_required
def appointments_calendar(request):
    """
    Render a staff-only month calendar of appointments, grouped by local day.
    """
    tz = timezone.get_current_timezone()
    today = timezone.localtime(timezone.now(), tz)
    year, month = _month_param(request, today)

    # Month bounds [first day 00:00, first day of next month 00:00)
    _, last_day_num = calendar.monthrange(year, month)
    next_y, next_m = (year + 1, 1) if month == 12 else (year, month + 1)
    prev_y, prev_m = (year - 1, 12) if month == 1 else (year, month - 1)
    start_dt = timezone.make_aware(datetime(year, month, 1), tz)
    end_dt = timezone.make_aware(datetime(next_y, next_m, 1), tz)

    qs = (
        Appointment.objects
        .filter(start_time__gte=start_dt, start_time__lt=end_dt)
        .select_related("customer", "employee", "shop")
        .order_by("start_time")
    )
    shop_id = (request.GET.get("shop") or "").strip()
    if shop_id.isdigit():
        qs = qs.filter(shop_id=int(shop_id))

    days_map = {d: [] for d in range(1, last_day_num + 1)}
    for appt in qs:
        local_start = timezone.localtime(appt.start_time, tz)
        days_map[local_start.day].append({
            "id": appt.id,
            "time": local_start.strftime("%H:%M"),
            "duration": appt.duration_minutes,
            "employee": appt.employee.name,
            "shop": appt.shop.name,
            "customer": str(appt.customer) if appt.customer else "Walk-in",
            "price": appt.price,
        })

    # Leading blanks so the template can render a Monday-first grid
    first_weekday = calendar.monthrange(year, month)[0]
    cells = [{"blank": True} for _ in range(first_weekday)]
    for d in range(1, last_day_num + 1):
        cells.append({"blank": False, "day": d, "appointments": days_map[d]})

    ctx = {
        "year": year,
        "month": month,
        "month_name": calendar.month_name[month],
        "cells": cells,
        "shops": Shop.objects.all().order_by("name"),
        "selected_shop": int(shop_id) if shop_id.isdigit() else None,
        "prev_year": prev_y, "prev_month": prev_m,
        "next_year": next_y, "next_month": next_m,
    }
    return render(request, "appointments_calendar.html", ctx)
