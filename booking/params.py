"""
params.py
---------
Request-parameter parsing shared by the customer and the mobile API.
Malformed values raise InvalidInput so views can reject them before any
lookup or write.
"""

from .services.exceptions import InvalidInput
from .services.service_catalog import parse_service_ids, total_duration_for_services


def int_param(raw, name, required=True):
    raw = (str(raw).strip() if raw is not None else "")
    if not raw:
        if required:
            raise InvalidInput(f"Missing or invalid {name}")
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput(f"Missing or invalid {name}") from None


def list_param(data, name):
    """All values of a repeated parameter (form/query) or a JSON list."""
    if hasattr(data, "getlist"):
        values = data.getlist(name) or data.getlist(f"{name}[]")
    else:
        values = data.get(name) or []
        if not isinstance(values, (list, tuple)):
            values = [values]
    # Also accept a single comma-separated value: service_ids=1,2,2
    flat = []
    for value in values:
        flat.extend(part for part in str(value).split(",") if part.strip())
    return flat


def duration_param(query):
    """
    Requested duration in minutes: either `duration` directly or the summed
    duration of `service_ids`. Must be > 0.
    """
    raw_duration = query.get("duration")
    if raw_duration not in (None, ""):
        duration = int_param(raw_duration, "duration")
    else:
        service_ids = parse_service_ids(list_param(query, "service_ids"))
        if not service_ids:
            raise InvalidInput("Missing or invalid duration")
        duration = total_duration_for_services(service_ids)

    if duration <= 0:
        raise InvalidInput("Duration must be a positive number of minutes.")
    return duration
