# booking/authentication.py
#
# Purpose:
# - Authenticate customer API calls with a one-time booking link token.
#
# Token lookup order: ?token= query parameter, X-Booking-Token header,
# booking_token cookie (set by the booking form page).
#
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission

from .services.booking_links import resolve_booking_token

BOOKING_TOKEN_COOKIE = "booking_token"


def booking_token_from_request(request):
    return (
        request.GET.get("token")
        or request.headers.get("X-Booking-Token")
        or request.COOKIES.get(BOOKING_TOKEN_COOKIE)
    )


class BookingPrincipal:
    """The customer behind a valid booking link (set as request.user)."""
    is_authenticated = True
    is_anonymous = False

    def __init__(self, link):
        self.link = link

    @property
    def token(self):
        return self.link.token

    @property
    def customer(self):
        return self.link.customer

    @property
    def shop_id(self):
        return self.link.shop_id

    def resolve_shop_id(self, requested_shop_id):
        """A link bound to a shop always wins; unbound links accept the requested shop."""
        if self.link.shop_id is not None:
            return self.link.shop_id
        return requested_shop_id


class BookingTokenAuthentication(BaseAuthentication):
    def authenticate(self, request):
        token = booking_token_from_request(request)
        if not token:
            return None
        link = resolve_booking_token(token)
        if link is None:
            raise AuthenticationFailed("Invalid or expired booking token.")
        return BookingPrincipal(link), token

    def authenticate_header(self, request):
        return "Booking-Token"


class HasBookingLink(BasePermission):
    message = "Invalid or missing booking token."

    def has_permission(self, request, view):
        return isinstance(request.user, BookingPrincipal)
