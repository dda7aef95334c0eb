from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from .auth import verify_token


class ManagerJWTAuthentication(BaseAuthentication):
    """
    Authorization: Bearer <jwt>

    request.user becomes a staff.auth.LoginInfo.
    """
    keyword = b"bearer"
    realm = "Access to mobile API"

    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword:
            return None
        if len(parts) != 2:
            raise AuthenticationFailed("Invalid Authorization header.")

        try:
            token = parts[1].decode()
        except UnicodeError:
            raise AuthenticationFailed("Invalid Authorization header.") from None

        info = verify_token(token)
        if info is None:
            raise AuthenticationFailed("Invalid or expired token")
        return info, token

    def authenticate_header(self, request):
        return f'Bearer realm="{self.realm}"'
