# staff/auth.py
#
# Purpose:
# - Issue and verify the JWTs used by the mobile API.
# - Map a verified token onto a LoginInfo principal with a closed Role.
#
# Token claims:
#   iss = settings.JWT_ISSUER, aud = settings.JWT_AUDIENCE,
#   userId = Manager.id (role "manager") or Shop.id (role "shop"),
#   role, exp (settings.JWT_TTL_DAYS from issue time)
#
import logging
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import authenticate
from django.utils import timezone
from jose import JWTError
from jose import jwt as jose_jwt

from .models import Manager, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginInfo:
    """Authenticated mobile-API caller (set as request.user by DRF)."""
    role: Role
    user_id: int

    is_authenticated = True
    is_anonymous = False

    @classmethod
    def from_claims(cls, user_id, role):
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise ValueError("userId claim must be an integer")
        return cls(role=Role(role), user_id=user_id)

    @property
    def manager_id(self):
        return self.user_id if self.role == Role.MANAGER else None

    @property
    def shop_id(self):
        return self.user_id if self.role == Role.SHOP else None

    @property
    def is_manager(self):
        return self.role == Role.MANAGER

    def can_access_shop(self, shop) -> bool:
        if self.role == Role.MANAGER:
            return shop.manager_id == self.user_id
        if self.role == Role.SHOP:
            return shop.pk == self.user_id
        raise ValueError(f"Unhandled role: {self.role!r}")


def generate_token(user_id: int, role: Role) -> str:
    expires_at = timezone.now() + timedelta(days=settings.JWT_TTL_DAYS)
    claims = {
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "userId": user_id,
        "role": Role(role).value,
        "exp": expires_at,
    }
    return jose_jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> LoginInfo | None:
    """
    Verify signature, expiry, issuer and audience.

    Returns:
        LoginInfo if the token is valid and carries a known role, else None.
    """
    try:
        claims = jose_jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        logger.warning("JWT verification failed: %s", e)
        return None

    try:
        return LoginInfo.from_claims(claims.get("userId"), claims.get("role"))
    except ValueError as e:
        logger.warning("JWT rejected: %s", e)
        return None


def login_with_credentials(username: str, password: str) -> LoginInfo | None:
    """Managers first, then shop accounts (same order as the login form)."""
    from booking.models import Shop

    user = authenticate(username=username, password=password)
    if user is None:
        return None

    manager = Manager.objects.filter(user=user).first()
    if manager is not None:
        return LoginInfo(role=Role.MANAGER, user_id=manager.pk)

    shop = Shop.objects.filter(account=user).first()
    if shop is not None:
        return LoginInfo(role=Role.SHOP, user_id=shop.pk)

    logger.warning("User %s has neither a manager profile nor a shop account", user.pk)
    return None
