# staff/tests/test_auth.py

from datetime import datetime, timedelta, timezone as dt_timezone

from django.contrib.auth.models import User
from django.test import TestCase, override_settings
from jose import jwt as jose_jwt

from booking.models import Shop
from staff.auth import LoginInfo, generate_token, login_with_credentials, verify_token
from staff.models import Manager, Role


@override_settings(JWT_SECRET="test-secret", JWT_ISSUER="shop-manager", JWT_AUDIENCE="mobile")
class TokenTests(TestCase):
    def test_round_trip(self):
        info = verify_token(generate_token(7, Role.MANAGER))
        self.assertEqual(info, LoginInfo(role=Role.MANAGER, user_id=7))
        self.assertTrue(info.is_manager)
        self.assertEqual(info.manager_id, 7)
        self.assertIsNone(info.shop_id)

    def test_claims(self):
        claims = jose_jwt.get_unverified_claims(generate_token(3, Role.SHOP))
        self.assertEqual(claims["iss"], "shop-manager")
        self.assertEqual(claims["aud"], "mobile")
        self.assertEqual(claims["userId"], 3)
        self.assertEqual(claims["role"], "shop")

    def _encode(self, **overrides):
        claims = {
            "iss": "shop-manager",
            "aud": "mobile",
            "userId": 1,
            "role": "manager",
            "exp": datetime.now(dt_timezone.utc) + timedelta(days=1),
        }
        claims.update(overrides)
        return jose_jwt.encode(claims, "test-secret", algorithm="HS256")

    def test_rejects_bad_tokens(self):
        expired = self._encode(exp=datetime.now(dt_timezone.utc) - timedelta(minutes=1))
        wrong_audience = self._encode(aud="web")
        wrong_issuer = self._encode(iss="someone-else")
        unknown_role = self._encode(role="owner")
        bad_user_id = self._encode(userId="1")
        wrong_key = jose_jwt.encode({"userId": 1, "role": "manager"}, "other", algorithm="HS256")

        for token in (expired, wrong_audience, wrong_issuer, unknown_role, bad_user_id, wrong_key, "garbage"):
            with self.assertLogs("staff.auth", level="WARNING"):
                self.assertIsNone(verify_token(token))


class LoginTests(TestCase):
    def setUp(self):
        self.manager_user = User.objects.create_user(username="mona", password="pass1234")
        self.manager = Manager.objects.create(user=self.manager_user, name="Mona")
        self.shop_user = User.objects.create_user(username="mainstreet", password="pass1234")
        self.shop = Shop.objects.create(name="Main Street", manager=self.manager, account=self.shop_user)

    def test_manager_login(self):
        self.assertEqual(
            login_with_credentials("mona", "pass1234"),
            LoginInfo(role=Role.MANAGER, user_id=self.manager.id),
        )

    def test_shop_login(self):
        self.assertEqual(
            login_with_credentials("mainstreet", "pass1234"),
            LoginInfo(role=Role.SHOP, user_id=self.shop.id),
        )

    def test_wrong_password(self):
        self.assertIsNone(login_with_credentials("mona", "nope"))

    def test_plain_user_cannot_log_in(self):
        User.objects.create_user(username="nobody", password="pass1234")
        with self.assertLogs("staff.auth", level="WARNING"):
            self.assertIsNone(login_with_credentials("nobody", "pass1234"))

    def test_shop_access(self):
        other = Shop.objects.create(name="Harbour")
        manager = LoginInfo(role=Role.MANAGER, user_id=self.manager.id)
        shop = LoginInfo(role=Role.SHOP, user_id=self.shop.id)
        self.assertTrue(manager.can_access_shop(self.shop))
        self.assertFalse(manager.can_access_shop(other))
        self.assertTrue(shop.can_access_shop(self.shop))
        self.assertFalse(shop.can_access_shop(other))
