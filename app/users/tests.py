from io import StringIO
from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.core.cache import cache
from django.core.management import call_command
from django.urls import reverse

from tests.base import BaseAppTestCase
from users import auth
from users.models import RoleCode, RolePermission, User


class AuthFlowTests(BaseAppTestCase):
    def setUp(self):
        cache.clear()
        self.user = self.make_user(role=RoleCode.VENDEDOR, username="vendedor1", email="vende@example.com")

    def _login(self, password=None):
        return self.post_json(
            reverse("users:login"),
            {"correo": "vende@example.com", "password": password or self.default_password},
        )

    def _last_otp(self):
        return auth.store.get("otp:vende@example.com")["code"]

    def test_login_sends_otp_and_verify_opens_session(self):
        response = self._login()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "success")
        self.assertEqual(len(mail.outbox), 1)
        code = self._last_otp()
        self.assertRegex(code, r"^\d{6}$")
        self.assertIn(code, mail.outbox[0].body)

        response = self.post_json(reverse("users:verify_otp"), {"correo": "vende@example.com", "otp": code})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["usuario"], "vendedor1")
        self.assertNotIn("password", response.json()["user"])
        self.assertEqual(int(self.client.session["_auth_user_id"]), self.user.pk)

        # El código es de un solo uso
        again = self.post_json(reverse("users:verify_otp"), {"correo": "vende@example.com", "otp": code})
        self.assertEqual(again.json()["message"], "OTP no generado")

    def test_login_validations(self):
        self.assertEqual(self.post_json(reverse("users:login"), {"correo": "no-es-correo", "password": "x"}).status_code, 400)
        response = self.post_json(reverse("users:login"), {"correo": "nadie@example.com", "password": "x"})
        self.assertEqual(response.status_code, 404)

    def test_wrong_otp_and_expired_otp(self):
        self._login()
        code = self._last_otp()
        wrong = "000000" if code != "000000" else "111111"
        response = self.post_json(reverse("users:verify_otp"), {"correo": "vende@example.com", "otp": wrong})
        self.assertEqual(response.json()["message"], "OTP incorrecto")

        with mock.patch("users.auth._now", return_value=10 ** 12):
            response = self.post_json(reverse("users:verify_otp"), {"correo": "vende@example.com", "otp": code})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "OTP expirado")

    def test_fifth_failure_locks_the_account(self):
        for _ in range(4):
            response = self._login(password="incorrecta")
            self.assertEqual(response.json()["message"], "Contraseña incorrecta")
        response = self._login(password="incorrecta")
        self.assertEqual(response.json()["code"], "usuario_bloqueado")

        response = self._login()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Usuario bloqueado temporalmente")
        self.assertEqual(len(mail.outbox), 0)

    def test_email_failure_returns_502(self):
        with mock.patch("users.auth.send_mail", side_effect=SMTPException("down")):
            response = self._login()
        self.assertEqual(response.status_code, 502)

    def test_password_reset(self):
        response = self.post_json(reverse("users:password_reset_request"), {"correo": "vende@example.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)
        token = mail.outbox[0].body.split("/reset/")[1].split()[0]

        url = reverse("users:password_reset_confirm", kwargs={"token": token})
        self.assertEqual(self.post_json(url, {"password": "123"}).status_code, 400)

        response = self.post_json(url, {"password": "nueva123"})
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("nueva123"))

        response = self.post_json(url, {"password": "otra1234"})
        self.assertEqual(response.json()["code"], "token_invalido")

    def test_logout(self):
        self.login_as(self.user)
        response = self.post_json(reverse("users:logout"))
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("_auth_user_id", self.client.session)


class UserApiTests(BaseAppTestCase):
    def setUp(self):
        self.admin = self.login_as(self.make_user(role=RoleCode.ADMIN))
        self.grant_permissions(RoleCode.ADMIN, ["users:user_list", "users:user_detail", "users:me"])

    def test_create_user_hashes_password(self):
        response = self.post_json(
            reverse("users:user_list"),
            {"usuario": "secre1", "password": "secreta1", "rol": "SECRETARIA", "correo": "Secre@Example.com", "telefono": "9991234567"},
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["correo"], "secre@example.com")
        self.assertNotIn("password", body)
        user = User.objects.get(username="secre1")
        self.assertTrue(user.check_password("secreta1"))

    def test_create_user_validations(self):
        response = self.post_json(
            reverse("users:user_list"),
            {"usuario": "ab", "password": "123", "rol": "JEFE", "correo": "x@example.com", "telefono": "12"},
        )
        self.assertEqual(response.status_code, 400)
        errors = response.json()["errors"]
        for field in ("usuario", "password", "rol", "telefono"):
            self.assertIn(field, errors)

    def test_list_filters_by_role(self):
        self.make_user(role=RoleCode.VENDEDOR, username="vend")
        response = self.client.get(reverse("users:user_list"), {"rol": "VENDEDOR"})
        self.assertEqual([row["usuario"] for row in response.json()], ["vend"])

    def test_partial_update_keeps_password_unless_given(self):
        user = self.make_user(role=RoleCode.VENDEDOR, username="vend2")
        url = reverse("users:user_detail", kwargs={"pk": user.pk})

        response = self.send_json("patch", url, {"telefono": "9990001111"})
        self.assertEqual(response.status_code, 200)
        user.refresh_from_db()
        self.assertEqual(user.phone, "9990001111")
        self.assertTrue(user.check_password(self.default_password))

        self.send_json("patch", url, {"password": "cambiada1"})
        user.refresh_from_db()
        self.assertTrue(user.check_password("cambiada1"))

    def test_delete_user(self):
        user = self.make_user(role=RoleCode.VENDEDOR)
        response = self.client.delete(reverse("users:user_detail", kwargs={"pk": user.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(User.objects.filter(pk=user.pk).exists())

    def test_me(self):
        response = self.client.get(reverse("users:me"))
        self.assertEqual(response.json()["id"], self.admin.pk)

    def test_superuser_bypasses_permissions(self):
        self.login_as(User.objects.create_superuser("root", "root@example.com", "pass1234"))
        response = self.client.get(reverse("users:user_list"))
        self.assertEqual(response.status_code, 200)


class SeedRolePermissionsTests(BaseAppTestCase):
    def test_seed_matrix(self):
        call_command("seed_role_permissions", stdout=StringIO())
        admin_keys = set(RolePermission.objects.filter(role_code=RoleCode.ADMIN).values_list("permission_key", flat=True))
        vendedor_keys = set(RolePermission.objects.filter(role_code=RoleCode.VENDEDOR).values_list("permission_key", flat=True))
        secretaria_keys = set(RolePermission.objects.filter(role_code=RoleCode.SECRETARIA).values_list("permission_key", flat=True))

        self.assertIn("users:user_list", admin_keys)
        self.assertNotIn("users:login", admin_keys)
        self.assertIn("sales:contrato_create", vendedor_keys)
        self.assertNotIn("sales:pago_registrar", vendedor_keys)
        self.assertNotIn("clients:cliente_list", vendedor_keys)
        self.assertIn("clients:cliente_detail", secretaria_keys)
        self.assertNotIn("users:user_list", secretaria_keys)
