from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from io import StringIO
from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.core.management import call_command
from django.db import DatabaseError
from django.test import SimpleTestCase
from django.urls import reverse

from clients.models import Cliente
from core.exceptions import BusinessRuleError, NotFoundError, PersistenceError, ValidationError
from inventory.models import Lote
from sales.forms import ContratoCreateForm
from sales.models import ContratoVenta, Pago
from sales.schedule import add_months_preserve_day, build_schedule, monthly_installment
from sales.services import create_contract, mark_overdue, register_payment, resolve_customer
from tests.base import BaseAppTestCase
from tests.factories import Factory
from users.models import RoleCode

SALES_PERMISSIONS = [
    "sales:contrato_list",
    "sales:contrato_create",
    "sales:contrato_detalle",
    "sales:pago_detalle",
    "sales:pago_registrar",
    "sales:pago_resumen",
    "sales:pago_notificar",
]


class ScheduleTests(SimpleTestCase):
    def test_month_end_is_clamped_without_drift(self):
        start = date(2024, 1, 31)
        self.assertEqual(add_months_preserve_day(start, 1), date(2024, 2, 29))
        self.assertEqual(add_months_preserve_day(start, 2), date(2024, 3, 31))
        self.assertEqual(add_months_preserve_day(date(2023, 1, 31), 1), date(2023, 2, 28))
        self.assertEqual(add_months_preserve_day(date(2024, 11, 15), 3), date(2025, 2, 15))

    def test_monthly_installment(self):
        self.assertEqual(monthly_installment(Decimal("120000"), Decimal("20000"), 10), Decimal("10000.00"))
        self.assertEqual(monthly_installment(Decimal("100000"), Decimal("0"), 3), Decimal("33333.33"))
        self.assertEqual(monthly_installment(Decimal("0.05"), Decimal("0"), 2), Decimal("0.03"))

    def test_monthly_installment_requires_term(self):
        with self.assertRaises(ValueError):
            monthly_installment(Decimal("1000"), Decimal("0"), 0)

    def test_build_schedule(self):
        pagos = build_schedule(7, date(2024, 1, 31), 2, Decimal("500.00"))
        self.assertEqual([p.numero_pago for p in pagos], [1, 2])
        self.assertEqual([p.fecha_pago for p in pagos], [date(2024, 2, 29), date(2024, 3, 31)])
        for pago in pagos:
            self.assertEqual(pago.contrato_id, 7)
            self.assertEqual(pago.monto, Decimal("500.00"))
            self.assertEqual(pago.estado_pago, "pendiente")
            self.assertEqual(pago.metodo_pago, "pendiente")
            self.assertIsNone(pago.pk)


class ContratoCreateFormTests(SimpleTestCase):
    base = {"id_lote": 1, "precio_total": "120000", "enganche": "20000", "plazo_meses": 10}

    def test_requires_a_customer_reference(self):
        form = ContratoCreateForm(data=self.base)
        self.assertFalse(form.is_valid())
        self.assertIn("correo_cliente", form.errors)

    def test_inline_data_not_allowed_with_customer_id(self):
        form = ContratoCreateForm(data={**self.base, "id_cliente": 3, "nombre": "Ana", "telefono": "999"})
        self.assertFalse(form.is_valid())
        self.assertIn("nombre", form.errors)
        self.assertIn("telefono", form.errors)

    def test_rejects_bad_numbers(self):
        form = ContratoCreateForm(
            data={"id_lote": 0, "precio_total": "-1", "enganche": "1.234", "plazo_meses": 0, "correo_cliente": "a@b.mx"}
        )
        self.assertFalse(form.is_valid())
        for field in ("id_lote", "precio_total", "enganche", "plazo_meses"):
            self.assertIn(field, form.errors)

    def test_cleaned_data_is_typed(self):
        form = ContratoCreateForm(data={**self.base, "correo_cliente": " Ana@Example.com "})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data["precio_total"], Decimal("120000"))
        self.assertEqual(form.cleaned_data["correo_cliente"], "ana@example.com")
        self.assertEqual(form.cleaned_data["estado_contrato"], "activo")

    def test_rejects_term_beyond_limit(self):
        form = ContratoCreateForm(data={**self.base, "plazo_meses": 601, "correo_cliente": "a@b.mx"})
        self.assertFalse(form.is_valid())
        self.assertIn("plazo_meses", form.errors)


class CreateContractServiceTests(BaseAppTestCase):
    def setUp(self):
        self.lote = Factory.lote()

    def _data(self, **overrides):
        data = {
            "id_lote": self.lote.pk,
            "precio_total": Decimal("120000"),
            "enganche": Decimal("20000"),
            "plazo_meses": 10,
            "correo_cliente": "nuevo@example.com",
            "nombre": "Carlos",
            "apellido_paterno": "Ramírez",
            "telefono": " 9991112233 ",
        }
        data.update(overrides)
        return data

    def test_creates_contract_schedule_and_reserves_lot(self):
        result = create_contract(self._data())

        self.assertEqual(result.mensualidad, Decimal("10000.00"))
        self.assertEqual([p.numero_pago for p in result.pagos], list(range(1, 11)))
        self.assertTrue(all(p.monto == Decimal("10000.00") for p in result.pagos))
        self.assertTrue(all(p.pk for p in result.pagos))

        self.lote.refresh_from_db()
        self.assertEqual(self.lote.estado_propiedad, Lote.Estado.EN_PROCESO)
        cliente = Cliente.objects.get(correo="nuevo@example.com")
        self.assertEqual(cliente.telefono, "9991112233")
        self.assertEqual(result.contrato.cliente_id, cliente.pk)
        self.assertEqual(result.contrato.estado_contrato, ContratoVenta.Estado.ACTIVO)

    def test_due_dates_follow_contract_day(self):
        fixed_now = datetime(2024, 1, 31, 18, 0, tzinfo=dt_timezone.utc)
        with mock.patch("django.utils.timezone.now", return_value=fixed_now):
            result = create_contract(self._data(plazo_meses=2))
        self.assertEqual([p.fecha_pago for p in result.pagos], [date(2024, 2, 29), date(2024, 3, 31)])

    def test_existing_email_reuses_customer(self):
        create_contract(self._data())
        otro_lote = Factory.lote()
        create_contract(self._data(id_lote=otro_lote.pk, correo_cliente="NUEVO@example.com", nombre="", apellido_paterno=""))
        self.assertEqual(Cliente.objects.filter(correo="nuevo@example.com").count(), 1)
        self.assertEqual(ContratoVenta.objects.count(), 2)

    def test_customer_by_id(self):
        cliente = Factory.cliente()
        result = create_contract(
            self._data(id_cliente=cliente.pk, correo_cliente="", nombre="", apellido_paterno="", telefono="")
        )
        self.assertEqual(result.contrato.cliente_id, cliente.pk)

    def test_down_payment_must_be_lower_than_price(self):
        with self.assertRaisesMessage(BusinessRuleError, "El enganche debe ser menor que el precio total"):
            create_contract(self._data(enganche=Decimal("120000")))
        self.assertEqual(ContratoVenta.objects.count(), 0)

    def test_sold_lot_is_rejected(self):
        self.lote.estado_propiedad = Lote.Estado.VENDIDA
        self.lote.save()
        with self.assertRaisesMessage(BusinessRuleError, "Lote no disponible (estado actual: vendida)"):
            create_contract(self._data())
        self.assertEqual(ContratoVenta.objects.count(), 0)
        self.assertEqual(Pago.objects.count(), 0)
        self.assertFalse(Cliente.objects.exists())

    def test_missing_lot(self):
        with self.assertRaisesMessage(NotFoundError, "Lote no encontrado"):
            create_contract(self._data(id_lote=99999))

    def test_unknown_customer_id_rolls_back(self):
        with self.assertRaisesMessage(NotFoundError, "Cliente indicado no existe"):
            create_contract(self._data(id_cliente=99999))
        self.lote.refresh_from_db()
        self.assertEqual(self.lote.estado_propiedad, Lote.Estado.DISPONIBLE)

    def test_new_customer_needs_name(self):
        with self.assertRaises(ValidationError) as ctx:
            create_contract(self._data(apellido_paterno=""))
        self.assertIn("apellido_paterno", ctx.exception.errors)
        self.assertFalse(Cliente.objects.exists())

    def test_failure_after_inserts_rolls_everything_back(self):
        with mock.patch("sales.services.mark_lot_in_process", side_effect=DatabaseError("conexión perdida")):
            with self.assertRaises(PersistenceError) as ctx:
                create_contract(self._data())
        self.assertEqual(ctx.exception.as_payload()["error"], "conexión perdida")
        self.assertEqual(ContratoVenta.objects.count(), 0)
        self.assertEqual(Pago.objects.count(), 0)
        self.assertFalse(Cliente.objects.exists())
        self.lote.refresh_from_db()
        self.assertEqual(self.lote.estado_propiedad, Lote.Estado.DISPONIBLE)

    def test_second_contract_on_same_lot_is_rejected(self):
        create_contract(self._data())
        with self.assertRaisesMessage(BusinessRuleError, "estado actual: en proceso"):
            create_contract(self._data(correo_cliente="otro@example.com"))
        self.assertEqual(ContratoVenta.objects.count(), 1)

    def test_uneven_division_keeps_equal_installments(self):
        result = create_contract(self._data(precio_total=Decimal("100000"), enganche=Decimal("0"), plazo_meses=3))

        self.assertEqual(result.mensualidad, Decimal("33333.33"))
        montos = list(Pago.objects.filter(contrato=result.contrato).values_list("monto", flat=True))
        self.assertEqual(montos, [Decimal("33333.33")] * 3)
        total = sum(montos, Decimal("0"))
        self.assertEqual(total, Decimal("99999.99"))
        self.assertLessEqual(abs(total - Decimal("100000")), Decimal("0.01") * 3)

    def test_installment_rounding_to_zero_is_rejected(self):
        with self.assertRaisesMessage(BusinessRuleError, "La mensualidad resultante debe ser de al menos 0.01"):
            create_contract(self._data(precio_total=Decimal("0.01"), enganche=Decimal("0"), plazo_meses=3))
        self.assertEqual(ContratoVenta.objects.count(), 0)
        self.assertEqual(Pago.objects.count(), 0)
        self.assertFalse(Cliente.objects.exists())
        self.lote.refresh_from_db()
        self.assertEqual(self.lote.estado_propiedad, Lote.Estado.DISPONIBLE)


class ResolveCustomerTests(BaseAppTestCase):
    def test_requires_id_or_email(self):
        with self.assertRaisesMessage(ValidationError, "Debe proporcionar id_cliente o correo_cliente"):
            resolve_customer({})


class ContratoApiTests(BaseAppTestCase):
    def setUp(self):
        self.login_as(self.make_user(role=RoleCode.VENDEDOR))
        self.grant_permissions(RoleCode.VENDEDOR, SALES_PERMISSIONS)
        self.lote = Factory.lote(num_lote="15", direccion="Calle 60")
        self.payload = {
            "id_lote": self.lote.pk,
            "precio_total": 120000,
            "enganche": 20000,
            "plazo_meses": 10,
            "correo_cliente": "compra@example.com",
            "nombre": "Lucía",
            "apellido_paterno": "Méndez",
        }

    def test_create_contract(self):
        response = self.post_json(reverse("sales:contrato_list"), self.payload)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["mensualidad"], 10000.0)
        self.assertEqual(body["contrato"]["id_lote"], self.lote.pk)
        self.assertEqual(body["contrato"]["estado_contrato"], "activo")
        self.assertEqual(len(body["pagos"]), 10)
        self.assertEqual(body["pagos"][0]["numero_pago"], 1)
        self.assertEqual(body["pagos"][-1]["numero_pago"], 10)

    def test_create_alias_route(self):
        response = self.post_json(reverse("sales:contrato_create"), self.payload)
        self.assertEqual(response.status_code, 201)

    def test_create_without_trailing_slash(self):
        response = self.post_json("/api/contratos", self.payload)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(ContratoVenta.objects.count(), 1)

        response = self.post_json("/api/contratos/crear", {**self.payload, "id_lote": Factory.lote().pk})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(ContratoVenta.objects.count(), 2)

    def test_term_beyond_limit_is_a_validation_error(self):
        response = self.post_json(reverse("sales:contrato_list"), {**self.payload, "plazo_meses": 200000})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "validation_error")
        self.assertIn("plazo_meses", body["errors"])
        self.assertEqual(ContratoVenta.objects.count(), 0)

    def test_validation_error_lists_fields(self):
        response = self.post_json(reverse("sales:contrato_list"), {"id_lote": self.lote.pk})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "validation_error")
        for field in ("precio_total", "enganche", "plazo_meses", "correo_cliente"):
            self.assertIn(field, body["errors"])
        self.assertEqual(ContratoVenta.objects.count(), 0)

    def test_invalid_json(self):
        response = self.client.post(reverse("sales:contrato_list"), data="{no", content_type="application/json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "invalid_json")

    def test_missing_lot_returns_404(self):
        response = self.post_json(reverse("sales:contrato_list"), {**self.payload, "id_lote": 99999})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Lote no encontrado")

    def test_down_payment_rule_returns_400(self):
        response = self.post_json(reverse("sales:contrato_list"), {**self.payload, "enganche": 120000})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "business_rule")

    def test_persistence_failure_returns_500(self):
        with mock.patch("sales.services.build_schedule", side_effect=DatabaseError("disk full")):
            response = self.post_json(reverse("sales:contrato_list"), self.payload)
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["message"], "Error al crear contrato")
        self.assertEqual(body["error"], "disk full")
        self.assertEqual(ContratoVenta.objects.count(), 0)

    def test_list_joins_customer_and_lot(self):
        self.post_json(reverse("sales:contrato_list"), self.payload)
        response = self.client.get(reverse("sales:contrato_list"))
        self.assertEqual(response.status_code, 200)
        row = response.json()[0]
        self.assertEqual(row["cliente_nombre"], "Lucía")
        self.assertEqual(row["correo"], "compra@example.com")
        self.assertEqual(row["num_lote"], "15")
        self.assertEqual(row["direccion"], "Calle 60")
        self.assertEqual(row["lote_tipo"], "terreno")

    def test_role_without_permission_gets_403(self):
        self.login_as(self.make_user(role=RoleCode.SECRETARIA))
        response = self.post_json(reverse("sales:contrato_list"), self.payload)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(ContratoVenta.objects.count(), 0)


class PagoApiTests(BaseAppTestCase):
    def setUp(self):
        self.login_as(self.make_user(role=RoleCode.SECRETARIA))
        self.grant_permissions(RoleCode.SECRETARIA, SALES_PERMISSIONS)
        self.contrato = Factory.contrato(plazo_meses=2, precio_total="30000", enganche="10000")

    def test_payments_of_contract(self):
        response = self.client.get(reverse("sales:pago_detalle", kwargs={"id_contrato": self.contrato.pk}))
        self.assertEqual(response.status_code, 200)
        pagos = response.json()
        self.assertEqual([p["numero_pago"] for p in pagos], [1, 2])
        self.assertEqual(pagos[0]["monto"], 10000.0)
        self.assertEqual(pagos[0]["fecha_pago"], "2026-02-15")

    def test_payments_of_unknown_contract(self):
        response = self.client.get(reverse("sales:pago_detalle", kwargs={"id_contrato": 99999}))
        self.assertEqual(response.status_code, 404)

    def test_register_payment_and_close_contract(self):
        primero, segundo = self.contrato.pagos.all()
        url = reverse("sales:pago_registrar", kwargs={"id_pago": primero.pk})
        response = self.post_json(url, {"metodo_pago": "transferencia"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["estado_pago"], "pagado")
        self.assertEqual(response.json()["metodo_pago"], "transferencia")
        self.assertEqual(response.json()["fecha_pago"], "2026-02-15")
        self.assertIsNotNone(response.json()["fecha_pagado"])

        again = self.post_json(url, {})
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["code"], "pago_ya_registrado")

        self.post_json(reverse("sales:pago_registrar", kwargs={"id_pago": segundo.pk}), {})
        segundo.refresh_from_db()
        self.assertEqual(segundo.metodo_pago, "efectivo")
        self.contrato.refresh_from_db()
        self.assertEqual(self.contrato.estado_contrato, ContratoVenta.Estado.PAGADO)

    def test_register_unknown_payment(self):
        response = self.post_json(reverse("sales:pago_registrar", kwargs={"id_pago": 99999}), {})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Pago no encontrado")

    def test_contract_detail_with_totals(self):
        register_payment(self.contrato.pagos.first().pk)
        response = self.client.get(reverse("sales:contrato_detalle", kwargs={"id_contrato": self.contrato.pk}))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["cliente"]["id"], self.contrato.cliente_id)
        self.assertEqual(body["lote"]["id"], self.contrato.lote_id)
        self.assertEqual(body["resumen"]["pagos_realizados"], 1)
        self.assertEqual(body["resumen"]["monto_pagado"], 10000.0)
        self.assertEqual(body["resumen"]["monto_pendiente"], 10000.0)
        self.assertEqual(body["resumen"]["siguiente_pago"]["numero_pago"], 2)

    def test_summary(self):
        mark_overdue(today=date(2026, 3, 1))
        response = self.client.get(reverse("sales:pago_resumen"))
        self.assertEqual(response.status_code, 200)
        row = response.json()[0]
        self.assertEqual(row["id_contrato"], self.contrato.pk)
        self.assertEqual(row["total_pagos"], 2)
        self.assertEqual(row["pagos_atrasados"], 1)
        self.assertEqual(row["pagos_pendientes"], 2)

    def test_notify_sends_email(self):
        pago = self.contrato.pagos.first()
        response = self.post_json(reverse("sales:pago_notificar"), {"id_pago": pago.pk})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [self.contrato.cliente.correo])
        self.assertIn("pago 1", mail.outbox[0].body)

    def test_notify_delivery_failure_returns_502(self):
        pago = self.contrato.pagos.first()
        with mock.patch("sales.services.send_mail", side_effect=SMTPException("smtp caído")):
            response = self.post_json(reverse("sales:pago_notificar"), {"id_pago": pago.pk})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "delivery_error")


class SalesCommandTests(BaseAppTestCase):
    def test_mark_overdue_command(self):
        contrato = Factory.contrato(plazo_meses=2, fecha_inicio=date(2020, 1, 10))
        call_command("marcar_pagos_atrasados", stdout=StringIO())
        self.assertEqual(contrato.pagos.filter(estado_pago=Pago.Estado.ATRASADO).count(), 2)

    def test_reset_sales_frees_lots(self):
        contrato = Factory.contrato()
        out = StringIO()
        call_command("reset_sales", "--no-input", stdout=out)
        self.assertFalse(ContratoVenta.objects.exists())
        self.assertFalse(Pago.objects.exists())
        lote = Lote.objects.get(pk=contrato.lote_id)
        self.assertEqual(lote.estado_propiedad, Lote.Estado.DISPONIBLE)
        self.assertIn("Listo.", out.getvalue())
