from decimal import Decimal

from django.urls import reverse

from inventory.models import Lote
from locations.models import Colonia
from tests.base import BaseAppTestCase
from tests.factories import Factory
from users.models import RoleCode


class LoteApiTests(BaseAppTestCase):
    def setUp(self):
        self.user = self.make_user(role=RoleCode.SECRETARIA, username="inv_secretaria")
        self.login_as(self.user)
        self.grant_permissions(RoleCode.SECRETARIA, ["inventory:lote_list", "inventory:lote_detail"])
        self.list_url = reverse("inventory:lote_list")

    def test_create_lote_with_currency_format(self):
        colonia = Factory.colonia()
        response = self.post_json(
            self.list_url,
            {
                "tipo": "terreno",
                "num_lote": "12",
                "manzana": "B",
                "superficie_m2": "200",
                "precio": "$150,000.50",
                "id_colonia": colonia.id,
            },
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["precio"], 150000.5)
        self.assertEqual(body["estado_propiedad"], "disponible")
        self.assertEqual(body["id_colonia"], colonia.id)
        lote = Lote.objects.get(num_lote="12")
        self.assertEqual(lote.precio, Decimal("150000.50"))

    def test_create_lote_registers_new_colonia_in_city(self):
        ciudad = Factory.ciudad(nombre_ciudad="Mérida")
        Factory.colonia(ciudad=ciudad, nombre_colonia="Centro")
        response = self.post_json(
            self.list_url,
            {
                "tipo": "casa",
                "num_lote": "7",
                "superficie_m2": "120",
                "precio": "900000",
                "id_ciudad": ciudad.id,
                "nombre_colonia_nueva": "  centro ",
            },
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(Colonia.objects.filter(ciudad=ciudad).count(), 1)
        self.assertEqual(response.json()["nombre_colonia"], "Centro")

    def test_new_colonia_requires_city(self):
        response = self.post_json(
            self.list_url,
            {"tipo": "casa", "num_lote": "8", "superficie_m2": "120", "precio": "900000", "nombre_colonia_nueva": "Norte"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("id_ciudad", response.json()["errors"])
        self.assertFalse(Lote.objects.filter(num_lote="8").exists())

    def test_rejects_duplicate_lote_number_in_block(self):
        Factory.lote(num_lote="3", manzana="C")
        response = self.post_json(
            self.list_url,
            {"tipo": "terreno", "num_lote": "3", "manzana": "C", "superficie_m2": "90", "precio": "50000"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("num_lote", response.json()["errors"])

    def test_rejects_invalid_price_and_type(self):
        response = self.post_json(
            self.list_url,
            {"tipo": "castillo", "num_lote": "4", "superficie_m2": "90", "precio": "-5"},
        )
        self.assertEqual(response.status_code, 400)
        errors = response.json()["errors"]
        self.assertIn("tipo", errors)
        self.assertIn("precio", errors)

    def test_list_filters_by_state(self):
        Factory.lote(num_lote="A1")
        Factory.lote(num_lote="A2", estado_propiedad=Lote.Estado.VENDIDA)
        response = self.client.get(self.list_url, {"estado": "vendida"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["num_lote"] for row in response.json()], ["A2"])

    def test_partial_update_keeps_other_fields(self):
        lote = Factory.lote(num_lote="P1", precio=Decimal("100000.00"))
        response = self.send_json(
            "patch",
            reverse("inventory:lote_detail", kwargs={"pk": lote.pk}),
            {"precio": "110000"},
        )
        self.assertEqual(response.status_code, 200)
        lote.refresh_from_db()
        self.assertEqual(lote.precio, Decimal("110000.00"))
        self.assertEqual(lote.num_lote, "P1")
        self.assertEqual(lote.manzana, "A")

    def test_partial_update_rejects_unknown_fields(self):
        lote = Factory.lote()
        response = self.send_json(
            "patch",
            reverse("inventory:lote_detail", kwargs={"pk": lote.pk}),
            {"color": "rojo"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("color", response.json()["errors"])

    def test_detail_not_found(self):
        response = self.client.get(reverse("inventory:lote_detail", kwargs={"pk": 9999}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Lote no encontrado")

    def test_delete_lote_with_contract_is_blocked(self):
        contrato = Factory.contrato()
        response = self.client.delete(reverse("inventory:lote_detail", kwargs={"pk": contrato.lote_id}))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "lote_con_contratos")
        self.assertTrue(Lote.objects.filter(pk=contrato.lote_id).exists())

    def test_delete_free_lote(self):
        lote = Factory.lote()
        response = self.client.delete(reverse("inventory:lote_detail", kwargs={"pk": lote.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Lote.objects.filter(pk=lote.pk).exists())
