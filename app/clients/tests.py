from django.urls import reverse

from clients.models import Cliente
from clients import services
from tests.base import BaseAppTestCase
from tests.factories import Factory
from users.models import RoleCode


class ClienteApiTests(BaseAppTestCase):
    def setUp(self):
        self.login_as(self.make_user(role=RoleCode.SECRETARIA))
        self.grant_permissions(RoleCode.SECRETARIA, ["clients:cliente_list", "clients:cliente_detail"])
        self.list_url = reverse("clients:cliente_list")

    def _payload(self, **overrides):
        payload = {
            "nombre": "María  José",
            "apellido_paterno": "Pérez",
            "apellido_materno": "Gómez",
            "correo": " Maria@Example.com ",
            "telefono": "9991234567",
            "curp": "pegm900101mdfrzr09",
        }
        payload.update(overrides)
        return payload

    def test_create_normalizes_fields(self):
        response = self.post_json(self.list_url, self._payload())
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["nombre"], "María José")
        self.assertEqual(body["correo"], "maria@example.com")
        self.assertEqual(body["curp"], "PEGM900101MDFRZR09")
        self.assertIsNone(body["doc_identificacion"])

    def test_create_validates_phone_and_curp(self):
        response = self.post_json(self.list_url, self._payload(telefono="12345", curp="CORTA"))
        self.assertEqual(response.status_code, 400)
        errors = response.json()["errors"]
        self.assertIn("telefono", errors)
        self.assertIn("curp", errors)

    def test_duplicates_reported_per_field(self):
        Factory.cliente(correo="maria@example.com", telefono="9991234567")
        response = self.post_json(self.list_url, self._payload())
        self.assertEqual(response.status_code, 400)
        errors = response.json()["errors"]
        self.assertEqual(errors["correo"], ["El correo 'maria@example.com' ya está registrado en otro cliente."])
        self.assertEqual(errors["telefono"], ["El teléfono '9991234567' ya está registrado en otro cliente."])

    def test_detail_update_and_delete_by_curp(self):
        cliente = Factory.cliente(curp="PEGM900101MDFRZR09")
        url = reverse("clients:cliente_detail", kwargs={"curp": "pegm900101mdfrzr09"})

        self.assertEqual(self.client.get(url).json()["id"], cliente.id)

        response = self.send_json("patch", url, {"telefono": "9990001111"})
        self.assertEqual(response.status_code, 200)
        cliente.refresh_from_db()
        self.assertEqual(cliente.telefono, "9990001111")
        self.assertEqual(cliente.nombre, "Ana")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Cliente.objects.filter(pk=cliente.pk).exists())

    def test_update_allows_own_unique_values(self):
        cliente = Factory.cliente(curp="PEGM900101MDFRZR09", correo="ana@example.com")
        url = reverse("clients:cliente_detail", kwargs={"curp": cliente.curp})
        response = self.send_json("put", url, {"correo": "ana@example.com", "nombre": "Ana María"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["nombre"], "Ana María")

    def test_delete_with_contracts_is_blocked(self):
        contrato = Factory.contrato()
        url = reverse("clients:cliente_detail", kwargs={"curp": contrato.cliente.curp})
        response = self.client.delete(url)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "cliente_con_contratos")

    def test_unknown_curp(self):
        response = self.client.get(reverse("clients:cliente_detail", kwargs={"curp": "XXXX"}))
        self.assertEqual(response.status_code, 404)


class ClienteServiceTests(BaseAppTestCase):
    def test_lookup_by_email_is_case_insensitive(self):
        cliente = Factory.cliente(correo="ana@example.com")
        self.assertEqual(services.get_by_email(" ANA@example.com"), cliente)
        self.assertIsNone(services.get_by_email(""))

    def test_insert_without_curp(self):
        cliente = services.insert(nombre="Luis", apellido_paterno="Díaz", correo="LUIS@example.com")
        self.assertIsNone(cliente.curp)
        self.assertEqual(cliente.correo, "luis@example.com")
        services.insert(nombre="Eva", apellido_paterno="Sol", correo="eva@example.com")
        self.assertEqual(Cliente.objects.filter(curp__isnull=True).count(), 2)
