from django.urls import reverse

from core.exceptions import NotFoundError, ValidationError
from locations.models import Colonia
from locations.services import resolve_colonia
from tests.base import BaseAppTestCase
from tests.factories import Factory
from users.models import RoleCode


class LocationApiTests(BaseAppTestCase):
    def setUp(self):
        self.user = self.login_as(self.make_user(role=RoleCode.VENDEDOR))
        self.grant_permissions(
            RoleCode.VENDEDOR,
            [
                "locations:estado_list",
                "locations:ciudad_list",
                "locations:colonia_list",
                "locations:ciudad_por_codigo_postal",
            ],
        )
        self.estado = Factory.estado(nombre_estado="Yucatán")
        self.ciudad = Factory.ciudad(estado=self.estado, nombre_ciudad="Mérida")
        self.colonia = Factory.colonia(ciudad=self.ciudad, nombre_colonia="Centro", codigo_postal="97000")

    def test_cascading_lists(self):
        estados = self.client.get(reverse("locations:estado_list")).json()
        self.assertEqual(estados, [{"id": self.estado.id, "nombre_estado": "Yucatán"}])

        ciudades = self.client.get(reverse("locations:ciudad_list", kwargs={"estado_id": self.estado.id})).json()
        self.assertEqual([c["nombre_ciudad"] for c in ciudades], ["Mérida"])

        colonias = self.client.get(reverse("locations:colonia_list", kwargs={"ciudad_id": self.ciudad.id})).json()
        self.assertEqual(colonias[0]["codigo_postal"], "97000")

    def test_city_by_postal_code(self):
        response = self.client.get(reverse("locations:ciudad_por_codigo_postal", kwargs={"codigo_postal": "97000"}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["nombre_estado"], "Yucatán")

    def test_unknown_postal_code(self):
        response = self.client.get(reverse("locations:ciudad_por_codigo_postal", kwargs={"codigo_postal": "00000"}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Código postal no encontrado")

    def test_anonymous_request_gets_json_401(self):
        self.client.logout()
        response = self.client.get(reverse("locations:estado_list"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Autenticación requerida")


class ResolveColoniaTests(BaseAppTestCase):
    def setUp(self):
        self.ciudad = Factory.ciudad()

    def test_reuses_existing_colonia_ignoring_accents(self):
        existing = Factory.colonia(ciudad=self.ciudad, nombre_colonia="Jardín")
        colonia = resolve_colonia(nombre_colonia="JARDIN", id_ciudad=self.ciudad.id)
        self.assertEqual(colonia.pk, existing.pk)

    def test_creates_new_colonia(self):
        colonia = resolve_colonia(nombre_colonia="Las  Palmas", id_ciudad=self.ciudad.id, codigo_postal="97100")
        self.assertEqual(colonia.nombre_colonia, "Las Palmas")
        self.assertEqual(Colonia.objects.filter(ciudad=self.ciudad).count(), 1)

    def test_without_name_returns_none(self):
        self.assertIsNone(resolve_colonia())

    def test_errors(self):
        with self.assertRaises(NotFoundError):
            resolve_colonia(id_colonia=9999)
        with self.assertRaises(ValidationError):
            resolve_colonia(nombre_colonia="Norte")
        with self.assertRaises(NotFoundError):
            resolve_colonia(nombre_colonia="Norte", id_ciudad=9999)
