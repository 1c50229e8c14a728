import json

from django.core.cache import cache
from django.db import DatabaseError
from django.http import JsonResponse
from django.test import RequestFactory, SimpleTestCase

from core.exceptions import BusinessRuleError, NotFoundError, PersistenceError, ValidationError
from core.http import api_errors, parse_json_body
from core.normalization import name_search_key, normalize_curp, normalize_email, normalize_phone
from core.transient import TransientStore


class ApiErrorsTests(SimpleTestCase):
    def setUp(self):
        self.request = RequestFactory().post("/api/prueba/")

    def _call(self, exc):
        @api_errors
        def view(request):
            raise exc

        response = view(self.request)
        return response.status_code, json.loads(response.content)

    def test_domain_errors_map_to_status(self):
        self.assertEqual(self._call(ValidationError("malo", errors={"x": ["y"]})),
                         (400, {"message": "malo", "code": "validation_error", "errors": {"x": ["y"]}}))
        self.assertEqual(self._call(BusinessRuleError("regla"))[0], 400)
        self.assertEqual(self._call(NotFoundError("falta")), (404, {"message": "falta", "code": "not_found"}))

    def test_persistence_error_exposes_cause(self):
        try:
            raise PersistenceError("Error al guardar") from DatabaseError("timeout")
        except PersistenceError as exc:
            status, body = self._call(exc)
        self.assertEqual(status, 500)
        self.assertEqual(body["message"], "Error al guardar")
        self.assertEqual(body["error"], "timeout")

    def test_unexpected_error_is_500(self):
        with self.assertLogs("core.http", level="ERROR"):
            status, body = self._call(RuntimeError("boom"))
        self.assertEqual(status, 500)
        self.assertEqual(body, {"message": "Error interno del servidor", "error": "boom"})

    def test_success_passes_through(self):
        @api_errors
        def view(request):
            return JsonResponse({"ok": True})

        self.assertEqual(view(self.request).status_code, 200)


class ParseJsonBodyTests(SimpleTestCase):
    def test_rejects_non_objects(self):
        request = RequestFactory().post("/x/", data="[1, 2]", content_type="application/json")
        with self.assertRaises(ValidationError):
            parse_json_body(request)

    def test_empty_body_is_empty_dict(self):
        request = RequestFactory().post("/x/", data="", content_type="application/json")
        self.assertEqual(parse_json_body(request), {})


class NormalizationTests(SimpleTestCase):
    def test_values(self):
        self.assertIsNone(normalize_phone("   "))
        self.assertEqual(normalize_phone(" 999 "), "999")
        self.assertEqual(normalize_email(" A@B.MX "), "a@b.mx")
        self.assertEqual(normalize_curp("abcd-900101 hdf"), "ABCD900101HDF")
        self.assertEqual(name_search_key("  Jardín   Botánico "), "jardin botanico")


class TransientStoreTests(SimpleTestCase):
    def setUp(self):
        cache.clear()
        self.store = TransientStore(prefix="test:")

    def test_set_get_delete(self):
        self.store.set("k", {"v": 1}, 60)
        self.assertEqual(self.store.get("k"), {"v": 1})
        self.store.delete("k")
        self.assertIsNone(self.store.get("k"))

    def test_incr_creates_counter(self):
        self.assertEqual(self.store.incr("n", 60), 1)
        self.assertEqual(self.store.incr("n", 60), 2)
        self.assertEqual(cache.get("test:n"), 2)
