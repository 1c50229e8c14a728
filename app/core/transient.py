"""
Almacén clave/valor con expiración para estado temporal (OTP, intentos de
login, tokens de recuperación). Se apoya en el framework de caché de Django
para que el backend sea configurable (memoria local, base de datos, ...).
"""
from django.conf import settings
from django.core.cache import caches


class TransientStore:
    def __init__(self, alias=None, prefix=""):
        self.alias = alias or getattr(settings, "TRANSIENT_STORE_CACHE", "default")
        self.prefix = prefix

    @property
    def _cache(self):
        return caches[self.alias]

    def _key(self, key):
        return f"{self.prefix}{key}"

    def get(self, key, default=None):
        return self._cache.get(self._key(key), default)

    def set(self, key, value, ttl):
        self._cache.set(self._key(key), value, timeout=ttl)

    def delete(self, key):
        self._cache.delete(self._key(key))

    def incr(self, key, ttl):
        """Increment a counter, creating it with ``ttl`` when missing."""
        full_key = self._key(key)
        if self._cache.add(full_key, 1, timeout=ttl):
            return 1
        try:
            return self._cache.incr(full_key)
        except ValueError:
            self._cache.set(full_key, 1, timeout=ttl)
            return 1
