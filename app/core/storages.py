from urllib.parse import urlsplit, urlunsplit

from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage


def _public_domain(bucket):
    domain = getattr(settings, "AWS_S3_CUSTOM_DOMAIN", "")
    return f"{domain}/{bucket}" if domain else None


def _rewrite_host(url, host):
    """Cambia el host de una URL firmada por el dominio público (MinIO detrás de proxy)."""
    parsed = urlsplit(url)
    if not host or not parsed.netloc:
        return url
    scheme = getattr(settings, "AWS_S3_URL_PROTOCOL", "https:").rstrip(":")
    return urlunsplit(parsed._replace(scheme=scheme, netloc=host.split("/")[0]))


class PublicMediaStorage(S3Boto3Storage):
    """Fotos de lotes: lectura pública."""
    bucket_name = settings.AWS_PUBLIC_MEDIA_BUCKET
    default_acl = "public-read"
    querystring_auth = False
    custom_domain = _public_domain(settings.AWS_PUBLIC_MEDIA_BUCKET)


class PrivateMediaStorage(S3Boto3Storage):
    """Documentos de identidad de clientes: solo con URL firmada."""
    bucket_name = settings.AWS_PRIVATE_MEDIA_BUCKET
    default_acl = "private"
    querystring_auth = True
    file_overwrite = False
    # Con custom_domain las URLs saldrían sin firma.
    custom_domain = None

    def url(self, name, parameters=None, expire=None, http_method=None):
        signed = super().url(name, parameters=parameters, expire=expire, http_method=http_method)
        return _rewrite_host(signed, getattr(settings, "AWS_S3_PRIVATE_CUSTOM_DOMAIN", ""))


def file_url(field_file):
    if not field_file:
        return None
    return field_file.url
